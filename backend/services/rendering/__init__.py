from services.rendering.substitution import (
    KNOWN_TOKENS,
    PLACEHOLDER_PATTERN,
    build_replacements,
    clean_template,
    render,
)
from services.rendering.template_store import TemplateStore
from services.rendering.preview import PreviewRenderer, preview_source

__all__ = [
    "KNOWN_TOKENS",
    "PLACEHOLDER_PATTERN",
    "build_replacements",
    "clean_template",
    "render",
    "TemplateStore",
    "PreviewRenderer",
    "preview_source",
]
