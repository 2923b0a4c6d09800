"""Parsing of language-model replies that should contain a JSON object.

``parse_reply`` never raises: it returns Structured when the (fence-stripped)
reply is a JSON object, Recovered when only the outermost balanced ``{...}``
substring parses, and RawFallback otherwise.
"""

import json
import re
from typing import Any, Optional

from models.generation import ParseOutcome, RawFallback, Recovered, Structured


_FENCE_BLOCK = re.compile(r"```[a-zA-Z0-9_-]*\s*\n?([\s\S]*?)```")
_LEADING_FENCE = re.compile(r"^```[a-zA-Z0-9_-]*\s*")
_TRAILING_FENCE = re.compile(r"\s*```\s*$")


def strip_code_fences(text: str) -> str:
    """Remove markdown code-fence wrapping from a reply."""
    if not text:
        return ""
    text = text.strip()
    if text.startswith("```"):
        match = _FENCE_BLOCK.match(text)
        if match:
            return match.group(1).strip()
        return _TRAILING_FENCE.sub("", _LEADING_FENCE.sub("", text)).strip()
    return _TRAILING_FENCE.sub("", text).strip()


def extract_outer_json(text: str) -> Optional[str]:
    """Return the outermost balanced ``{...}`` substring, if any.

    Braces inside string literals are ignored. When the braces never balance
    (e.g. a truncated reply) the span from the first ``{`` to the last ``}``
    is returned instead.
    """
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        char = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start:i + 1]

    end = text.rfind("}")
    return text[start:end + 1] if end > start else None


def _load_object(text: str) -> tuple[Optional[dict[str, Any]], Optional[str]]:
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        return None, str(e)
    if not isinstance(data, dict):
        return None, f"expected a JSON object, got {type(data).__name__}"
    return data, None


def parse_reply(text: Optional[str]) -> ParseOutcome:
    """Parse a model reply into a tagged outcome."""
    raw = text or ""
    cleaned = strip_code_fences(raw)

    data, first_error = _load_object(cleaned)
    if data is not None:
        return Structured(data=data)

    candidate = extract_outer_json(cleaned)
    if candidate is not None:
        data, second_error = _load_object(candidate)
        if data is not None:
            return Recovered(data=data)
    else:
        second_error = "no JSON object found"

    return RawFallback(raw_text=raw, errors=(first_error or "", second_error or ""))
