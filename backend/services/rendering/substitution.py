"""Placeholder substitution for HTML resume templates.

Templates mark insertion points with ``{{name}}`` tokens. ``render`` fills the
recognized tokens from a profile (or a consolidated AI text block) in a single
pass, then ``clean_template`` strips anything left over so the output never
contains placeholder syntax.

Usage:
    html = render(template_html, profile)
    html = render(template_html, profile, ai_text=ai_block)
"""

import html as html_lib
import re
from typing import Callable, Optional

from models.resume import (
    Profile,
    ExperienceEntry,
    EducationEntry,
    ProjectEntry,
    CertificationEntry,
)


PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([\w.\-]+)\s*\}\}")

LINE_BREAK = "<br>"

CONTACT_TOKENS = ("name", "email", "phone", "location", "linkedin", "github", "portfolio")
SECTION_TOKENS = ("summary", "skills", "experience", "education", "projects", "certifications")
KNOWN_TOKENS = frozenset(CONTACT_TOKENS + ("title",) + SECTION_TOKENS + ("ai_resume",))

_WHITESPACE_RUN = re.compile(r"\s{2,}")
_BREAK_RUN = re.compile(r"(?:<br\s*/?>\s*){2,}", re.IGNORECASE)


def _esc(value: str) -> str:
    return html_lib.escape(value or "", quote=True)


def _heading(title: str, subtitle: str, period: str) -> str:
    """'<b>title</b> — subtitle (period)', omitting empty parts."""
    parts = []
    if title.strip():
        parts.append(f"<b>{_esc(title)}</b>")
    if subtitle.strip():
        parts.append(_esc(subtitle))
    heading = " — ".join(parts)
    if period.strip():
        heading = f"{heading} ({_esc(period)})" if heading else f"({_esc(period)})"
    return heading


def _block(heading: str, bullets: list[str]) -> str:
    lines = [heading] if heading else []
    lines.extend(_esc(b) for b in bullets)
    return LINE_BREAK.join(lines)


def format_experience(entry: ExperienceEntry) -> str:
    return _block(_heading(entry.title, entry.organization, entry.duration), entry.description)


def format_project(entry: ProjectEntry) -> str:
    return _block(_heading(entry.title, ", ".join(entry.tech), entry.duration), entry.description)


def format_education(entry: EducationEntry) -> str:
    text = _heading(entry.degree, entry.institution, entry.year)
    if entry.gpa.strip():
        text = f"{text} | GPA: {_esc(entry.gpa)}" if text else f"GPA: {_esc(entry.gpa)}"
    return text


def format_certification(entry: CertificationEntry) -> str:
    name = _esc(entry.name)
    if entry.year.strip():
        return f"{name} ({_esc(entry.year)})" if name else f"({_esc(entry.year)})"
    return name


def _join(items: list, formatter: Callable) -> str:
    return LINE_BREAK.join(text for text in (formatter(item) for item in items) if text)


def build_replacements(data: Optional[Profile], ai_text: Optional[str] = None) -> dict[str, str]:
    """Map each recognized token to its rendered content."""
    profile = data or Profile()
    info = profile.personal_info
    values = {token: _esc(getattr(info, token)) for token in CONTACT_TOKENS}
    values["title"] = _esc(profile.title)

    if ai_text and ai_text.strip():
        values["ai_resume"] = ai_text
        return values

    values.update(
        summary=_esc(profile.summary),
        skills=_esc(", ".join(profile.skills)),
        experience=_join(profile.experience, format_experience),
        education=_join(profile.education, format_education),
        projects=_join(profile.projects, format_project),
        certifications=_join(profile.certifications, format_certification),
    )
    return values


def clean_template(html: str) -> str:
    """Remove leftover placeholder tokens and collapse redundant whitespace/breaks."""
    # Removing a token can join its neighbours into a new one; repeat until stable.
    while PLACEHOLDER_PATTERN.search(html):
        html = PLACEHOLDER_PATTERN.sub("", html)
    html = _WHITESPACE_RUN.sub(" ", html)
    return _BREAK_RUN.sub(LINE_BREAK, html)


def render(template: str, data: Optional[Profile] = None, ai_text: Optional[str] = None) -> str:
    """Fill a template with profile data.

    Args:
        template: HTML template containing ``{{token}}`` placeholders.
        data: Profile (or generated resume) supplying the content.
        ai_text: Consolidated AI text; when non-blank it fills ``{{ai_resume}}``
            and the section tokens are not filled from ``data``.

    Returns:
        Rendered HTML with no placeholder syntax left.
    """
    replacements = build_replacements(data, ai_text)

    def _substitute(match: re.Match) -> str:
        return replacements.get(match.group(1), "")

    return clean_template(PLACEHOLDER_PATTERN.sub(_substitute, template))
