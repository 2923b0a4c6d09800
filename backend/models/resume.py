from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Any, Optional


def normalize_description(value: Any) -> list[str]:
    """Normalize a description to an ordered list of strings.

    A list of strings passes through unchanged (only ``None`` items are
    dropped), a single string becomes a one-element list, and absent or
    empty values become an empty list.
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, (list, tuple)):
        return [item if isinstance(item, str) else str(item) for item in value if item is not None]
    text = str(value)
    return [text] if text.strip() else []


def _empty_list(value: Any) -> Any:
    return [] if value is None else value


def _empty_str(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, (int, float)):
        return str(value)
    return value


class _Entry(BaseModel):
    """Base for resume entries: missing scalars become empty strings."""

    model_config = {"extra": "ignore"}

    @model_validator(mode="before")
    @classmethod
    def _none_to_empty(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {
                k: _empty_str(v) if not isinstance(v, (list, tuple, dict)) else v
                for k, v in data.items()
            }
        return data


class ExperienceEntry(_Entry):
    title: str = ""
    organization: str = Field(default="", validation_alias="company")
    duration: str = ""
    description: list[str] = Field(default_factory=list)

    # Stored records use "company"; generated ones may use "organization".
    model_config = {"extra": "ignore", "populate_by_name": True}

    @field_validator("description", mode="before")
    @classmethod
    def _normalize_description(cls, v: Any) -> list[str]:
        return normalize_description(v)


class EducationEntry(_Entry):
    degree: str = ""
    institution: str = ""
    year: str = ""
    gpa: str = ""  # optional grade metric


class ProjectEntry(_Entry):
    title: str = ""
    description: list[str] = Field(default_factory=list)
    tech: list[str] = Field(default_factory=list)
    duration: str = ""

    @field_validator("description", mode="before")
    @classmethod
    def _normalize_description(cls, v: Any) -> list[str]:
        return normalize_description(v)

    @field_validator("tech", mode="before")
    @classmethod
    def _split_tech(cls, v: Any) -> list[str]:
        if isinstance(v, str):
            return [t.strip() for t in v.split(",") if t.strip()]
        return normalize_description(v)


class CertificationEntry(_Entry):
    name: str = ""
    issuer: str = ""
    year: str = ""


class ReferenceEntry(_Entry):
    name: str = ""
    position: str = ""
    company: str = ""
    contact: str = ""


class PersonalInfo(_Entry):
    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    github: str = ""
    portfolio: str = ""


PERSONAL_FIELDS = tuple(PersonalInfo.model_fields)

LIST_FIELDS = (
    "skills",
    "technologies",
    "languages",
    "references",
    "experience",
    "education",
    "projects",
    "certifications",
)


class Profile(BaseModel):
    """Structured resume data edited in the builder.

    Accepts both the nested ``personal_info`` shape stored by the client and
    a flat shape with contact fields at the top level.
    """

    model_config = {"extra": "ignore"}

    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    title: str = ""
    summary: str = ""
    skills: list[str] = Field(default_factory=list)
    technologies: list[str] = Field(default_factory=list)
    languages: list[str] = Field(default_factory=list)
    references: list[ReferenceEntry] = Field(default_factory=list)
    experience: list[ExperienceEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    projects: list[ProjectEntry] = Field(default_factory=list)
    certifications: list[CertificationEntry] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _lift_flat_contact(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        personal = dict(data.get("personal_info") or {})
        for key in PERSONAL_FIELDS:
            if key in data and not personal.get(key):
                personal[key] = data.pop(key)
            else:
                data.pop(key, None)
        data["personal_info"] = personal
        for key in LIST_FIELDS:
            if key in data:
                data[key] = _empty_list(data[key])
        for key in ("title", "summary"):
            if key in data:
                data[key] = _empty_str(data[key])
        return data

    @field_validator("skills", "technologies", "languages", mode="before")
    @classmethod
    def _normalize_strings(cls, v: Any) -> list[str]:
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return normalize_description(v)

    @property
    def name(self) -> str:
        return self.personal_info.name

    def is_empty(self) -> bool:
        """True when the profile carries no usable content at all."""
        if any(getattr(self.personal_info, f).strip() for f in PERSONAL_FIELDS):
            return False
        if self.title.strip() or self.summary.strip():
            return False
        return not any(getattr(self, f) for f in LIST_FIELDS)

    def to_prompt_dict(self) -> dict[str, Any]:
        """Flat dictionary used when embedding the profile in a prompt."""
        data = self.model_dump(exclude={"personal_info"})
        data = {**self.personal_info.model_dump(), **data}
        for entry in data["experience"]:
            entry["company"] = entry.pop("organization")
        return data


class StoredResume(BaseModel):
    """A saved resume row in the data service."""
    id: Optional[str] = None
    user_id: Optional[str] = None
    title: str
    content: dict[str, Any] = Field(default_factory=dict)
    template: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
