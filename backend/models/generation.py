from dataclasses import dataclass, field
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Any, Literal, Optional, Union

from models.resume import Profile, normalize_description


RESUME_SCHEMA_VERSION = "2"


class GeneratedResume(Profile):
    """Resume record produced by the language model."""

    extracted_keywords: list[str] = Field(default_factory=list)
    matched_keywords: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _accept_aliases(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("technologies") and data.get("tech"):
            data = {**data, "technologies": data["tech"]}
        return data

    @field_validator("extracted_keywords", "matched_keywords", mode="before")
    @classmethod
    def _normalize_keywords(cls, v: Any) -> list[str]:
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return normalize_description(v)


# Outcome of parsing a model reply. Callers match on ``kind``.

@dataclass(frozen=True)
class Structured:
    data: dict[str, Any]
    kind: Literal["structured"] = "structured"


@dataclass(frozen=True)
class Recovered:
    data: dict[str, Any]
    kind: Literal["recovered"] = "recovered"


@dataclass(frozen=True)
class RawFallback:
    raw_text: str
    kind: Literal["raw_fallback"] = "raw_fallback"
    errors: tuple[str, ...] = field(default_factory=tuple)


ParseOutcome = Union[Structured, Recovered, RawFallback]


class ResumeContentResult(BaseModel):
    """Result of an AI resume request.

    Exactly one of ``resume`` and ``raw_text`` is populated. A raw-text result
    is a successful response that the caller shows for inspection.
    """

    schema_version: str = RESUME_SCHEMA_VERSION
    outcome: Literal["structured", "recovered", "raw_fallback"]
    resume: Optional[GeneratedResume] = None
    raw_text: Optional[str] = None
    warning: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return self.outcome == "raw_fallback"
