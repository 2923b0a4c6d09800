import math

from pydantic import BaseModel, Field, AliasChoices, field_validator
from typing import Any


class ATSResult(BaseModel):
    """Result of comparing resume text against a job description."""

    score: int = Field(default=0, ge=0, le=100)
    missing_keywords: list[str] = Field(default_factory=list)
    suggested_improvements: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("suggested_improvements", "suggestions"),
    )
    is_default: bool = False

    @field_validator("score", mode="before")
    @classmethod
    def _clamp_score(cls, v: Any) -> int:
        try:
            score = float(v)
        except (TypeError, ValueError):
            return 0
        if not math.isfinite(score):
            raise ValueError("score must be a finite number")
        return max(0, min(100, round(score)))

    @field_validator("missing_keywords", "suggested_improvements", mode="before")
    @classmethod
    def _none_to_list(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str):
            return [v] if v.strip() else []
        return v


# Substituted when the model reply cannot be parsed.
DEFAULT_ATS_RESULT = ATSResult(
    score=70,
    missing_keywords=["Leadership", "Project Management"],
    suggested_improvements=["Add measurable results and job-specific keywords."],
    is_default=True,
)
