from pydantic import BaseModel, Field, field_validator
from typing import Optional, Any

from models.resume import Profile, normalize_description


class SendOTPRequest(BaseModel):
    """Request a signup verification code."""
    email: str


class VerifyOTPRequest(BaseModel):
    """Submit the emailed code (and the new account's credentials)."""
    email: str
    otp: str
    password: Optional[str] = None
    full_name: str = ""

    @field_validator("otp", mode="before")
    @classmethod
    def _otp_as_text(cls, v: Any) -> str:
        return "" if v is None else str(v).strip()


class CreateBuilderSessionRequest(BaseModel):
    """Start a builder session, optionally from an existing profile."""
    profile: Optional[Profile] = None
    template_id: Optional[str] = None


class UpdateProfileRequest(BaseModel):
    profile: Profile


class SelectTemplateRequest(BaseModel):
    template_id: str = Field(..., min_length=1)


class JobRequest(BaseModel):
    """What the resume should target."""
    job_title: str = ""
    target_skills: list[str] = Field(default_factory=list)
    job_description: str = ""

    @field_validator("target_skills", mode="before")
    @classmethod
    def _split_skills(cls, v: Any) -> list[str]:
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return normalize_description(v)


class GenerateResumeRequest(JobRequest):
    """Stateless resume generation from a profile."""
    profile: Profile
    template_url: str = ""


class CoverLetterRequest(BaseModel):
    job_title: str = ""
    company: str = ""
    points: str = ""
    candidate_name: Optional[str] = None


class ATSAnalyzeRequest(BaseModel):
    resume_text: str = ""
    job_description: str = ""


class SaveResumeRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: dict[str, Any] = Field(default_factory=dict)
    template: Optional[str] = None


class UpdateResumeRequest(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    content: Optional[dict[str, Any]] = None
    template: Optional[str] = None
