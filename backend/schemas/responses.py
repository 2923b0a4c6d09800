from pydantic import BaseModel
from typing import Optional, Any
from datetime import datetime

from models.account import UserProfile
from models.builder import BuilderSession, PreviewMode
from models.generation import GeneratedResume
from models.resume import Profile
from models.template import TemplateDescriptor


class ErrorResponse(BaseModel):
    """Standard error response."""
    error_code: str
    message: str
    details: Optional[dict[str, Any]] = None


class OTPSentResponse(BaseModel):
    message: str = "OTP sent successfully."
    expires_at: datetime


class VerifyOTPResponse(BaseModel):
    message: str = "Email verified successfully."
    user: UserProfile


class TemplateResponse(BaseModel):
    """A template as shown in the gallery."""
    id: str
    name: str
    description: Optional[str] = None
    preview_image: Optional[str] = None
    category: Optional[str] = None
    is_premium: bool = False
    locked: bool = False

    @classmethod
    def from_descriptor(cls, template: TemplateDescriptor, locked: bool) -> "TemplateResponse":
        return cls(
            id=template.id,
            name=template.name,
            description=template.description,
            preview_image=template.preview_image,
            category=template.category,
            is_premium=template.is_premium,
            locked=locked,
        )


class BuilderSessionResponse(BaseModel):
    """Builder session state returned to the client."""
    session_id: str
    profile: Profile
    template_id: Optional[str] = None
    ai_resume: Optional[GeneratedResume] = None
    ai_text: str = ""
    ai_warning: Optional[str] = None
    preview_mode: Optional[PreviewMode] = None
    has_preview: bool = False
    is_generating: bool = False
    is_analyzing: bool = False
    updated_at: datetime

    @classmethod
    def from_session(cls, session: BuilderSession) -> "BuilderSessionResponse":
        return cls(
            session_id=session.session_id,
            profile=session.profile,
            template_id=session.template.id if session.template else None,
            ai_resume=session.ai_resume,
            ai_text=session.ai_text,
            ai_warning=session.ai_warning,
            preview_mode=session.preview_mode,
            has_preview=session.has_preview,
            is_generating=session.is_generating,
            is_analyzing=session.is_analyzing,
            updated_at=session.updated_at,
        )


class PreviewResponse(BaseModel):
    session_id: str
    preview_mode: PreviewMode
    html: str


class CoverLetterResponse(BaseModel):
    cover_letter: str


class ExtractTextResponse(BaseModel):
    filename: str
    text: str
    characters: int
