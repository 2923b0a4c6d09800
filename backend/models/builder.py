from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime, timezone
from uuid import uuid4

from models.generation import GeneratedResume
from models.resume import Profile
from models.template import TemplateDescriptor


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PreviewMode(Enum):
    """What the current preview was rendered from."""
    PROFILE = "profile"
    AI_RESUME = "ai_resume"
    AI_TEXT = "ai_text"


class BuilderSession(BaseModel):
    """Working state of one resume being built.

    Held in memory only; nothing here is persisted until the user saves.
    """
    session_id: str = Field(default_factory=lambda: str(uuid4()))
    owner_id: str

    profile: Profile = Field(default_factory=Profile)
    template: Optional[TemplateDescriptor] = None

    # Output of the last AI request: a structured record or the raw reply text
    ai_resume: Optional[GeneratedResume] = None
    ai_text: str = ""
    ai_warning: Optional[str] = None

    # Last rendered preview; required before export
    preview_html: Optional[str] = None
    preview_mode: Optional[PreviewMode] = None

    # In-flight operation flags
    is_generating: bool = False
    is_analyzing: bool = False

    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @property
    def has_preview(self) -> bool:
        return bool(self.preview_html and self.preview_html.strip())
