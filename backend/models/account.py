from enum import Enum
from pydantic import BaseModel, Field, field_validator
from typing import Any, Optional
from datetime import datetime, timezone


class Plan(Enum):
    """Subscription tier."""
    FREE = "free"
    PAID = "paid"

    @classmethod
    def from_value(cls, value: Any) -> "Plan":
        if isinstance(value, Plan):
            return value
        if isinstance(value, str) and value.strip().lower() in ("paid", "premium"):
            return cls.PAID
        return cls.FREE


class Feature(Enum):
    """Features gated by plan."""
    AI_GENERATION = "ai_generation"
    COVER_LETTER = "cover_letter"
    SAVE_COVER_LETTER = "save_cover_letter"
    PREMIUM_TEMPLATES = "premium_templates"
    WATERMARK_FREE_EXPORT = "watermark_free_export"


class UserProfile(BaseModel):
    """Row of the ``profiles`` table."""

    model_config = {"extra": "ignore"}

    id: str
    full_name: Optional[str] = None
    email: Optional[str] = None
    is_admin: bool = False
    plan: Plan = Plan.FREE

    @field_validator("plan", mode="before")
    @classmethod
    def _coerce_plan(cls, v: Any) -> Plan:
        return Plan.from_value(v)

    @field_validator("is_admin", mode="before")
    @classmethod
    def _coerce_admin(cls, v: Any) -> bool:
        return bool(v)


class SessionContext(BaseModel):
    """Authenticated identity and plan, resolved once per request."""

    user: UserProfile
    resolved_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def plan(self) -> Plan:
        return self.user.plan

    @property
    def user_id(self) -> str:
        return self.user.id


class OTPRecord(BaseModel):
    """Row of the ``email_otps`` table."""

    model_config = {"extra": "ignore"}

    email: str
    code: str
    expires_at: datetime
    verified: bool = False

    @field_validator("code", mode="before")
    @classmethod
    def _code_as_text(cls, v: Any) -> str:
        # Numeric columns drop leading zeros.
        if isinstance(v, int):
            return f"{v:06d}"
        return str(v).strip()

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        now = now or datetime.now(timezone.utc)
        expires_at = self.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return now >= expires_at
