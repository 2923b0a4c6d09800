"""FastAPI dependencies shared by the routers.

Everything that talks to an external collaborator is provided here so tests
can swap it through ``app.dependency_overrides``.
"""

from typing import Optional

from fastapi import Depends, Header

from config import Settings, get_settings
from models.account import SessionContext
from services.auth.identity import IdentityService
from services.auth.otp import OTPService
from services.builder.session_manager import SessionManager, get_session_manager
from services.datastore.client import SupabaseClient, get_supabase_client
from services.datastore.resumes import ResumeRepository
from services.email.client import get_email_client
from services.export.rasterizer import PlaywrightRasterizer, SurfaceRasterizer
from services.generation.ats import ATSAnalyzer
from services.generation.cover_letter import CoverLetterGenerator
from services.generation.resume import ResumeContentGenerator
from services.llm.base import LLMProvider
from services.llm.factory import get_llm_provider
from services.rendering.preview import PreviewRenderer
from services.rendering.template_store import TemplateStore


def get_datastore() -> SupabaseClient:
    return get_supabase_client()


def get_identity_service(client: SupabaseClient = Depends(get_datastore)) -> IdentityService:
    return IdentityService(client)


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


async def get_session_context(
    authorization: Optional[str] = Header(default=None),
    identity: IdentityService = Depends(get_identity_service),
) -> SessionContext:
    """Resolve the caller's identity and plan.

    Evaluated on every request; the plan is never cached between requests.
    """
    return await identity.resolve(bearer_token(authorization))


def get_llm() -> LLMProvider:
    return get_llm_provider()


def get_resume_generator(
    llm: LLMProvider = Depends(get_llm),
    settings: Settings = Depends(get_settings),
) -> ResumeContentGenerator:
    return ResumeContentGenerator(
        llm,
        temperature=settings.resume_temperature,
        max_tokens=settings.resume_max_tokens,
        max_target_skills=settings.max_target_skills,
    )


def get_ats_analyzer(
    llm: LLMProvider = Depends(get_llm),
    settings: Settings = Depends(get_settings),
) -> ATSAnalyzer:
    return ATSAnalyzer(llm, temperature=settings.ats_temperature, max_tokens=settings.ats_max_tokens)


def get_cover_letter_generator(
    llm: LLMProvider = Depends(get_llm),
    settings: Settings = Depends(get_settings),
) -> CoverLetterGenerator:
    return CoverLetterGenerator(
        llm,
        temperature=settings.cover_letter_temperature,
        max_tokens=settings.cover_letter_max_tokens,
    )


def get_otp_service(
    client: SupabaseClient = Depends(get_datastore),
    identity: IdentityService = Depends(get_identity_service),
    settings: Settings = Depends(get_settings),
) -> OTPService:
    return OTPService(client, get_email_client(), identity, ttl_minutes=settings.otp_ttl_minutes)


def get_template_store(
    client: SupabaseClient = Depends(get_datastore),
    settings: Settings = Depends(get_settings),
) -> TemplateStore:
    return TemplateStore(client, timeout=settings.http_timeout)


def get_sessions() -> SessionManager:
    return get_session_manager()


def get_preview_renderer(
    store: TemplateStore = Depends(get_template_store),
    sessions: SessionManager = Depends(get_sessions),
) -> PreviewRenderer:
    return PreviewRenderer(store, sessions)


def get_rasterizer() -> SurfaceRasterizer:
    return PlaywrightRasterizer()


def get_resume_repository(client: SupabaseClient = Depends(get_datastore)) -> ResumeRepository:
    return ResumeRepository(client)
