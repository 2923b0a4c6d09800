from fastapi import APIRouter, Depends, Response, status

from config import Settings, get_settings
from exceptions import InputValidationError, SessionNotFoundError
from models.account import Feature, SessionContext
from models.generation import ResumeContentResult
from schemas.requests import (
    CreateBuilderSessionRequest,
    JobRequest,
    SelectTemplateRequest,
    UpdateProfileRequest,
)
from schemas.responses import BuilderSessionResponse, PreviewResponse
from services.auth.gate import can_access, require_feature, require_template
from services.builder.session_manager import SessionManager
from services.export.pdf_exporter import content_disposition, export_to_pdf
from services.export.rasterizer import SurfaceRasterizer
from services.generation.resume import JobContext, ResumeContentGenerator
from services.rendering.preview import PreviewRenderer
from services.rendering.template_store import TemplateStore
from routers.dependencies import (
    get_preview_renderer,
    get_rasterizer,
    get_resume_generator,
    get_session_context,
    get_sessions,
    get_template_store,
)

router = APIRouter(prefix="/api/builder", tags=["Builder"])


async def _load_template(store: TemplateStore, context: SessionContext, template_id: str):
    template = await store.get_template(template_id)
    if template is None:
        raise InputValidationError("template_id", "Template not found.")
    require_template(context, template)
    return template


@router.post("/sessions", response_model=BuilderSessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session(
    request: CreateBuilderSessionRequest,
    context: SessionContext = Depends(get_session_context),
    sessions: SessionManager = Depends(get_sessions),
    store: TemplateStore = Depends(get_template_store),
):
    """Start building a resume."""
    fields = {}
    if request.profile is not None:
        fields["profile"] = request.profile
    if request.template_id:
        fields["template"] = await _load_template(store, context, request.template_id)

    session = sessions.create_session(context.user_id, **fields)
    return BuilderSessionResponse.from_session(session)


@router.get("/sessions/{session_id}", response_model=BuilderSessionResponse)
async def get_session(
    session_id: str,
    context: SessionContext = Depends(get_session_context),
    sessions: SessionManager = Depends(get_sessions),
):
    session = sessions.require_session(session_id, context.user_id)
    return BuilderSessionResponse.from_session(session)


@router.put("/sessions/{session_id}/profile", response_model=BuilderSessionResponse)
async def update_profile(
    session_id: str,
    request: UpdateProfileRequest,
    context: SessionContext = Depends(get_session_context),
    sessions: SessionManager = Depends(get_sessions),
):
    """Replace the session's profile with the edited one."""
    sessions.require_session(session_id, context.user_id)
    session = sessions.update_session(session_id, profile=request.profile)
    if session is None:
        raise SessionNotFoundError(session_id)
    return BuilderSessionResponse.from_session(session)


@router.post("/sessions/{session_id}/template", response_model=BuilderSessionResponse)
async def select_template(
    session_id: str,
    request: SelectTemplateRequest,
    context: SessionContext = Depends(get_session_context),
    sessions: SessionManager = Depends(get_sessions),
    store: TemplateStore = Depends(get_template_store),
):
    """Choose a template. The previous preview no longer applies."""
    sessions.require_session(session_id, context.user_id)
    template = await _load_template(store, context, request.template_id)
    session = sessions.update_session(
        session_id, template=template, preview_html=None, preview_mode=None
    )
    if session is None:
        raise SessionNotFoundError(session_id)
    return BuilderSessionResponse.from_session(session)


@router.post("/sessions/{session_id}/preview", response_model=PreviewResponse)
async def preview(
    session_id: str,
    context: SessionContext = Depends(get_session_context),
    renderer: PreviewRenderer = Depends(get_preview_renderer),
):
    """Render the session into its template."""
    session = await renderer.render_preview(session_id, context)
    return PreviewResponse(
        session_id=session.session_id,
        preview_mode=session.preview_mode,
        html=session.preview_html,
    )


@router.post("/sessions/{session_id}/generate", response_model=ResumeContentResult)
async def generate(
    session_id: str,
    request: JobRequest,
    context: SessionContext = Depends(get_session_context),
    sessions: SessionManager = Depends(get_sessions),
    generator: ResumeContentGenerator = Depends(get_resume_generator),
):
    """Have the AI write the resume for this session.

    Only one generation may run per session. A raw-text reply is returned
    with a warning and stored for the preview.
    """
    require_feature(context, Feature.AI_GENERATION)
    sessions.require_session(session_id, context.user_id)

    session = sessions.begin(session_id, "is_generating")
    try:
        job = JobContext(
            job_title=request.job_title,
            target_skills=request.target_skills,
            job_description=request.job_description,
            template_url=session.template.url if session.template else "",
        )
        result = await generator.request_resume_content(session.profile, job)
        sessions.update_session(
            session_id,
            ai_resume=result.resume,
            ai_text=result.raw_text or "",
            ai_warning=result.warning,
        )
    finally:
        sessions.end(session_id, "is_generating")

    return result


@router.get("/sessions/{session_id}/pdf")
async def download_pdf(
    session_id: str,
    context: SessionContext = Depends(get_session_context),
    sessions: SessionManager = Depends(get_sessions),
    renderer: PreviewRenderer = Depends(get_preview_renderer),
    rasterizer: SurfaceRasterizer = Depends(get_rasterizer),
    settings: Settings = Depends(get_settings),
):
    """Export the session as a PDF download.

    A preview must exist; it is re-rendered from the latest profile and AI
    content first. Free-plan exports carry a watermark.
    """
    session = sessions.require_session(session_id, context.user_id)
    if session.has_preview:
        session = await renderer.render_preview(session_id, context)
    exported = await export_to_pdf(
        session.preview_html,
        session.profile.name,
        rasterizer,
        scale=settings.pdf_supersample,
        watermark=not can_access(Feature.WATERMARK_FREE_EXPORT, context.plan),
    )
    return Response(
        content=exported.content,
        media_type="application/pdf",
        headers={"Content-Disposition": content_disposition(exported.filename)},
    )


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(
    session_id: str,
    context: SessionContext = Depends(get_session_context),
    sessions: SessionManager = Depends(get_sessions),
):
    """Abandon a session. Results of operations still in flight are dropped."""
    if not sessions.delete_session(session_id, context.user_id):
        raise SessionNotFoundError(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
