from fastapi import APIRouter, Depends

from models.account import SessionContext
from schemas.responses import TemplateResponse
from services.auth.gate import can_use_template
from services.rendering.template_store import TemplateStore
from routers.dependencies import get_session_context, get_template_store

router = APIRouter(prefix="/api/templates", tags=["Templates"])


@router.get("", response_model=list[TemplateResponse])
async def list_templates(
    context: SessionContext = Depends(get_session_context),
    store: TemplateStore = Depends(get_template_store),
):
    """Active templates, each flagged ``locked`` when the caller's plan can't use it."""
    templates = await store.list_templates(active_only=True)
    return [
        TemplateResponse.from_descriptor(t, locked=not can_use_template(t, context.plan))
        for t in templates
    ]
