import logging

from exceptions import InputValidationError, SessionNotFoundError
from models.account import SessionContext
from models.builder import BuilderSession, PreviewMode
from models.resume import Profile
from services.auth.gate import require_template
from services.builder.session_manager import SessionManager
from services.rendering.substitution import render
from services.rendering.template_store import TemplateStore


logger = logging.getLogger(__name__)


def preview_source(session: BuilderSession) -> tuple[Profile, str, PreviewMode]:
    """Pick the data a preview is rendered from.

    Raw AI text wins over a structured AI record, which wins over the
    user's own profile. Contact details always come from the profile.
    """
    if session.ai_text.strip():
        return session.profile, session.ai_text, PreviewMode.AI_TEXT

    if session.ai_resume is not None:
        data = session.ai_resume
        if not data.personal_info.name.strip():
            data = data.model_copy(update={"personal_info": session.profile.personal_info})
        if not data.title.strip():
            data = data.model_copy(update={"title": session.profile.title})
        return data, "", PreviewMode.AI_RESUME

    return session.profile, "", PreviewMode.PROFILE


class PreviewRenderer:
    """Renders a builder session into its selected template."""

    def __init__(self, store: TemplateStore, sessions: SessionManager):
        self.store = store
        self.sessions = sessions

    async def render_preview(self, session_id: str, context: SessionContext) -> BuilderSession:
        """Render and store the preview for a session.

        The template's plan gate is checked again on every preview, since the
        caller's plan may have changed since it was selected.

        Raises:
            SessionNotFoundError: If the session is gone.
            InputValidationError: If no template has been selected.
            FeatureLockedError: If the template is premium and the plan is not.
            TemplateFetchError: If the template HTML could not be loaded. The
                previous preview is kept in that case.
        """
        session = self.sessions.require_session(session_id, context.user_id)
        if session.template is None:
            raise InputValidationError("template_id", "Please choose a template first.")

        require_template(context, session.template)
        template_html = await self.store.fetch_html(session.template)

        data, ai_text, mode = preview_source(session)
        rendered = render(template_html, data, ai_text=ai_text or None)
        logger.info(
            f"Rendered preview for session {session_id} from {mode.value} "
            f"with template {session.template.id} ({len(rendered)} chars)"
        )

        updated = self.sessions.update_session(session_id, preview_html=rendered, preview_mode=mode)
        if updated is None:
            raise SessionNotFoundError(session_id)
        return updated
