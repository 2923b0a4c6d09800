"""Unit tests for rendering builder previews."""

import pytest

from exceptions import FeatureLockedError, InputValidationError, TemplateFetchError
from models.builder import PreviewMode
from models.generation import GeneratedResume
from services.builder.session_manager import SessionManager
from services.rendering.preview import PreviewRenderer, preview_source
from services.rendering.substitution import PLACEHOLDER_PATTERN


@pytest.fixture
def sessions():
    return SessionManager()


@pytest.mark.unit
async def test_preview_from_profile(sessions, template_store, free_template, free_context, sample_profile):
    session = sessions.create_session(free_context.user_id, profile=sample_profile, template=free_template)

    updated = await PreviewRenderer(template_store, sessions).render_preview(session.session_id, free_context)

    assert updated.preview_mode == PreviewMode.PROFILE
    assert "<h1>Asha Rao</h1>" in updated.preview_html
    assert "Acme Corp" in updated.preview_html
    assert PLACEHOLDER_PATTERN.search(updated.preview_html) is None
    assert sessions.get_session(session.session_id).has_preview


@pytest.mark.unit
async def test_preview_prefers_ai_text(sessions, template_store, free_template, free_context, sample_profile):
    session = sessions.create_session(
        free_context.user_id, profile=sample_profile, template=free_template, ai_text="RAW AI RESUME"
    )

    updated = await PreviewRenderer(template_store, sessions).render_preview(session.session_id, free_context)

    assert updated.preview_mode == PreviewMode.AI_TEXT
    assert "RAW AI RESUME" in updated.preview_html
    assert "Acme Corp" not in updated.preview_html
    assert "<h1>Asha Rao</h1>" in updated.preview_html


@pytest.mark.unit
def test_preview_source_ai_resume_keeps_contact_details(sample_profile, free_context):
    sessions = SessionManager()
    session = sessions.create_session(
        free_context.user_id,
        profile=sample_profile,
        ai_resume=GeneratedResume.model_validate({"summary": "AI summary"}),
    )

    data, ai_text, mode = preview_source(session)

    assert mode == PreviewMode.AI_RESUME
    assert ai_text == ""
    assert data.summary == "AI summary"
    assert data.name == "Asha Rao"
    assert data.title == "Backend Engineer"


@pytest.mark.unit
async def test_preview_requires_template(sessions, template_store, free_context):
    session = sessions.create_session(free_context.user_id)

    with pytest.raises(InputValidationError):
        await PreviewRenderer(template_store, sessions).render_preview(session.session_id, free_context)


@pytest.mark.unit
async def test_premium_template_rechecked_at_preview(
    sessions, template_store, premium_template, free_context, sample_profile
):
    # Selected while paid; the plan has since lapsed.
    session = sessions.create_session(free_context.user_id, profile=sample_profile, template=premium_template)

    with pytest.raises(FeatureLockedError):
        await PreviewRenderer(template_store, sessions).render_preview(session.session_id, free_context)

    assert template_store.fetched == []


@pytest.mark.unit
async def test_fetch_failure_keeps_previous_preview(sessions, free_template, free_context, sample_profile):
    class BrokenStore:
        async def fetch_html(self, template):
            raise TemplateFetchError(template.id, "template server returned 404")

    session = sessions.create_session(
        free_context.user_id, profile=sample_profile, template=free_template, preview_html="<p>old</p>"
    )

    with pytest.raises(TemplateFetchError):
        await PreviewRenderer(BrokenStore(), sessions).render_preview(session.session_id, free_context)

    assert sessions.get_session(session.session_id).preview_html == "<p>old</p>"
