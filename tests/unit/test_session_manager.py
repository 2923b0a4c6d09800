"""Unit tests for builder session storage."""

from datetime import datetime, timedelta, timezone

import pytest

from exceptions import OperationInProgressError, SessionNotFoundError
from models.resume import Profile
from services.builder.session_manager import SessionManager


@pytest.mark.unit
def test_create_and_get_session(sample_profile):
    manager = SessionManager()

    session = manager.create_session("user-1", profile=sample_profile)
    loaded = manager.get_session(session.session_id, "user-1")

    assert loaded.profile == sample_profile
    assert loaded.preview_html is None
    assert not loaded.is_generating


@pytest.mark.unit
def test_sessions_are_private_to_owner():
    manager = SessionManager()
    session = manager.create_session("user-1")

    assert manager.get_session(session.session_id, "user-2") is None
    with pytest.raises(SessionNotFoundError):
        manager.require_session(session.session_id, "user-2")
    assert not manager.delete_session(session.session_id, "user-2")


@pytest.mark.unit
def test_snapshots_do_not_leak_mutations():
    manager = SessionManager()
    session = manager.create_session("user-1")

    snapshot = manager.get_session(session.session_id)
    snapshot.ai_text = "changed locally"

    assert manager.get_session(session.session_id).ai_text == ""


@pytest.mark.unit
def test_update_after_delete_is_ignored():
    manager = SessionManager()
    session = manager.create_session("user-1")
    manager.delete_session(session.session_id, "user-1")

    assert manager.update_session(session.session_id, ai_text="late reply") is None
    assert manager.get_session(session.session_id) is None


@pytest.mark.unit
def test_update_changes_fields():
    manager = SessionManager()
    session = manager.create_session("user-1")

    updated = manager.update_session(session.session_id, profile=Profile(summary="New"))

    assert updated.profile.summary == "New"
    assert updated.updated_at >= session.updated_at


@pytest.mark.unit
def test_operation_flags_are_exclusive():
    manager = SessionManager()
    session = manager.create_session("user-1")

    manager.begin(session.session_id, "is_generating")
    with pytest.raises(OperationInProgressError):
        manager.begin(session.session_id, "is_generating")

    # A different operation may run alongside.
    manager.begin(session.session_id, "is_analyzing")

    manager.end(session.session_id, "is_generating")
    manager.begin(session.session_id, "is_generating")


@pytest.mark.unit
def test_begin_unknown_session_or_flag():
    manager = SessionManager()

    with pytest.raises(SessionNotFoundError):
        manager.begin("missing", "is_generating")
    with pytest.raises(ValueError):
        manager.begin("missing", "is_sleeping")


@pytest.mark.unit
def test_end_on_deleted_session_is_noop():
    manager = SessionManager()
    session = manager.create_session("user-1")
    manager.begin(session.session_id, "is_generating")
    manager.delete_session(session.session_id)

    manager.end(session.session_id, "is_generating")


@pytest.mark.unit
def test_cleanup_expired_keeps_busy_and_recent_sessions():
    manager = SessionManager()
    stale = manager.create_session("user-1")
    busy = manager.create_session("user-1")
    fresh = manager.create_session("user-1")
    old = datetime.now(timezone.utc) - timedelta(hours=2)
    manager._sessions[stale.session_id].updated_at = old
    manager._sessions[busy.session_id].updated_at = old
    manager.begin(busy.session_id, "is_generating")

    cleaned = manager.cleanup_expired(max_age_minutes=60)

    assert cleaned == 1
    assert manager.get_session(stale.session_id) is None
    assert manager.get_session(busy.session_id) is not None
    assert manager.get_session(fresh.session_id) is not None
