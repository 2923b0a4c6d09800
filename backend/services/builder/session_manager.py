from typing import Any, Optional
from datetime import datetime, timezone
from functools import lru_cache
import logging
import threading

from models.builder import BuilderSession
from exceptions import OperationInProgressError, SessionNotFoundError


logger = logging.getLogger(__name__)

OPERATION_FLAGS = ("is_generating", "is_analyzing")


class SessionManager:
    """In-memory storage for resume builder sessions.

    Thread-safe. Sessions belong to one user; lookups by anyone else behave
    as if the session did not exist.
    """

    def __init__(self):
        self._sessions: dict[str, BuilderSession] = {}
        self._lock = threading.Lock()

    def create_session(self, owner_id: str, **fields: Any) -> BuilderSession:
        """Create a new builder session.

        Args:
            owner_id: The user the session belongs to.
            **fields: Initial values (profile, template, ...).

        Returns:
            New BuilderSession instance.
        """
        session = BuilderSession(owner_id=owner_id, **fields)

        with self._lock:
            self._sessions[session.session_id] = session

        logger.info(f"Builder session {session.session_id} created for user {owner_id}")
        return session.model_copy(deep=True)

    def get_session(self, session_id: str, owner_id: Optional[str] = None) -> Optional[BuilderSession]:
        """Get a snapshot of a session.

        Returns:
            A copy of the session, or None if it does not exist (or belongs
            to someone other than ``owner_id``).
        """
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None or (owner_id is not None and session.owner_id != owner_id):
                return None
            return session.model_copy(deep=True)

    def require_session(self, session_id: str, owner_id: str) -> BuilderSession:
        session = self.get_session(session_id, owner_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def update_session(self, session_id: str, **changes: Any) -> Optional[BuilderSession]:
        """Apply field changes to a stored session.

        A session deleted in the meantime stays deleted: results that arrive
        after the user abandoned the session are dropped.

        Returns:
            The updated snapshot, or None if the session no longer exists.
        """
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                logger.info(f"Dropping update for closed session {session_id}")
                return None
            for name, value in changes.items():
                setattr(session, name, value)
            session.updated_at = datetime.now(timezone.utc)
            return session.model_copy(deep=True)

    def delete_session(self, session_id: str, owner_id: Optional[str] = None) -> bool:
        """Delete a session by ID.

        Returns:
            True if deleted, False if not found.
        """
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None or (owner_id is not None and session.owner_id != owner_id):
                return False
            del self._sessions[session_id]
            return True

    def begin(self, session_id: str, flag: str) -> BuilderSession:
        """Mark an operation as running.

        Raises:
            SessionNotFoundError: If the session does not exist.
            OperationInProgressError: If the same operation is already running.
        """
        if flag not in OPERATION_FLAGS:
            raise ValueError(f"Unknown operation flag: {flag}")

        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise SessionNotFoundError(session_id)
            if getattr(session, flag):
                raise OperationInProgressError(flag.removeprefix("is_"))
            setattr(session, flag, True)
            return session.model_copy(deep=True)

    def end(self, session_id: str, flag: str) -> None:
        """Clear an operation flag. No-op for a deleted session."""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None:
                setattr(session, flag, False)

    def list_sessions(self, owner_id: Optional[str] = None) -> list[BuilderSession]:
        with self._lock:
            sessions = list(self._sessions.values())
            if owner_id:
                sessions = [s for s in sessions if s.owner_id == owner_id]
            return [s.model_copy(deep=True) for s in sessions]

    def cleanup_expired(self, max_age_minutes: int = 60) -> int:
        """Drop sessions idle for longer than ``max_age_minutes``.

        Sessions with an operation in flight are kept.

        Returns:
            Number of sessions cleaned up.
        """
        now = datetime.now(timezone.utc)

        with self._lock:
            expired = [
                sid for sid, session in self._sessions.items()
                if (now - session.updated_at).total_seconds() > max_age_minutes * 60
                and not (session.is_generating or session.is_analyzing)
            ]
            for sid in expired:
                del self._sessions[sid]

        if expired:
            logger.info(f"Cleaned up {len(expired)} expired builder sessions")
        return len(expired)


@lru_cache()
def get_session_manager() -> SessionManager:
    """Get the singleton session manager instance."""
    return SessionManager()
