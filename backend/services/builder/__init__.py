from services.builder.session_manager import SessionManager, get_session_manager

__all__ = ["SessionManager", "get_session_manager"]
