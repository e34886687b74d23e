from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional
import settings
from models.menu import MenuEntry
from editor.session import EditorSession
from settings import logger


class SessionManager:
    """Keeps the open editing sessions, one per editor opened by a client.

    Sessions idle for longer than ``max_idle_seconds`` are dropped the next
    time the registry is used, unsaved changes included.
    """

    def __init__(self, max_idle_seconds: Optional[int] = None):
        self.active_sessions: Dict[str, EditorSession] = {}
        if max_idle_seconds is None:
            max_idle_seconds = settings.EDITOR_SESSION_IDLE_SECONDS
        self.max_idle = timedelta(seconds=max_idle_seconds)

    def open(self, entries: List[MenuEntry], menu_id: Optional[str] = None) -> EditorSession:
        """Load entries into a new session and register it."""
        self.expire_idle()
        session = EditorSession(entries, menu_id=menu_id)
        self.active_sessions[session.id] = session
        logger.info("Editor session opened", extra={
            "session_id": session.id,
            "menu_id": menu_id,
            "total_sessions": len(self.active_sessions)
        })
        return session

    def get(self, session_id: str) -> Optional[EditorSession]:
        self.expire_idle()
        session = self.active_sessions.get(session_id)
        if session is not None:
            session.touch()
        return session

    def expire_idle(self) -> int:
        """Drop sessions idle for too long; returns how many were dropped."""
        cutoff = datetime.now(timezone.utc) - self.max_idle
        expired = [
            session_id for session_id, session in self.active_sessions.items()
            if session.last_active < cutoff
        ]
        for session_id in expired:
            session = self.active_sessions.pop(session_id)
            logger.warning("Idle editor session expired", extra={
                "session_id": session_id,
                "menu_id": session.menu_id,
                "unsaved_changes": session.has_unsaved_changes
            })
        return len(expired)

    def close(self, session_id: str) -> bool:
        """Drop a session; closing an unknown session is not an error."""
        session = self.active_sessions.pop(session_id, None)
        if session is None:
            return False
        if session.has_unsaved_changes:
            logger.warning("Editor session closed with unsaved changes", extra={
                "session_id": session_id,
                "menu_id": session.menu_id
            })
        else:
            logger.info("Editor session closed", extra={"session_id": session_id})
        return True

    def clear(self):
        self.active_sessions.clear()

    def get_session_count(self) -> int:
        """Get the number of open sessions."""
        return len(self.active_sessions)


# Global manager instance
sessions = SessionManager()
