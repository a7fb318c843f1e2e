"""In-memory store of grading sessions.

Results live for the lifetime of the process only.
"""

import threading
from typing import Dict, List, Optional

from src.models.grading_models import GradingSession


class GradingSessionStore:
    """Thread-safe mapping of session id to GradingSession."""

    def __init__(self):
        self._sessions: Dict[str, GradingSession] = {}
        self._lock = threading.Lock()

    def add(self, grading_session: GradingSession) -> None:
        with self._lock:
            self._sessions[grading_session.id] = grading_session

    def get(self, session_id: str) -> Optional[GradingSession]:
        with self._lock:
            return self._sessions.get(session_id)

    def list_for_user(self, user_id: Optional[str]) -> List[GradingSession]:
        """Sessions created by ``user_id``, newest first."""
        with self._lock:
            sessions = [s for s in self._sessions.values() if s.user_id == user_id]
        return sorted(sessions, key=lambda s: s.created_at, reverse=True)

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
