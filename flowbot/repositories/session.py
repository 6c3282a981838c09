from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional

from ..domain.models import FlowDefinition
from ..exceptions import DuplicateSessionError
from ..state.models import SessionState, utcnow

Clock = Callable[[], datetime]


class SessionRepository(ABC):
    """
    Defines how the application accesses sessions.
    One session per user id; every mutating call refreshes `last_activity`.
    """

    def __init__(self, clock: Clock = utcnow):
        self.clock = clock

    @abstractmethod
    def get(self, user_id: str) -> Optional[SessionState]:
        """Retrieves the user's session, if any."""
        pass

    @abstractmethod
    def create(self, user_id: str, flow: FlowDefinition) -> SessionState:
        """
        Creates a session for `flow`.
        Raises DuplicateSessionError if the user already has one.
        """
        pass

    @abstractmethod
    def save(self, session: SessionState):
        """Persists the session state and marks it active now."""
        pass

    @abstractmethod
    def delete(self, user_id: str) -> bool:
        """Deletes a session. Returns True if found and deleted."""
        pass

    @abstractmethod
    def list_sessions(self) -> List[SessionState]:
        """Snapshot of all live sessions."""
        pass

    @abstractmethod
    def clear(self):
        """Discards every session."""
        pass

    @staticmethod
    def is_expired(session: SessionState, now: datetime, timeout: timedelta) -> bool:
        return now - session.last_activity > timeout


class InMemorySessionRepository(SessionRepository):
    """
    Uses in-memory dictionary for session storage.
    """

    def __init__(self, clock: Clock = utcnow):
        super().__init__(clock)
        self._store: Dict[str, SessionState] = {}

    def get(self, user_id: str) -> Optional[SessionState]:
        return self._store.get(user_id)

    def create(self, user_id: str, flow: FlowDefinition) -> SessionState:
        if user_id in self._store:
            raise DuplicateSessionError(user_id)
        now = self.clock()
        session = SessionState(
            user_id=user_id,
            flow_name=flow.name,
            created_at=now,
            last_activity=now,
        )
        self._store[user_id] = session
        return session

    def save(self, session: SessionState):
        session.last_activity = self.clock()
        self._store[session.user_id] = session

    def delete(self, user_id: str) -> bool:
        if user_id in self._store:
            del self._store[user_id]
            return True
        return False

    def list_sessions(self) -> List[SessionState]:
        return list(self._store.values())

    def clear(self):
        self._store.clear()
