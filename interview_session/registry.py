"""Process-local registry of live interview sessions."""
from __future__ import annotations

import secrets
import time
from typing import Dict, Iterator, List, Optional, Sequence, Union

from catalog.models import Persona, Role, Topic
from difficulty import DifficultyTracker, initial_level

from .models import InterviewSession, PersonaSnapshot, RoleSnapshot


def new_session_id() -> str:
    return f"int_{int(time.time() * 1000)}_{secrets.token_hex(5)}"


class SessionRegistry:
    """Holds active sessions keyed by id.

    Nothing here survives a process restart; a session leaves the registry
    exactly once, when it is ended and handed to durable storage.
    """

    def __init__(self, *, default_level: int = 2, assessment_window: int = 3) -> None:
        self._sessions: Dict[str, InterviewSession] = {}
        self._default_level = default_level
        self._assessment_window = assessment_window

    def create(
        self,
        course_id: str,
        course_name: str,
        selected_topics: Union[str, Sequence[str]],
        topic_snapshots: Sequence[Topic],
        persona: Optional[Persona] = None,
        role: Optional[Role] = None,
    ) -> InterviewSession:
        level = initial_level(
            role.model_dump(exclude_none=True) if role is not None else None,
            default=self._default_level,
        )
        session_id = new_session_id()
        while session_id in self._sessions:
            session_id = new_session_id()
        session = InterviewSession(
            id=session_id,
            course_id=course_id,
            course_name=course_name,
            selected_topics=selected_topics if isinstance(selected_topics, str) else list(selected_topics),
            topics=[topic.model_copy(deep=True) for topic in topic_snapshots],
            persona=PersonaSnapshot.from_persona(persona) if persona is not None else None,
            target_role=RoleSnapshot.from_role(role, level) if role is not None else None,
            difficulty_tracker=DifficultyTracker(current_level=level, window_size=self._assessment_window),
        )
        self._sessions[session_id] = session
        return session

    def get(self, session_id: str) -> Optional[InterviewSession]:
        return self._sessions.get(session_id)

    def evict(self, session_id: str) -> Optional[InterviewSession]:
        return self._sessions.pop(session_id, None)

    def active_ids(self) -> List[str]:
        return list(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def __iter__(self) -> Iterator[InterviewSession]:
        return iter(list(self._sessions.values()))


__all__ = ["SessionRegistry", "new_session_id"]
