"""Interview session state: context snapshots, transcript and lifecycle."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field
from typing_extensions import Annotated

from catalog.models import Persona, Role, Topic
from difficulty import DifficultyTracker
from interviewer.schemas import InterviewSummaryReply

from .metrics import MetricsSnapshot, SessionMetrics

RANDOM_TOPICS = "random"

MessageRole = Literal["interviewer", "user"]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TranscriptMessage(BaseModel):
    role: MessageRole
    content: str
    timestamp: datetime = Field(default_factory=utcnow)
    metadata: Dict[str, Any] = Field(default_factory=dict)


class PersonaSnapshot(BaseModel):
    """Persona as it was when the session started."""

    id: str
    name: str
    style: str = ""
    description: str = ""
    focus_areas: List[str] = Field(default_factory=list)
    evaluation_weight: Dict[str, float] = Field(default_factory=dict)

    @classmethod
    def from_persona(cls, persona: Persona) -> "PersonaSnapshot":
        return cls(
            id=persona.id,
            name=persona.name,
            style=persona.style,
            description=persona.description,
            focus_areas=list(persona.focus_areas),
            evaluation_weight=dict(persona.evaluation_weight),
        )


class RoleSnapshot(BaseModel):
    """Target role as it was when the session started."""

    id: str
    name: str
    level: int = Field(ge=1, le=4)
    type: str = "generic"
    years_experience: Optional[str] = None
    expectations: Dict[str, Any] = Field(default_factory=dict)
    evaluation_criteria: List[str] = Field(default_factory=list)
    focus_topics: List[str] = Field(default_factory=list)

    @classmethod
    def from_role(cls, role: Role, level: int) -> "RoleSnapshot":
        return cls(
            id=role.id,
            name=role.name,
            level=role.level or level,
            type=role.type or "generic",
            years_experience=role.years_experience,
            expectations=dict(role.expectations),
            evaluation_criteria=list(role.evaluation_criteria),
            focus_topics=list(role.focus_topics),
        )


class SessionSummary(InterviewSummaryReply):
    """Generated summary plus the context it was produced under."""

    persona: Optional[PersonaSnapshot] = None
    target_role: Optional[RoleSnapshot] = None
    difficulty_tracker: DifficultyTracker
    metrics: MetricsSnapshot


class ActiveState(BaseModel):
    status: Literal["active"] = "active"


class TerminatedState(BaseModel):
    status: Literal["terminated"] = "terminated"
    end_time: datetime
    summary: SessionSummary


SessionState = Annotated[Union[ActiveState, TerminatedState], Field(discriminator="status")]


class InterviewSession(BaseModel):
    id: str
    course_id: str
    course_name: str
    selected_topics: Union[Literal["random"], List[str]] = RANDOM_TOPICS
    topics: List[Topic] = Field(default_factory=list)
    persona: Optional[PersonaSnapshot] = None
    target_role: Optional[RoleSnapshot] = None
    difficulty_tracker: DifficultyTracker = Field(default_factory=DifficultyTracker)
    metrics: SessionMetrics = Field(default_factory=SessionMetrics)
    start_time: datetime = Field(default_factory=utcnow)
    messages: List[TranscriptMessage] = Field(default_factory=list)
    state: SessionState = Field(default_factory=ActiveState)

    @property
    def is_active(self) -> bool:
        return isinstance(self.state, ActiveState)

    @property
    def end_time(self) -> Optional[datetime]:
        return self.state.end_time if isinstance(self.state, TerminatedState) else None

    @property
    def summary(self) -> Optional[SessionSummary]:
        return self.state.summary if isinstance(self.state, TerminatedState) else None

    def append_message(self, role: MessageRole, content: str, **metadata: Any) -> TranscriptMessage:
        if not self.is_active:
            raise ValueError(f"Session '{self.id}' is terminated; transcript is closed")
        message = TranscriptMessage(role=role, content=content, metadata=metadata)
        self.messages.append(message)
        return message

    def last_interviewer_message(self) -> Optional[TranscriptMessage]:
        return next((msg for msg in reversed(self.messages) if msg.role == "interviewer"), None)

    def resolve_topic(self, reference: Optional[str]) -> Optional[Topic]:
        """Match a generator's topic reference against the session's topic snapshots."""

        if not reference:
            return None
        needle = reference.strip().lower()
        for topic in self.topics:
            if topic.id.lower() == needle or topic.name.strip().lower() == needle:
                return topic
        return None

    def current_topic_key(self) -> Optional[str]:
        """Topic id of the question being answered; falls back to the raw topic text."""

        last = self.last_interviewer_message()
        if last is None:
            return None
        topic_id = last.metadata.get("topic_id")
        if topic_id:
            return str(topic_id)
        current = last.metadata.get("current_topic")
        return str(current) if current else None

    def current_topic_name(self) -> Optional[str]:
        last = self.last_interviewer_message()
        if last is None:
            return None
        current = last.metadata.get("current_topic")
        return str(current) if current else None

    def metrics_snapshot(self, now: Optional[datetime] = None) -> MetricsSnapshot:
        return self.metrics.snapshot(self.start_time, now)

    def terminated(self, summary: SessionSummary, end_time: Optional[datetime] = None) -> "InterviewSession":
        """Terminated copy of this session; the active instance is left untouched."""

        if not self.is_active:
            raise ValueError(f"Session '{self.id}' is already terminated")
        return self.model_copy(
            deep=True,
            update={"state": TerminatedState(end_time=end_time or utcnow(), summary=summary)},
        )


__all__ = [
    "ActiveState",
    "InterviewSession",
    "PersonaSnapshot",
    "RANDOM_TOPICS",
    "RoleSnapshot",
    "SessionState",
    "SessionSummary",
    "TerminatedState",
    "TranscriptMessage",
]
