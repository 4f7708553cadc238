"""Interview session state, counters and the live-session registry."""
from .errors import (
    CourseNotFound,
    DailyLimitReached,
    InterviewError,
    NoTopicsSelected,
    SessionNotFound,
    UpstreamGenerationFailure,
)
from .metrics import MetricsSnapshot, SessionDuration, SessionMetrics
from .models import (
    RANDOM_TOPICS,
    InterviewSession,
    PersonaSnapshot,
    RoleSnapshot,
    SessionSummary,
    TranscriptMessage,
)
from .registry import SessionRegistry

__all__ = [
    "CourseNotFound",
    "DailyLimitReached",
    "InterviewError",
    "InterviewSession",
    "MetricsSnapshot",
    "NoTopicsSelected",
    "PersonaSnapshot",
    "RANDOM_TOPICS",
    "RoleSnapshot",
    "SessionDuration",
    "SessionMetrics",
    "SessionNotFound",
    "SessionRegistry",
    "SessionSummary",
    "TranscriptMessage",
    "UpstreamGenerationFailure",
]
