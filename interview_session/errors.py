"""Errors raised by the interview engine."""
from __future__ import annotations


class InterviewError(RuntimeError):
    """Base class for interview engine failures."""


class SessionNotFound(InterviewError):
    """The session id is unknown, expired or already terminated."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Interview session '{session_id}' not found or expired")
        self.session_id = session_id


class UpstreamGenerationFailure(InterviewError):
    """An interviewer generator failed or returned unusable content."""

    def __init__(self, stage: str, detail: str = "") -> None:
        message = f"Interview {stage} generation failed"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.stage = stage


class CourseNotFound(InterviewError):
    def __init__(self, course_id: str) -> None:
        super().__init__(f"Course '{course_id}' not found")
        self.course_id = course_id


class NoTopicsSelected(InterviewError):
    """None of the requested topics exist in the course."""


class DailyLimitReached(InterviewError):
    def __init__(self, limit: int, used: int) -> None:
        super().__init__(
            f"You've reached your daily interview question limit of {limit}. Try again tomorrow."
        )
        self.limit = limit
        self.used = used


__all__ = [
    "CourseNotFound",
    "DailyLimitReached",
    "InterviewError",
    "NoTopicsSelected",
    "SessionNotFound",
    "UpstreamGenerationFailure",
]
