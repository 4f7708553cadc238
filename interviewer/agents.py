"""Interviewer generators resolved through the model registry.

Each function looks up the callable bound under its registry key, calls it
with keyword inputs and validates the reply. Any failure surfaces as
``UpstreamGenerationFailure`` so callers can leave session state untouched.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel, ValidationError

from catalog.models import Course, Topic
from config.registry import OPENING_KEY, SUMMARY_KEY, TURN_KEY, get_model
from difficulty import DifficultyContext, DifficultyTracker
from interview_session.errors import UpstreamGenerationFailure

from .schemas import InterviewSummaryReply, OpeningReply, TurnReply

if TYPE_CHECKING:
    from interview_session.models import PersonaSnapshot, RoleSnapshot, TranscriptMessage

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=BaseModel)


def _invoke(key: str, stage: str, schema: Type[R], **inputs: Any) -> R:
    try:
        model = get_model(key)
    except KeyError as exc:
        raise UpstreamGenerationFailure(stage, str(exc)) from exc
    try:
        raw = model(**inputs)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Interview %s generator failed", stage)
        raise UpstreamGenerationFailure(stage, str(exc)) from exc
    if isinstance(raw, schema):
        return raw
    try:
        if isinstance(raw, BaseModel):
            return schema.model_validate(raw.model_dump())
        return schema.model_validate(raw)
    except ValidationError as exc:
        logger.error("Interview %s reply failed validation: %s", stage, exc)
        raise UpstreamGenerationFailure(stage, "reply did not match the expected shape") from exc


def generate_interview_opening(
    course: Course,
    topics: Sequence[Topic],
    persona: Optional[PersonaSnapshot],
    role: Optional[RoleSnapshot],
    difficulty_context: DifficultyContext,
) -> OpeningReply:
    return _invoke(
        OPENING_KEY,
        "opening",
        OpeningReply,
        course=course,
        topics=list(topics),
        persona=persona,
        role=role,
        difficulty_context=difficulty_context,
    )


def generate_interview_turn(
    course: Course,
    topics: Sequence[Topic],
    transcript: Sequence[TranscriptMessage],
    user_message: str,
    persona: Optional[PersonaSnapshot],
    role: Optional[RoleSnapshot],
    difficulty_context: DifficultyContext,
) -> TurnReply:
    return _invoke(
        TURN_KEY,
        "turn",
        TurnReply,
        course=course,
        topics=list(topics),
        transcript=list(transcript),
        user_message=user_message,
        persona=persona,
        role=role,
        difficulty_context=difficulty_context,
    )


def generate_interview_summary(
    course: Course,
    topics: Sequence[Topic],
    transcript: Sequence[TranscriptMessage],
    persona: Optional[PersonaSnapshot],
    role: Optional[RoleSnapshot],
    difficulty_tracker: DifficultyTracker,
) -> InterviewSummaryReply:
    return _invoke(
        SUMMARY_KEY,
        "summary",
        InterviewSummaryReply,
        course=course,
        topics=list(topics),
        transcript=list(transcript),
        persona=persona,
        role=role,
        difficulty_tracker=difficulty_tracker,
    )


__all__ = ["generate_interview_opening", "generate_interview_summary", "generate_interview_turn"]
