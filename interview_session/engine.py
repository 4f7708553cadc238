"""Start / respond / end transitions of an adaptive interview."""
from __future__ import annotations

import logging
from typing import Callable, List, Literal, Optional, Sequence, Union

from pydantic import BaseModel

from catalog.models import Course, Topic
from catalog.store import CatalogStore
from difficulty import Assessment, parse_assessment
from interviewer.agents import (
    generate_interview_opening,
    generate_interview_summary,
    generate_interview_turn,
)
from observability import log_event, span
from services.eligibility import daily_limit_status
from storage.interviews import load_interview, save_interview

from .errors import CourseNotFound, DailyLimitReached, NoTopicsSelected, SessionNotFound
from .metrics import MetricsSnapshot
from .models import (
    RANDOM_TOPICS,
    InterviewSession,
    PersonaSnapshot,
    RoleSnapshot,
    SessionSummary,
    TranscriptMessage,
)
from .registry import SessionRegistry

logger = logging.getLogger(__name__)

MAX_SKIPS_PER_TOPIC = 3


class StartResult(BaseModel):
    session_id: str
    message: str
    current_topic: Optional[str] = None
    persona: Optional[PersonaSnapshot] = None
    target_role: Optional[RoleSnapshot] = None
    difficulty_level: int


class RespondResult(BaseModel):
    message: str
    current_topic: Optional[str] = None
    assessment: Optional[Assessment] = None
    # Generator label as given; `assessment` holds it only when it is a known label.
    assessment_label: Optional[str] = None
    difficulty_level: int
    difficulty_name: str
    metrics: MetricsSnapshot


class AutoEndSignal(BaseModel):
    """Returned instead of a turn once a topic's skip ceiling is hit; the caller should end the session."""

    auto_end: Literal[True] = True
    reason: Literal["topic_skip_limit"] = "topic_skip_limit"
    message: str
    skipped_count: int
    topic_id: Optional[str] = None


TurnOutcome = Union[RespondResult, AutoEndSignal]


class InterviewEngine:
    """Drives sessions held in a ``SessionRegistry`` through their lifecycle.

    Generator calls happen before any session mutation, so a failed call
    leaves the session exactly as it was and the turn can be retried.
    """

    def __init__(
        self,
        registry: SessionRegistry,
        catalog: CatalogStore,
        *,
        persist: Callable[[InterviewSession], None] = save_interview,
        max_skips_per_topic: int = MAX_SKIPS_PER_TOPIC,
        enforce_daily_limit: bool = True,
    ) -> None:
        self.registry = registry
        self.catalog = catalog
        self._persist = persist
        self._max_skips = max_skips_per_topic
        self._enforce_daily_limit = enforce_daily_limit

    # -- lookups -------------------------------------------------------

    def _require(self, session_id: str) -> InterviewSession:
        session = self.registry.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        return session

    def find_session(self, session_id: str) -> Optional[InterviewSession]:
        """Live session first, then durable storage."""

        return self.registry.get(session_id) or load_interview(session_id)

    def active_question_count(self) -> int:
        return sum(session.metrics.question_count for session in self.registry)

    @staticmethod
    def _course_snapshot(session: InterviewSession) -> Course:
        return Course(id=session.course_id, name=session.course_name, topics=session.topics)

    @staticmethod
    def _select_topics(course: Course, selected: Union[str, Sequence[str], None]) -> List[Topic]:
        if selected is None or selected == RANDOM_TOPICS:
            topics = list(course.topics)
        else:
            wanted = [selected] if isinstance(selected, str) else list(selected)
            topics = [topic for topic in (course.topic_by_id(topic_id) for topic_id in wanted) if topic is not None]
        if not topics:
            raise NoTopicsSelected("No valid topics selected")
        return topics

    # -- transitions ---------------------------------------------------

    def start(
        self,
        course_id: str,
        selected_topics: Union[str, Sequence[str], None] = None,
        persona_id: Optional[str] = None,
        role_id: Optional[str] = None,
    ) -> StartResult:
        course = self.catalog.get_course(course_id)
        if course is None:
            raise CourseNotFound(course_id)

        if self._enforce_daily_limit:
            status = daily_limit_status(active_questions=self.active_question_count())
            if not status.within_daily_limit:
                raise DailyLimitReached(status.daily_limit, status.today_question_count)

        topics = self._select_topics(course, selected_topics)
        persona = self.catalog.get_persona(persona_id) if persona_id else None
        role = self.catalog.get_role(role_id, course_id) if role_id else None

        session = self.registry.create(
            course.id,
            course.name,
            RANDOM_TOPICS if selected_topics in (None, RANDOM_TOPICS) else [topic.id for topic in topics],
            topics,
            persona,
            role,
        )
        context = session.difficulty_tracker.context()
        try:
            with span("interview_opening", session.id):
                reply = generate_interview_opening(
                    self._course_snapshot(session),
                    session.topics,
                    session.persona,
                    session.target_role,
                    context,
                )
        except Exception:
            self.registry.evict(session.id)
            raise

        topic = session.resolve_topic(reply.current_topic)
        session.append_message(
            "interviewer",
            reply.message,
            current_topic=reply.current_topic,
            topic_id=topic.id if topic else None,
        )
        session.metrics.increment_question_count()

        log_event(
            "session_started",
            session.id,
            course_id=course.id,
            difficulty=context.current_level,
            topic_id=topic.id if topic else reply.current_topic,
        )
        return StartResult(
            session_id=session.id,
            message=reply.message,
            current_topic=reply.current_topic,
            persona=session.persona,
            target_role=session.target_role,
            difficulty_level=context.current_level,
        )

    def respond(self, session_id: str, message: str, skipped: bool = False) -> TurnOutcome:
        session = self._require(session_id)

        metrics = session.metrics.model_copy(deep=True)
        if skipped:
            topic_key = session.current_topic_key()
            metrics.increment_skipped_count(topic_key)
            max_skips, max_topic = metrics.get_max_topic_skips()
            if max_skips >= self._max_skips:
                session.metrics = metrics
                topic = session.resolve_topic(max_topic)
                topic_name = topic.name if topic else (session.current_topic_name() or "this topic")
                log_event(
                    "skip_limit_reached",
                    session.id,
                    topic_id=max_topic,
                    skips=metrics.skipped_count,
                )
                return AutoEndSignal(
                    message=(
                        f"Interview ended: You've skipped {self._max_skips} questions on \"{topic_name}\". "
                        "The interview has been automatically ended."
                    ),
                    skipped_count=metrics.skipped_count,
                    topic_id=max_topic,
                )

        pending = TranscriptMessage(role="user", content=message, metadata={"skipped": skipped})
        with span("interview_turn", session.id):
            reply = generate_interview_turn(
                self._course_snapshot(session),
                session.topics,
                [*session.messages, pending],
                message,
                session.persona,
                session.target_role,
                session.difficulty_tracker.context(),
            )

        assessment = None if skipped else parse_assessment(reply.assessment_of_last_answer)
        if not skipped and reply.assessment_of_last_answer:
            session.difficulty_tracker.consume_assessment(reply.assessment_of_last_answer, session_id=session.id)
        session.metrics = metrics
        if not reply.is_probing:
            session.metrics.increment_question_count()

        session.messages.append(pending)
        topic = session.resolve_topic(reply.current_topic)
        session.append_message(
            "interviewer",
            reply.message,
            current_topic=reply.current_topic,
            topic_id=topic.id if topic else None,
            assessment_of_last_answer=reply.assessment_of_last_answer,
            is_probing=reply.is_probing,
        )

        tracker = session.difficulty_tracker
        log_event(
            "turn_completed",
            session.id,
            difficulty=tracker.current_level,
            label=assessment.value if assessment else None,
            questions=session.metrics.question_count,
            skips=session.metrics.skipped_count,
        )
        return RespondResult(
            message=reply.message,
            current_topic=reply.current_topic,
            assessment=assessment,
            assessment_label=None if skipped else reply.assessment_of_last_answer,
            difficulty_level=tracker.current_level,
            difficulty_name=tracker.level_name,
            metrics=session.metrics_snapshot(),
        )

    def end(self, session_id: str) -> SessionSummary:
        session = self._require(session_id)
        metrics = session.metrics_snapshot()

        with span("interview_summary", session.id):
            reply = generate_interview_summary(
                self._course_snapshot(session),
                session.topics,
                list(session.messages),
                session.persona,
                session.target_role,
                session.difficulty_tracker,
            )

        summary = SessionSummary(
            **reply.model_dump(),
            persona=session.persona,
            target_role=session.target_role,
            difficulty_tracker=session.difficulty_tracker.model_copy(deep=True),
            metrics=metrics,
        )
        terminated = session.terminated(summary)
        self._persist(terminated)
        self.registry.evict(session.id)

        log_event(
            "session_ended",
            session.id,
            course_id=session.course_id,
            difficulty=session.difficulty_tracker.current_level,
            questions=metrics.question_count,
            skips=metrics.skipped_count,
        )
        return summary


__all__ = ["AutoEndSignal", "InterviewEngine", "RespondResult", "StartResult", "TurnOutcome"]
