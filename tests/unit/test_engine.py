import pytest

from interview_session import (
    CourseNotFound,
    DailyLimitReached,
    NoTopicsSelected,
    SessionNotFound,
    UpstreamGenerationFailure,
)
from interview_session.engine import AutoEndSignal, RespondResult
from config.settings import settings
from storage.interviews import list_interviews, load_interview


def test_start_uses_role_level_and_records_opening(engine, fake_models):
    result = engine.start("py", "random", persona_id="mentor", role_id="senior")

    assert result.difficulty_level == 3
    assert result.current_topic == "HTTP APIs"
    assert result.persona is not None and result.persona.name == "Friendly Mentor"
    assert result.target_role is not None and result.target_role.type == "generic"

    session = engine.registry.get(result.session_id)
    assert session.metrics.question_count == 1
    assert [m.role for m in session.messages] == ["interviewer"]
    assert session.messages[0].metadata["topic_id"] == "apis"

    opening_call = fake_models.calls[0]
    assert opening_call["kind"] == "opening"
    assert opening_call["difficulty_context"].current_level == 3
    assert [t.id for t in opening_call["topics"]] == ["apis", "db", "async"]


def test_course_specific_role_from_base_level(engine):
    result = engine.start("py", ["db"], role_id="sre")
    assert result.difficulty_level == 3
    assert result.target_role.type == "course-specific"
    session = engine.registry.get(result.session_id)
    assert session.selected_topics == ["db"]
    assert [t.id for t in session.topics] == ["db"]


def test_start_without_role_uses_default_level(engine):
    assert engine.start("py").difficulty_level == 2


def test_start_rejects_unknown_course_and_topics(engine):
    with pytest.raises(CourseNotFound):
        engine.start("nope")
    with pytest.raises(NoTopicsSelected):
        engine.start("py", ["missing"])
    assert len(engine.registry) == 0


def test_opening_failure_leaves_no_session(engine, fake_models):
    fake_models.fail_next = True
    with pytest.raises(UpstreamGenerationFailure):
        engine.start("py")
    assert len(engine.registry) == 0


def test_two_excellent_answers_raise_junior_to_mid(engine, fake_models):
    session_id = engine.start("py", role_id="junior").session_id
    fake_models.queue("excellent")
    fake_models.queue("excellent")

    first = engine.respond(session_id, "Repeating a request has the same effect.")
    second = engine.respond(session_id, "PUT and DELETE are idempotent, POST is not.")

    assert first.difficulty_level == 1
    assert second.difficulty_level == 2
    assert second.difficulty_name == "Mid-Level"
    assert second.assessment == "excellent"

    tracker = engine.registry.get(session_id).difficulty_tracker
    assert [(a.from_level, a.to_level) for a in tracker.adjustment_history] == [(1, 2)]
    assert tracker.recent_assessments == []


def test_turn_sees_pending_answer_and_appends_both_messages(engine, fake_models):
    session_id = engine.start("py").session_id
    engine.respond(session_id, "My answer")

    turn_call = fake_models.calls[-1]
    assert turn_call["user_message"] == "My answer"
    assert turn_call["transcript"][-1].content == "My answer"

    session = engine.registry.get(session_id)
    assert [m.role for m in session.messages] == ["interviewer", "user", "interviewer"]
    assert session.messages[1].metadata == {"skipped": False}
    assert session.messages[2].metadata["assessment_of_last_answer"] == "good"


def test_probing_follow_up_does_not_count_as_question(engine, fake_models):
    session_id = engine.start("py").session_id
    fake_models.queue("partial", probing=True)
    fake_models.queue("good")

    probing = engine.respond(session_id, "Not sure")
    assert probing.metrics.question_count == 1
    regular = engine.respond(session_id, "Now I remember")
    assert regular.metrics.question_count == 2


def test_skipped_answer_is_not_assessed(engine, fake_models):
    session_id = engine.start("py").session_id
    fake_models.queue("brief")
    result = engine.respond(session_id, "skip", skipped=True)

    assert isinstance(result, RespondResult)
    assert result.assessment is None
    assert result.metrics.skipped_count == 1
    session = engine.registry.get(session_id)
    assert session.difficulty_tracker.recent_assessments == []
    assert session.metrics.skips_per_topic == {"apis": 1}


def test_third_skip_on_topic_auto_ends_without_generator_call(engine, fake_models):
    session_id = engine.start("py").session_id
    engine.respond(session_id, "skip", skipped=True)
    engine.respond(session_id, "skip", skipped=True)
    turn_calls = len([c for c in fake_models.calls if c["kind"] == "turn"])

    signal = engine.respond(session_id, "skip", skipped=True)

    assert isinstance(signal, AutoEndSignal)
    assert signal.auto_end is True
    assert signal.reason == "topic_skip_limit"
    assert signal.skipped_count == 3
    assert signal.topic_id == "apis"
    assert '"HTTP APIs"' in signal.message
    assert len([c for c in fake_models.calls if c["kind"] == "turn"]) == turn_calls

    session = engine.registry.get(session_id)
    assert session.is_active
    assert session.messages[-1].role == "interviewer"

    summary = engine.end(session_id)
    assert summary.metrics.skipped_count == 3


def test_skips_spread_across_topics_do_not_auto_end(engine, fake_models):
    session_id = engine.start("py").session_id
    fake_models.queue(topic="Databases")
    fake_models.queue(topic="Concurrency")
    fake_models.queue(topic="HTTP APIs")
    for _ in range(3):
        assert isinstance(engine.respond(session_id, "skip", skipped=True), RespondResult)
    assert engine.registry.get(session_id).metrics.skips_per_topic == {"apis": 1, "db": 1, "async": 1}


def test_failed_turn_leaves_session_untouched(engine, fake_models):
    session_id = engine.start("py").session_id
    session = engine.registry.get(session_id)
    before = session.model_dump()

    fake_models.fail_next = True
    with pytest.raises(UpstreamGenerationFailure):
        engine.respond(session_id, "skip", skipped=True)

    assert session.model_dump() == before
    result = engine.respond(session_id, "retry")
    assert result.metrics.question_count == 2


def test_malformed_turn_reply_is_upstream_failure(engine, fake_models):
    session_id = engine.start("py").session_id
    fake_models.turns.append({"currentTopic": "HTTP APIs"})
    with pytest.raises(UpstreamGenerationFailure):
        engine.respond(session_id, "answer")
    assert len(engine.registry.get(session_id).messages) == 1


def test_end_persists_and_evicts(engine, fake_models):
    session_id = engine.start("py", persona_id="mentor", role_id="junior").session_id
    fake_models.queue("excellent")
    engine.respond(session_id, "answer")

    summary = engine.end(session_id)

    assert summary.score == 72
    assert summary.persona.id == "mentor"
    assert summary.target_role.id == "junior"
    assert summary.metrics.question_count == 2
    assert summary.difficulty_tracker.recent_assessments == ["excellent"]
    assert session_id not in engine.registry

    stored = load_interview(session_id)
    assert stored is not None
    assert not stored.is_active
    assert stored.summary.score == 72
    assert len(stored.messages) == 3
    assert [s.id for s in list_interviews("py")] == [session_id]
    assert engine.find_session(session_id).id == session_id


def test_operations_after_end_report_not_found(engine):
    session_id = engine.start("py").session_id
    engine.end(session_id)
    with pytest.raises(SessionNotFound):
        engine.end(session_id)
    with pytest.raises(SessionNotFound):
        engine.respond(session_id, "hello")


def test_summary_failure_keeps_session_active(engine, fake_models):
    session_id = engine.start("py").session_id
    fake_models.fail_next = True
    with pytest.raises(UpstreamGenerationFailure):
        engine.end(session_id)
    assert engine.registry.get(session_id).is_active
    assert load_interview(session_id) is None


def test_daily_limit_counts_live_sessions(engine, monkeypatch):
    monkeypatch.setattr(settings, "INTERVIEW_DAILY_QUESTION_LIMIT", 2)
    engine.start("py")
    engine.start("py")
    with pytest.raises(DailyLimitReached) as excinfo:
        engine.start("py")
    assert excinfo.value.limit == 2
    assert excinfo.value.used == 2


def test_daily_limit_zero_disables_check(engine, monkeypatch):
    monkeypatch.setattr(settings, "INTERVIEW_DAILY_QUESTION_LIMIT", 0)
    for _ in range(3):
        engine.start("py")
    assert len(engine.registry) == 3


def test_null_probing_flag_counts_as_new_question(engine, fake_models):
    session_id = engine.start("py").session_id
    fake_models.turns.append(
        {"message": "Next one?", "currentTopic": "HTTP APIs", "assessmentOfLastAnswer": "good", "isProbing": None}
    )
    result = engine.respond(session_id, "answer")
    assert result.metrics.question_count == 2
    assert engine.registry.get(session_id).messages[-1].metadata["is_probing"] is False


def test_unrecognised_label_is_echoed_but_not_assessed(engine, fake_models):
    session_id = engine.start("py").session_id
    fake_models.queue("outstanding")
    result = engine.respond(session_id, "answer")

    assert result.assessment is None
    assert result.assessment_label == "outstanding"
    session = engine.registry.get(session_id)
    assert session.difficulty_tracker.recent_assessments == []
    assert session.messages[-1].metadata["assessment_of_last_answer"] == "outstanding"

    fake_models.queue("excellent")
    known = engine.respond(session_id, "answer")
    assert known.assessment == "excellent"
    assert known.assessment_label == "excellent"
