from datetime import datetime, timedelta, timezone

import pytest

from catalog.models import Topic
from config.settings import settings
from difficulty import DifficultyTracker
from interview_session.models import InterviewSession, SessionSummary
from services.eligibility import daily_limit_status, start_of_day
from storage.interviews import (
    clear_interviews_for_course,
    count_questions_since,
    list_interviews,
    load_interview,
    save_interview,
)


def _terminated(session_id: str, course_id: str = "py", *, questions: int = 3, ended_minutes_ago: int = 0):
    now = datetime.now(timezone.utc)
    session = InterviewSession(
        id=session_id,
        course_id=course_id,
        course_name="Python Backend",
        topics=[Topic(id="apis", name="HTTP APIs")],
        start_time=now - timedelta(minutes=ended_minutes_ago + 1),
    )
    session.metrics.question_count = questions
    session.append_message("interviewer", "Welcome", current_topic="HTTP APIs", topic_id="apis")
    summary = SessionSummary(
        score=80,
        overall_feedback="Good",
        difficulty_tracker=DifficultyTracker(),
        metrics=session.metrics_snapshot(),
    )
    return session.terminated(summary, end_time=now - timedelta(minutes=ended_minutes_ago))


def test_save_and_load_round_trip():
    stored = _terminated("int_1")
    save_interview(stored)
    loaded = load_interview("int_1")
    assert loaded is not None
    assert loaded.state.status == "terminated"
    assert loaded.summary.score == 80
    assert loaded.messages[0].metadata["topic_id"] == "apis"
    assert load_interview("int_missing") is None


def test_active_session_cannot_be_stored():
    session = InterviewSession(id="int_live", course_id="py", course_name="Python")
    with pytest.raises(ValueError):
        save_interview(session)


def test_terminated_session_rejects_new_messages():
    stored = _terminated("int_closed")
    with pytest.raises(ValueError):
        stored.append_message("user", "late answer")


def test_list_newest_first_and_filter_by_course():
    save_interview(_terminated("int_old", ended_minutes_ago=30))
    save_interview(_terminated("int_new", ended_minutes_ago=1))
    save_interview(_terminated("int_js", course_id="js", ended_minutes_ago=5))

    assert [s.id for s in list_interviews()] == ["int_new", "int_js", "int_old"]
    assert [s.id for s in list_interviews("py")] == ["int_new", "int_old"]
    assert [s.id for s in list_interviews(limit=1)] == ["int_new"]


def test_history_is_pruned(monkeypatch):
    monkeypatch.setattr(settings, "INTERVIEW_HISTORY_LIMIT", 2)
    for minutes, session_id in ((30, "a"), (20, "b"), (10, "c")):
        save_interview(_terminated(session_id, ended_minutes_ago=minutes))
    assert [s.id for s in list_interviews()] == ["c", "b"]


def test_clear_for_course():
    save_interview(_terminated("int_a"))
    save_interview(_terminated("int_b", course_id="js"))
    assert clear_interviews_for_course("py") == 1
    assert clear_interviews_for_course("py") == 0
    assert [s.id for s in list_interviews()] == ["int_b"]


def test_daily_limit_status_counts_stored_and_live(monkeypatch):
    monkeypatch.setattr(settings, "INTERVIEW_DAILY_QUESTION_LIMIT", 10)
    save_interview(_terminated("int_today", questions=4))
    assert count_questions_since(start_of_day()) == 4

    status = daily_limit_status(active_questions=3)
    assert status.today_question_count == 7
    assert status.within_daily_limit is True
    assert status.daily_limit_remaining == 3

    exhausted = daily_limit_status(active_questions=6)
    assert exhausted.within_daily_limit is False
    assert exhausted.daily_limit_remaining == 0


def test_start_of_day_is_utc_midnight():
    now = datetime(2024, 3, 5, 17, 45, tzinfo=timezone.utc)
    assert start_of_day(now) == datetime(2024, 3, 5, tzinfo=timezone.utc)


def test_admin_tail_prints_stored_sessions(capsys):
    from observability.admin_cli import tail_interviews

    save_interview(_terminated("int_tail"))
    save_interview(_terminated("int_other", course_id="js"))
    tail_interviews(limit=5, course_id="py")
    out = capsys.readouterr().out
    assert "int_tail course=py questions=3" in out
    assert "level=2(Mid-Level) score=80" in out
    assert "int_other" not in out


def test_admin_tail_on_fresh_database(tmp_path, monkeypatch, capsys):
    from observability.admin_cli import tail_interviews

    monkeypatch.setattr(settings, "DB_PATH", str(tmp_path / "fresh" / "interviews.db"))
    tail_interviews()
    assert capsys.readouterr().out == ""
