"""Durable storage for terminated interview sessions."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from config.settings import settings
from interview_session.models import InterviewSession

from .sqlite import get_conn

logger = logging.getLogger(__name__)


def save_interview(session: InterviewSession) -> None:
    """Persist a terminated session and prune history beyond the retention limit."""

    summary = session.summary
    end_time = session.end_time
    if summary is None or end_time is None:
        raise ValueError(f"Session '{session.id}' is still active and cannot be stored")
    with get_conn() as conn:
        conn.execute(
            """INSERT OR REPLACE INTO interview_sessions
               (id, course_id, course_name, start_time, end_time, question_count,
                skipped_count, final_level, score, session_json)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                session.id,
                session.course_id,
                session.course_name,
                session.start_time.isoformat(),
                end_time.isoformat(),
                summary.metrics.question_count,
                summary.metrics.skipped_count,
                session.difficulty_tracker.current_level,
                summary.score,
                session.model_dump_json(),
            ),
        )
        conn.execute(
            """DELETE FROM interview_sessions
               WHERE id NOT IN (
                 SELECT id FROM interview_sessions ORDER BY end_time DESC LIMIT ?
               )""",
            (settings.INTERVIEW_HISTORY_LIMIT,),
        )
    logger.info("Stored interview session %s for course %s", session.id, session.course_id)


def list_interviews(course_id: Optional[str] = None, limit: Optional[int] = None) -> List[InterviewSession]:
    """Stored sessions, newest first, optionally for a single course."""

    query = "SELECT session_json FROM interview_sessions"
    params: list = []
    if course_id is not None:
        query += " WHERE course_id = ?"
        params.append(course_id)
    query += " ORDER BY end_time DESC"
    if limit is not None:
        query += " LIMIT ?"
        params.append(limit)
    with get_conn() as conn:
        rows = conn.execute(query, params).fetchall()
    return [InterviewSession.model_validate_json(row["session_json"]) for row in rows]


def load_interview(session_id: str) -> Optional[InterviewSession]:
    with get_conn() as conn:
        row = conn.execute(
            "SELECT session_json FROM interview_sessions WHERE id = ?",
            (session_id,),
        ).fetchone()
    if row is None:
        return None
    return InterviewSession.model_validate_json(row["session_json"])


def clear_interviews_for_course(course_id: str) -> int:
    with get_conn() as conn:
        cur = conn.execute("DELETE FROM interview_sessions WHERE course_id = ?", (course_id,))
        return int(cur.rowcount)


def count_questions_since(since: datetime) -> int:
    """Total questions asked in stored interviews that started at or after ``since``."""

    with get_conn() as conn:
        row = conn.execute(
            "SELECT COALESCE(SUM(question_count), 0) AS total FROM interview_sessions WHERE start_time >= ?",
            (since.isoformat(),),
        ).fetchone()
    return int(row["total"])


__all__ = [
    "clear_interviews_for_course",
    "count_questions_since",
    "list_interviews",
    "load_interview",
    "save_interview",
]
