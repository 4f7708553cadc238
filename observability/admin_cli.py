"""Lightweight CLI for inspecting stored interview sessions."""
from __future__ import annotations

import argparse
from typing import Optional

from difficulty import level_name
from storage.sqlite import get_conn


def tail_interviews(limit: int = 20, course_id: Optional[str] = None) -> None:
    query = """
        SELECT end_time, id, course_id, question_count, skipped_count, final_level, score
        FROM interview_sessions
    """
    params: list = []
    if course_id:
        query += " WHERE course_id = ?"
        params.append(course_id)
    query += " ORDER BY end_time DESC LIMIT ?"
    params.append(limit)
    with get_conn() as conn:
        rows = conn.execute(query, params).fetchall()
    for row in rows:
        print(
            f"[{row['end_time']}] {row['id']} course={row['course_id']} questions={row['question_count']} "
            f"skips={row['skipped_count']} level={row['final_level']}({level_name(row['final_level'])}) "
            f"score={row['score']}"
        )


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--tail", type=int, default=20, help="Show the latest stored interviews")
    parser.add_argument("--course", help="Only show interviews for this course id")
    args = parser.parse_args()
    tail_interviews(args.tail, args.course)


if __name__ == "__main__":
    main()
