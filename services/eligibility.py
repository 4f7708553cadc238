"""Daily interview question allowance."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel

from config.settings import settings
from storage.interviews import count_questions_since


class DailyLimitStatus(BaseModel):
    daily_limit: int
    today_question_count: int
    within_daily_limit: bool
    daily_limit_remaining: int


def start_of_day(now: Optional[datetime] = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)


def daily_limit_status(now: Optional[datetime] = None, *, active_questions: int = 0) -> DailyLimitStatus:
    """Questions used today across stored interviews plus any still-live sessions.

    A limit of 0 disables the check.
    """

    limit = settings.INTERVIEW_DAILY_QUESTION_LIMIT
    used = count_questions_since(start_of_day(now)) + active_questions
    within = limit == 0 or used < limit
    return DailyLimitStatus(
        daily_limit=limit,
        today_question_count=used,
        within_daily_limit=within,
        daily_limit_remaining=max(0, limit - used) if limit else 0,
    )


__all__ = ["DailyLimitStatus", "daily_limit_status", "start_of_day"]
