"""Question and skip counters for a single interview session."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, Field


class SessionDuration(BaseModel):
    minutes: int
    seconds: int
    formatted: str


class MetricsSnapshot(BaseModel):
    question_count: int
    skipped_count: int
    duration: SessionDuration


class SessionMetrics(BaseModel):
    """Monotonic counters; duration is always derived from the session start."""

    question_count: int = Field(default=0, ge=0)
    skipped_count: int = Field(default=0, ge=0)
    skips_per_topic: Dict[str, int] = Field(default_factory=dict)

    def increment_question_count(self) -> int:
        self.question_count += 1
        return self.question_count

    def increment_skipped_count(self, topic_id: Optional[str] = None) -> int:
        """Count a skip globally and, when the topic is known, against that topic."""

        self.skipped_count += 1
        if topic_id:
            self.skips_per_topic[topic_id] = self.skips_per_topic.get(topic_id, 0) + 1
        return self.skipped_count

    def get_max_topic_skips(self) -> Tuple[int, Optional[str]]:
        """Return ``(count, topic_id)`` for the most-skipped topic; first one wins ties."""

        max_skips = 0
        max_topic: Optional[str] = None
        for topic_id, count in self.skips_per_topic.items():
            if count > max_skips:
                max_skips = count
                max_topic = topic_id
        return max_skips, max_topic

    def get_duration(self, start_time: datetime, now: Optional[datetime] = None) -> SessionDuration:
        now = now or datetime.now(timezone.utc)
        elapsed = max(0, int((now - start_time).total_seconds()))
        minutes, seconds = divmod(elapsed, 60)
        return SessionDuration(minutes=minutes, seconds=seconds, formatted=f"{minutes}:{seconds:02d}")

    def snapshot(self, start_time: datetime, now: Optional[datetime] = None) -> MetricsSnapshot:
        return MetricsSnapshot(
            question_count=self.question_count,
            skipped_count=self.skipped_count,
            duration=self.get_duration(start_time, now),
        )


__all__ = ["MetricsSnapshot", "SessionDuration", "SessionMetrics"]
