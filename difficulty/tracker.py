"""Per-session difficulty tracking."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, Field

from observability import log_event

from .assessment import (
    BASE_LEVELS,
    Assessment,
    clamp_level,
    decide_adjustment,
    level_name,
    parse_assessment,
)

logger = logging.getLogger(__name__)

WINDOW_SIZE = 3


class DifficultyAdjustment(BaseModel):
    timestamp: datetime
    from_level: int
    to_level: int
    reason: str


class DifficultyContext(BaseModel):
    """What the interviewer generators are told about the current difficulty."""

    current_level: int
    level_name: str
    recent_assessments: List[Assessment] = Field(default_factory=list)


def initial_level(role: Optional[Mapping[str, Any]], default: int = 2) -> int:
    """Starting level for a session targeting ``role``.

    A numeric ``level`` wins, then ``baseLevel``/``base_level`` names, then ``default``.
    """

    if not role:
        return default
    level = role.get("level")
    if isinstance(level, int) and not isinstance(level, bool) and level > 0:
        return clamp_level(level)
    base = role.get("baseLevel") or role.get("base_level")
    if isinstance(base, str):
        return BASE_LEVELS.get(base.strip().lower(), default)
    return default


class DifficultyTracker(BaseModel):
    """Current level, the sliding assessment window and the adjustment log."""

    current_level: int = Field(default=2, ge=1, le=4)
    recent_assessments: List[Assessment] = Field(default_factory=list)
    adjustment_history: List[DifficultyAdjustment] = Field(default_factory=list)
    window_size: int = Field(default=WINDOW_SIZE, ge=2, exclude=True)

    model_config = {"validate_assignment": True}

    @property
    def level_name(self) -> str:
        return level_name(self.current_level)

    def context(self) -> DifficultyContext:
        return DifficultyContext(
            current_level=self.current_level,
            level_name=self.level_name,
            recent_assessments=list(self.recent_assessments),
        )

    def consume_assessment(self, label: object, *, session_id: str | None = None) -> Optional[DifficultyAdjustment]:
        """Feed one assessment label; returns the adjustment it triggered, if any.

        Unknown labels are dropped with a ``difficulty_label_rejected`` event.
        """

        assessment = parse_assessment(label)
        if assessment is None:
            logger.warning("Ignoring unrecognised assessment label: %r", label)
            log_event(
                "difficulty_label_rejected",
                session_id,
                level=logging.WARNING,
                label=repr(label),
            )
            return None

        window = [*self.recent_assessments, assessment][-self.window_size:]
        self.recent_assessments = window

        decision = decide_adjustment(window, self.current_level)
        if decision is None:
            return None

        previous = self.current_level
        adjustment = DifficultyAdjustment(
            timestamp=datetime.now(timezone.utc),
            from_level=previous,
            to_level=clamp_level(previous + decision.direction),
            reason=decision.reason,
        )
        self.current_level = adjustment.to_level
        self.adjustment_history = [*self.adjustment_history, adjustment]
        self.recent_assessments = []
        log_event(
            "difficulty_adjusted",
            session_id,
            from_level=adjustment.from_level,
            to_level=adjustment.to_level,
        )
        return adjustment


__all__ = ["DifficultyAdjustment", "DifficultyContext", "DifficultyTracker", "initial_level"]
