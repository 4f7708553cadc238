"""Answer-quality labels and the rule that turns them into level changes."""
from __future__ import annotations

from collections import Counter
from enum import Enum
from typing import Optional, Sequence

from pydantic import BaseModel

MIN_LEVEL = 1
MAX_LEVEL = 4
MIN_SIGNALS = 2

LEVEL_NAMES = {
    1: "Junior",
    2: "Mid-Level",
    3: "Senior",
    4: "Lead",
}

BASE_LEVELS = {
    "junior": 1,
    "mid": 2,
    "senior": 3,
    "lead": 4,
}

INCREASE_REASON = "Candidate showing strong performance - increasing difficulty"
DECREASE_REASON = "Candidate may need support - decreasing difficulty"


class Assessment(str, Enum):
    """Qualitative judgment the interviewer attaches to the last answer."""

    EXCELLENT = "excellent"
    GOOD = "good"
    PARTIAL = "partial"
    BRIEF = "brief"


class AdjustmentDecision(BaseModel):
    direction: int
    reason: str


def parse_assessment(label: object) -> Optional[Assessment]:
    """Return the matching ``Assessment`` or ``None`` for anything unrecognised."""

    if isinstance(label, Assessment):
        return label
    if not isinstance(label, str):
        return None
    try:
        return Assessment(label.strip().lower())
    except ValueError:
        return None


def level_name(level: int) -> str:
    return LEVEL_NAMES.get(level, LEVEL_NAMES[2])


def clamp_level(level: int) -> int:
    return max(MIN_LEVEL, min(MAX_LEVEL, level))


def decide_adjustment(window: Sequence[Assessment], current_level: int) -> Optional[AdjustmentDecision]:
    """Decide whether the recent window warrants moving the level.

    Two excellent answers raise the level; two brief answers, or any two of
    brief/partial, lower it. The increase rule is evaluated first, so it wins
    when both hold. Ceiling and floor suppress the respective move.
    """

    if len(window) < MIN_SIGNALS:
        return None

    counts = Counter(window)
    excellent = counts[Assessment.EXCELLENT]
    brief = counts[Assessment.BRIEF]
    partial = counts[Assessment.PARTIAL]

    if excellent >= MIN_SIGNALS and current_level < MAX_LEVEL:
        return AdjustmentDecision(direction=1, reason=INCREASE_REASON)

    if (brief >= MIN_SIGNALS or brief + partial >= MIN_SIGNALS) and current_level > MIN_LEVEL:
        return AdjustmentDecision(direction=-1, reason=DECREASE_REASON)

    return None


__all__ = [
    "Assessment",
    "AdjustmentDecision",
    "BASE_LEVELS",
    "LEVEL_NAMES",
    "MAX_LEVEL",
    "MIN_LEVEL",
    "clamp_level",
    "decide_adjustment",
    "level_name",
    "parse_assessment",
]
