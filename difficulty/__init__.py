"""Adaptive difficulty: assessment labels and the per-session tracker."""
from .assessment import (
    LEVEL_NAMES,
    MAX_LEVEL,
    MIN_LEVEL,
    AdjustmentDecision,
    Assessment,
    decide_adjustment,
    level_name,
    parse_assessment,
)
from .tracker import DifficultyAdjustment, DifficultyContext, DifficultyTracker, initial_level

__all__ = [
    "AdjustmentDecision",
    "Assessment",
    "DifficultyAdjustment",
    "DifficultyContext",
    "DifficultyTracker",
    "LEVEL_NAMES",
    "MAX_LEVEL",
    "MIN_LEVEL",
    "decide_adjustment",
    "initial_level",
    "level_name",
    "parse_assessment",
]
