"""Reply shapes expected from the interviewer generators."""
from __future__ import annotations

from typing import List, Optional

from pydantic import Field, field_validator

from catalog.models import CatalogModel


class OpeningReply(CatalogModel):
    message: str = Field(min_length=1)
    current_topic: Optional[str] = None


class TurnReply(CatalogModel):
    message: str = Field(min_length=1)
    current_topic: Optional[str] = None
    # Kept as free text; the difficulty tracker decides what it accepts.
    assessment_of_last_answer: Optional[str] = None
    is_probing: bool = False

    @field_validator("is_probing", mode="before")
    @classmethod
    def _null_probing(cls, value):
        return False if value is None else value


class InterviewSummaryReply(CatalogModel):
    score: int = Field(ge=0, le=100)
    overall_feedback: str
    topics_covered: List[str] = Field(default_factory=list)
    strengths: List[str] = Field(default_factory=list)
    areas_to_improve: List[str] = Field(default_factory=list)
    recommended_next_steps: str = ""
    role_fit_score: Optional[int] = Field(default=None, ge=0, le=100)
    role_fit_feedback: Optional[str] = None
    difficulty_progression: Optional[str] = None

    @field_validator("score", "role_fit_score", mode="before")
    @classmethod
    def _round_scores(cls, value):
        if isinstance(value, float):
            return round(value)
        return value

    @field_validator("recommended_next_steps", mode="before")
    @classmethod
    def _join_steps(cls, value):
        if isinstance(value, list):
            return " ".join(str(item) for item in value)
        return value


__all__ = ["InterviewSummaryReply", "OpeningReply", "TurnReply"]
