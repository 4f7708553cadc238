"""Dependency wiring for the interview routes."""
from __future__ import annotations

from pathlib import Path

from fastapi import Request

from catalog.store import CatalogStore
from config.settings import settings
from interview_session.engine import InterviewEngine
from interview_session.registry import SessionRegistry


def build_engine() -> InterviewEngine:
    registry = SessionRegistry(
        default_level=settings.DEFAULT_DIFFICULTY_LEVEL,
        assessment_window=settings.ASSESSMENT_WINDOW,
    )
    return InterviewEngine(
        registry,
        CatalogStore(Path(settings.CATALOG_DIR)),
        max_skips_per_topic=settings.MAX_SKIPS_PER_TOPIC,
    )


def get_engine(request: Request) -> InterviewEngine:
    """The engine (and so the session registry) built by the application lifespan."""

    engine = getattr(request.app.state, "engine", None)
    if engine is None:
        raise RuntimeError("Interview engine is not configured; set app.state.engine at startup")
    return engine
