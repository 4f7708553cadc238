from __future__ import annotations  # FastAPI server exposing the adaptive interview API

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.deps import build_engine
from api.routes import router as interview_router
from config.registry import OPENING_KEY, SUMMARY_KEY, TURN_KEY, is_bound
from config.settings import settings
from interviewer.llm_models import bind_llm_models
from storage.migrate import migrate


logger = logging.getLogger(__name__)


def _bind_generators() -> None:  # Bind LLM routes unless generators were bound already
    if all(is_bound(key) for key in (OPENING_KEY, TURN_KEY, SUMMARY_KEY)):
        return
    config_path = Path(settings.APP_CONFIG_PATH)
    if not config_path.exists():
        logger.warning("LLM config %s not found; interview generators are unbound", config_path)
        return
    bind_llm_models(config_path)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    migrate(settings.DB_PATH)
    _bind_generators()
    app.state.engine = build_engine()
    yield
    active = len(app.state.engine.registry)
    if active:
        logger.warning("Shutting down with %d active interview session(s); they will be lost", active)


app = FastAPI(title="Adaptive Interview API", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(interview_router)


@app.get("/api/health")
def health() -> dict:
    return {"status": "ok", "generators_bound": all(is_bound(key) for key in (OPENING_KEY, TURN_KEY, SUMMARY_KEY))}
