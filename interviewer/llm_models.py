from __future__ import annotations  # Bind LLM-backed interviewer generators into the model registry

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Type

from pydantic import BaseModel

from config.registry import OPENING_KEY, SUMMARY_KEY, TURN_KEY, bind_model
from config.routes import LlmRoute, load_app_registry
from llm_gateway import call

from . import prompts
from .schemas import InterviewSummaryReply, OpeningReply, TurnReply

logger = logging.getLogger(__name__)

SCHEMAS: Dict[str, Type[BaseModel]] = {
    OPENING_KEY: OpeningReply,
    TURN_KEY: TurnReply,
    SUMMARY_KEY: InterviewSummaryReply,
}


def opening_model(route: LlmRoute) -> Callable[..., OpeningReply]:
    def _generate(*, course, topics, persona, role, difficulty_context, **_: Any) -> OpeningReply:
        prompt = prompts.opening_prompt(course, topics, persona, role, difficulty_context)
        return call(prompt, OpeningReply, cfg=route)

    return _generate


def turn_model(route: LlmRoute) -> Callable[..., TurnReply]:
    def _generate(*, course, topics, transcript, user_message, persona, role, difficulty_context, **_: Any) -> TurnReply:
        prompt = prompts.turn_prompt(course, topics, transcript, user_message, persona, role, difficulty_context)
        return call(prompt, TurnReply, cfg=route)

    return _generate


def summary_model(route: LlmRoute) -> Callable[..., InterviewSummaryReply]:
    def _generate(*, course, topics, transcript, persona, role, difficulty_tracker, **_: Any) -> InterviewSummaryReply:
        prompt = prompts.summary_prompt(course, topics, transcript, persona, role, difficulty_tracker)
        return call(prompt, InterviewSummaryReply, cfg=route)

    return _generate


def bind_llm_models(config_path: Path) -> None:  # Resolve routes from app config and bind all three generators
    resolved = load_app_registry(config_path, SCHEMAS)
    factories = {OPENING_KEY: opening_model, TURN_KEY: turn_model, SUMMARY_KEY: summary_model}
    for key, (route, _schema) in resolved.items():
        bind_model(key, factories[key](route))
        logger.info("Bound %s to route=%s model=%s", key, route.name, route.model)


__all__ = ["bind_llm_models", "opening_model", "summary_model", "turn_model"]
