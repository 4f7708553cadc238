"""LLM route configuration loaded from ``app_config.json``."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Literal, Tuple, Type

from pydantic import BaseModel, Field


class LlmRoute(BaseModel):
    """A single LLM endpoint the interviewer generators can be routed to."""

    name: str
    provider: Literal["openai", "anthropic"] = "openai"
    base_url: str
    endpoint: str
    model: str
    timeout_s: float = Field(ge=0.1)
    max_retries: int = Field(default=2, ge=0)
    max_tokens: int = Field(default=2048, ge=1)
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    api_key_env: str | None = None
    response_format: str | None = None
    extra_headers: Dict[str, str] = Field(default_factory=dict)
    sequential: bool = False
    enforce_json: bool = True


class AppConfig(BaseModel):
    """Configuration root: named routes plus the generator-to-route mapping."""

    llm_routes: Dict[str, LlmRoute]
    registry: Dict[str, str]


def load_config(path: Path) -> AppConfig:
    """Load configuration from disk."""

    data = path.read_text(encoding="utf-8")
    return AppConfig.model_validate_json(data)


def resolve_registry(
    cfg: AppConfig, schemas: Dict[str, Type[BaseModel]]
) -> Dict[str, Tuple[LlmRoute, Type[BaseModel]]]:
    """Pair every generator target with its route and reply schema.

    Raises:
        KeyError: If a target has no registry entry or points at an unknown route.
        TypeError: If a schema is not a pydantic model.
    """

    resolved: Dict[str, Tuple[LlmRoute, Type[BaseModel]]] = {}
    for target, schema in schemas.items():
        if target not in cfg.registry:
            raise KeyError(f"Registry entry missing for '{target}'")
        route_id = cfg.registry[target]
        if route_id not in cfg.llm_routes:
            raise KeyError(f"Route '{route_id}' missing for '{target}'")
        if not issubclass(schema, BaseModel):
            raise TypeError(f"Schema for '{target}' must be BaseModel")
        resolved[target] = (cfg.llm_routes[route_id], schema)
    return resolved


def load_app_registry(
    path: Path, schemas: Dict[str, Type[BaseModel]]
) -> Dict[str, Tuple[LlmRoute, Type[BaseModel]]]:
    """Load configuration and build registry."""

    cfg = load_config(path)
    return resolve_registry(cfg, schemas)
