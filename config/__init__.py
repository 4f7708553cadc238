"""Configuration package for the interview service."""
from .registry import OPENING_KEY, SUMMARY_KEY, TURN_KEY, bind_model, get_model, is_bound
from .routes import AppConfig, LlmRoute, load_app_registry, load_config, resolve_registry
from .settings import Settings, settings

__all__ = [
    "AppConfig",
    "LlmRoute",
    "load_app_registry",
    "load_config",
    "resolve_registry",
    "OPENING_KEY",
    "TURN_KEY",
    "SUMMARY_KEY",
    "bind_model",
    "get_model",
    "is_bound",
    "Settings",
    "settings",
]
