"""In-memory registry of the interviewer generator callables."""
from typing import Any, Callable, Dict

_REGISTRY: Dict[str, Callable[..., Any]] = {}


def bind_model(key: str, fn: Callable[..., Any]) -> None:
    """Bind a callable implementation to a registry key."""
    _REGISTRY[key] = fn


def get_model(key: str) -> Callable[..., Any]:
    """Retrieve a callable from the registry.

    Raises:
        KeyError: If no callable has been bound for ``key``.
    """

    if key not in _REGISTRY:
        raise KeyError(f"Model not bound in registry: {key}")
    return _REGISTRY[key]


def is_bound(key: str) -> bool:
    return key in _REGISTRY


OPENING_KEY = "models.interview_opening"
TURN_KEY = "models.interview_turn"
SUMMARY_KEY = "models.interview_summary"
