"""Span helper for timing calls to the interviewer generators."""
from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Iterator

from .logger import log_event


@contextmanager
def span(name: str, session_id: str | None) -> Iterator[None]:
    start = time.perf_counter()
    outcome = "ok"
    try:
        yield
    except Exception:
        outcome = "error"
        raise
    finally:
        elapsed_ms = int((time.perf_counter() - start) * 1000)
        log_event("span", session_id, node=name, ms=elapsed_ms, outcome=outcome)


__all__ = ["span"]
