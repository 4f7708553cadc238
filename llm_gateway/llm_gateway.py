from __future__ import annotations  # LLM request gateway module

import json
import logging
import os
import threading
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence, Tuple, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from config.routes import LlmRoute


logger = logging.getLogger(__name__)

ANTHROPIC_VERSION = "2023-06-01"

_ROUTE_LOCKS: Dict[str, threading.Lock] = {}
_ROUTE_LOCKS_GUARD = threading.Lock()


class HttpClient(Protocol):  # Minimal HTTP client protocol
    def post(self, url: str, *, json: Dict[str, Any], headers: Dict[str, str], timeout: float) -> "HttpResponse": ...


class HttpResponse(Protocol):  # Minimal HTTP response protocol
    @property
    def status_code(self) -> int: ...

    def json(self) -> Any: ...

    @property
    def text(self) -> str: ...


class LlmGatewayError(RuntimeError):  # Transport, status or validation failure
    pass


T = TypeVar("T", bound=BaseModel)


def _lock_for(cfg: LlmRoute) -> threading.Lock:
    key = cfg.name or f"{cfg.base_url}{cfg.endpoint}"
    with _ROUTE_LOCKS_GUARD:
        lock = _ROUTE_LOCKS.get(key)
        if lock is None:
            lock = threading.Lock()
            _ROUTE_LOCKS[key] = lock
    return lock


def call(
    task: str,
    schema: Type[T],
    *,
    cfg: LlmRoute,
    client: Optional[HttpClient] = None,
    options: Optional[Dict[str, Any]] = None,
) -> T:  # Single-prompt convenience wrapper around chat
    return chat(
        [{"role": "user", "content": task}],
        schema,
        cfg=cfg,
        client=client,
        options=options,
    )


def chat(
    messages: Sequence[Dict[str, str]],
    schema: Type[T],
    *,
    cfg: LlmRoute,
    client: Optional[HttpClient] = None,
    options: Optional[Dict[str, Any]] = None,
) -> T:  # Send chat messages on the configured route and validate the JSON reply
    def _execute() -> T:
        base_messages: List[Dict[str, str]] = []
        if cfg.enforce_json:
            schema_json = json.dumps(schema.model_json_schema(), indent=2)
            base_messages.append(
                {"role": "system", "content": "Reply with a single JSON object matching this schema:\n" + schema_json}
            )
        base_messages.extend(_normalize_messages(messages))
        attempts = cfg.max_retries + 1
        last_error: Optional[Exception] = None
        last_error_text: Optional[str] = None
        preview = _preview(base_messages[1:] if cfg.enforce_json else base_messages)
        logger.info(
            "LLM request start route=%s provider=%s model=%s attempts=%d preview=%s",
            cfg.name,
            cfg.provider,
            cfg.model,
            attempts,
            preview,
        )
        for attempt in range(attempts):
            attempt_messages = list(base_messages)
            if attempt > 0:
                attempt_messages.append({"role": "system", "content": _retry_hint(last_error_text, cfg.enforce_json)})
            payload, headers = _build_request(cfg, attempt_messages, options)
            try:
                response, close_cb = _post(f"{cfg.base_url}{cfg.endpoint}", payload, headers, cfg.timeout_s, client)
            except Exception as exc:  # noqa: BLE001
                logger.error("LLM transport failure route=%s: %s", cfg.name, exc)
                raise LlmGatewayError("LLM transport failed") from exc
            try:
                if response.status_code >= 400:
                    logger.error("LLM error status route=%s: %s", cfg.name, response.status_code)
                    raise LlmGatewayError(f"LLM returned status {response.status_code}")
                try:
                    data = response.json()
                except ValueError as exc:
                    logger.error("Invalid JSON payload from LLM: %s", exc)
                    raise LlmGatewayError("LLM payload was not JSON") from exc
                content = _extract_content(data)
            finally:
                _close_safely(close_cb)
            try:
                parsed = _validate(schema, content)
            except (json.JSONDecodeError, ValidationError) as exc:
                logger.warning("LLM output validation failed attempt=%d/%d: %s", attempt + 1, attempts, exc)
                last_error = exc
                last_error_text = str(exc)
                continue
            logger.info("LLM request done route=%s model=%s attempt=%d", cfg.name, cfg.model, attempt + 1)
            return parsed
        raise LlmGatewayError("LLM output validation failed") from last_error

    if cfg.sequential:
        with _lock_for(cfg):
            return _execute()
    return _execute()


def _build_request(
    cfg: LlmRoute, messages: Sequence[Dict[str, str]], options: Optional[Dict[str, Any]]
) -> Tuple[Dict[str, Any], Dict[str, str]]:  # Shape payload and headers for the route's provider
    headers = {"Content-Type": "application/json"}
    api_key = os.getenv(cfg.api_key_env) if cfg.api_key_env else None
    if cfg.provider == "anthropic":
        system = "\n\n".join(m["content"] for m in messages if m["role"] == "system")
        payload: Dict[str, Any] = {
            "model": cfg.model,
            "max_tokens": cfg.max_tokens,
            "messages": [m for m in messages if m["role"] != "system"],
        }
        if system:
            payload["system"] = system
        if api_key:
            headers["x-api-key"] = api_key
        headers["anthropic-version"] = ANTHROPIC_VERSION
    else:
        payload = {"model": cfg.model, "messages": list(messages), "max_tokens": cfg.max_tokens}
        if cfg.response_format:
            payload["response_format"] = {"type": cfg.response_format}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
    if cfg.temperature is not None:
        payload["temperature"] = cfg.temperature
    if options:
        payload.update(options)
    headers.update(cfg.extra_headers)
    return payload, headers


def _post(
    url: str, payload: Dict[str, Any], headers: Dict[str, str], timeout: float, client: Optional[HttpClient]
) -> Tuple[HttpResponse, Optional[Callable[[], None]]]:  # Dispatch HTTP request
    if client is not None:
        return client.post(url, json=payload, headers=headers, timeout=timeout), None
    http_client = httpx.Client(timeout=timeout)
    try:
        response = http_client.post(url, json=payload, headers=headers)
    except Exception:
        http_client.close()
        raise
    return response, http_client.close


def _close_safely(close_cb: Optional[Callable[[], None]]) -> None:  # Close HTTP client callback when provided
    if close_cb is not None:
        close_cb()


def _normalize_messages(messages: Sequence[Dict[str, str]]) -> List[Dict[str, str]]:  # Ensure message payload shape
    normalized: List[Dict[str, str]] = []
    for item in messages:
        if not isinstance(item, dict):
            raise TypeError("Each chat message must be a dict with role/content")
        role = str(item.get("role", "")).strip()
        if not role:
            raise ValueError("Chat message missing role")
        normalized.append({"role": role, "content": str(item.get("content", ""))})
    return normalized


def _preview(messages: Sequence[Dict[str, str]]) -> str:  # First non-empty line, truncated for logs
    for message in messages:
        text = message.get("content", "").strip()
        if text:
            line = text.splitlines()[0]
            return line if len(line) <= 120 else line[:117] + "..."
    return ""


def _extract_content(data: Any) -> str:  # Pull the text reply out of either provider's response
    if isinstance(data, dict):
        choices = data.get("choices")
        if isinstance(choices, list) and choices:
            message = choices[0].get("message") if isinstance(choices[0], dict) else None
            content = message.get("content") if isinstance(message, dict) else None
            if isinstance(content, str):
                return content
        content = data.get("content")
        if isinstance(content, str):
            return content
        if isinstance(content, list):
            texts = [block.get("text", "") for block in content if isinstance(block, dict) and block.get("type") == "text"]
            if texts:
                return "".join(texts)
    raise LlmGatewayError("LLM response missing content")


def _validate(schema: Type[T], content: str) -> T:  # Parse JSON content with schema
    return schema.model_validate_json(strip_code_fences(content))


def strip_code_fences(content: str) -> str:
    """Return the JSON body of a reply that may be wrapped in a markdown fence."""

    text = content.strip()
    if "```" not in text:
        return text
    start = text.find("```")
    body_start = text.find("\n", start)
    if body_start == -1:
        return text.strip("`").strip()
    end = text.find("```", body_start)
    body = text[body_start + 1 : end] if end != -1 else text[body_start + 1 :]
    return body.strip()


def _retry_hint(error_text: Optional[str], enforce_json: bool) -> str:  # Compose retry instructions including last error
    base = "The previous reply failed validation."
    if error_text:
        truncated = error_text.splitlines()[0].strip()
        if len(truncated) > 200:
            truncated = truncated[:197] + "..."
        base += f" Reason: {truncated}."
    if enforce_json:
        return base + " Return a single JSON object that matches the schema."
    return base + " Follow the requested format precisely."
