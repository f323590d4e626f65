import json
import time
from typing import Any, Callable, List, Optional

import requests

from story_builder.core.config import Settings
from story_builder.core.errors import (
    InsufficientBalanceError,
    UpstreamError,
    UpstreamUnavailableError,
    is_balance_failure,
)
from story_builder.core.logger import get_logger, log_upstream_call

logger = get_logger("writer")


def request_story_text(prompt: str, settings: Settings, api_key: str) -> Any:
    """
    Calls the text-generation model and returns its decoded JSON payload.

    Raises:
        InsufficientBalanceError: upstream refused for billing reasons
        UpstreamError: any other non-2xx answer
        UpstreamUnavailableError: connection failure, timeout or unreadable body
    """
    url = settings.inference_url(settings.TEXT_MODEL)
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }
    payload = {"input": prompt, "max_output_tokens": settings.MAX_OUTPUT_TOKENS}

    start = time.perf_counter()
    try:
        resp = requests.post(url, json=payload, headers=headers, timeout=settings.TEXT_TIMEOUT_SECONDS)
        duration_ms = (time.perf_counter() - start) * 1000
        log_upstream_call("text", settings.TEXT_MODEL, resp.status_code, duration_ms)

        if not resp.ok:
            body = resp.text
            logger.error(f"Text model returned non-OK: {resp.status_code} {body[:2000]}")
            if is_balance_failure(body):
                raise InsufficientBalanceError(body)
            raise UpstreamError(resp.status_code, body)

        return resp.json()
    except requests.RequestException as e:
        logger.error(f"Error calling text model: {e}")
        raise UpstreamUnavailableError(str(e)) from e


# ==================== RESPONSE NORMALIZATION ====================
# Each extractor returns None when the payload does not have its shape.
# The first extractor that returns a value wins.

def _serialize(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else _serialize(value)


def _first(payload: dict, key: str) -> Any:
    items = payload.get(key)
    if isinstance(items, list) and items and items[0]:
        return items[0]
    return None


def _from_empty(payload: Any) -> Optional[str]:
    if not payload:
        return _serialize(payload)
    return None


def _from_string(payload: Any) -> Optional[str]:
    if isinstance(payload, str):
        return payload
    return None


def _from_output(payload: Any) -> Optional[str]:
    if isinstance(payload, dict) and payload.get("output"):
        return _as_text(payload["output"])
    return None


def _from_results(payload: Any) -> Optional[str]:
    if not isinstance(payload, dict):
        return None
    first = _first(payload, "results")
    if first is None:
        return None
    if isinstance(first, dict):
        for key in ("output", "content", "text"):
            if first.get(key) is not None:
                return _as_text(first[key])
    return _serialize(first)


def _from_choices(payload: Any) -> Optional[str]:
    if not isinstance(payload, dict):
        return None
    first = _first(payload, "choices")
    if first is None:
        return None
    if isinstance(first, dict):
        if first.get("text") is not None:
            return _as_text(first["text"])
        message = first.get("message")
        if isinstance(message, dict) and message.get("content") is not None:
            return _as_text(message["content"])
    return _serialize(first)


def _from_error_detail(payload: Any) -> Optional[str]:
    if isinstance(payload, dict):
        detail = payload.get("detail")
        if isinstance(detail, dict) and detail.get("error"):
            return _serialize(detail)
    return None


TEXT_EXTRACTORS: List[Callable[[Any], Optional[str]]] = [
    _from_empty,
    _from_string,
    _from_output,
    _from_results,
    _from_choices,
    _from_error_detail,
]


def extract_text(payload: Any) -> str:
    """Best-effort story text from any of the model-specific response shapes."""
    for extractor in TEXT_EXTRACTORS:
        text = extractor(payload)
        if text is not None:
            return text
    return _serialize(payload)
