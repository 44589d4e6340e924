"""Shared HTTP helpers used by the lifecycle registry client.

Encapsulates request/timeout/retry handling so callers only deal with a
status code and a decoded body. Transport errors never propagate out of
this module; they are reported as a zero status code.
"""
from __future__ import annotations

import logging
import time
import json
from typing import Any, Optional, Dict, Tuple

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS = {429}


def _should_retry_status(status_code: int) -> bool:
    return status_code >= 500 or status_code in _RETRYABLE_STATUS


def _backoff_delay(attempt: int) -> float:
    """Delay before retry number ``attempt`` (0-based), capped at HTTP_RETRY_MAX_DELAY_SEC."""
    return min(
        Constants.HTTP_RETRY_BASE_DELAY_SEC * (2 ** min(attempt, 16)),
        Constants.HTTP_RETRY_MAX_DELAY_SEC,
    )


def robust_get(
    url: str,
    *,
    timeout: float = Constants.REQUEST_TIMEOUT,
    retries: int = Constants.HTTP_RETRY_MAX,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Tuple[int, Dict[str, str], str]:
    """Perform GET request with timeout and bounded retries, with DEBUG traces.

    Args:
        url: Target URL
        timeout: Per-attempt timeout in seconds
        retries: Retries after the first attempt
        headers: Optional request headers
        **kwargs: Additional requests.get parameters

    Returns:
        Tuple of (status_code, headers_dict, text). A status code of 0 means
        every attempt failed at the transport level; text then holds the reason.
    """
    safe_target = safe_url(url)
    request_headers = {"User-Agent": Constants.USER_AGENT}
    if headers:
        request_headers.update(headers)

    attempts = max(0, int(retries)) + 1
    last_exception = None
    last_response: Optional[Tuple[int, Dict[str, str], str]] = None

    for attempt in range(attempts):
        if attempt:
            time.sleep(_backoff_delay(attempt - 1))
        with Timer() as t:
            try:
                if is_debug_enabled(logger):
                    logger.debug(
                        "HTTP request",
                        extra=extra_context(
                            event="http_request",
                            component="http_client",
                            action="GET",
                            target=safe_target,
                            attempt=attempt + 1
                        )
                    )

                response = requests.get(
                    url,
                    timeout=timeout,
                    headers=request_headers,
                    **kwargs
                )

                if is_debug_enabled(logger):
                    logger.debug(
                        "HTTP response",
                        extra=extra_context(
                            event="http_response",
                            component="http_client",
                            action="GET",
                            outcome="success",
                            status_code=response.status_code,
                            duration_ms=t.duration_ms(),
                            target=safe_target
                        )
                    )
                last_response = (response.status_code, dict(response.headers), response.text)
                if _should_retry_status(response.status_code):
                    last_exception = f"HTTP {response.status_code}"
                    continue
                return last_response

            except requests.Timeout:
                last_exception = "timeout"
                if is_debug_enabled(logger):
                    logger.debug(
                        "HTTP timeout",
                        extra=extra_context(
                            event="http_exception",
                            component="http_client",
                            action="GET",
                            outcome="timeout",
                            attempt=attempt + 1,
                            target=safe_target
                        )
                    )
                continue
            except requests.RequestException as exc:
                last_exception = str(exc)
                if is_debug_enabled(logger):
                    logger.debug(
                        "HTTP request exception",
                        extra=extra_context(
                            event="http_exception",
                            component="http_client",
                            action="GET",
                            outcome="request_exception",
                            attempt=attempt + 1,
                            target=safe_target
                        )
                    )
                continue

    if last_response is not None:
        return last_response
    return 0, {}, f"Request failed after {attempts} attempts: {last_exception}"


def get_json(
    url: str,
    *,
    timeout: float = Constants.REQUEST_TIMEOUT,
    retries: int = Constants.HTTP_RETRY_MAX,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Tuple[int, Dict[str, str], Optional[Any]]:
    """Perform GET request and parse JSON response with DEBUG traces.

    Args:
        url: Target URL
        timeout: Per-attempt timeout in seconds
        retries: Retries after the first attempt
        headers: Optional request headers
        **kwargs: Additional requests.get parameters

    Returns:
        Tuple of (status_code, headers_dict, parsed_json_or_none)
    """
    merged = {"Accept": "application/json"}
    if headers:
        merged.update(headers)
    status_code, response_headers, text = robust_get(
        url, timeout=timeout, retries=retries, headers=merged, **kwargs
    )

    if status_code == 200 and text:
        try:
            parsed = json.loads(text)
            if is_debug_enabled(logger):
                logger.debug(
                    "Parsed JSON response",
                    extra=extra_context(
                        event="parse",
                        component="http_client",
                        action="get_json",
                        outcome="success",
                        status_code=status_code,
                        target=safe_url(url)
                    )
                )
            return status_code, response_headers, parsed
        except json.JSONDecodeError:
            if is_debug_enabled(logger):
                logger.debug(
                    "JSON decode error",
                    extra=extra_context(
                        event="parse",
                        component="http_client",
                        action="get_json",
                        outcome="json_decode_error",
                        status_code=status_code,
                        target=safe_url(url)
                    )
                )
            return status_code, response_headers, None

    return status_code, response_headers, None
