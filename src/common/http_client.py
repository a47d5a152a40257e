"""Shared HTTP helpers used by the registry clients.

Encapsulates common request/timeout error handling so client modules avoid
duplicating try/except blocks. Transport failures surface as
RegistryRequestError; callers decide how a failure maps onto a tool error.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Optional, Tuple

import requests

from constants import Constants
from common.errors import RegistryRequestError
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)

HEADERS_JSON = {"Accept": "application/json", "User-Agent": Constants.USER_AGENT}


def safe_get(url: str, *, context: str, timeout: Optional[float] = None, **kwargs: Any) -> requests.Response:
    """Perform a GET request with consistent error handling and DEBUG traces.

    Args:
        url: Target URL.
        context: Human-readable source tag for logs (e.g., "npm", "pypi").
        timeout: Seconds before giving up; defaults to Constants.REQUEST_TIMEOUT.
        **kwargs: Passed through to requests.get.

    Raises:
        RegistryRequestError: On timeouts and connection-level failures.
    """
    safe_target = safe_url(url)
    timeout = Constants.REQUEST_TIMEOUT if timeout is None else timeout
    kwargs.setdefault("headers", HEADERS_JSON)
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action="GET",
                    target=safe_target,
                    context=context
                )
            )
        try:
            res = requests.get(url, timeout=timeout, **kwargs)
        except requests.Timeout as exc:
            logger.error("%s request timed out after %s seconds", context, timeout)
            raise RegistryRequestError(f"{context} request timed out after {timeout} seconds") from exc
        except requests.RequestException as exc:  # includes ConnectionError
            logger.error("%s connection error: %s", context, exc)
            raise RegistryRequestError(f"{context} connection error: {exc}") from exc
    if is_debug_enabled(logger):
        logger.debug(
            "HTTP response",
            extra=extra_context(
                event="http_response",
                component="http_client",
                action="GET",
                status_code=res.status_code,
                duration_ms=t.duration_ms(),
                target=safe_target,
                context=context
            )
        )
    return res


def get_json(
    url: str,
    *,
    context: str,
    timeout: Optional[float] = None,
    **kwargs: Any
) -> Tuple[int, Optional[Any]]:
    """Perform GET request and parse JSON response.

    Args:
        url: Target URL
        context: Source tag for logs
        timeout: Optional request timeout in seconds
        **kwargs: Additional requests.get parameters

    Returns:
        Tuple of (status_code, parsed_json_or_none). The parsed
        body is None for non-200 responses and for bodies that are not JSON.

    Raises:
        RegistryRequestError: When the registry cannot be reached.
    """
    res = safe_get(url, context=context, timeout=timeout, **kwargs)
    if res.status_code != 200 or not res.text:
        return res.status_code, None
    try:
        return res.status_code, json.loads(res.text)
    except json.JSONDecodeError:
        logger.warning(
            "JSON decode error",
            extra=extra_context(
                event="parse",
                component="http_client",
                action="get_json",
                outcome="json_decode_error",
                target=safe_url(url),
                context=context
            )
        )
        return res.status_code, None
