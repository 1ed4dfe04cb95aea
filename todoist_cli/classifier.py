"""Turn a non-2xx HTTP response into a typed Todoist error.

The predicates here are the only place status codes are interpreted; the
retry engine consults them instead of comparing numbers itself.
"""

from __future__ import annotations

import json
from http import HTTPStatus

from todoist_cli.exceptions import (
    TodoistAPIError,
    TodoistAuthError,
    TodoistClientError,
    TodoistNotFoundError,
    TodoistRateLimitError,
    TodoistServerError,
)


def is_success(status_code: int) -> bool:
    return 200 <= status_code <= 299


def is_auth(status_code: int) -> bool:
    return status_code == 401


def is_rate_limit(status_code: int) -> bool:
    return status_code == 429


def is_server_error(status_code: int) -> bool:
    return 500 <= status_code <= 599


def is_client_error(status_code: int) -> bool:
    return 400 <= status_code <= 499 and not is_auth(status_code) and not is_rate_limit(status_code)


def is_not_found(status_code: int) -> bool:
    return status_code == 404


def is_retryable(status_code: int) -> bool:
    return is_rate_limit(status_code) or is_server_error(status_code)


def parse_error_body(body: bytes) -> str:
    """Extract a message from an error body.

    The API answers with ``{"error": "..."}``, a bare JSON string, or plain
    text, tried in that order.
    """
    try:
        data = json.loads(body)
    except ValueError:
        data = None

    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, str) and error:
            return error
    if isinstance(data, str) and data:
        return data
    return body.decode("utf-8", errors="replace")


def reason_phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Unknown Status"


def error_message(status_code: int, body: bytes) -> str:
    if not body.strip():
        return f"HTTP {status_code}: {reason_phrase(status_code)}"
    return parse_error_body(body)


def classify(status_code: int, body: bytes, *, retry_after: int | None = None) -> TodoistAPIError:
    """Build the error matching ``status_code`` with a message taken from ``body``."""
    message = error_message(status_code, body)
    if is_auth(status_code):
        return TodoistAuthError(message, status_code)
    if is_rate_limit(status_code):
        return TodoistRateLimitError(message, status_code, retry_after=retry_after)
    if is_server_error(status_code):
        return TodoistServerError(message, status_code)
    if is_not_found(status_code):
        return TodoistNotFoundError(message, status_code)
    if is_client_error(status_code):
        return TodoistClientError(message, status_code)
    # 1xx/3xx are not retried either.
    return TodoistClientError(message, status_code)
