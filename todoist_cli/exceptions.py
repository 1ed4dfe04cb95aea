"""Custom exceptions for the Todoist CLI."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Failure categories, one per exception class below."""

    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"
    NETWORK = "network"
    DECODE = "decode"
    UNEXPECTED_STATUS = "unexpected_status"


class TodoistError(Exception):
    """Base exception for all Todoist CLI errors."""

    kind: ErrorKind

    def __init__(self, message: str, status_code: int = 0):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class TodoistAPIError(TodoistError):
    """A classified failure of one logical API request.

    The retry engine sets ``attempts`` and ``retries_exhausted`` before raising
    the error it gave up on.
    """

    kind = ErrorKind.CLIENT_ERROR

    def __init__(self, message: str, status_code: int = 0):
        super().__init__(message, status_code)
        self.attempts = 1
        self.retries_exhausted = False

    @property
    def retryable(self) -> bool:
        """Network failures have no status; everything else defers to the classifier."""
        from todoist_cli.classifier import is_retryable

        return self.kind is ErrorKind.NETWORK or is_retryable(self.status_code)

    def mark_exhausted(self, attempts: int) -> TodoistAPIError:
        self.attempts = attempts
        self.retries_exhausted = True
        return self

    def __str__(self) -> str:
        text = f"[Todoist] {self.message} (HTTP {self.status_code})"
        if self.retries_exhausted:
            return f"request failed after {self.attempts - 1} retries: {text}"
        return text


class TodoistAuthError(TodoistAPIError):
    """Authentication failed (401)."""

    kind = ErrorKind.AUTH


class TodoistRateLimitError(TodoistAPIError):
    """Rate limited (429)."""

    kind = ErrorKind.RATE_LIMIT

    def __init__(self, message: str = "Rate limited", status_code: int = 429, retry_after: int | None = None):
        super().__init__(message, status_code)
        self.retry_after = retry_after


class TodoistClientError(TodoistAPIError):
    """The request was rejected as invalid (4xx other than 401/429)."""

    kind = ErrorKind.CLIENT_ERROR


class TodoistNotFoundError(TodoistClientError):
    """Resource not found (404)."""


class TodoistServerError(TodoistAPIError):
    """The API failed to handle the request (5xx)."""

    kind = ErrorKind.SERVER_ERROR


class TodoistNetworkError(TodoistAPIError):
    """No response was obtained (connection, DNS, timeout)."""

    kind = ErrorKind.NETWORK


class TodoistDecodeError(TodoistAPIError):
    """A response body did not match the expected schema."""

    kind = ErrorKind.DECODE


class TodoistUnexpectedStatusError(TodoistError):
    """A success status other than the one the operation expects."""

    kind = ErrorKind.UNEXPECTED_STATUS

    def __init__(self, status_code: int, expected: int = 204):
        self.expected = expected
        super().__init__(f"unexpected status code: {status_code} (expected {expected})", status_code)
