"""Todoist REST API client with retry and rate limit handling."""

from __future__ import annotations

import json as jsonlib
import logging
import time
from typing import Any, Callable, TypeVar

import requests

from todoist_cli import __version__
from todoist_cli.classifier import classify, is_rate_limit, is_retryable, is_success
from todoist_cli.exceptions import TodoistAPIError, TodoistDecodeError, TodoistNetworkError
from todoist_cli.managers.label import LabelManager
from todoist_cli.managers.project import ProjectManager
from todoist_cli.managers.task import TaskManager

logger = logging.getLogger(__name__)

BASE_URL = "https://api.todoist.com/rest/v2"
USER_AGENT = f"todoist-cli/{__version__}"

MAX_RETRIES = 3
MAX_ATTEMPTS = MAX_RETRIES + 1
INITIAL_BACKOFF = 1.0
RATE_LIMIT_WAIT = 60.0
REQUEST_TIMEOUT = 30.0

# First page plus one cursor follow.
MAX_PAGES = 2

T = TypeVar("T")


class TodoistClient:
    """Todoist API client.

    Build one per command invocation; it owns its session and credential.

    Resource managers are accessible as attributes:
        client.task     - list, create, close, delete and completed tasks
        client.project  - list, create and delete projects
        client.label    - list personal labels
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str = BASE_URL,
        session: requests.Session | None = None,
        timeout: float = REQUEST_TIMEOUT,
    ):
        if not token:
            raise ValueError("access token is required")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self._setup_session(token)

        self.task = TaskManager(self)
        self.project = ProjectManager(self)
        self.label = LabelManager(self)

    def _setup_session(self, token: str) -> None:
        self.session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
                "User-Agent": USER_AGENT,
            }
        )

    # ── HTTP layer ────────────────────────────────────────────────────

    def execute(
        self,
        method: str,
        endpoint: str,
        *,
        params: dict | None = None,
        json: Any = None,
    ) -> tuple[bytes, int]:
        """Perform one logical request, retrying transient failures.

        Returns the raw response body and status code of the first 2xx
        response. Network errors, 429 and 5xx are retried with exponential
        backoff (1s, 2s, 4s); a 429 additionally waits out the rate limit
        window. 401 and other 4xx responses raise immediately.

        Raises:
            TodoistAPIError: the classified failure. When the attempt budget
                runs out, the last error is raised with ``retries_exhausted``.
        """
        url = f"{self.base_url}{endpoint}"
        # Serialized once so every attempt replays identical bytes.
        body = jsonlib.dumps(json, separators=(",", ":")).encode("utf-8") if json is not None else None

        last_error: TodoistAPIError | None = None
        backoff = INITIAL_BACKOFF
        for attempt in range(1, MAX_ATTEMPTS + 1):
            if attempt > 1:
                logger.warning(
                    "%s %s failed (%s); retrying in %.1f s (attempt %d/%d)",
                    method, endpoint, last_error, backoff, attempt, MAX_ATTEMPTS,
                )
                time.sleep(backoff)
                backoff *= 2

            logger.debug("HTTP %s %s (attempt %d/%d)", method, endpoint, attempt, MAX_ATTEMPTS)
            try:
                resp = self.session.request(method, url, params=params, data=body, timeout=self.timeout)
            except requests.RequestException as exc:
                last_error = TodoistNetworkError(f"request failed: {exc}")
                continue

            status = resp.status_code
            if is_success(status):
                return resp.content, status

            content = resp.content or b""
            logger.debug("HTTP %s %s -> %s: %s", method, endpoint, status, content[:500].decode("utf-8", "replace"))

            if is_rate_limit(status):
                last_error = classify(status, content, retry_after=_retry_after(resp))
                if attempt < MAX_ATTEMPTS:
                    logger.warning("Rate limited; waiting %.0f s before retrying", RATE_LIMIT_WAIT)
                    time.sleep(RATE_LIMIT_WAIT)
                continue

            error = classify(status, content)
            if not is_retryable(status):
                raise error
            last_error = error

        if last_error is None:
            # Should not be reached, but satisfies type checkers
            last_error = TodoistNetworkError("unexpected exit from retry loop")
        raise last_error.mark_exhausted(MAX_ATTEMPTS)

    def get(self, endpoint: str, **kwargs: Any) -> tuple[bytes, int]:
        return self.execute("GET", endpoint, **kwargs)

    def post(self, endpoint: str, **kwargs: Any) -> tuple[bytes, int]:
        return self.execute("POST", endpoint, **kwargs)

    def delete(self, endpoint: str, **kwargs: Any) -> tuple[bytes, int]:
        return self.execute("DELETE", endpoint, **kwargs)

    # ── Decoding ──────────────────────────────────────────────────────

    @staticmethod
    def decode(body: bytes, status_code: int = 200) -> Any:
        """Parse a JSON response body."""
        try:
            return jsonlib.loads(body)
        except ValueError as exc:
            raise TodoistDecodeError(f"invalid JSON in response: {exc}", status_code) from exc

    def decode_model(self, body: bytes, status_code: int, model: Callable[[dict], T]) -> T:
        data = self.decode(body, status_code)
        return _build(model, data, status_code)

    def get_list(
        self,
        endpoint: str,
        model: Callable[[dict], T],
        *,
        params: dict | None = None,
        key: str = "results",
        limit: int | None = None,
    ) -> list[T]:
        """GET a list endpoint and decode every element with ``model``.

        Accepts either a bare JSON array or an envelope holding the array
        under ``key`` plus a ``next_cursor``. At most one cursor is followed,
        and only while fewer than ``limit`` items have been collected; the
        result is cut to ``limit``.
        """
        params = dict(params or {})
        items: list[T] = []
        for page in range(1, MAX_PAGES + 1):
            body, status = self.get(endpoint, params=dict(params) if params else None)
            data = self.decode(body, status)
            if isinstance(data, list):
                items.extend(_build(model, d, status) for d in data)
                break
            if not isinstance(data, dict) or not isinstance(data.get(key), list):
                raise TodoistDecodeError(f"expected a list or an envelope with '{key}'", status)
            items.extend(_build(model, d, status) for d in data[key])

            cursor = data.get("next_cursor")
            if not cursor or cursor == params.get("cursor"):
                break
            if limit is not None and len(items) >= limit:
                break
            if page == MAX_PAGES:
                logger.debug("Not following cursor %s for %s: page limit reached", cursor, endpoint)
                break
            logger.debug("Following cursor %s for %s", cursor, endpoint)
            params["cursor"] = cursor
        return items if limit is None else items[:limit]


def _build(model: Callable[[dict], T], data: Any, status_code: int) -> T:
    if not isinstance(data, dict):
        raise TodoistDecodeError(f"expected a JSON object, got {type(data).__name__}", status_code)
    try:
        return model(data)
    except (KeyError, TypeError, ValueError) as exc:
        raise TodoistDecodeError(f"unexpected response shape: {exc!r}", status_code) from exc


def _retry_after(resp: requests.Response) -> int | None:
    raw = resp.headers.get("Retry-After")
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None
