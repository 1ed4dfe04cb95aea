"""Conversion between user-facing and API task priorities.

The API stores priority inverted from what users see:

    API 4 = P1 (urgent)    API 3 = P2    API 2 = P3    API 1 = P4 (normal)
"""

from __future__ import annotations

MIN_PRIORITY = 1
MAX_PRIORITY = 4


def parse_priority(value: str | int) -> int:
    """Convert user input 1-4 (1 = most urgent) to the API value."""
    try:
        n = int(value)
    except (TypeError, ValueError):
        n = 0
    if not MIN_PRIORITY <= n <= MAX_PRIORITY:
        raise ValueError(f"priority must be 1-4 (1=urgent, 4=normal): {value}")
    return MAX_PRIORITY + 1 - n


def format_priority(api_priority: int) -> int:
    """Convert an API priority back to the user-facing 1-4 scale."""
    if not MIN_PRIORITY <= api_priority <= MAX_PRIORITY:
        return MAX_PRIORITY
    return MAX_PRIORITY + 1 - api_priority


def priority_label(api_priority: int) -> str:
    return f"P{format_priority(api_priority)}"
