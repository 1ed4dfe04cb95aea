"""Label management."""

from __future__ import annotations

from typing import TYPE_CHECKING

from todoist_cli.models import Label

if TYPE_CHECKING:
    from todoist_cli.client import TodoistClient


class LabelManager:
    """Read personal labels."""

    def __init__(self, client: TodoistClient):
        self._c = client

    def list(self) -> list[Label]:
        """Get all personal labels."""
        return self._c.get_list("/labels", Label.from_dict)
