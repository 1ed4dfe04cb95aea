"""Doctor command for installation and configuration diagnostics."""

from __future__ import annotations

import shutil
from dataclasses import asdict, dataclass
from typing import Callable

from rich.console import Console
from rich.table import Table

from todoist_cli import config
from todoist_cli.client import TodoistClient
from todoist_cli.exceptions import TodoistError

OK = "ok"
WARN = "warn"
FAIL = "fail"

_STATUS_STYLE = {OK: "green", WARN: "yellow", FAIL: "red"}


@dataclass
class DoctorCheck:
    name: str
    status: str
    message: str

    def to_dict(self) -> dict:
        return asdict(self)


def _check_binary() -> DoctorCheck:
    path = shutil.which("todoist")
    if path is None:
        return DoctorCheck("Binary", WARN, "todoist not found in PATH (running from a checkout?)")
    return DoctorCheck("Binary", OK, path)


def _check_config_file() -> list[DoctorCheck]:
    path = config.config_path()
    if not config.exists():
        return [DoctorCheck("Config file", FAIL, f"{path} not found. Run 'todoist configure'")]

    checks = [DoctorCheck("Config file", OK, str(path))]
    try:
        perms = config.permissions()
    except OSError as exc:
        checks.append(DoctorCheck("Config permissions", FAIL, f"Cannot read permissions: {exc}"))
    else:
        if perms != 0o600:
            checks.append(DoctorCheck("Config permissions", WARN, f"{perms:o} (should be 600). Fix: chmod 600 {path}"))
        else:
            checks.append(DoctorCheck("Config permissions", OK, "600 (secure)"))
    return checks


def _check_api(token: str, client_factory: Callable[[str], TodoistClient]) -> DoctorCheck:
    try:
        projects = client_factory(token).project.list()
    except TodoistError as exc:
        return DoctorCheck("API connection", FAIL, f"Failed: {exc}")
    return DoctorCheck("API connection", OK, f"Success ({len(projects)} project(s) found)")


def run_checks(client_factory: Callable[[str], TodoistClient] = TodoistClient) -> list[DoctorCheck]:
    """Run every diagnostic in order; later checks are skipped when their input is missing."""
    checks = [_check_binary(), *_check_config_file()]

    try:
        config.load()
    except OSError as exc:
        checks.append(DoctorCheck("Config format", FAIL, f"Failed to read config: {exc}"))
        return checks

    token = config.resolve_token()
    if not token:
        checks.append(DoctorCheck("Access token", FAIL, f"Not found in config or {config.TOKEN_ENV_VAR} env var"))
        return checks
    checks.append(DoctorCheck("Access token", OK, f"Present ({config.mask_token(token)})"))
    checks.append(_check_api(token, client_factory))
    return checks


def summarize(checks: list[DoctorCheck]) -> tuple[str, bool]:
    failed = sum(1 for c in checks if c.status == FAIL)
    if failed:
        return f"{failed} check(s) failed. Run 'todoist configure' to fix.", False
    return "All checks passed!", True


def render_table(checks: list[DoctorCheck], console: Console) -> None:
    table = Table(title="Todoist CLI Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    for c in checks:
        style = _STATUS_STYLE[c.status]
        table.add_row(c.name, f"[{style}]{c.status.upper()}[/{style}]", c.message)
    console.print(table)
