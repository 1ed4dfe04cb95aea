"""CLI entrypoint for todoist."""

import logging
from contextlib import contextmanager
from datetime import date
from typing import Annotated, Iterator, Optional

import typer
from rich.console import Console

from todoist_cli import __version__, config
from todoist_cli.cli import doctor as diagnostics
from todoist_cli.cli.formatting import (
    format_completed_task_line,
    format_label_line,
    format_project_line,
    format_task_line,
    to_json,
)
from todoist_cli.client import TodoistClient
from todoist_cli.exceptions import ErrorKind, TodoistError
from todoist_cli.priority import parse_priority

logger = logging.getLogger(__name__)

EXIT_FAILURE = 1
EXIT_SETUP = 2

app = typer.Typer(no_args_is_help=True, add_completion=False, help="Todoist command-line interface.")
projects_app = typer.Typer(help="List, create and delete projects.")
configure_app = typer.Typer(help="Set up the Todoist access token.")
app.add_typer(projects_app, name="projects")
app.add_typer(configure_app, name="configure")

JsonOption = Annotated[bool, typer.Option("--json", help="Output in JSON format")]
ProjectOption = Annotated[Optional[str], typer.Option("--project", help="Project name")]


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"todoist version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", help="Log HTTP requests and retries")] = False,
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version"),
    ] = False,
) -> None:
    """Todoist command-line interface."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# ── Helpers ───────────────────────────────────────────────────────────


@contextmanager
def _api_errors(json_output: bool) -> Iterator[None]:
    """Render a TodoistError and exit: 2 for auth failures, 1 otherwise."""
    try:
        yield
    except TodoistError as exc:
        logger.debug("Command failed", exc_info=True)
        code = EXIT_SETUP if exc.kind is ErrorKind.AUTH else EXIT_FAILURE
        if json_output:
            typer.echo(to_json({"error": exc.message, "kind": exc.kind.value, "status_code": exc.status_code}))
        else:
            typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code) from exc


def _client() -> TodoistClient:
    token = config.resolve_token()
    if not token:
        typer.echo(
            "Error: no access token found\n\n"
            f"Run 'todoist configure' to set up, or set {config.TOKEN_ENV_VAR}",
            err=True,
        )
        raise typer.Exit(EXIT_SETUP)
    return TodoistClient(token)


def _project_id(client: TodoistClient, name: str | None) -> str | None:
    if not name:
        return None
    return client.project.find_by_name(name).id


def _status(message: str, **ids: str) -> dict:
    return {"status": "ok", **ids, "message": message}


# ── Tasks ─────────────────────────────────────────────────────────────


@app.command("list")
def list_tasks(
    filter: Annotated[
        Optional[str],
        typer.Option("--filter", help="Filter query (today, overdue, p1, @label, #project)"),
    ] = None,
    project: ProjectOption = None,
    json_output: JsonOption = False,
) -> None:
    """List active tasks."""
    with _api_errors(json_output):
        client = _client()
        tasks = client.task.list(filter=filter, project_id=_project_id(client, project))

    if json_output:
        typer.echo(to_json(tasks))
        return
    if not tasks:
        typer.echo("No tasks found.")
        return
    for t in tasks:
        typer.echo(format_task_line(t))


@app.command("add")
def add_task(
    content: Annotated[str, typer.Argument(help="Task name")],
    due: Annotated[str, typer.Option("--date", help="Due date (today, tomorrow, YYYY-MM-DD)")] = "",
    priority: Annotated[Optional[str], typer.Option("--priority", help="Priority 1-4 (1=urgent, 4=normal)")] = None,
    project: ProjectOption = None,
    labels: Annotated[str, typer.Option("--labels", help="Comma-separated labels")] = "",
    description: Annotated[str, typer.Option("--description", help="Task description")] = "",
    json_output: JsonOption = False,
) -> None:
    """Add a new task."""
    if priority is not None:
        try:
            parse_priority(priority)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--priority") from exc
    label_names = [name.strip() for name in labels.split(",") if name.strip()]

    with _api_errors(json_output):
        client = _client()
        task = client.task.create(
            content,
            description=description,
            project_id=_project_id(client, project),
            labels=label_names,
            priority=priority,
            due_string=due,
        )

    if json_output:
        typer.echo(to_json(task))
        return
    typer.echo(f"Created task: {task.content} (ID: {task.id})")


@app.command("close")
def close_task(
    task_id: Annotated[str, typer.Argument(help="Task ID")],
    json_output: JsonOption = False,
) -> None:
    """Complete a task."""
    with _api_errors(json_output):
        _client().task.close(task_id)

    if json_output:
        typer.echo(to_json(_status("Task completed", task_id=task_id)))
        return
    typer.echo(f"Task {task_id} completed.")


@app.command("delete")
def delete_task(
    task_id: Annotated[str, typer.Argument(help="Task ID")],
    json_output: JsonOption = False,
) -> None:
    """Delete a task."""
    with _api_errors(json_output):
        _client().task.delete(task_id)

    if json_output:
        typer.echo(to_json(_status("Task deleted", task_id=task_id)))
        return
    typer.echo(f"Task {task_id} deleted.")


@app.command("completed")
def completed_tasks(
    project: ProjectOption = None,
    since: Annotated[Optional[str], typer.Option("--since", help="Completed since (YYYY-MM-DD)")] = None,
    limit: Annotated[int, typer.Option("--limit", min=1, help="Maximum number of tasks")] = 50,
    json_output: JsonOption = False,
) -> None:
    """List completed tasks."""
    if since and len(since) == 10:
        try:
            since = date.fromisoformat(since).isoformat() + "T00:00:00"
        except ValueError as exc:
            raise typer.BadParameter(f"expected YYYY-MM-DD: {since}", param_hint="--since") from exc

    with _api_errors(json_output):
        client = _client()
        tasks = client.task.completed(_project_id(client, project), since=since, limit=limit)

    if json_output:
        typer.echo(to_json(tasks))
        return
    if not tasks:
        typer.echo("No completed tasks found.")
        return
    for t in tasks:
        typer.echo(format_completed_task_line(t))


# ── Projects and labels ───────────────────────────────────────────────


@projects_app.callback(invoke_without_command=True)
def projects(ctx: typer.Context, json_output: JsonOption = False) -> None:
    """List all projects, or manage them with a subcommand."""
    if ctx.invoked_subcommand is not None:
        return
    with _api_errors(json_output):
        items = _client().project.list()

    if json_output:
        typer.echo(to_json(items))
        return
    if not items:
        typer.echo("No projects found.")
        return
    for p in items:
        typer.echo(format_project_line(p))


@projects_app.command("add")
def projects_add(
    name: Annotated[str, typer.Argument(help="Project name")],
    json_output: JsonOption = False,
) -> None:
    """Create a project."""
    with _api_errors(json_output):
        project = _client().project.create(name)

    if json_output:
        typer.echo(to_json(project))
        return
    typer.echo(f"Created project: {project.name} (ID: {project.id})")


@projects_app.command("delete")
def projects_delete(
    project_id: Annotated[str, typer.Argument(help="Project ID")],
    json_output: JsonOption = False,
) -> None:
    """Delete a project and all its tasks."""
    with _api_errors(json_output):
        _client().project.delete(project_id)

    if json_output:
        typer.echo(to_json(_status("Project deleted", project_id=project_id)))
        return
    typer.echo(f"Project {project_id} deleted.")


@app.command("labels")
def labels(json_output: JsonOption = False) -> None:
    """List all personal labels."""
    with _api_errors(json_output):
        items = _client().label.list()

    if json_output:
        typer.echo(to_json(items))
        return
    if not items:
        typer.echo("No labels found.")
        return
    for label in items:
        typer.echo(format_label_line(label))


# ── Configuration and diagnostics ─────────────────────────────────────


@configure_app.callback(invoke_without_command=True)
def configure(ctx: typer.Context) -> None:
    """Interactive setup of the access token."""
    if ctx.invoked_subcommand is not None:
        return

    typer.echo("Todoist CLI Configuration")
    typer.echo("=========================")
    typer.echo()
    if config.exists():
        typer.echo(f"Existing configuration found at {config.config_path()}")
        if not typer.confirm("Overwrite?", default=False):
            typer.echo("Configuration cancelled.")
            return
        typer.echo()

    typer.echo("Get your API token from:")
    typer.echo(config.TOKEN_URL)
    typer.echo()
    token = typer.prompt("Todoist API Token", default="", show_default=False, hide_input=True).strip()
    if not token:
        typer.echo("Error: access token is required", err=True)
        raise typer.Exit(EXIT_FAILURE)

    try:
        path = config.save(config.Config(access_token=token))
    except OSError as exc:
        typer.echo(f"Error: failed to save configuration: {exc}", err=True)
        raise typer.Exit(EXIT_FAILURE) from exc

    typer.echo()
    typer.echo(f"Configuration saved to {path}")
    typer.echo()
    typer.echo("Test your setup:")
    typer.echo("  todoist list")
    typer.echo("  todoist projects")
    typer.echo()
    typer.echo("Troubleshoot:")
    typer.echo("  todoist doctor")


@configure_app.command("show")
def configure_show(json_output: JsonOption = False) -> None:
    """Show the current configuration with the token masked."""
    if not config.exists():
        typer.echo("No configuration file found.")
        typer.echo("Run 'todoist configure' to set up.")
        return
    try:
        cfg = config.load()
    except OSError as exc:
        typer.echo(f"Error: failed to load config: {exc}", err=True)
        raise typer.Exit(EXIT_FAILURE) from exc

    masked = config.mask_token(cfg.access_token) if cfg.access_token else ""
    if json_output:
        typer.echo(to_json({"config_path": str(config.config_path()), "access_token": masked}))
        return
    typer.echo(f"Config file: {config.config_path()}")
    typer.echo(f"Access token: {masked}")


@app.command("doctor")
def doctor(json_output: JsonOption = False) -> None:
    """Validate installation and configuration."""
    checks = diagnostics.run_checks(TodoistClient)
    summary, all_ok = diagnostics.summarize(checks)

    if json_output:
        typer.echo(to_json({"checks": checks, "summary": summary, "all_ok": all_ok}))
    else:
        diagnostics.render_table(checks, Console())
        typer.echo()
        typer.echo(summary)
    if not all_ok:
        raise typer.Exit(EXIT_FAILURE)


def run() -> None:
    app(prog_name="todoist")


if __name__ == "__main__":
    run()
