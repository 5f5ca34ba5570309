#!/usr/bin/env python3
"""Things 3 CLI - run catalog operations against a local Things 3 from the shell."""
import asyncio
import json
import locale
import subprocess
import sys
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from commands.catalog import OPERATIONS, dispatch, to_jsonable
from things_api.errors import ThingsError
from things_api.list_resolver import BUILT_IN_LIST_IDS
from things_api.task_operations import ThingsManager
from utils.config import LOG_LEVEL_KEY, get_auth_token, get_config, load_env_vars
from utils.logger import configure_logging, get_logger

__version__ = "1.0.0"

log = get_logger("thingscli")

app = typer.Typer(
    name="thingscli",
    help="Things 3 CLI - Manage to-dos, projects and lists in Things 3 via AppleScript.",
    no_args_is_help=True,
)


def _version_callback(value: bool):
    if value:
        print(f"thingscli {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log AppleScript calls to stderr."),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True, help="Show version and exit."
    ),
):
    """Things 3 CLI - Manage to-dos, projects and lists in Things 3 via AppleScript."""
    load_env_vars()
    configure_logging("DEBUG" if verbose else get_config(LOG_LEVEL_KEY, "WARNING"))
    try:
        # Lets natural date styles follow the user's regional settings.
        locale.setlocale(locale.LC_TIME, "")
    except locale.Error:
        log.debug("Could not adopt the host LC_TIME locale; keeping the default")


async def _invoke(name: str, arguments: Optional[Dict[str, Any]]) -> Any:
    manager = ThingsManager(auth_token=get_auth_token())
    try:
        return await dispatch(manager, name, arguments)
    finally:
        manager.runner.close()


def run_operation(name: str, arguments: Optional[Dict[str, Any]] = None) -> None:
    """Run one catalog operation and print its result as JSON."""
    try:
        result = asyncio.run(_invoke(name, arguments))
    except ThingsError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise typer.Exit(code=1)
    print(json.dumps(to_jsonable(result), indent=2, ensure_ascii=False))


@app.command("operations")
def list_operations():
    """List every operation that `call` accepts."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Operation", style="cyan")
    table.add_column("Kind", style="magenta")
    table.add_column("Description", style="green")
    for op in OPERATIONS.values():
        kind = "read" if op.read_only else ("destructive" if op.destructive else "write")
        table.add_row(op.name, kind, op.description)
    Console().print(table)


@app.command("call")
def call(
    name: str = typer.Argument(..., help="Operation name, see `thingscli operations`."),
    args: Optional[str] = typer.Option(None, "--args", "-a", help="Operation arguments as a JSON object."),
):
    """Invoke an operation with JSON arguments."""
    arguments = None
    if args:
        try:
            arguments = json.loads(args)
        except json.JSONDecodeError as e:
            print(f"Error: --args is not valid JSON: {e}", file=sys.stderr)
            raise typer.Exit(code=1)
        if not isinstance(arguments, dict):
            print("Error: --args must be a JSON object", file=sys.stderr)
            raise typer.Exit(code=1)
    run_operation(name, arguments)


@app.command("add")
def add(
    name: str = typer.Option(..., "--title", "-t", help="Title of the new to-do."),
    project: Optional[str] = typer.Option(None, "--project", "-p", help="Project to place the to-do in."),
    list_name: Optional[str] = typer.Option(None, "--list", "-l", help="List to place the to-do in."),
    notes: Optional[str] = typer.Option(None, "--note", "-n", help="Optional notes."),
    due: Optional[str] = typer.Option(None, "--due", "-d", help="Due date (YYYY-MM-DD or natural language)."),
    when: Optional[str] = typer.Option(None, "--when", "-w", help="today, tomorrow, evening, anytime, someday or a date."),
    tags: Optional[str] = typer.Option(None, "--tags", help="Comma-separated list of tags."),
):
    """Quick add a new to-do to Things."""
    arguments: Dict[str, Any] = {"name": name}
    for key, value in (("project", project), ("list", list_name), ("notes", notes), ("due_date", due), ("when", when)):
        if value is not None:
            arguments[key] = value
    if tags:
        arguments["tags"] = [tag.strip() for tag in tags.split(",") if tag.strip()]
    run_operation("add_todo", arguments)


@app.command("list")
def list_todos(
    list_name: str = typer.Argument("Today", help="Inbox, Today, Upcoming, Anytime, Someday or Logbook."),
):
    """Show the to-dos of a built-in list."""
    key = list_name.strip().lower()
    if key not in BUILT_IN_LIST_IDS:
        print(f"Error: unknown list '{list_name}'", file=sys.stderr)
        raise typer.Exit(code=1)
    run_operation(f"get_{key}")


@app.command("complete")
def complete(
    todo_ids: List[str] = typer.Argument(..., help="One or more to-do IDs to complete."),
):
    """Mark to-dos as complete in Things."""
    run_operation("complete_todos_batch", {"ids": todo_ids})


@app.command("search")
def search(query: str = typer.Argument(..., help="Text to look for in names and notes.")):
    """Search open to-dos."""
    run_operation("search_todos", {"query": query})


@app.command("diagnostics")
def diagnostics():
    """Health check: Things process, AppleScript access, URL-scheme token."""
    console = Console()

    try:
        result = subprocess.run(["pgrep", "-x", "Things3"], capture_output=True)
        is_running = result.returncode == 0
    except OSError as e:
        log.debug("pgrep unavailable: %s", e)
        is_running = False
    console.print(("✅" if is_running else "❌") + " Things 3 running", style="green" if is_running else "red")

    try:
        tags = asyncio.run(_invoke("get_tags", None))
        console.print(f"✅ AppleScript access ({len(tags)} tags)", style="green")
    except ThingsError as e:
        console.print(f"❌ AppleScript access: {e}", style="red")

    has_token = bool(get_auth_token())
    console.print(
        ("✅" if has_token else "⚠️ ") + " URL-scheme auth token " + ("configured" if has_token else "not set"),
        style="green" if has_token else "yellow",
    )


if __name__ == "__main__":
    app()
