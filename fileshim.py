#!/usr/bin/env python3
"""
fileshim - whole-file read, write and delete

Main entry point for the fileshim CLI application.
"""

import json
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from core import AuditLogger, ConfigError, Settings, load_settings
from core.config import DEFAULT_CONFIG_PATH, settings_as_dict
from core.logger import ActionStatus, ActionType
from modules.file_io import FileOperator


console = Console()
err_console = Console(stderr=True)


def fail(label: str, message: str) -> None:
    """Print a red error line to stderr and exit with status 1."""
    err_console.print(f"[red]{label}:[/red] {escape(message)}")
    sys.exit(1)


def get_file_operator(settings: Settings) -> FileOperator:
    """Get a file operator, audited when the settings ask for it."""
    logger = AuditLogger(settings.audit_log_path) if settings.audit_enabled else None
    return FileOperator(logger=logger)


def run_operation(settings: Settings, operation: str, *args):
    """
    Run one FileOperator method and return its Result.

    File operations themselves never raise; an OSError here comes from the
    audit log, and is reported the same way as any other CLI error.
    """
    try:
        operator = get_file_operator(settings)
        return getattr(operator, operation)(*args)
    except OSError as e:
        fail("Audit log error", str(e))


def report(result, as_json: bool, on_ok=None) -> None:
    """Print a Result and exit with 1 if it is an Err."""
    if as_json:
        click.echo(json.dumps(result.to_dict(), ensure_ascii=False))
    elif result.is_err():
        err_console.print(f"[red]Error:[/red] {escape(result.error.message)}")
    elif on_ok is not None:
        on_ok(result.value)

    if result.is_err():
        sys.exit(1)


@click.group()
@click.version_option(version="0.1.0", prog_name="fileshim")
@click.option("--config", "config_path", default=DEFAULT_CONFIG_PATH, show_default=True,
              help="Path to the YAML configuration file.")
@click.pass_context
def fileshim(ctx, config_path: str):
    """
    fileshim - read, write and delete whole text files

    Every operation reports success or a single error message;
    failures exit with status 1.
    """
    try:
        ctx.obj = load_settings(config_path)
    except ConfigError as e:
        fail("Configuration error", str(e))


@fileshim.command()
@click.argument("path")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
@click.pass_obj
def read(settings: Settings, path: str, as_json: bool):
    """Print the contents of a file."""
    result = run_operation(settings, "read_file", path)
    report(result, as_json, on_ok=lambda content: click.echo(content, nl=False))


@fileshim.command()
@click.argument("path")
@click.argument("content", required=False)
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
@click.pass_obj
def write(settings: Settings, path: str, content, as_json: bool):
    """Replace the contents of a file (reads stdin when CONTENT is omitted)."""
    if content is None:
        # Binary stdin so line endings reach the file unchanged.
        data = click.get_binary_stream("stdin").read()
        try:
            content = data.decode("utf-8")
        except UnicodeDecodeError as e:
            fail("Error", f"stdin is not valid UTF-8: {e}")

    result = run_operation(settings, "write_file", path, content)
    report(result, as_json, on_ok=lambda _: console.print(f"[green]Wrote[/green] {escape(path)}"))


@fileshim.command()
@click.argument("path")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
@click.pass_obj
def rm(settings: Settings, path: str, as_json: bool):
    """Delete a file."""
    result = run_operation(settings, "delete_file", path)
    report(result, as_json, on_ok=lambda _: console.print(f"[green]Deleted[/green] {escape(path)}"))


@fileshim.command()
@click.option("--limit", default=20, show_default=True, help="Number of entries to show.")
@click.option("--failed", is_flag=True, help="Only show failed operations.")
@click.option("--action", "action_type", type=click.Choice([t.value for t in ActionType]),
              help="Only show one kind of operation.")
@click.option("--export", "export_format", type=click.Choice(["json", "csv"]),
              help="Dump the whole log in this format instead of a table.")
@click.option("--clear", is_flag=True, help="Move the current log aside to a backup file.")
@click.option("--yes", is_flag=True, help="Do not ask before clearing.")
@click.pass_obj
def audit(settings: Settings, limit: int, failed: bool, action_type, export_format, clear: bool, yes: bool):
    """View the audit log."""
    if not Path(settings.audit_log_path).exists():
        console.print("[dim]No audit entries found.[/dim]")
        return

    try:
        logger = AuditLogger(settings.audit_log_path)

        if clear:
            if not yes:
                click.confirm("Clear the audit log?", abort=True)
            logger.clear(confirm=True)
            console.print("[green]Audit log cleared.[/green]")
            return

        if export_format:
            click.echo(logger.export(export_format), nl=False)
            return

        if action_type:
            entries = logger.get_by_action_type(ActionType(action_type), limit=limit)
        elif failed:
            entries = logger.get_failed(limit=limit)
        else:
            entries = logger.get_recent(limit=limit)
    except OSError as e:
        fail("Audit log error", str(e))

    if not entries:
        console.print("[dim]No audit entries found.[/dim]")
        return

    table = Table(title="Recent Audit Log")
    table.add_column("Time", style="dim")
    table.add_column("Action")
    table.add_column("Status")
    table.add_column("Result")

    for entry in entries:
        time_str = entry.timestamp.split("T")[1].split(".")[0] if "T" in entry.timestamp else entry.timestamp

        status_str = entry.status
        if entry.status == ActionStatus.EXECUTED.value:
            status_str = f"[green]{entry.status}[/green]"
        elif entry.status == ActionStatus.FAILED.value:
            status_str = f"[red]{entry.status}[/red]"

        description = entry.action_description
        if len(description) > 50:
            description = description[:50] + "..."

        table.add_row(time_str, escape(description), status_str, escape(entry.result or "—"))

    console.print(table)


@fileshim.command("config")
@click.pass_obj
def show_config(settings: Settings):
    """Show the effective settings."""
    console.print("\n[bold]Settings:[/bold]")
    for key, value in settings_as_dict(settings).items():
        console.print(f"  {key}: {escape(str(value))}")


if __name__ == "__main__":
    fileshim()
