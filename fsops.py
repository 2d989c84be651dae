#!/usr/bin/env python3
"""
FSOps - File system convenience operations

Main entry point for the FSOps CLI application.
"""

import os
import sys

import click
from rich.console import Console
from rich.table import Table
from typing import Optional

from core import (
    AuditLogger,
    EnvironmentFailure,
    FsConfig,
    InvalidUsageError,
    load_config,
)
from modules.fs_operator import CapacityUnit, FileOps


console = Console()


def get_file_ops(ctx: click.Context) -> FileOps:
    """Get a FileOps instance configured from the CLI context."""
    config: FsConfig = ctx.obj["config"]
    logger = AuditLogger(log_path=config.audit_log) if config.audit_enabled else None
    return FileOps(config=config, logger=logger)


def run(operation):
    """Call an operation, turning its failures into exit codes."""
    try:
        return operation()
    except InvalidUsageError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        sys.exit(2)
    except EnvironmentFailure as e:
        console.print(f"[red]Failed:[/red] {e.message}")
        if e.__cause__ is not None:
            console.print(f"   [dim]{e.__cause__}[/dim]")
        sys.exit(1)


@click.group()
@click.version_option(version="0.1.0", prog_name="FSOps")
@click.option("--config", "config_path", default="config.yaml", show_default=True,
              help="Path to the YAML configuration file.")
@click.pass_context
def fsops(ctx, config_path: str):
    """
    FSOps - File system convenience operations

    List, size, copy, move and remove files and directories without
    overwriting what is already there.
    """
    ctx.ensure_object(dict)
    ctx.obj["config"] = run(lambda: load_config(config_path))


@fsops.command()
@click.argument("path")
@click.option("--no-extension", is_flag=True, help="Strip the extension.")
@click.pass_context
def name(ctx, path: str, no_extension: bool):
    """Print the name of PATH."""
    ops = get_file_ops(ctx)
    console.print(ops.name(path, include_extension=not no_extension))


@fsops.command("ls")
@click.argument("path", default=".")
@click.option("--depth", "-d", default=1, show_default=True, help="Levels to descend.")
@click.pass_context
def ls(ctx, path: str, depth: int):
    """List the contents of a directory."""
    ops = get_file_ops(ctx)
    entries = run(lambda: ops.contents(path, depth=depth))

    if not entries:
        console.print("[dim]Directory is empty.[/dim]")
        return

    table = Table(title=f"Contents of {path}")
    table.add_column("Kind", style="dim")
    table.add_column("Path")
    table.add_column("Bytes", justify="right")

    for entry in entries:
        if entry.is_dir:
            table.add_row("dir", f"[bold blue]{entry.path}[/bold blue]", "")
        else:
            table.add_row("file", entry.path, str(entry.length))

    console.print(table)


@fsops.command()
@click.argument("path")
@click.option("--unit", "-u", default=None,
              type=click.Choice([u.name for u in CapacityUnit], case_sensitive=False),
              help="Unit of the result (defaults to the configured unit).")
@click.pass_context
def size(ctx, path: str, unit: Optional[str]):
    """Print the size of a file or directory."""
    ops = get_file_ops(ctx)
    resolved = run(lambda: CapacityUnit.parse(unit or ops.config.default_unit))
    result = run(lambda: ops.size(path, unit=resolved))
    console.print(f"{result.normalize():f} {resolved.name}")


@fsops.command("rm")
@click.argument("path")
@click.pass_context
def rm(ctx, path: str):
    """Remove a file or a directory tree."""
    ops = get_file_ops(ctx)
    if run(lambda: ops.remove(path)):
        console.print(f"[green]Removed:[/green] {path}")
    else:
        console.print(f"[red]Could not remove:[/red] {path}")
        sys.exit(1)


@fsops.command()
@click.argument("path")
@click.pass_context
def clear(ctx, path: str):
    """Remove everything inside a directory."""
    ops = get_file_ops(ctx)
    if run(lambda: ops.clear(path)):
        console.print(f"[green]Cleared:[/green] {path}")
    else:
        console.print(f"[red]Some entries could not be removed from:[/red] {path}")
        sys.exit(1)


@fsops.command()
@click.argument("path")
@click.argument("new_name")
@click.pass_context
def rename(ctx, path: str, new_name: str):
    """Rename PATH to NEW_NAME in the same directory."""
    ops = get_file_ops(ctx)
    renamed = run(lambda: ops.rename(path, new_name))
    console.print(f"[green]Renamed:[/green] {path} → {renamed.path}")


@fsops.command("cp")
@click.argument("path")
@click.option("--to", "destination", default=None, help="Destination directory.")
@click.option("--as", "target_name", default=None, help="Name of the copy.")
@click.pass_context
def cp(ctx, path: str, destination: Optional[str], target_name: Optional[str]):
    """Copy PATH without overwriting anything."""
    ops = get_file_ops(ctx)
    copied = run(lambda: ops.copy_as(path, destination=destination, name=target_name))
    console.print(f"[green]Copied:[/green] {path} → {copied.path}")


@fsops.command("mv")
@click.argument("path")
@click.argument("destination")
@click.pass_context
def mv(ctx, path: str, destination: str):
    """Move PATH into DESTINATION directory."""
    ops = get_file_ops(ctx)
    moved = run(lambda: ops.move(path, destination))
    console.print(f"[green]Moved:[/green] {path} → {moved.path}")
    if os.path.exists(path):
        console.print("[yellow]Warning:[/yellow] the original could not be removed")


@fsops.command()
@click.argument("path")
@click.pass_context
def mkdir(ctx, path: str):
    """Create an empty directory."""
    ops = get_file_ops(ctx)
    run(lambda: ops.create(path, directory=True))
    console.print(f"[green]Created directory:[/green] {path}")


@fsops.command()
@click.argument("path")
@click.pass_context
def touch(ctx, path: str):
    """Create an empty file."""
    ops = get_file_ops(ctx)
    run(lambda: ops.create(path, directory=False))
    console.print(f"[green]Created file:[/green] {path}")


@fsops.command()
@click.option("--limit", "-n", default=20, show_default=True, help="Entries to show.")
@click.option("--failed", is_flag=True, help="Only show failed operations.")
@click.option("--export", "export_format", default=None,
              type=click.Choice(["json", "csv"]), help="Print the whole log in this format.")
@click.pass_context
def audit(ctx, limit: int, failed: bool, export_format: Optional[str]):
    """View the audit log."""
    config: FsConfig = ctx.obj["config"]
    logger = AuditLogger(log_path=config.audit_log)

    if export_format:
        click.echo(logger.export(format=export_format))
        return

    entries = logger.get_failed(limit=limit) if failed else logger.get_recent(limit=limit)

    if not entries:
        console.print("[dim]No audit entries found.[/dim]")
        return

    table = Table(title="Recent Audit Log")
    table.add_column("Time", style="dim")
    table.add_column("Type")
    table.add_column("Action")
    table.add_column("Status")

    for entry in entries:
        time_str = entry.timestamp.split("T")[1].split(".")[0] if "T" in entry.timestamp else entry.timestamp

        status_str = entry.status
        if entry.status == "executed":
            status_str = f"[green]{entry.status}[/green]"
        elif entry.status == "failed":
            status_str = f"[red]{entry.status}[/red]"

        table.add_row(
            time_str,
            entry.action_type,
            entry.action_description[:50] + "..." if len(entry.action_description) > 50 else entry.action_description,
            status_str
        )

    console.print(table)


if __name__ == "__main__":
    fsops()
