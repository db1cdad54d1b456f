"""CLI entry point for resident-directory.

Invoked as::

    resident-directory [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m resident_directory.cli.main

State is kept between invocations only through the audit log file
(``--audit-log`` or ``audit_log`` in the YAML config). Without one, each
invocation starts from an empty directory plus any configured seed.

Commands
--------
- ``add``      Add a resident.
- ``status``   Report a resident's residency status.
- ``count``    Count logged adds of people living here.
- ``list``     Show every resident row in insertion order.
- ``show``     Show the latest record for a name.
- ``history``  Show recorded add events.
- ``version``  Show version information.
"""
from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from resident_directory import __version__
from resident_directory.audit.log import AuditLog, AuditLogError
from resident_directory.config import ConfigError, build_directory, load_config
from resident_directory.directory.models import NOT_FOUND_MESSAGE, ResidencyStatus
from resident_directory.directory.store import ResidentDirectory

console = Console()

_STATUS_CHOICES = [status.value for status in ResidencyStatus]


@dataclass
class _State:
    directory: ResidentDirectory
    audit: AuditLog


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(name)s | %(message)s",
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                rich_tracebacks=False,
                show_path=False,
                show_time=False,
            )
        ],
        force=True,
    )


@click.group()
@click.version_option(version=__version__, prog_name="resident-directory")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML configuration file.",
)
@click.option(
    "--audit-log",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="JSON Lines audit log used to persist adds. Overrides the config value.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable debug logging.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Path | None,
    audit_log: Path | None,
    verbose: bool,
) -> None:
    """Directory of residents of an area and their residency status"""
    try:
        config = load_config(config_path)
    except ConfigError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)

    if audit_log is not None:
        config.audit_log = audit_log
    _configure_logging("DEBUG" if verbose else config.log_level)

    try:
        directory, audit = build_directory(config)
    except AuditLogError as exc:
        console.print(f"[red]Audit log error:[/red] {exc}")
        sys.exit(1)
    ctx.obj = _State(directory=directory, audit=audit)


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    console.print(f"[bold]resident-directory[/bold] v{__version__}")


# ---------------------------------------------------------------------------
# add
# ---------------------------------------------------------------------------


@cli.command(name="add")
@click.argument("name")
@click.argument("age", type=click.IntRange(min=0))
@click.option(
    "--status",
    "-s",
    "status",
    required=True,
    type=click.Choice(_STATUS_CHOICES),
    help="Residency status of the person.",
)
@click.pass_obj
def add_command(state: _State, name: str, age: int, status: str) -> None:
    """Add a resident record.

    Re-adding an existing name appends a new row and replaces the
    record returned by ``status`` and ``show``.

    Examples:

    \b
        resident-directory --audit-log residents.jsonl add Cyndie 23 --status lives_here
        resident-directory --audit-log residents.jsonl add Jordan 24 -s moved_away
    """
    # Checked before the add and outside the directory lock; only used for
    # the confirmation message.
    replacing = name in state.directory
    state.directory.add_new_person(name, age, ResidencyStatus(status))
    console.print(f"[green]Added[/green] {name} (age {age}, {status})")
    if replacing:
        console.print(f"[dim]Latest record for {name} replaced.[/dim]")


# ---------------------------------------------------------------------------
# status
# ---------------------------------------------------------------------------


@cli.command(name="status")
@click.argument("name")
@click.pass_obj
def status_command(state: _State, name: str) -> None:
    """Report the residency status of NAME."""
    click.echo(state.directory.get_residency_status(name))


# ---------------------------------------------------------------------------
# count
# ---------------------------------------------------------------------------


@cli.command(name="count")
@click.option(
    "--json-output",
    is_flag=True,
    default=False,
    help="Output results as JSON.",
)
@click.pass_obj
def count_command(state: _State, json_output: bool) -> None:
    """Count logged adds whose status is lives_here."""
    count = state.directory.count_residents()
    if json_output:
        console.print_json(json.dumps({"residents": count}))
        return
    click.echo(str(count))


# ---------------------------------------------------------------------------
# list
# ---------------------------------------------------------------------------


@cli.command(name="list")
@click.option(
    "--json-output",
    is_flag=True,
    default=False,
    help="Output results as JSON.",
)
@click.pass_obj
def list_command(state: _State, json_output: bool) -> None:
    """Show every resident row in insertion order, duplicates included."""
    residents = state.directory.residents
    if json_output:
        output = [
            {
                "name": person.name,
                "age": person.age,
                "residency_status": person.residency_status.value,
            }
            for person in residents
        ]
        console.print_json(json.dumps(output, indent=2))
        return

    if not residents:
        console.print("[dim]No residents recorded.[/dim]")
        return

    table = Table(title="Residents", show_header=True)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Age", justify="right")
    table.add_column("Status", style="yellow")
    for row, person in enumerate(residents):
        table.add_row(str(row), person.name, str(person.age), person.residency_status.value)
    console.print(table)


# ---------------------------------------------------------------------------
# show
# ---------------------------------------------------------------------------


@cli.command(name="show")
@click.argument("name")
@click.pass_obj
def show_command(state: _State, name: str) -> None:
    """Show the latest record for NAME."""
    person = state.directory.lookup(name)
    if person is None:
        console.print(f"[red]{NOT_FOUND_MESSAGE}[/red]")
        sys.exit(1)
    console.print(f"  Name   : {person.name}")
    console.print(f"  Age    : {person.age}")
    console.print(f"  Status : {person.residency_status.value}")


# ---------------------------------------------------------------------------
# history
# ---------------------------------------------------------------------------


@cli.command(name="history")
@click.option(
    "--json-output",
    is_flag=True,
    default=False,
    help="Output results as JSON.",
)
@click.pass_obj
def history_command(state: _State, json_output: bool) -> None:
    """Show recorded add events in the order they were applied."""
    events = state.audit.events()
    if json_output:
        console.print_json(json.dumps([event.to_dict() for event in events], indent=2))
        return

    if not events:
        console.print("[dim]No add events recorded.[/dim]")
        return

    table = Table(title="Add Events", show_header=True)
    table.add_column("Seq", style="dim", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Age", justify="right")
    table.add_column("Status", style="yellow")
    for event in events:
        table.add_row(
            str(event.sequence), event.name, str(event.age), event.residency_status.value
        )
    console.print(table)


if __name__ == "__main__":
    cli()
