"""CLI for replaying captured Alexa requests."""

import json
import logging
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import settings
from .models.request import RequestEnvelope
from .services.standard import build_default_skill

app = typer.Typer(help="Skill dispatch developer CLI")
console = Console()


def _load_envelope(path: Path) -> RequestEnvelope:
    if not path.exists():
        console.print(f"[red]File not found: {path}[/red]")
        raise typer.Exit(1)

    try:
        return RequestEnvelope.model_validate(json.loads(path.read_text()))
    except (json.JSONDecodeError, ValidationError) as e:
        console.print(f"[red]Not a request envelope: {escape(str(e))}[/red]")
        raise typer.Exit(1)


@app.command()
def replay(
    path: Path = typer.Argument(..., help="JSON file with a request envelope"),
    check_timestamp: bool = typer.Option(False, "--check-timestamp", help="Verify request freshness"),
    application_id: str = typer.Option("", "--application-id", "-a", help="Expected application ID"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Run a captured request through the default skill and print the response."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    envelope = _load_envelope(path)
    replay_settings = settings.model_copy(
        update={"ignore_timestamp": not check_timestamp, "application_id": application_id}
    )
    skill = build_default_skill(replay_settings)

    try:
        response = skill.invoke(envelope)
    except Exception as e:
        console.print(f"[red]Unhandled error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if response is None:
        console.print("[yellow]No handler matched this request[/yellow]")
        return

    console.print_json(data=response.to_wire())


@app.command("inspect-slots")
def inspect_slots(path: Path = typer.Argument(..., help="JSON file with a request envelope")):
    """Show slot values and their entity resolution status."""
    envelope = _load_envelope(path)
    intent = envelope.request.intent

    if intent is None or not intent.slots:
        console.print("[yellow]Request has no slots[/yellow]")
        return

    table = Table(title=f"Slots of {intent.name}")
    table.add_column("Slot", style="cyan")
    table.add_column("Value")
    table.add_column("Resolution")
    table.add_column("Valid")

    for name, slot in intent.slots.items():
        valid = "[green]yes[/green]" if slot.is_valid else "[red]no[/red]"
        table.add_row(name, slot.value or "-", slot.resolution_status.value, valid)

    console.print(table)


if __name__ == "__main__":
    app()
