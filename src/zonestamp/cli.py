"""Command-line interface for zonestamp."""

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from zonestamp.config.settings import ZonePolicy

app = typer.Typer(
    name="zonestamp",
    help="Normalize timestamps to a time zone and render them for interchange.",
    no_args_is_help=True,
)

console = Console()

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to configuration YAML file.",
        exists=True,
        dir_okay=False,
    ),
]
PolicyOption = Annotated[
    str | None,
    typer.Option(
        "--policy",
        "-p",
        help="Name of the zone policy (default: the configured default).",
    ),
]


def _resolve_policy(config: Path | None, policy: str | None) -> "ZonePolicy":
    from zonestamp.config import ZonestampConfig, load_config
    from zonestamp.utils.logging import configure_from

    settings = load_config(config) if config is not None else ZonestampConfig()
    configure_from(settings.logging)
    try:
        return settings.policy(policy)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e


@app.command()
def convert(
    text: Annotated[str, typer.Argument(help="Timestamp text to normalize.")],
    config: ConfigOption = None,
    policy: PolicyOption = None,
    layout: Annotated[
        str | None,
        typer.Option("--layout", "-l", help="strftime layout for the output."),
    ] = None,
) -> None:
    """Parse TEXT in the policy's input zone and print it in its output zone."""
    from zonestamp.errors import TimestampParseError
    from zonestamp.timestamp import Timestamp

    zone_policy = _resolve_policy(config, policy)
    try:
        ts = Timestamp.from_string(text, zone_policy.input_tz)
    except TimestampParseError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e

    console.print(
        ts.encode(zone_policy.output_tz, layout or zone_policy.layout),
        highlight=False,
        markup=False,
    )


@app.command("days-left")
def days_left(
    text: Annotated[str, typer.Argument(help="Timestamp text.")],
    config: ConfigOption = None,
    policy: PolicyOption = None,
    next_month: Annotated[
        bool,
        typer.Option("--next", help="Count to the end of the next month."),
    ] = False,
) -> None:
    """Print whole days from TEXT to the end of the (next) month."""
    from zonestamp.errors import TimestampParseError
    from zonestamp.timestamp import Timestamp

    zone_policy = _resolve_policy(config, policy)
    try:
        ts = Timestamp.from_string(text, zone_policy.input_tz)
    except TimestampParseError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e

    if next_month:
        days = ts.days_until_end_of_next_month()
    else:
        days = ts.days_until_end_of_month()
    console.print(str(days), highlight=False, markup=False)


@app.command()
def policies(config: ConfigOption = None) -> None:
    """List the configured zone policies."""
    from zonestamp.config import ZonestampConfig, load_config

    settings = load_config(config) if config is not None else ZonestampConfig()

    table = Table(title="Zone policies")
    table.add_column("Name", style="cyan")
    table.add_column("Input zone", style="green")
    table.add_column("Output zone", style="green")
    table.add_column("Layout")

    for name, zone_policy in sorted(settings.policies.items()):
        marker = " (default)" if name == settings.default_policy else ""
        table.add_row(
            f"{name}{marker}",
            zone_policy.input_zone,
            zone_policy.output_zone,
            zone_policy.layout,
        )

    console.print(table)


if __name__ == "__main__":
    app()
