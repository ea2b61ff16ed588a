"""CLI for formstate: submit a form from the command line and inspect routes."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Annotated, Any

import typer
import yaml
from rich.console import Console
from rich.table import Table

from formstate import __version__
from formstate.config import configure, get_settings, load_settings
from formstate.exceptions import ConfigError
from formstate.form import Form

app = typer.Typer(
    name="formstate",
    help="Submit form data to HTTP endpoints and inspect the resulting errors.",
    no_args_is_help=True,
)
console = Console()

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Settings file (default: $FORMSTATE_CONFIG or ~/.config/formstate/config.yaml)",
    ),
]
ParamOption = Annotated[
    list[str] | None,
    typer.Option("--param", "-p", help="Route placeholder value as key=value"),
]


def version_callback(value: bool) -> None:
    if value:
        console.print(f"formstate version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging"),
    ] = False,
) -> None:
    """formstate: form field binding and submission state."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s %(message)s")


def parse_pairs(pairs: list[str] | None) -> dict[str, Any]:
    """Parse key=value pairs. Values are read as JSON when possible."""
    result: dict[str, Any] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got {pair!r}")
        try:
            result[key] = json.loads(value)
        except json.JSONDecodeError:
            result[key] = value
    return result


def _load_settings(config: Path | None) -> None:
    try:
        configure(load_settings(config))
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def _read_data_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        console.print(f"[red]Error:[/red] Data file not found: {path}")
        raise typer.Exit(1)

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        console.print(f"[red]Error:[/red] Data file must contain a mapping: {path}")
        raise typer.Exit(1)
    return data


def _print_errors(form: Form) -> None:
    table = Table(title="Errors")
    table.add_column("Field", style="bold")
    table.add_column("Messages")
    for field in form.errors:
        table.add_row(field, "\n".join(str(m) for m in form.errors.get_all(field)))
    console.print(table)


@app.command()
def submit(
    method: Annotated[str, typer.Argument(help="HTTP method (get, post, put, patch, delete)")],
    url: Annotated[str, typer.Argument(help="Route name or URL")],
    field: Annotated[
        list[str] | None,
        typer.Option("--field", "-f", help="Field value as key=value"),
    ] = None,
    data_file: Annotated[
        Path | None,
        typer.Option("--data-file", "-d", help="JSON or YAML file with field values"),
    ] = None,
    param: ParamOption = None,
    config: ConfigOption = None,
) -> None:
    """Submit field values and print the response or the field errors.

    Examples:
        formstate submit post /api/users -f name=Jane -f age=31
        formstate submit put users.update -p id=3 -d user.yaml
    """
    _load_settings(config)

    data = _read_data_file(data_file) if data_file else {}
    form = Form.make(data, **parse_pairs(field))
    parameters = parse_pairs(param)

    console.print(f"[bold]{method.upper()}[/bold] {form.route(url, parameters)}")
    try:
        response = asyncio.run(form.submit(method, url, parameters=parameters))
    except Exception as e:
        console.print(f"[red]Failed:[/red] {e}")
        if form.errors:
            _print_errors(form)
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] {getattr(response, 'status', '')}")
    body = getattr(response, "data", None)
    if isinstance(body, (dict, list)):
        console.print_json(data=body)
    elif body:
        console.print(body)


@app.command()
def route(
    name: Annotated[str, typer.Argument(help="Route name or URL template")],
    param: ParamOption = None,
    config: ConfigOption = None,
) -> None:
    """Print the URL a route name resolves to."""
    _load_settings(config)
    console.print(Form().route(name, parse_pairs(param)))


@app.command()
def routes(config: ConfigOption = None) -> None:
    """List the configured routes."""
    _load_settings(config)
    table_routes = get_settings().routes
    if not table_routes:
        console.print("[yellow]No routes configured[/yellow]")
        return

    table = Table(title="Routes")
    table.add_column("Name", style="bold")
    table.add_column("URL")
    for name, template in table_routes.items():
        table.add_row(name, template)
    console.print(table)


if __name__ == "__main__":
    app()
