"""
Main CLI application for the person client.

Provides the Typer application with global flags and command
routing for the Person Service HTTP API.
"""

import sys
from typing import Annotated, Optional

import typer

from .commands.health import ping_command
from .commands.persons import (
    add_command,
    build_person,
    delete_command,
    get_command,
    list_command,
    update_command,
)
from .config import Config
from .http import HTTPClient
from .render import Renderer

app = typer.Typer(
    name="person-cli",
    help="Command-line interface for the Person Service HTTP API",
    no_args_is_help=True,
    add_completion=False,
)

_http_client: Optional[HTTPClient] = None
_renderer: Optional[Renderer] = None


def get_http_client() -> HTTPClient:
    """Get global HTTP client instance."""
    if _http_client is None:
        raise RuntimeError("HTTP client not initialized")
    return _http_client


def get_renderer() -> Renderer:
    """Get global renderer instance."""
    if _renderer is None:
        raise RuntimeError("Renderer not initialized")
    return _renderer


@app.callback()
def main(
    url: Annotated[
        Optional[str], typer.Option("--url", "-u", help="Base URL [default: http://127.0.0.1:8080]")
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Machine-output mode")] = False,
    timeout: Annotated[int, typer.Option("--timeout", help="Request timeout")] = 30,
    quiet: Annotated[
        bool, typer.Option("--quiet", "-q", help="Suppress non-essential output")
    ] = False,
):
    """
    Command-line interface for the Person Service HTTP API.

    Examples:
      person-cli list

      person-cli add 42 Alice 30 2024-01-01T00:00:00Z

      person-cli delete 42
    """
    global _http_client, _renderer

    _http_client = HTTPClient(Config(url=url, timeout=timeout))
    _renderer = Renderer(json_output=json_output, quiet=quiet)


@app.command()
def ping():
    """GET /health."""
    raise typer.Exit(ping_command(get_http_client(), get_renderer()))


@app.command("list")
def list_persons():
    """List all persons."""
    raise typer.Exit(list_command(get_http_client(), get_renderer()))


@app.command()
def get(
    person_id: Annotated[int, typer.Argument(help="Person ID", min=0)],
):
    """Show one person."""
    raise typer.Exit(get_command(person_id, get_http_client(), get_renderer()))


@app.command()
def add(
    person_id: Annotated[int, typer.Argument(help="Person ID (must not exist yet)", min=0)],
    name: Annotated[str, typer.Argument(help="Name")],
    age: Annotated[int, typer.Argument(help="Age")],
    date: Annotated[str, typer.Argument(help="Date, stored verbatim")],
):
    """Create a person."""
    person = build_person(person_id, name, age, date)
    raise typer.Exit(add_command(person, get_http_client(), get_renderer()))


@app.command()
def update(
    person_id: Annotated[int, typer.Argument(help="ID of the person to update", min=0)],
    name: Annotated[str, typer.Argument(help="New name")],
    age: Annotated[int, typer.Argument(help="New age")],
    date: Annotated[str, typer.Argument(help="New date, stored verbatim")],
):
    """Replace name, age and date of an existing person. The ID never changes."""
    person = build_person(person_id, name, age, date)
    raise typer.Exit(update_command(person, get_http_client(), get_renderer()))


@app.command()
def delete(
    person_id: Annotated[int, typer.Argument(help="Person ID", min=0)],
):
    """Delete a person."""
    raise typer.Exit(delete_command(person_id, get_http_client(), get_renderer()))


def cli_main():
    """Entry point for console script."""
    try:
        app()
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(130)
    finally:
        if _http_client:
            _http_client.close()


if __name__ == "__main__":
    cli_main()
