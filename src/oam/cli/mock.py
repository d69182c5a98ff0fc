"""
CLI commands for mock servers.

Provides the ``oam mock`` command group for serving a mock, listing the
routes it would register, and printing a single mock body.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from oam.cli.utils import configure_logging
from oam.config import DEFAULT_CONFIG_FILE, load_config
from oam.core.document import ApiDocument
from oam.core.errors import ConfigError, DocumentLoadError
from oam.core.loader import load_document
from oam.mock.data_generators import MockDataGenerator
from oam.mock.responses import select_response, select_response_schema
from oam.mock.seed import DEFAULT_SEED

mock_app = typer.Typer(help="Mock server commands", no_args_is_help=True)

console = Console()


def _load_or_exit(spec: Path) -> ApiDocument:
    try:
        return load_document(spec)
    except DocumentLoadError as e:
        typer.echo(f"Error loading spec: {e}", err=True)
        raise typer.Exit(code=1)


@mock_app.command(name="run")
def run_mock(
    spec: Path = typer.Argument(..., help="Path to OpenAPI document (.yaml or .json)"),
    host: str | None = typer.Option(None, "--host", help="Interface to bind"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port to run the mock server"),
    seed: int | None = typer.Option(None, "--seed", "-s", help="Seed for deterministic data"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level"),
    config_path: Path = typer.Option(  # noqa: B008
        Path(DEFAULT_CONFIG_FILE), "--config", "-c", help="Config file"
    ),
) -> None:
    """Start a mock server for an OpenAPI document.

    Every declared operation answers with deterministic mock data generated
    from its response schema.
    """
    try:
        config = load_config(config_path).with_overrides(
            seed=seed, host=host, port=port, log_level=log_level
        )
    except ConfigError as e:
        typer.echo(f"Error loading config: {e}", err=True)
        raise typer.Exit(code=1)

    configure_logging(config.log_level)
    document = _load_or_exit(spec)

    from oam.mock.server import create_mock_server

    app = create_mock_server(document, seed=config.seed)

    typer.echo(f"Mocking {document.title} ({len(document.operations)} endpoints)")
    typer.echo(f"  Seed: {config.seed}")
    typer.echo(f"  URL:  http://{config.host}:{config.port}")
    typer.echo("\nPress Ctrl+C to stop")

    import uvicorn

    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


@mock_app.command(name="routes")
def list_routes(
    spec: Path = typer.Argument(..., help="Path to OpenAPI document (.yaml or .json)"),
) -> None:
    """List the routes a mock server would register."""
    document = _load_or_exit(spec)

    if not document.operations:
        console.print("[dim]No operations declared.[/dim]")
        return

    table = Table(title=f"{document.title} {document.version}".strip())
    table.add_column("Method", style="bold")
    table.add_column("Route")
    table.add_column("Operation")
    table.add_column("Mocked response")

    for op in document.operations:
        response = select_response(op, 200)
        table.add_row(
            op.method,
            op.path,
            op.operation_id or "",
            response.status if response else "[dim]{}[/dim]",
        )

    console.print(table)
    console.print(f"\n[dim]{len(document.operations)} route(s)[/dim]")


@mock_app.command(name="sample")
def sample(
    spec: Path = typer.Argument(..., help="Path to OpenAPI document (.yaml or .json)"),
    method: str = typer.Argument(..., help="HTTP method, e.g. GET"),
    route: str = typer.Argument(..., help="Route template, e.g. /users/{id}"),
    status: int = typer.Option(200, "--status", help="Status code to mock"),
    seed: int = typer.Option(DEFAULT_SEED, "--seed", "-s", help="Seed for deterministic data"),
) -> None:
    """Print the mock body one operation would return."""
    document = _load_or_exit(spec)

    op = document.find_operation(method, route)
    if op is None:
        typer.echo(f"Operation '{method.upper()} {route}' not found.", err=True)
        raise typer.Exit(code=1)

    schema = select_response_schema(op, status)
    if schema is None:
        typer.echo("{}")
        return

    value = MockDataGenerator(seed=seed).generate(schema, op.key)
    typer.echo(json.dumps(value, indent=2))
