"""
OAM CLI main application.

Registers all command groups on the top-level ``oam`` Typer app.
"""

import typer

from oam.cli.mock import mock_app
from oam.cli.utils import version_callback

app = typer.Typer(
    help="""OAM – OpenAPI auto mock

Serve deterministic mock responses for an OpenAPI document:

  oam mock run openapi.yaml --port 4000 --seed 12345
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
) -> None:
    """OAM CLI main callback for global options."""
    pass


app.add_typer(mock_app, name="mock")


def main() -> None:
    """Console script entry point."""
    app()
