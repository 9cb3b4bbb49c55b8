"""Command-line interface for storx-mcp.

Commands:
    - serve: Run the MCP server over stdio
    - tools: Show the tool catalog
    - check: Resolve configuration and test the connection to the gateway
    - call: Run a single tool call without an MCP client

Credentials are read from claude_desktop_config.json (see
``storx_mcp.storage_config``); ``--config`` points at a specific file.
"""

import json
from typing import Annotated, Optional

import anyio
import typer

from . import __version__
from .core.exceptions import ConfigurationError, StorageError
from .dispatcher import Dispatcher, ToolFailure
from .objectstorage import S3ClientManager, StorxStorageClient
from .registry import default_registry
from .server import create_server, run_stdio
from .storage_config import load_credentials, to_client_config

app = typer.Typer(
    name="storx-mcp",
    help="MCP server exposing Storx object storage as tools.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"storx-mcp {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, help="Show version."),
    ] = None,
) -> None:
    """
    storx-mcp: Storx bucket and object management for MCP clients.
    """
    pass


ConfigOption = Annotated[
    Optional[str],
    typer.Option(
        "--config",
        "-c",
        help="Path to claude_desktop_config.json (searched before default locations)",
    ),
]


def _build_dispatcher(config_path: Optional[str]) -> Dispatcher:
    """Resolve credentials and build the dispatcher, or exit with a diagnostic."""
    try:
        credentials = load_credentials(config_path)
    except ConfigurationError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    storage = StorxStorageClient.from_config(to_client_config(credentials))
    # Build the boto3 client before any worker thread needs it
    storage.client
    return Dispatcher(storage)


@app.command("serve")
def serve_cmd(config: ConfigOption = None) -> None:
    """
    Run the MCP server on stdin/stdout.

    Example:
        storx-mcp serve --config ~/.config/Claude/claude_desktop_config.json
    """
    dispatcher = _build_dispatcher(config)
    server = create_server(dispatcher)
    anyio.run(run_stdio, server)


@app.command("tools")
def tools_cmd() -> None:
    """List the tools exposed to MCP clients."""
    for definition in default_registry.list():
        typer.echo(f"{definition.name}: {definition.description}")
        typer.echo(f"  required: {', '.join(definition.required) or '-'}")
        typer.echo(f"  optional: {', '.join(definition.optional) or '-'}")


@app.command("check")
def check_cmd(config: ConfigOption = None) -> None:
    """
    Resolve configuration and verify the gateway accepts the credentials.
    """
    try:
        credentials = load_credentials(config)
    except ConfigurationError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Config: {credentials.source or 'environment'}")
    typer.echo(f"Endpoint: {credentials.endpoint}")
    typer.echo(f"Region: {credentials.region}")

    try:
        S3ClientManager(to_client_config(credentials)).test_connection()
    except StorageError as e:
        typer.echo(f"✗ {e}", err=True)
        raise typer.Exit(1)

    typer.echo("✓ Connection verified")


@app.command("call")
def call_cmd(
    name: Annotated[str, typer.Argument(help="Tool name, e.g. list_objects")],
    args: Annotated[
        str, typer.Option("--args", "-a", help="Tool arguments as a JSON object")
    ] = "{}",
    config: ConfigOption = None,
) -> None:
    """
    Run one tool call and print its text result.

    Example:
        storx-mcp call list_objects --args '{"bucket": "test-vault"}'
    """
    try:
        arguments = json.loads(args)
    except ValueError as e:
        typer.echo(f"Error: --args is not valid JSON: {e}", err=True)
        raise typer.Exit(2)
    if not isinstance(arguments, dict):
        typer.echo("Error: --args must be a JSON object", err=True)
        raise typer.Exit(2)

    dispatcher = _build_dispatcher(config)
    outcome = dispatcher.dispatch(name, arguments)
    if isinstance(outcome, ToolFailure):
        typer.echo(outcome.protocol_message, err=True)
        raise typer.Exit(1)

    typer.echo(outcome.text)


if __name__ == "__main__":
    app()
