"""Typer CLI for the Monobank MCP server."""

from __future__ import annotations

import json
import logging
import os
import sys
from typing import Annotated

import anyio
import typer

from monobank_mcp.dispatcher import ToolDispatcher
from monobank_mcp.errors import MonobankToolError
from monobank_mcp.monobank_client import (
    build_monobank_client,
    fetch_client_info,
    get_monobank_token_with_source,
)
from monobank_mcp.output import describe_failure, render_payload_text
from monobank_mcp.server import run_stdio_server

LOG_LEVEL_ENV_VAR = "MONOBANK_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

app = typer.Typer(help="Monobank personal API exposed as MCP tools.")

logger = logging.getLogger(__name__)


def configure_logging(level: str | None = None) -> None:
    """Send logs to stderr; stdout carries the MCP protocol stream."""
    resolved_level = (level or os.getenv(LOG_LEVEL_ENV_VAR) or "INFO").upper()
    logging.basicConfig(level=resolved_level, format=LOG_FORMAT, stream=sys.stderr)


@app.command("serve")
def serve_command(
    timeout_seconds: Annotated[
        float | None, typer.Option(help="Monobank API timeout in seconds.")
    ] = None,
    log_level: Annotated[str | None, typer.Option(help="Logging level for stderr.")] = None,
) -> None:
    """Run the MCP server over stdio."""
    configure_logging(log_level)
    try:
        with build_monobank_client(timeout_seconds=timeout_seconds) as client:
            anyio.run(run_stdio_server, ToolDispatcher(client))
    except Exception as error:
        logger.error("Error starting server: %s", error)
        raise typer.Exit(code=1) from error


@app.command("auth-check")
def auth_check_command(
    timeout_seconds: Annotated[
        float, typer.Option(help="Monobank API timeout in seconds for the validation call.")
    ] = 20,
    trust_env: Annotated[
        bool,
        typer.Option(
            "--trust-env/--no-trust-env",
            help="Use proxy/SSL environment variables from the current shell.",
        ),
    ] = True,
) -> None:
    """Validate Monobank token setup by fetching client info."""
    _token, token_source = get_monobank_token_with_source()
    if token_source == "placeholder":
        typer.echo("No token configured; using placeholder token.")
    else:
        typer.echo(f"Token detected in {token_source}.")

    try:
        with build_monobank_client(timeout_seconds=timeout_seconds, trust_env=trust_env) as client:
            client_info = fetch_client_info(client=client)
    except MonobankToolError as error:
        typer.echo(f"Monobank auth check failed: {describe_failure(error)}")
        raise typer.Exit(code=1) from error

    account_count = len(client_info.accounts or [])
    jar_count = len(client_info.jars or [])
    typer.echo(
        f"Authenticated as '{client_info.name}' with {account_count} account(s) "
        f"and {jar_count} jar(s)."
    )
    typer.echo("Monobank token setup is valid.")


@app.command("call")
def call_command(
    name: Annotated[str, typer.Argument(help="Tool name, e.g. get_client_info.")],
    arguments: Annotated[
        str, typer.Option("--arguments", "-a", help="Tool arguments as a JSON object.")
    ] = "{}",
    timeout_seconds: Annotated[
        float | None, typer.Option(help="Monobank API timeout in seconds.")
    ] = None,
) -> None:
    """Invoke one tool locally and print its text payload."""
    try:
        parsed_arguments = json.loads(arguments)
    except json.JSONDecodeError as error:
        raise typer.BadParameter(f"--arguments must be valid JSON: {error}") from error

    try:
        with build_monobank_client(timeout_seconds=timeout_seconds) as client:
            payload = ToolDispatcher(client).dispatch(name, parsed_arguments)
    except MonobankToolError as error:
        typer.echo(describe_failure(error), err=True)
        raise typer.Exit(code=1) from error

    typer.echo(render_payload_text(payload))


def main() -> None:
    """Console script entrypoint."""
    app()
