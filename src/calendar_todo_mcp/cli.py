"""Command-line entry point: serve over stdio, authorize, or show info."""

import asyncio
import logging
import os
import sys
from importlib.metadata import PackageNotFoundError, version

import typer

from . import auth, errors
from .server import serve

DIST_NAME = "calendar-todo-mcp"
LOG_LEVEL_ENV = "CALENDAR_TODO_MCP_LOG_LEVEL"

app = typer.Typer(
    name=DIST_NAME,
    help="MCP server for Google Calendar events and Google Tasks.",
    invoke_without_command=True,
)


def get_version() -> str:
    try:
        return version(DIST_NAME)
    except PackageNotFoundError:
        return "0.0.0"


def configure_logging(level: str | None = None) -> None:
    # stdout carries the MCP protocol, so logs go to stderr.
    level = (level or os.environ.get(LOG_LEVEL_ENV) or "WARNING").upper()
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.callback()
def root(
    ctx: typer.Context,
    log_level: str | None = typer.Option(
        None, "--log-level", help=f"Logging level (default: ${LOG_LEVEL_ENV} or WARNING)"
    ),
) -> None:
    """Start the server when no command is given."""
    configure_logging(log_level)
    if ctx.invoked_subcommand is None:
        start()


@app.command()
def start() -> None:
    """Start the MCP server over stdio."""
    try:
        asyncio.run(serve(get_version()))
    except errors.AuthError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command(name="auth")
def authorize() -> None:
    """Run the authorization flow and cache tokens."""
    try:
        auth.get_credentials()
    except errors.AuthError as e:
        typer.echo(f"Authentication failed: {e}", err=True)
        raise typer.Exit(1)
    typer.echo(f"OAuth tokens saved to {auth.get_token_path()}.")


@app.command(name="version")
def show_version() -> None:
    """Show the current version."""
    typer.echo(f"{DIST_NAME} v{get_version()}")


@app.command()
def info() -> None:
    """Show configuration: environment variables, scopes and token cache location."""
    scopes = "\n    - ".join(auth.SCOPES)
    typer.echo(f"{DIST_NAME} v{get_version()}\n")
    typer.echo("Environment variables:")
    typer.echo(f"  {auth.CREDENTIALS_ENV}   Path to OAuth credentials JSON")
    typer.echo(f"  {auth.TOKEN_PATH_ENV}   Custom token cache path (optional)")
    typer.echo(f"  {LOG_LEVEL_ENV}   Logging level (optional)\n")
    typer.echo(f"Required OAuth scopes (requested automatically):\n    - {scopes}")
    typer.echo(f"Token cache location: {auth.get_token_path()}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
