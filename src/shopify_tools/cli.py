"""CLI for the Shopify MCP tool server.

Commands:
- serve: Run the MCP server over stdio
- check-config: Show the resolved configuration (token masked)
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Annotated, Protocol

import typer
from mcp.server.fastmcp import FastMCP
from rich import print as rprint

from .config import ShopifyConfig
from .exceptions import MissingEnvVarError


class ServerBuilder(Protocol):
    """Protocol for constructing the MCP server."""

    def __call__(self, *, config: ShopifyConfig) -> FastMCP:
        """Build a server for the given configuration."""
        ...


@dataclass(frozen=True)
class CliContext:
    """Runtime CLI context for a single command invocation."""

    config: ShopifyConfig
    server_builder: ServerBuilder


class CliContextNotInitialisedError(typer.BadParameter):
    """Raised when CLI context is missing."""

    def __init__(self) -> None:
        super().__init__("CLI context is not initialised. Use the shopify-tools entry point.")


def _get_context(ctx: typer.Context) -> CliContext:
    if not isinstance(ctx.obj, CliContext):
        raise CliContextNotInitialisedError()
    return ctx.obj


def create_app(server_builder: ServerBuilder) -> typer.Typer:
    """Create a Typer app wired with the provided server builder."""
    app = typer.Typer(
        add_completion=False,
        help="Shopify Admin API tools served over the Model Context Protocol",
    )

    @app.callback()
    def main(
        ctx: typer.Context,
        env_file: Annotated[
            str | None,
            typer.Option("--env-file", help="Path to a .env file (default: discover .env)"),
        ] = None,
    ) -> None:
        """Initialise CLI context."""
        ctx.obj = CliContext(
            config=ShopifyConfig.from_env(env_file), server_builder=server_builder
        )

    @app.command()
    def serve(
        ctx: typer.Context,
        api_version: Annotated[
            str | None,
            typer.Option("--api-version", help="Shopify Admin API version (e.g. 2024-04)"),
        ] = None,
        log_level: Annotated[
            str | None,
            typer.Option("--log-level", help="Log level for stderr output"),
        ] = None,
    ) -> None:
        """Run the MCP server on stdio."""
        cli_ctx = _get_context(ctx)
        config = cli_ctx.config.with_overrides(api_version=api_version, log_level=log_level)
        try:
            server = cli_ctx.server_builder(config=config)
        except MissingEnvVarError as exc:
            # stdout belongs to the MCP stream.
            rprint(f"[red]✗ {exc}[/red]", file=sys.stderr)
            raise typer.Exit(code=1) from exc
        server.run()

    @app.command("check-config")
    def check_config(ctx: typer.Context) -> None:
        """Print the resolved configuration and whether credentials are present."""
        config = _get_context(ctx).config
        rprint("[bold]Shopify tools configuration:[/bold]")
        for key, value in config.describe().items():
            rprint(f"  {key}: {value}")
        try:
            config.validate()
        except MissingEnvVarError as exc:
            rprint(f"[red]✗ {exc}[/red]")
            raise typer.Exit(code=1) from exc
        rprint("[green]✓ Configuration complete[/green]")

    return app
