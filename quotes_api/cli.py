"""
CLI tool for running and inspecting the quotes service.

Example:
    quotes-cli serve --port 8080 --reload
    quotes-cli init-db
    quotes-cli routes
"""

import asyncio
import copy
from typing import Any

import typer
import uvicorn
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from uvicorn.config import LOGGING_CONFIG

# Initialize Typer app with help text
typer_app = typer.Typer(
    name="quotes-cli",
    help="Quotes catalog CLI - run the server and manage the database",
    add_completion=False,
)
console = Console()


def uvicorn_log_config() -> dict[str, Any]:
    """
    Uvicorn's default logging config with health probes filtered out.

    Returns:
        dictConfig mapping for uvicorn.run(log_config=...).
    """
    config = copy.deepcopy(LOGGING_CONFIG)
    config.setdefault("filters", {})["exclude_health_checks"] = {
        "()": "quotes_api.uvicorn_filters.ExcludeHealthChecksFilter"
    }
    config["handlers"]["access"]["filters"] = ["exclude_health_checks"]
    return config


@typer_app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Interface to bind"),
    port: int = typer.Option(8000, help="Port to bind"),
    reload: bool = typer.Option(False, help="Restart on code changes"),
):
    """
    Run the HTTP server with uvicorn.

    Example:
        quotes-cli serve --port 8080
    """
    uvicorn.run(
        "quotes_api:application",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_config=uvicorn_log_config(),
    )


@typer_app.command(name="init-db")
def init_db():
    """
    Wait for the database and create the schema.

    Exits with code 1 if the database never becomes reachable.
    """
    from quotes_api.storage.db import engine, wait_and_init_db

    async def run() -> None:
        try:
            await wait_and_init_db()
        finally:
            await engine.dispose()

    try:
        asyncio.run(run())
    except RuntimeError as ex:
        console.print(f"[red]✗ {ex}[/red]")
        raise typer.Exit(code=1)
    console.print("[green]✓ Database schema is ready[/green]")


@typer_app.command()
def routes():
    """
    Display a table of all registered HTTP routes.

    Example:
        quotes-cli routes
    """
    from quotes_api.routing import http_routes

    console.print()
    console.print(
        Panel.fit(
            "[bold cyan]Registered HTTP Routes[/bold cyan]",
            border_style="cyan",
        )
    )
    console.print()

    table = Table(
        "Methods",
        "Path",
        "Endpoint",
        title="HTTP Routes",
        show_lines=True,
    )

    api_routes = http_routes()
    for route in sorted(api_routes, key=lambda r: r.path):
        endpoint = route.endpoint
        table.add_row(
            f"[green]{', '.join(sorted(route.methods))}[/green]",
            route.path,
            f"{endpoint.__module__}.[yellow]{endpoint.__name__}[/yellow]",
        )

    console.print(table)
    console.print()
    console.print(f"[bold]Summary:[/bold] {len(api_routes)} routes registered")
    console.print()


if __name__ == "__main__":
    typer_app()
