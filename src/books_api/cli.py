"""Command line entry points for the Books API."""

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from src.books_api.core.exceptions import StorageError

console = Console()

app = typer.Typer(
    help="📚 Books API - server and database commands",
    no_args_is_help=True,
)


@app.command()
def serve(
    host: str | None = typer.Option(None, help="Host to bind the server to"),
    port: int | None = typer.Option(None, help="Port to bind the server to"),
) -> None:
    """
    🚀 Start the Books API server.

    Host and port default to the values from the configuration.
    """
    import uvicorn

    from src.books_api.api.http.app import app as http_app

    config = http_app.state.config
    bind_host = host or config.app.host
    bind_port = port or config.app.port

    console.print(
        Panel.fit(
            f"[bold green]Books API on http://{bind_host}:{bind_port}[/bold green]",
            border_style="green",
        )
    )
    uvicorn.run(http_app, host=bind_host, port=bind_port, access_log=False)


@app.command(name="init-db")
def init_db_command(
    drop: bool = typer.Option(
        False, "--drop", help="Drop the books table before creating it"
    ),
) -> None:
    """
    🗄️  Create the books table if it does not exist.
    """
    from src.books_api.runtime.init_db import init_db

    try:
        init_db(drop=drop)
    except StorageError as e:
        console.print(f"[red]❌ {escape(e.message)}[/red]")
        raise typer.Exit(1) from e

    console.print("[green]✅ Table 'books' is ready[/green]")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
