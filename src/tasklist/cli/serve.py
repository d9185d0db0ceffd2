"""
Tasklist CLI - Serve command.

Runs the REST API under uvicorn.
"""

import logging
import os
from pathlib import Path

import typer
from rich.console import Console

from tasklist.cli.errors import ExitCode
from tasklist.core.config import load_config

console = Console()
logger = logging.getLogger(__name__)


def serve(
    host: str | None = typer.Option(
        None,
        "--host",
        help="Interface to bind (default from config: 127.0.0.1)",
    ),
    port: int | None = typer.Option(
        None,
        "--port",
        "-p",
        help="Port to run the server on (default from config: 3001)",
    ),
    data_file: Path | None = typer.Option(
        None,
        "--data-file",
        "-d",
        help="JSON task file (default from config: data/tasks.json)",
    ),
    reload: bool = typer.Option(
        False,
        "--reload/--no-reload",
        help="Restart the server when source files change (development)",
    ),
) -> None:
    """
    Start the tasklist REST API.

    Examples:
        tasklist serve                          # 127.0.0.1:3001
        tasklist serve --port 8000
        tasklist serve --data-file ~/todo.json
        tasklist serve --reload                 # auto-restart on code changes
    """
    import uvicorn

    from tasklist.core.api.app import create_app
    from tasklist.core.tasks import JsonTaskStore, TaskRepository

    config = load_config()
    bind_host = host or config.server.host
    bind_port = port or config.server.port
    path = data_file.expanduser().resolve() if data_file else config.resolve_data_file()

    url = f"http://{bind_host}:{bind_port}"
    console.print("[bold cyan]Tasklist API[/bold cyan]")
    console.print(f"[dim]API: {url}/api/tasks[/dim]")
    console.print(f"[dim]Docs: {url}/docs[/dim]")
    console.print(f"[dim]Health: {url}/health[/dim]")
    console.print(f"[dim]CORS: {', '.join(config.server.cors_origins) or 'none'}[/dim]")
    console.print(f"[dim]Storage: {path}[/dim]")
    console.print("\n[dim]Press Ctrl+C to stop[/dim]\n")

    log_level = config.logging.level.lower()
    try:
        if reload:
            # The reloader re-imports the app in a worker process, so it needs
            # an import string; the data file travels through the environment
            os.environ["TASKLIST_DATA_FILE"] = str(path)
            uvicorn.run(
                "tasklist.core.api.app:create_app",
                factory=True,
                reload=True,
                host=bind_host,
                port=bind_port,
                log_level=log_level,
            )
        else:
            fastapi_app = create_app(
                repository=TaskRepository(JsonTaskStore(path)), config=config
            )
            uvicorn.run(fastapi_app, host=bind_host, port=bind_port, log_level=log_level)
    except KeyboardInterrupt:
        console.print("\n[yellow]Server stopped[/yellow]")
        raise typer.Exit(ExitCode.SUCCESS)
