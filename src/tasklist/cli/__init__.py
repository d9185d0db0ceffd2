"""
Tasklist CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import logging
import sys

import typer
from rich.console import Console

from tasklist import __version__
from tasklist.cli import serve, task
from tasklist.core.config import load_config, load_layered_env

app = typer.Typer(
    name="tasklist",
    help="JSON-file backed to-do list service",
    no_args_is_help=True,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


def setup_logging(level: str = "INFO", debug: bool = False) -> None:
    """
    Configure root logging for CLI commands.

    Args:
        level: Level name from config
        debug: If True, force DEBUG regardless of ``level``
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"tasklist {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """
    Tasklist - a to-do list REST service backed by a JSON file.

    Quick Start:
        tasklist serve                    # Start the API on :3001
        tasklist task create "Buy milk"   # Add a task locally
        tasklist task list                # Show tasks
    """
    load_layered_env()
    setup_logging(load_config().logging.level, debug=debug)
    ctx.obj = {"debug": debug}


app.command("serve")(serve.serve)
app.add_typer(task.app, name="task")


def cli_main() -> None:
    """Console script entry point."""
    app()


__all__ = ["app", "cli_main", "setup_logging"]
