"""
Standardized error handling and exit codes for the tasklist CLI.
"""

from enum import IntEnum

from rich.console import Console

from tasklist.core.tasks import Violation

console = Console()


class ExitCode(IntEnum):
    """Standard exit codes for tasklist CLI operations."""

    SUCCESS = 0
    """Operation completed successfully."""

    GENERAL_ERROR = 1
    """Generic or storage error."""

    USER_ERROR = 2
    """Invalid input or unknown task (actionable by user)."""


def print_error(problem: str, *, solution: str | None = None) -> None:
    """
    Print a standardized error message.

    Args:
        problem: Brief description of what went wrong
        solution: Optional command or action to fix it
    """
    console.print(f"[red]Error:[/red] {problem}")

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {solution}")


def print_task_not_found_error(task_id: int) -> None:
    """Print error when a task id does not exist."""
    print_error(
        f"Task not found: {task_id}",
        solution="tasklist task list  # to see existing task ids",
    )


def print_violations(violations: list[Violation]) -> None:
    """Print each broken validation rule on its own line."""
    console.print("[red]Error:[/red] Invalid task data")
    for violation in violations:
        console.print(f"  • {violation.field}: {violation.message}")
