"""
Tasklist CLI - Task commands.

Works directly on the configured JSON data file through the same
repository and validation rules as the HTTP API.
"""

import json
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tasklist.cli.errors import (
    ExitCode,
    print_error,
    print_task_not_found_error,
    print_violations,
)
from tasklist.core.config import load_config
from tasklist.core.tasks import (
    JsonTaskStore,
    StorageWriteError,
    Task,
    TaskCreate,
    TaskNotFoundError,
    TaskRepository,
    TaskUpdate,
    validate_create,
    validate_update,
)

console = Console()
app = typer.Typer(help="Manage tasks in the local data file")


def _get_repository() -> TaskRepository:
    config = load_config()
    return TaskRepository(JsonTaskStore(config.resolve_data_file()))


def _print_json(data: Any) -> None:
    console.print(
        json.dumps(data, indent=2, ensure_ascii=False),
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


def _storage_failed(e: StorageWriteError) -> typer.Exit:
    print_error(str(e), solution="check permissions on the data file directory")
    return typer.Exit(ExitCode.GENERAL_ERROR)


@app.command("list")
def list_tasks(
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON",
    ),
) -> None:
    """
    List all tasks.

    Examples:
        tasklist task list
        tasklist task list --json
    """
    tasks = _get_repository().list_all()

    if json_output:
        _print_json([t.model_dump(mode="json") for t in tasks])
        return

    if not tasks:
        console.print("[yellow]No tasks yet.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Done", width=4, justify="center")
    table.add_column("Title", overflow="fold")

    for task in tasks:
        table.add_row(
            str(task.id),
            "[green]✓[/green]" if task.completed else "",
            escape(task.title),
        )

    console.print(table)
    console.print(f"\n[dim]Total: {len(tasks)} tasks[/dim]")


@app.command()
def create(
    title: str = typer.Argument(..., help="Task title"),
    completed: bool = typer.Option(
        False,
        "--completed",
        help="Create the task already completed",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON",
    ),
) -> None:
    """
    Create a new task.

    Examples:
        tasklist task create "Buy milk"
        tasklist task create "File taxes" --completed
    """
    body = {"title": title, "completed": completed}
    violations = validate_create(body)
    if violations:
        print_violations(violations)
        raise typer.Exit(ExitCode.USER_ERROR)

    data = TaskCreate.model_validate(body)
    try:
        task = _get_repository().create(data.title, data.completed)
    except StorageWriteError as e:
        raise _storage_failed(e) from e

    if json_output:
        _print_json(task.model_dump(mode="json"))
    else:
        console.print(f"[green]Created:[/green] {task.id} {escape(task.title)}")


@app.command()
def update(
    task_id: int = typer.Argument(..., help="Task ID to update"),
    title: str | None = typer.Option(
        None,
        "--title",
        "-t",
        help="New title",
    ),
    completed: bool | None = typer.Option(
        None,
        "--completed/--not-completed",
        help="Mark the task completed or not completed",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON",
    ),
) -> None:
    """
    Update a task. Options left out keep their current value.

    Examples:
        tasklist task update 1 --completed
        tasklist task update 1 --title "Buy oat milk" --not-completed
    """
    body: dict[str, Any] = {}
    if title is not None:
        body["title"] = title
    if completed is not None:
        body["completed"] = completed

    violations = validate_update(body)
    if violations:
        print_violations(violations)
        raise typer.Exit(ExitCode.USER_ERROR)

    try:
        task = _get_repository().update_by_id(task_id, TaskUpdate.model_validate(body))
    except TaskNotFoundError:
        print_task_not_found_error(task_id)
        raise typer.Exit(ExitCode.USER_ERROR)
    except StorageWriteError as e:
        raise _storage_failed(e) from e

    if json_output:
        _print_json(task.model_dump(mode="json"))
    else:
        _print_task(task, "Updated")


@app.command()
def delete(
    task_id: int = typer.Argument(..., help="Task ID to delete"),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Skip confirmation prompt",
    ),
) -> None:
    """
    Delete a task permanently.

    A confirmation prompt is shown unless --force is passed. Deleted ids
    are never reused.

    Examples:
        tasklist task delete 3
        tasklist task delete 3 --force
    """
    repository = _get_repository()

    # Look the task up first so the prompt can show its title
    task = next((t for t in repository.list_all() if t.id == task_id), None)
    if task is None:
        print_task_not_found_error(task_id)
        raise typer.Exit(ExitCode.USER_ERROR)

    if not force:
        confirmation = typer.confirm(f"Delete task {task_id} '{task.title}'?", default=False)
        if not confirmation:
            console.print("[yellow]Cancelled.[/yellow]")
            raise typer.Exit(ExitCode.SUCCESS)

    try:
        task = repository.delete_by_id(task_id)
    except TaskNotFoundError:
        print_task_not_found_error(task_id)
        raise typer.Exit(ExitCode.USER_ERROR)
    except StorageWriteError as e:
        raise _storage_failed(e) from e

    _print_task(task, "Deleted")


def _print_task(task: Task, verb: str) -> None:
    mark = "x" if task.completed else " "
    console.print(f"[green]{verb}:[/green] {task.id} \\[{mark}] {escape(task.title)}")
