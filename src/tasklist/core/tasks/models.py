"""
Task data models for tasklist.

Defines the persisted document shape ({tasks, nextId}), the Task entity,
and the structured request bodies used to create and patch tasks.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

TITLE_MAX_LENGTH = 200


class Task(BaseModel):
    """
    A single to-do entry.

    Example:
        >>> task = Task(id=1, title="Buy milk", completed=False)
        >>> task.model_dump()
        {'id': 1, 'title': 'Buy milk', 'completed': False}
    """

    id: int = Field(
        ..., ge=1, strict=True, description="Unique task identifier, assigned on create"
    )
    title: str = Field(
        ..., min_length=1, max_length=TITLE_MAX_LENGTH, strict=True, description="Task title"
    )
    completed: bool = Field(default=False, strict=True, description="Whether the task is done")

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        # Titles are stored trimmed; whitespace-only would trim to nothing
        if not value.strip():
            raise ValueError("title must not be blank")
        return value


class TaskDocument(BaseModel):
    """
    The full persisted document.

    File format:
        {
          "tasks": [{"id": 1, "title": "Buy milk", "completed": false}],
          "nextId": 2
        }

    Insertion order of ``tasks`` is the display order. ``next_id`` is
    always greater than every id in ``tasks``.
    """

    model_config = ConfigDict(populate_by_name=True)

    tasks: list[Task] = Field(default_factory=list, description="Tasks in insertion order")
    next_id: int = Field(default=1, ge=1, alias="nextId", description="Next id to assign")

    @model_validator(mode="after")
    def _next_id_above_existing(self) -> "TaskDocument":
        # A hand-edited file may carry a stale counter
        if self.tasks:
            highest = max(task.id for task in self.tasks)
            if self.next_id <= highest:
                self.next_id = highest + 1
        return self

    def find_index(self, task_id: int) -> int | None:
        """Return the position of the task with ``task_id``, or None."""
        for index, task in enumerate(self.tasks):
            if task.id == task_id:
                return index
        return None

    def to_json_dict(self) -> dict[str, object]:
        """Serialize with the on-disk key names (``nextId``)."""
        return self.model_dump(by_alias=True, mode="json")


class TaskCreate(BaseModel):
    """Request body for POST /api/tasks. Both fields are mandatory."""

    model_config = ConfigDict(strict=True, extra="ignore")

    title: str
    completed: bool

    @field_validator("title")
    @classmethod
    def _strip_title(cls, value: str) -> str:
        return value.strip()


class TaskUpdate(BaseModel):
    """
    Request body for PUT /api/tasks/{id}.

    Every field is optional. Only fields present in the request are
    applied; use ``model_fields_set`` (or ``changes()``) to tell an
    omitted field apart from an explicit value.
    """

    model_config = ConfigDict(strict=True, extra="ignore")

    title: str | None = None
    completed: bool | None = None

    @field_validator("title")
    @classmethod
    def _strip_title(cls, value: str | None) -> str | None:
        return value.strip() if value is not None else None

    def changes(self) -> dict[str, object]:
        """Return only the fields the client actually sent."""
        return {name: getattr(self, name) for name in self.model_fields_set}


class DeleteConfirmation(BaseModel):
    """Response body for DELETE /api/tasks/{id}."""

    message: str = "Task deleted successfully"
