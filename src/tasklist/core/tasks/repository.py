"""
Task repository: CRUD over the JSON task document.

The repository is the only component that mutates the document. Every
public operation does exactly one load, and mutating operations do
exactly one save. Nothing is rolled back if the save fails; the
StorageWriteError propagates and the caller must treat the change as
not persisted.
"""

import logging

from .models import Task, TaskDocument, TaskUpdate
from .store import JsonTaskStore

logger = logging.getLogger(__name__)


class TaskNotFoundError(Exception):
    """Raised when no task has the requested id."""

    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"Task not found: {task_id}")


class TaskRepository:
    """
    Create, list, update and delete tasks stored by a JsonTaskStore.

    Ids come from the document's ``nextId`` counter and are never reused,
    even after the task holding them is deleted.

    Example:
        >>> repo = TaskRepository(JsonTaskStore(Path("tasks.json")))
        >>> task = repo.create("Buy milk", completed=False)
        >>> repo.update_by_id(task.id, TaskUpdate(completed=True)).completed
        True
    """

    def __init__(self, store: JsonTaskStore):
        self.store = store

    def list_all(self) -> list[Task]:
        """Return every task in insertion order."""
        doc = self.store.load()
        logger.debug("Listed %d tasks", len(doc.tasks))
        return doc.tasks

    def create(self, title: str, completed: bool) -> Task:
        """
        Append a new task with the next id.

        Args:
            title: Task title (already validated)
            completed: Initial completion state

        Returns:
            The created task

        Raises:
            StorageWriteError: If the document cannot be saved
        """
        doc = self.store.load()
        task = Task(id=doc.next_id, title=title, completed=completed)
        doc.tasks.append(task)
        doc.next_id += 1
        self.store.save(doc)
        logger.info("Created task %d", task.id)
        return task

    def update_by_id(self, task_id: int, patch: TaskUpdate) -> Task:
        """
        Overwrite the fields set in ``patch`` on the task with ``task_id``.

        Fields the client did not send keep their current values.

        Raises:
            TaskNotFoundError: If no task has ``task_id`` (nothing is saved)
            StorageWriteError: If the document cannot be saved
        """
        doc = self.store.load()
        index = self._require_index(doc, task_id)

        updated = doc.tasks[index].model_copy(update=patch.changes())
        doc.tasks[index] = updated
        self.store.save(doc)
        logger.info("Updated task %d: %s", task_id, sorted(patch.changes()))
        return updated

    def delete_by_id(self, task_id: int) -> Task:
        """
        Remove the task with ``task_id``.

        Returns:
            The removed task

        Raises:
            TaskNotFoundError: If no task has ``task_id`` (nothing is saved)
            StorageWriteError: If the document cannot be saved
        """
        doc = self.store.load()
        index = self._require_index(doc, task_id)

        removed = doc.tasks.pop(index)
        self.store.save(doc)
        logger.info("Deleted task %d", task_id)
        return removed

    @staticmethod
    def _require_index(doc: TaskDocument, task_id: int) -> int:
        index = doc.find_index(task_id)
        if index is None:
            raise TaskNotFoundError(task_id)
        return index
