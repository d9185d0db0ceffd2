"""
Task persistence and validation.

This module provides the task data models, the JSON file store, the
repository that owns every mutation of the task document, and the
request body validation rules shared by the API and the CLI.
"""

from .models import DeleteConfirmation, Task, TaskCreate, TaskDocument, TaskUpdate
from .repository import TaskNotFoundError, TaskRepository
from .store import JsonTaskStore, StorageWriteError
from .validation import TaskValidationError, Violation, validate_create, validate_update

__all__ = [
    # Models
    "Task",
    "TaskDocument",
    "TaskCreate",
    "TaskUpdate",
    "DeleteConfirmation",
    # Storage
    "JsonTaskStore",
    "StorageWriteError",
    # Repository
    "TaskRepository",
    "TaskNotFoundError",
    # Validation
    "Violation",
    "TaskValidationError",
    "validate_create",
    "validate_update",
]
