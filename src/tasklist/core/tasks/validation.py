"""
Request body validation for task create/update.

Rules are checked per field and every violation is collected, so a client
sees all of its mistakes in one 400 response. Validation is pure: it never
mutates the body and never touches storage.

Rules:
    title      required on create, optional on update; must be a string
               whose trimmed length is between 1 and 200 characters
    completed  required on create, optional on update; must be a real
               boolean ("false", 0 and 1 are rejected, not coerced)
"""

from typing import Any

from pydantic import BaseModel

from .models import TITLE_MAX_LENGTH


class Violation(BaseModel):
    """A single failed rule, reported back to the client verbatim."""

    field: str
    message: str


class TaskValidationError(Exception):
    """Raised when a request body fails one or more rules."""

    def __init__(self, violations: list[Violation]):
        self.violations = violations
        fields = ", ".join(v.field for v in violations)
        super().__init__(f"Invalid task data: {fields}")


def _check_title(value: Any) -> str | None:
    if not isinstance(value, str):
        return "Title must be a string"
    length = len(value.strip())
    if length == 0:
        return "Title is required"
    if length > TITLE_MAX_LENGTH:
        return f"Title must be between 1 and {TITLE_MAX_LENGTH} characters"
    return None


def _check_completed(value: Any) -> str | None:
    # bool only; isinstance(1, bool) is False so ints are rejected too
    if not isinstance(value, bool):
        return "completed must be a boolean"
    return None


_RULES = (
    ("title", _check_title, "Title is required"),
    ("completed", _check_completed, "completed is required"),
)


def _validate(body: Any, *, partial: bool) -> list[Violation]:
    if body is None:
        body = {}
    if not isinstance(body, dict):
        return [Violation(field="body", message="Request body must be a JSON object")]

    violations: list[Violation] = []
    for field, check, missing_message in _RULES:
        if field not in body:
            if not partial:
                violations.append(Violation(field=field, message=missing_message))
            continue
        message = check(body[field])
        if message is not None:
            violations.append(Violation(field=field, message=message))
    return violations


def validate_create(body: Any) -> list[Violation]:
    """
    Validate a create request body.

    Args:
        body: Decoded JSON body (None is treated as an empty object)

    Returns:
        Ordered list of violations; empty when the body is valid

    Example:
        >>> validate_create({"title": "Buy milk", "completed": False})
        []
        >>> [v.field for v in validate_create({"title": ""})]
        ['title', 'completed']
    """
    return _validate(body, partial=False)


def validate_update(body: Any) -> list[Violation]:
    """
    Validate an update (patch) request body.

    Absent fields are skipped; present fields follow the create rules.
    """
    return _validate(body, partial=True)
