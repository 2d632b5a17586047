"""Error taxonomy for the Task API.

Every failure a handler can report is a ``TaskAPIError``; the application
renders it as ``{"error": message}`` with the error's status code.
"""

from collections.abc import Iterable, Mapping
from typing import Any

INVALID_PAYLOAD = "Invalid request payload"

# Pydantic error types meaning the body was not a JSON object at all.
_PAYLOAD_ERROR_TYPES = frozenset(
    {"json_invalid", "json_type", "model_type", "model_attributes_type", "dict_type"}
)


class TaskAPIError(Exception):
    """Base class for errors reported to API clients."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TaskAPIError):
    """The request body was malformed or failed field validation."""

    status_code = 400


class NotFoundError(TaskAPIError):
    """The addressed resource does not exist."""

    status_code = 404


class TaskNotFoundError(NotFoundError):
    """No task is stored under the given id."""

    def __init__(self, task_id: str) -> None:
        super().__init__("Task not found")
        self.task_id = task_id


def describe_validation_errors(errors: Iterable[Mapping[str, Any]]) -> str:
    """Turn pydantic/FastAPI error dicts into a single client-facing message."""
    problems: list[str] = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        if error.get("type") in _PAYLOAD_ERROR_TYPES or not loc:
            return INVALID_PAYLOAD
        problems.append(f"{'.'.join(loc)}: {error.get('msg', 'invalid value')}")
    return "; ".join(problems) or INVALID_PAYLOAD
