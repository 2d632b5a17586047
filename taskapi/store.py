"""In-memory task storage.

Tasks live only for the lifetime of the process. All access to the
collection goes through a single readers-writer lock: lookups share it,
mutations hold it exclusively.
"""

import uuid
from collections.abc import Callable

from taskapi.errors import TaskNotFoundError
from taskapi.models import Task, TaskWrite
from taskapi.observability.logging import get_logger
from taskapi.rwlock import ReadWriteLock

logger = get_logger(__name__)


def _new_task_id() -> str:
    return str(uuid.uuid4())


class TaskStore:
    """Thread-safe in-memory task storage."""

    def __init__(self, id_factory: Callable[[], str] = _new_task_id) -> None:
        """Initialize an empty task store."""
        self._tasks: dict[str, Task] = {}
        self._lock = ReadWriteLock()
        self._id_factory = id_factory

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._tasks)

    def list_all(self) -> list[Task]:
        """Return a snapshot of all tasks, in no particular order."""
        with self._lock.read_locked():
            return list(self._tasks.values())

    def get(self, task_id: str) -> Task:
        """Get a task by its ID. Raises TaskNotFoundError if absent."""
        with self._lock.read_locked():
            task = self._tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def create(self, data: TaskWrite) -> Task:
        """Store a new task under a freshly generated ID and return it."""
        with self._lock.write_locked():
            task_id = self._id_factory()
            while task_id in self._tasks:
                task_id = self._id_factory()
            task = Task(id=task_id, **data.model_dump())
            self._tasks[task_id] = task
        logger.info("task created", extra={"extra_fields": {"task_id": task_id}})
        return task

    def update(self, task_id: str, data: TaskWrite) -> Task:
        """Replace every field of an existing task except its ID.

        Raises TaskNotFoundError, leaving the store untouched, if absent.
        """
        with self._lock.write_locked():
            if task_id not in self._tasks:
                raise TaskNotFoundError(task_id)
            task = Task(id=task_id, **data.model_dump())
            self._tasks[task_id] = task
        logger.info("task updated", extra={"extra_fields": {"task_id": task_id}})
        return task

    def delete(self, task_id: str) -> None:
        """Delete a task. Raises TaskNotFoundError if absent."""
        with self._lock.write_locked():
            if self._tasks.pop(task_id, None) is None:
                raise TaskNotFoundError(task_id)
        logger.info("task deleted", extra={"extra_fields": {"task_id": task_id}})

    def clear(self) -> None:
        """Clear all tasks. Useful for testing."""
        with self._lock.write_locked():
            self._tasks.clear()
