"""Tests for the in-memory task store."""

from concurrent.futures import ThreadPoolExecutor

import pytest
from pydantic import ValidationError

from taskapi.errors import NotFoundError, TaskNotFoundError
from taskapi.models import Task, TaskWrite
from taskapi.store import TaskStore


def test_create_assigns_id(store: TaskStore) -> None:
    """Test that create stores the task under a generated id."""
    task = store.create(TaskWrite(name="Write tests", description="soon", status=0))
    assert task.id
    assert task.name == "Write tests"
    assert task.description == "soon"
    assert task.status == 0
    assert store.list_all() == [task]


def test_create_retries_colliding_id() -> None:
    """Test that a colliding generated id is replaced by a fresh one."""
    ids = iter(["same", "same", "other"])
    store = TaskStore(id_factory=lambda: next(ids))

    first = store.create(TaskWrite(name="first"))
    second = store.create(TaskWrite(name="second"))

    assert first.id == "same"
    assert second.id == "other"
    assert store.get("same").name == "first"


def test_get_missing_raises(store: TaskStore) -> None:
    """Test that looking up an unknown id raises TaskNotFoundError."""
    with pytest.raises(TaskNotFoundError) as excinfo:
        store.get("missing")
    assert excinfo.value.task_id == "missing"
    assert isinstance(excinfo.value, NotFoundError)


def test_update_replaces_all_fields(store: TaskStore) -> None:
    """Test that update replaces every field except the id."""
    task = store.create(TaskWrite(name="a", description="b", status=0))

    updated = store.update(task.id, TaskWrite(name="c", status=1))

    assert updated == Task(id=task.id, name="c", description="", status=1)
    assert store.get(task.id) == updated


def test_update_missing_leaves_store_unchanged(store: TaskStore) -> None:
    """Test that updating an unknown id does not touch the store."""
    task = store.create(TaskWrite(name="a"))

    with pytest.raises(TaskNotFoundError):
        store.update("missing", TaskWrite(name="b"))

    assert store.list_all() == [task]


def test_delete(store: TaskStore) -> None:
    """Test deleting a task, then deleting it again."""
    task = store.create(TaskWrite(name="a"))

    store.delete(task.id)

    assert store.list_all() == []
    with pytest.raises(TaskNotFoundError):
        store.delete(task.id)


def test_list_is_a_snapshot(store: TaskStore) -> None:
    """Test that a listed snapshot does not see later creates."""
    store.create(TaskWrite(name="a"))
    snapshot = store.list_all()

    store.create(TaskWrite(name="b"))

    assert len(snapshot) == 1
    assert len(store) == 2


def test_stored_tasks_are_immutable(store: TaskStore) -> None:
    """Test that a returned task cannot be modified in place."""
    task = store.create(TaskWrite(name="a"))
    with pytest.raises(ValidationError):
        task.name = "changed"
    assert store.get(task.id).name == "a"


def test_clear(store: TaskStore) -> None:
    """Test clearing the store."""
    store.create(TaskWrite(name="a"))
    store.clear()
    assert len(store) == 0


def test_concurrent_creates_get_distinct_ids(store: TaskStore) -> None:
    """Test that 100 concurrent creates yield 100 distinct, listed ids."""
    with ThreadPoolExecutor(max_workers=20) as pool:
        tasks = list(pool.map(lambda i: store.create(TaskWrite(name=f"task {i}")), range(100)))

    ids = {task.id for task in tasks}
    assert len(ids) == 100
    assert {task.id for task in store.list_all()} == ids


def test_concurrent_mixed_operations(store: TaskStore) -> None:
    """Test that concurrent updates, lists and deletes stay consistent."""
    seeded = [store.create(TaskWrite(name=f"seed {i}")) for i in range(50)]

    def work(i: int) -> None:
        task = seeded[i]
        store.update(task.id, TaskWrite(name=f"updated {i}", status=1))
        assert all(t.status in (0, 1) and t.name for t in store.list_all())
        if i % 2:
            store.delete(task.id)

    with ThreadPoolExecutor(max_workers=16) as pool:
        list(pool.map(work, range(50)))

    remaining = store.list_all()
    assert len(remaining) == 25
    assert all(t.name.startswith("updated") and t.status == 1 for t in remaining)
