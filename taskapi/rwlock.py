"""Readers-writer lock for the in-memory store.

Many readers may hold the lock at once; a writer holds it alone. Once a
writer is waiting, new readers queue behind it. When a writer releases,
every reader that was already queued is let in before the next writer.
Neither side can starve the other.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class ReadWriteLock:
    """Shared-read / exclusive-write lock built on a condition variable."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0
        self._readers_waiting = 0
        # Bumped on every write release; queued readers remember the value
        # they started waiting under.
        self._release_gen = 0
        # Readers handed the lock by the last write release, not yet entered.
        self._handoff = 0

    def acquire_read(self) -> None:
        with self._cond:
            if not self._writer and not self._writers_waiting:
                self._readers += 1
                return

            gen = self._release_gen
            self._readers_waiting += 1
            try:
                self._cond.wait_for(
                    lambda: not self._writer
                    and (gen != self._release_gen or not self._writers_waiting)
                )
            finally:
                self._readers_waiting -= 1
                if gen != self._release_gen:
                    self._handoff -= 1
                    if not self._handoff:
                        self._cond.notify_all()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read() called without a read lock held")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                self._cond.wait_for(
                    lambda: not self._writer and not self._readers and not self._handoff
                )
            except BaseException:
                self._writers_waiting -= 1
                self._cond.notify_all()
                raise
            self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write() called without the write lock held")
            self._writer = False
            self._release_gen += 1
            self._handoff = self._readers_waiting
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        """Hold the shared lock for the duration of the block."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        """Hold the exclusive lock for the duration of the block."""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()
