"""
SnippetBoard Backend — Reader-Writer Lock
===========================================

What:  A writer-preferring reader-writer lock for thread-shared state.
How:   One Condition guards three counters. Readers share the lock; a writer
       holds it alone. As soon as a writer is waiting, new readers queue
       behind it, so a steady stream of readers cannot starve writers.

    state            | acquire_read        | acquire_write
    -----------------+---------------------+----------------------
    idle             | enters              | enters
    readers active   | enters (no writer   | waits for readers
                     | waiting)            | to drain
    writer waiting   | waits               | waits (queued)
    writer active    | waits               | waits

The lock is not reentrant: a thread holding the read side must not ask for
the write side (it would wait for itself).
"""

import threading
from contextlib import contextmanager
from typing import Iterator


class ReadWriteLock:
    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer_active = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer_active or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer_active or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer_active = True

    def release_write(self) -> None:
        with self._cond:
            self._writer_active = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        """Hold the shared (read) side for the duration of the block."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        """Hold the exclusive (write) side for the duration of the block."""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()
