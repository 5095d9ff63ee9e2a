"""Reader/writer lock with poisoning for the in-memory person store."""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

logger = logging.getLogger(__name__)


class LockPoisonedError(RuntimeError):
    """Raised when acquiring a lock whose previous writer aborted."""


class ReadWriteLock:
    """Shared/exclusive lock built on a condition variable.

    Any number of readers may hold the lock together; a writer holds it
    alone. Arriving readers wait while a writer is waiting, so writers
    are not starved by a steady stream of readers.

    If an exception escapes a ``write()`` block the lock is poisoned and
    every later acquisition raises ``LockPoisonedError``.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0
        self._poisoned = False

    @property
    def poisoned(self) -> bool:
        """Whether an aborted write left the guarded data unusable."""
        with self._cond:
            return self._poisoned

    def _check_poisoned(self) -> None:
        if self._poisoned:
            raise LockPoisonedError("lock poisoned by an aborted write")

    def acquire_read(self) -> None:
        with self._cond:
            self._check_poisoned()
            while self._writer or self._writers_waiting:
                self._cond.wait()
                self._check_poisoned()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._check_poisoned()
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
                    self._check_poisoned()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self, poison: bool = False) -> None:
        with self._cond:
            self._writer = False
            if poison:
                self._poisoned = True
            self._cond.notify_all()

    @contextmanager
    def read(self) -> Iterator[None]:
        """Hold the lock in shared mode for the duration of the block."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write(self) -> Iterator[None]:
        """Hold the lock in exclusive mode for the duration of the block."""
        self.acquire_write()
        try:
            yield
        except BaseException:
            logger.error("Write critical section aborted, poisoning lock")
            self.release_write(poison=True)
            raise
        else:
            self.release_write()
