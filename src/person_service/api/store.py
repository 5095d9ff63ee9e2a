"""In-memory person store guarded by a reader/writer lock."""

import logging
from typing import Iterable, List, Optional

from .errors import PersonConflictError, PersonNotFoundError, StoreUnavailableError
from .locking import LockPoisonedError, ReadWriteLock
from .models import Person

logger = logging.getLogger(__name__)


def default_persons() -> List[Person]:
    """Seed records loaded into every new store."""
    return [
        Person(id=1, name="Jason", age=30, date="2023-01-01T00:00:00Z"),
        Person(id=2, name="Peter", age=25, date="2023-01-02T00:00:00Z"),
        Person(id=3, name="Anna", age=35, date="2023-01-03T00:00:00Z"),
    ]


class PersonStore:
    """Ordered collection of persons keyed by a unique id.

    Reads run under the shared lock and hand out copies; writes run under
    the exclusive lock. Not-found and conflict outcomes are decided inside
    the critical section but raised after the lock is released, so only an
    unexpected failure mid-write poisons the store.
    """

    def __init__(self, persons: Optional[Iterable[Person]] = None):
        self._lock = ReadWriteLock()
        self._persons: List[Person] = []
        for person in default_persons() if persons is None else persons:
            if self._index_of(person.id) is not None:
                raise ValueError(f"Duplicate person id {person.id} in seed data")
            self._persons.append(person.model_copy())

    def _index_of(self, person_id: int) -> Optional[int]:
        for index, person in enumerate(self._persons):
            if person.id == person_id:
                return index
        return None

    def list_persons(self) -> List[Person]:
        """Return a copy of every stored person in insertion order."""
        try:
            with self._lock.read():
                return [person.model_copy() for person in self._persons]
        except LockPoisonedError as e:
            raise StoreUnavailableError() from e

    def get_person(self, person_id: int) -> Person:
        """Return a copy of the person with ``person_id``.

        Raises:
            PersonNotFoundError: If no person has that id
            StoreUnavailableError: If the store lock is poisoned
        """
        try:
            with self._lock.read():
                index = self._index_of(person_id)
                found = self._persons[index].model_copy() if index is not None else None
        except LockPoisonedError as e:
            raise StoreUnavailableError() from e

        if found is None:
            raise PersonNotFoundError(person_id)
        return found

    def create_person(self, person: Person) -> None:
        """Append ``person`` unless its id is already stored.

        Raises:
            PersonConflictError: If a person with the same id exists
            StoreUnavailableError: If the store lock is poisoned
        """
        try:
            with self._lock.write():
                exists = self._index_of(person.id) is not None
                if not exists:
                    self._persons.append(person.model_copy())
        except LockPoisonedError as e:
            raise StoreUnavailableError() from e

        if exists:
            raise PersonConflictError(person.id)
        logger.info(f"Created person {person.id}")

    def update_person(self, person: Person) -> None:
        """Overwrite name, age and date of the person matching ``person.id``.

        The stored id is never changed.

        Raises:
            PersonNotFoundError: If no person has that id
            StoreUnavailableError: If the store lock is poisoned
        """
        try:
            with self._lock.write():
                index = self._index_of(person.id)
                if index is not None:
                    stored = self._persons[index]
                    stored.name = person.name
                    stored.age = person.age
                    stored.date = person.date
        except LockPoisonedError as e:
            raise StoreUnavailableError() from e

        if index is None:
            raise PersonNotFoundError(person.id)
        logger.info(f"Updated person {person.id}")

    def delete_person(self, person_id: int) -> None:
        """Remove the person with ``person_id``, keeping the order of the rest.

        Raises:
            PersonNotFoundError: If no person has that id
            StoreUnavailableError: If the store lock is poisoned
        """
        try:
            with self._lock.write():
                index = self._index_of(person_id)
                if index is not None:
                    del self._persons[index]
        except LockPoisonedError as e:
            raise StoreUnavailableError() from e

        if index is None:
            raise PersonNotFoundError(person_id)
        logger.info(f"Deleted person {person_id}")

    def count(self) -> int:
        """Number of stored persons."""
        try:
            with self._lock.read():
                return len(self._persons)
        except LockPoisonedError as e:
            raise StoreUnavailableError() from e

    def is_available(self) -> bool:
        """Whether the store lock can still be acquired."""
        return not self._lock.poisoned
