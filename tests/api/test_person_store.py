"""Tests for the in-memory person store."""

import threading

import pytest

from person_service.api.errors import (
    PersonConflictError,
    PersonNotFoundError,
    StoreUnavailableError,
)
from person_service.api.models import Person
from person_service.api.store import PersonStore, default_persons


def make_person(
    person_id: int, name: str = "X", age: int = 30, date: str = "2024-01-01T00:00:00Z"
) -> Person:
    return Person(id=person_id, name=name, age=age, date=date)


class TestSeeding:
    """Test store construction."""

    def test_default_seed(self):
        store = PersonStore()
        assert [p.id for p in store.list_persons()] == [p.id for p in default_persons()]

    def test_explicit_seed(self):
        store = PersonStore([make_person(7), make_person(3)])
        assert [p.id for p in store.list_persons()] == [7, 3]

    def test_duplicate_seed_rejected(self):
        with pytest.raises(ValueError, match="Duplicate person id 5"):
            PersonStore([make_person(5), make_person(5)])


class TestReads:
    """Test list and get."""

    def test_get_existing(self, store):
        person = store.get_person(1)
        assert person.id == 1

    def test_get_missing(self, store):
        with pytest.raises(PersonNotFoundError) as exc_info:
            store.get_person(999)
        assert exc_info.value.person_id == 999

    def test_reads_return_copies(self, store):
        """Mutating a returned record never changes the stored one."""
        listed = store.list_persons()
        listed[0].name = "mutated"
        listed.clear()

        fetched = store.get_person(1)
        fetched.age = -1

        assert store.get_person(1).name != "mutated"
        assert store.get_person(1).age != -1
        assert store.count() == len(default_persons())


class TestCreate:
    """Test create semantics."""

    def test_create_appends(self, store):
        store.create_person(make_person(42))
        assert store.list_persons()[-1].id == 42

    def test_create_duplicate_is_conflict(self, store):
        before = store.list_persons()

        with pytest.raises(PersonConflictError):
            store.create_person(make_person(1, name="Other"))

        assert store.list_persons() == before

    def test_create_keeps_own_copy(self, store):
        person = make_person(42)
        store.create_person(person)
        person.name = "changed after create"

        assert store.get_person(42).name == "X"

    def test_round_trip_preserves_date(self, store):
        person = make_person(42, date="2024-01-01T00:00:00.000+05:30")
        store.create_person(person)
        assert store.get_person(42) == person

    def test_concurrent_creates_keep_ids_unique(self):
        """Racing creators of the same id produce exactly one record."""
        store = PersonStore([])
        outcomes = []
        outcomes_lock = threading.Lock()
        start = threading.Barrier(8, timeout=5)

        def creator(n: int):
            start.wait()
            try:
                store.create_person(make_person(100, name=f"writer-{n}"))
                result = "created"
            except PersonConflictError:
                result = "conflict"
            with outcomes_lock:
                outcomes.append(result)

        threads = [threading.Thread(target=creator, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)

        assert outcomes.count("created") == 1
        assert outcomes.count("conflict") == 7
        assert [p.id for p in store.list_persons()] == [100]


class TestUpdate:
    """Test update semantics."""

    def test_update_overwrites_fields(self, store):
        store.update_person(make_person(2, name="Y", age=31, date="2024-02-02T00:00:00Z"))

        updated = store.get_person(2)
        assert updated.id == 2
        assert updated.name == "Y"
        assert updated.age == 31
        assert updated.date == "2024-02-02T00:00:00Z"

    def test_update_keeps_position(self, store):
        ids_before = [p.id for p in store.list_persons()]
        store.update_person(make_person(2, name="Y"))
        assert [p.id for p in store.list_persons()] == ids_before

    def test_update_missing(self, store):
        before = store.list_persons()
        with pytest.raises(PersonNotFoundError):
            store.update_person(make_person(999))
        assert store.list_persons() == before


class TestDelete:
    """Test delete semantics."""

    def test_delete_is_exact_and_order_preserving(self):
        store = PersonStore([make_person(i) for i in (5, 6, 7, 8)])

        store.delete_person(6)

        assert [p.id for p in store.list_persons()] == [5, 7, 8]

    def test_delete_missing(self, store):
        count = store.count()
        with pytest.raises(PersonNotFoundError):
            store.delete_person(999)
        assert store.count() == count


class TestPoisonedStore:
    """Test behaviour after a writer crashed mid-update."""

    def test_every_operation_unavailable(self, poisoned_store):
        assert poisoned_store.is_available() is False

        with pytest.raises(StoreUnavailableError):
            poisoned_store.list_persons()
        with pytest.raises(StoreUnavailableError):
            poisoned_store.get_person(1)
        with pytest.raises(StoreUnavailableError):
            poisoned_store.create_person(make_person(42))
        with pytest.raises(StoreUnavailableError):
            poisoned_store.update_person(make_person(1))
        with pytest.raises(StoreUnavailableError):
            poisoned_store.delete_person(1)
        with pytest.raises(StoreUnavailableError):
            poisoned_store.count()

    def test_not_found_does_not_poison(self, store):
        with pytest.raises(PersonNotFoundError):
            store.delete_person(999)
        with pytest.raises(PersonConflictError):
            store.create_person(make_person(1))

        assert store.is_available() is True


def test_readers_never_observe_partial_writes():
    """Concurrent lists only ever see complete collections."""
    store = PersonStore([])
    stop = threading.Event()
    torn = []

    def writer():
        for i in range(200):
            store.create_person(make_person(1000 + i, name=f"n{i}", age=i, date=f"d{i}"))
            store.update_person(make_person(1000 + i, name=f"u{i}", age=-i, date=f"e{i}"))
        stop.set()

    def reader():
        while not stop.is_set():
            persons = store.list_persons()
            ids = [p.id for p in persons]
            if len(ids) != len(set(ids)):
                torn.append(ids)
            for p in persons:
                index = p.id - 1000
                if (p.name, p.age, p.date) not in {
                    (f"n{index}", index, f"d{index}"),
                    (f"u{index}", -index, f"e{index}"),
                }:
                    torn.append(p)

    readers = [threading.Thread(target=reader) for _ in range(4)]
    w = threading.Thread(target=writer)
    for t in readers:
        t.start()
    w.start()
    w.join(timeout=30)
    for t in readers:
        t.join(timeout=30)

    assert torn == []
    assert store.count() == 200
