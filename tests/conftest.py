import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from person_service.api.config import Config
from person_service.api.server import create_app
from person_service.api.store import PersonStore


@pytest.fixture
def config():
    return Config(greeting_text="Hi!", host="127.0.0.1", port=8080)


@pytest.fixture
def store():
    return PersonStore()


@pytest.fixture
def app(config, store):
    return create_app(config=config, store=store)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def poisoned_store(store):
    """Store whose lock was poisoned by a writer that crashed mid-update."""
    with pytest.raises(RuntimeError):
        with store._lock.write():
            raise RuntimeError("writer crashed")
    return store
