import pytest
from fastapi.testclient import TestClient

from main import create_app
from store import EventStore


@pytest.fixture
def store(tmp_path):
    """An opened store on a throw-away database file."""
    event_store = EventStore(str(tmp_path / "data" / "contributions.db"))
    event_store.open()
    yield event_store
    event_store.close()


@pytest.fixture
def client(tmp_path):
    """TestClient whose lifespan opens and closes its own store."""
    app = create_app(EventStore(str(tmp_path / "api.db")))
    with TestClient(app) as c:
        yield c
