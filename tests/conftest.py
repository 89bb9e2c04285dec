import json

import pytest
from fastapi.testclient import TestClient

from family_tree.core.storage import get_store
from family_tree.main import app
from family_tree.services.family_store import FamilyStore

SEED_MEMBERS = [
    {"id": 1, "externalId": "0", "name": "Lars Tygesson", "birth": "1515", "death": "1559", "biologicalSex": "Male"},
    {
        "id": 2,
        "externalId": "0.1",
        "name": "Tyge Larsson (Gyllencreutz)",
        "notes": "Ennobled in Sweden, buried Östra Ryd church.",
        "father": "0",
        "isSuccessionSon": True,
    },
    {"id": 3, "externalId": "1", "name": "Johan Gyllencreutz", "notes": "Died from the plague", "father": "0.1"},
]


class FrozenClock:
    """Returns the same millisecond on every call so backup-name collisions are exercised."""

    def __init__(self, start: int = 1700000000000):
        self.now = start

    def __call__(self) -> int:
        return self.now


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def store(tmp_path, clock):
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    family_store = FamilyStore(data_dir, clock=clock)
    family_store.store_path.write_text(json.dumps(SEED_MEMBERS, indent=2, ensure_ascii=False), encoding="utf-8")
    return family_store


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
