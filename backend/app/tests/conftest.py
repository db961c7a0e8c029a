import os
from typing import List

import pytest

# No database in unit tests
os.environ.setdefault("DB_INIT_ON_STARTUP", "false")

from fastapi.testclient import TestClient  # noqa: E402

from app.dependencies import get_store  # noqa: E402
from app.errors import StoreError  # noqa: E402
from app.main import app  # noqa: E402
from app.models.domain import School  # noqa: E402


class FakeSchoolStore:
    """In-memory stand-in for SchoolStore."""

    def __init__(self, schools: List[School] | None = None):
        self.schools: List[School] = list(schools or [])
        self.down = False

    def exists_by_name_address(self, name: str, address: str) -> bool:
        if self.down:
            raise StoreError("connection refused")
        return any(s.name == name and s.address == address for s in self.schools)

    def insert(self, name: str, address: str, lat: float, lon: float) -> int:
        if self.down:
            raise StoreError("connection refused")
        new_id = len(self.schools) + 1
        self.schools.append(School(id=new_id, name=name, address=address, latitude=lat, longitude=lon))
        return new_id

    def fetch_all(self) -> List[School]:
        if self.down:
            raise StoreError("connection refused")
        return list(self.schools)


@pytest.fixture
def store():
    return FakeSchoolStore([
        School(id=1, name="Oak School", address="1 Main St", latitude=0.0, longitude=0.0),
    ])


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def empty_store():
    return FakeSchoolStore()
