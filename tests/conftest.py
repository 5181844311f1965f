"""
Shared fixtures for the HTTP layer.

Auth and Kafka are switched off through the environment before the app
is imported; the database session is replaced by an in-memory fake.
"""
import os

os.environ.setdefault("AUTH_ENABLED", "false")
os.environ.setdefault("KAFKA_ENABLED", "false")

import pytest
from fastapi.testclient import TestClient

from compliance_engine.main import app
from compliance_engine.models.database import get_db


class _FakeResult:
    def __init__(self, rows):
        self._rows = rows

    def scalar_one_or_none(self):
        return self._rows[0] if self._rows else None

    def scalars(self):
        return self

    def all(self):
        return list(self._rows)


class FakeSession:
    """Records writes; every query returns the configured rows."""

    def __init__(self):
        self.rows = []
        self.added = []
        self.merged = []
        self.commits = 0

    async def execute(self, stmt):
        return _FakeResult(self.rows)

    def add(self, obj):
        self.added.append(obj)

    async def merge(self, obj):
        self.merged.append(obj)
        return obj

    async def commit(self):
        self.commits += 1


@pytest.fixture
def db_session():
    return FakeSession()


@pytest.fixture
def client(db_session):
    async def _override_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
