"""Shared fixtures: a fresh in-memory store wired into the API for every test."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from livescribe.api.main import app
from livescribe.storage.base import get_store
from livescribe.storage.memory import MemoryMeetingStore


@pytest.fixture
def store() -> MemoryMeetingStore:
    return MemoryMeetingStore()


@pytest.fixture
def client(store: MemoryMeetingStore) -> Iterator[TestClient]:
    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
