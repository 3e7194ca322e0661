from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))
# shared fakes live beside this file
sys.path.insert(0, str(Path(__file__).resolve().parent))

from fakes import InMemoryStore, RecordingPublisher  # noqa: E402


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def publisher(store: InMemoryStore) -> RecordingPublisher:
    return store.publisher
