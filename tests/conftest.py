from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from plinkofair.deps.store import MemoryRoundStore, get_store
from plinkofair.main import app

SERVER_SEED = "b2a5f3f32a4d9c6ee7a8c1d33456677890abcdeffedcba0987654321ffeeddcc"
CLIENT_SEED = "candidate-hello"
NONCE = "42"
COMMIT_HEX = "bb9acdc67f3f18f3345236a01f0e5072596657a9005c7d8a22cff061451a6b34"
COMBINED_SEED = "e1dddf77de27d395ea2be2ed49aa2a59bd6bf12ee8d350c16c008abd406c07e0"
PEG_MAP_HASH = "21296c4b32a9cf0993d6988835d5a109d3337791239f411384794251c51e7784"


@pytest.fixture
def store() -> MemoryRoundStore:
    return MemoryRoundStore()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
