from __future__ import annotations

import pytest

from plinkofair import config
from plinkofair.deps.store import MemoryRoundStore, get_store


@pytest.mark.parametrize("raw, expected", [(None, 12), ("", 12), ("16", 16), ("abc", 12), ("-3", 12), ("0", 12)])
def test_int_env(monkeypatch, raw, expected):
    if raw is None:
        monkeypatch.delenv("PLINKO_TEST_ROWS", raising=False)
    else:
        monkeypatch.setenv("PLINKO_TEST_ROWS", raw)
    assert config._int_env("PLINKO_TEST_ROWS", 12) == expected


def test_store_defaults_to_memory(monkeypatch):
    monkeypatch.setattr(config, "DB_DSN", None)
    get_store.cache_clear()
    try:
        store = get_store()
        assert isinstance(store, MemoryRoundStore)
        assert get_store() is store
    finally:
        get_store.cache_clear()
