"""Tests for the keyed JSON store and its substrates."""

from __future__ import annotations

import json
import logging

import pytest

from resto.persistence import KeyedStore, MemorySubstrate, SqliteSubstrate, UnavailableSubstrate


@pytest.mark.parametrize(
    "value",
    [
        [],
        [{"id": "1", "name": "Pizza", "price": 10.0}],
        {"nested": {"list": [1, 2.5, "three", None, True]}},
        "plain",
        42,
    ],
)
def test_save_then_load_round_trips(store, value):
    assert store.save("key", value) is True
    assert store.load("key", None) == value


def test_load_missing_key_returns_default(store):
    default: list = []
    assert store.load("menuItems", default) is default


def test_load_corrupted_payload_returns_default(substrate, caplog):
    substrate.set("orders", "{not json")
    store = KeyedStore(substrate)

    with caplog.at_level(logging.WARNING):
        assert store.load("orders", ["fallback"]) == ["fallback"]
    assert "orders" in caplog.text


def test_load_decode_failure_returns_default(store):
    store.save("orders", [{"unexpected": True}])

    def decode(value):
        return [item["id"] for item in value]

    assert store.load("orders", (), decode=decode) == ()


def test_load_applies_decoder(store):
    store.save("numbers", [1, 2, 3])
    assert store.load("numbers", (), decode=tuple) == (1, 2, 3)


def test_save_applies_encoder(substrate, store):
    assert store.save("numbers", (3, 2, 1), encode=list) is True
    assert json.loads(substrate.data["numbers"]) == [3, 2, 1]


def test_unserializable_value_is_reported_not_raised(substrate, store):
    assert store.save("key", {"bad": object()}) is False
    assert "key" not in substrate.data


def test_nan_is_not_written(store):
    assert store.save("key", [float("nan")]) is False


def test_broken_substrate_never_raises(broken_substrate, caplog):
    store = KeyedStore(broken_substrate)

    with caplog.at_level(logging.WARNING):
        assert store.load("menuItems", []) == []
        assert store.save("menuItems", [1]) is False
    assert "store read failed" in caplog.text
    assert "store write failed" in caplog.text


def test_unavailable_substrate_behaves_as_empty(caplog):
    store = KeyedStore(UnavailableSubstrate())
    assert store.save("menuItems", [1]) is True

    with caplog.at_level(logging.WARNING):
        assert store.load("menuItems", "default") == "default"
        assert store.load("orders", []) == []
    assert caplog.text.count("store unavailable") == 1


def test_memory_substrate_starts_from_initial_data():
    substrate = MemorySubstrate({"k": "[1]"})
    assert KeyedStore(substrate).load("k", None) == [1]


def test_sqlite_substrate_persists_across_instances(tmp_path):
    db_path = tmp_path / "nested" / "resto.db"
    KeyedStore(SqliteSubstrate(str(db_path))).save("menuItems", [{"id": "1", "name": "Soup", "price": 4.5}])

    reopened = KeyedStore(SqliteSubstrate(str(db_path)))
    assert reopened.load("menuItems", []) == [{"id": "1", "name": "Soup", "price": 4.5}]
    assert db_path.is_file()


def test_sqlite_substrate_overwrites_existing_key(tmp_path):
    substrate = SqliteSubstrate(str(tmp_path / "resto.db"))
    substrate.set("orders", "[1]")
    substrate.set("orders", "[2]")
    assert substrate.get("orders") == "[2]"
    assert substrate.get("missing") is None


def test_sqlite_substrate_honors_env_override(tmp_path, monkeypatch):
    db_path = tmp_path / "from-env.db"
    monkeypatch.setenv("RESTO_DB_PATH", str(db_path))

    SqliteSubstrate().set("k", "1")
    assert db_path.is_file()
