import time
from datetime import timedelta

from kvstorage.storage import Item, KeyValueStorage


def test_set_then_get():
    store = KeyValueStorage()
    store.set("k", "v")
    assert store.get("k") == Item("v")


def test_get_missing_returns_none():
    assert KeyValueStorage().get("missing") is None


def test_version_counts_every_mutation():
    store = KeyValueStorage()
    assert store.data_version() == 0
    store.set("a", "1")
    store.set("a", "2")
    store.delete("a")
    store.delete("never-existed")
    assert store.data_version() == 4
    assert store.get("a") is None


def test_overwrite_replaces_value():
    store = KeyValueStorage()
    store.set("a", "1")
    store.set("a", "2")
    assert store.get("a").value == "2"


def test_set_with_expiration_stamps_future_time():
    store = KeyValueStorage()
    before = time.time_ns()
    store.set_with_expiration("k", "v", timedelta(seconds=60))
    item = store.get("k")
    assert item.value == "v"
    assert item.expiration >= before + 60 * 1_000_000_000
    assert store.data_version() == 1