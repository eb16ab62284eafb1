"""
Durable session cache stores.

The file-backed store must survive a "restart" (a new instance over the same
path) and treat unreadable content as empty instead of failing.
"""
from __future__ import annotations

from pathlib import Path

from backend.identity_access.stores import FileSessionCache, InMemorySessionCache


def test_in_memory_cache_get_set_delete():
    cache = InMemorySessionCache()
    assert cache.get("k") is None
    cache.set("k", "v")
    assert cache.get("k") == "v"
    cache.delete("k")
    cache.delete("k")
    assert cache.get("k") is None


def test_file_cache_persists_across_instances(tmp_path: Path):
    path = tmp_path / "nested" / "session.json"
    FileSessionCache(path).set("portal.user", '{"id": "1"}')
    assert path.exists()

    reopened = FileSessionCache(path)
    assert reopened.get("portal.user") == '{"id": "1"}'


def test_file_cache_delete_last_key_removes_file(tmp_path: Path):
    path = tmp_path / "session.json"
    cache = FileSessionCache(path)
    cache.set("a", "1")
    cache.set("b", "2")
    cache.delete("a")
    assert cache.get("b") == "2"
    cache.delete("b")
    assert not path.exists()
    # deleting from a missing file is a no-op
    cache.delete("b")


def test_file_cache_treats_garbage_as_empty(tmp_path: Path):
    path = tmp_path / "session.json"
    path.write_text("{not json", encoding="utf-8")
    cache = FileSessionCache(path)
    assert cache.get("portal.user") is None

    path.write_text('["a", "list"]', encoding="utf-8")
    assert cache.get("portal.user") is None

    # a write replaces the unreadable content
    cache.set("portal.user", "x")
    assert FileSessionCache(path).get("portal.user") == "x"


def test_file_cache_treats_deeply_nested_json_as_empty(tmp_path: Path):
    path = tmp_path / "session.json"
    path.write_text("[" * 100000 + "]" * 100000, encoding="utf-8")
    assert FileSessionCache(path).get("portal.user") is None
