from __future__ import annotations

import json

from treehole.services.likes import LikeStore


def test_likes_persist_between_instances(tmp_path):
    path = tmp_path / "likes.json"
    store = LikeStore(path)
    assert store.like("7", 0) == 1
    assert store.like("7", 1) == 2

    reloaded = LikeStore(path)
    assert reloaded.get("7") == 2
    assert reloaded.is_liked("7")
    assert json.loads(path.read_text(encoding="utf-8")) == {"7": 2}


def test_seed_count_used_until_liked_locally():
    store = LikeStore()
    assert store.effective_count("3", 4) == 4
    assert store.effective_count("3", None) == 0
    assert store.like("3", 4) == 5
    assert store.effective_count("3", 4) == 5


def test_unreadable_store_starts_empty(tmp_path):
    path = tmp_path / "likes.json"
    path.write_text("{not json", encoding="utf-8")
    store = LikeStore(path)
    assert store.get("1") is None
    assert not store.is_liked("1")
