from __future__ import annotations

from treehole.schemas import Comment, CommentThread
from treehole.services.comment_cache import CommentCache

from conftest import FakeClock


def _thread(*contents: str) -> CommentThread:
    comments = [Comment(id=str(index), content=text) for index, text in enumerate(contents)]
    return CommentThread(comments=comments, total=len(comments))


def test_entry_fresh_for_three_minutes():
    clock = FakeClock()
    cache = CommentCache(clock)
    entry = cache.put("1", _thread("a"))

    clock.advance(180)
    assert cache.is_fresh(entry)
    clock.advance(1)
    assert not cache.is_fresh(entry)
    assert cache.age_seconds(entry) == 181


def test_put_replaces_whole_snapshot():
    clock = FakeClock()
    cache = CommentCache(clock)
    cache.put("1", _thread("a", "b"))
    clock.advance(10)
    cache.put("1", _thread("c"))

    entry = cache.get("1")
    assert [comment.content for comment in entry.thread.comments] == ["c"]
    assert entry.fetched_at == clock.now
    assert len(cache) == 1


def test_invalidate_drops_entry():
    cache = CommentCache(FakeClock())
    cache.put(1, _thread("a"))
    assert "1" in cache
    cache.invalidate("1")
    cache.invalidate("never-cached")
    assert cache.get("1") is None
    assert not cache.is_fresh(None)
