"""Comment loading: cache window, coalescing and stale-result handling."""
from __future__ import annotations

import asyncio

import pytest

from conftest import FakeBoard, FakeClock, comments_path, make_session


@pytest.mark.asyncio
async def test_second_open_within_window_uses_cache(board: FakeBoard, clock: FakeClock):
    board.add_post("hello", post_id=1)
    board.add_comment("1", "first")
    session = make_session(board, clock=clock)

    await session.load_posts(1)
    card = session.card("1")
    await card.toggle_comments()
    await card.toggle_comments()
    clock.advance(120)
    await card.toggle_comments()
    await session.aclose()

    assert board.count("GET", comments_path(1)) == 1
    assert session.coordinator.network_calls == 1
    assert card.section.visible is True
    assert str(card.section.status.html) == "1 条评论 · 2分钟前更新"
    assert "first" in card.section.comments.html


@pytest.mark.asyncio
async def test_expired_entry_goes_back_to_network(board: FakeBoard, clock: FakeClock):
    board.add_post("hello", post_id=1)
    session = make_session(board, clock=clock)

    await session.load_posts(1)
    await session.load_comments("1")
    clock.advance(3 * 60 + 1)
    await session.load_comments("1")
    await session.aclose()

    assert board.count("GET", comments_path(1)) == 2


@pytest.mark.asyncio
async def test_forced_refresh_fetches_and_stamps_entry(board: FakeBoard, clock: FakeClock):
    board.add_post("hello", post_id=1)
    session = make_session(board, clock=clock)

    await session.load_posts(1)
    card = session.card("1")
    await card.toggle_comments()
    first = session.coordinator.cache.get("1").fetched_at
    clock.advance(30)
    board.add_comment("1", "late reply")
    await card.section.refresh()
    await session.aclose()

    entry = session.coordinator.cache.get("1")
    assert board.count("GET", comments_path(1)) == 2
    assert entry.fetched_at == first + 30
    assert entry.thread.total == 1
    assert "late reply" in card.section.comments.html
    assert card.comment_count == 1
    assert str(card.section.status.html) == "1 条评论 · 刚刚更新"


@pytest.mark.asyncio
async def test_failed_refresh_keeps_fresh_entry(board: FakeBoard, clock: FakeClock):
    board.add_post("hello", post_id=1)
    board.add_comment("1", "kept")
    session = make_session(board, clock=clock)

    await session.load_posts(1)
    card = session.card("1")
    await card.toggle_comments()
    entry = session.coordinator.cache.get("1")

    clock.advance(60)
    board.failures[("GET", comments_path(1))] = 500
    assert await card.section.refresh() is None
    assert 'data-error-kind="server"' in card.section.comments.html

    assert session.coordinator.cache.get("1") is entry
    assert session.coordinator.cache.is_fresh(entry)
    thread = await session.load_comments("1")
    await session.aclose()

    assert thread is entry.thread
    assert board.count("GET", comments_path(1)) == 2


@pytest.mark.asyncio
async def test_concurrent_loads_share_one_request(board: FakeBoard):
    board.add_post("hello", post_id=1)
    board.add_comment("1", "shared")
    session = make_session(board)

    await session.load_posts(1)
    release = board.hold("GET", comments_path(1))
    first = asyncio.create_task(session.load_comments("1"))
    second = asyncio.create_task(session.load_comments("1"))
    await asyncio.sleep(0.01)
    assert session.coordinator.in_flight("1")
    release.set()
    first_result, second_result = await asyncio.gather(first, second)
    await session.aclose()

    assert board.count("GET", comments_path(1)) == 1
    assert first_result is second_result
    assert not session.coordinator.in_flight("1")


@pytest.mark.asyncio
async def test_invalidated_fetch_never_repopulates_cache(board: FakeBoard):
    board.add_post("hello", post_id=1)
    board.add_comment("1", "old")
    session = make_session(board)

    await session.load_posts(1)
    release = board.hold("GET", comments_path(1))
    stale_task = asyncio.create_task(session.load_comments("1"))
    await asyncio.sleep(0.01)

    board.add_comment("1", "new")
    session.coordinator.invalidate("1")
    fresh_task = asyncio.create_task(session.load_comments("1"))
    await asyncio.sleep(0.01)
    # the newer load waits for the older one instead of racing it
    assert board.count("GET", comments_path(1)) == 1

    release.set()
    stale, fresh = await asyncio.gather(stale_task, fresh_task)
    await session.aclose()

    assert board.count("GET", comments_path(1)) == 2
    assert stale.total == 1
    assert fresh.total == 2
    assert session.coordinator.cache.get("1").thread.total == 2


@pytest.mark.asyncio
async def test_timeout_shows_retryable_error(board: FakeBoard):
    board.add_post("hello", post_id=1)
    session = make_session(board, timeout=0.05)

    await session.load_posts(1)
    card = session.card("1")
    board.delay = 0.3
    result = await card.toggle_comments()
    await session.aclose()

    html = card.section.comments.html
    assert result is None
    assert 'data-error-kind="timeout"' in html
    assert "加载评论超时" in html
    assert "重试" in html
    assert "/fragments/posts/1/comments?refresh=1" in html
    assert str(card.section.status.html) == "加载失败"
    assert "1" not in session.coordinator.cache
    assert not session.coordinator.in_flight("1")


@pytest.mark.asyncio
async def test_retry_after_timeout_fills_cache(board: FakeBoard, clock: FakeClock):
    board.add_post("hello", post_id=1)
    board.add_comment("1", "finally")
    session = make_session(board, clock=clock, timeout=0.05)

    await session.load_posts(1)
    card = session.card("1")
    board.delay = 0.3
    await card.toggle_comments()
    assert "1" not in session.coordinator.cache

    board.delay = 0.0
    clock.advance(10)
    thread = await card.section.retry()
    await session.aclose()

    entry = session.coordinator.cache.get("1")
    assert thread is not None and thread.total == 1
    assert entry.fetched_at == clock.now
    assert "finally" in card.section.comments.html
    assert str(card.section.status.html) == "1 条评论 · 刚刚更新"
    assert board.count("GET", comments_path(1)) == 2


@pytest.mark.asyncio
async def test_server_error_is_shown_in_section(board: FakeBoard):
    board.add_post("hello", post_id=1)
    board.failures[("GET", comments_path(1))] = 500
    session = make_session(board)

    await session.load_posts(1)
    card = session.card("1")
    await card.toggle_comments()
    await session.aclose()

    assert "加载评论失败: 服务器错误: 500 (boom)" in card.section.comments.html
    assert 'data-error-kind="server"' in card.section.comments.html


@pytest.mark.asyncio
async def test_result_for_replaced_card_is_dropped(board: FakeBoard):
    board.add_post("hello", post_id=1)
    board.add_comment("1", "reply")
    session = make_session(board)

    await session.load_posts(1)
    old_card = session.card("1")
    release = board.hold("GET", comments_path(1))
    pending = asyncio.create_task(old_card.toggle_comments())
    await asyncio.sleep(0.01)
    await session.load_posts(1)
    release.set()
    await pending
    await session.aclose()

    assert old_card.attached is False
    assert "reply" not in old_card.section.comments.html
    assert str(old_card.section.status.html) == "评论"
    assert session.card("1") is not old_card
    assert session.card("1").comment_count == 1
