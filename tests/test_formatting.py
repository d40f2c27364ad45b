from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from treehole.ui.formatting import UNKNOWN_TIME, format_cache_age, format_exact, format_relative, render_content

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "delta, expected",
    [
        (timedelta(seconds=30), "刚刚"),
        (timedelta(minutes=5), "5 分钟前"),
        (timedelta(hours=3), "3 小时前"),
        (timedelta(days=2), "2 天前"),
        (timedelta(days=45), "2026-09-04 12:00"),
    ],
)
def test_relative_time(delta, expected):
    assert format_relative(NOW - delta, now=NOW) == expected


def test_missing_timestamp():
    assert format_relative(None) == UNKNOWN_TIME
    assert format_exact(None) == ""


def test_naive_timestamps_are_treated_as_utc():
    assert format_exact(datetime(2026, 1, 2, 3, 4, 5)) == "2026-01-02 03:04:05"


@pytest.mark.parametrize(
    "age, expected",
    [(0, "刚刚更新"), (59, "刚刚更新"), (150, "2分钟前更新"), (7200, "2小时前更新"), (172800, "2天前更新")],
)
def test_cache_age_label(age, expected):
    assert format_cache_age(age) == expected


def test_render_content_normalizes_br_tags():
    assert render_content("a<br/>b<BR>c\r\nd") == "a<br>b<br>c<br>d"
    assert render_content("") == ""
    assert render_content("<img src=x onerror=alert(1)>") == "&lt;img src=x onerror=alert(1)&gt;"
