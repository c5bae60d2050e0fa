from pathlib import Path
from unittest import mock

import pytest

from srcmapper.diagnostics import Diagnostics
from srcmapper.processor.backfill import MissingContentPolicy, backfill
from srcmapper.utils.paths import is_url, resolve


@pytest.fixture
def resolver(assets: Path):
    return lambda _i, source: None if is_url(source) else resolve(assets, source)


def test_fills_missing_entries(resolver) -> None:
    result = backfill(["test1.js", "missing.js"], None, resolver, Diagnostics("test"))
    assert result == ["test1\n", None]


def test_drop_policy_leaves_out_trailing_failures(resolver) -> None:
    result = backfill(["missing.js", "test1.js", "gone.js"], [], resolver, Diagnostics("test"), MissingContentPolicy.DROP)
    assert result == [None, "test1\n"]


def test_existing_content_is_not_reread(resolver) -> None:
    with mock.patch("srcmapper.processor.backfill.read_text") as read_text:
        result = backfill(["test1.js"], ["cached"], resolver, Diagnostics("test"))
    read_text.assert_not_called()
    assert result == ["cached"]


def test_url_sources_skip_io(resolver) -> None:
    with mock.patch("srcmapper.processor.backfill.read_text") as read_text:
        result = backfill(["https://cdn.example.com/a.js", "webpack://app/b.js"], None, resolver, Diagnostics("test"))
    read_text.assert_not_called()
    assert result == [None, None]


def test_is_idempotent(resolver) -> None:
    first = backfill(["test1.js", "missing.js"], None, resolver, Diagnostics("test"))
    second = backfill(["test1.js", "missing.js"], first, resolver, Diagnostics("test"))
    assert second == first


def test_known_paths_are_used_instead_of_disk(resolver, assets: Path) -> None:
    known = {assets / "test1.js": "in memory"}
    assert backfill(["test1.js"], None, resolver, Diagnostics("test"), known=known) == ["in memory"]


def test_strips_byte_order_mark(resolver, assets: Path) -> None:
    (assets / "bom.js").write_text("\ufeffvar a;", encoding="utf-8")
    assert backfill(["bom.js"], None, resolver, Diagnostics("test")) == ["var a;"]


def test_unreadable_source_is_a_miss(resolver, assets: Path) -> None:
    (assets / "binary.js").write_bytes(b"\xff\xfe\xfa")
    assert backfill(["binary.js"], None, resolver, Diagnostics("test")) == [None]
