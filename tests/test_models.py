"""Tests for the generic feed model."""
import io
from datetime import datetime, timezone

import pytest

from feedforge.errors import UnknownFormatError
from feedforge.models import Feed, Item, Link


def _item(title="Post", **kw):
    return Item(title=title, **kw)


class TestItem:
    def test_string_timestamps_coerced(self):
        item = _item(created="2026-02-12T06:00:00Z")
        assert item.created == datetime(2026, 2, 12, 6, 0, tzinfo=timezone.utc)

    def test_naive_timestamps_become_utc(self):
        item = _item(updated=datetime(2026, 2, 12, 6, 0))
        assert item.updated.tzinfo == timezone.utc

    def test_defaults_empty(self):
        item = Item()
        assert item.link is None
        assert item.created is None
        assert item.is_permalink is None


class TestFeed:
    def test_add_preserves_order(self):
        feed = Feed(title="Blog")
        feed.add(_item("one"))
        feed.add_item(title="two", link=Link(href="http://x/2"))
        assert [i.title for i in feed.items] == ["one", "two"]
        assert feed.items[1].link.href == "http://x/2"

    def test_items_not_shared_between_feeds(self):
        a, b = Feed(), Feed()
        a.add(_item())
        assert b.items == []

    def test_sort(self):
        feed = Feed(items=[_item("b"), _item("a"), _item("c")])
        feed.sort(key=lambda i: i.title)
        assert [i.title for i in feed.items] == ["a", "b", "c"]
        feed.sort(key=lambda i: i.title, reverse=True)
        assert [i.title for i in feed.items] == ["c", "b", "a"]

    def test_to_methods_dispatch(self, minimal_feed):
        assert minimal_feed.to_rss().lstrip().startswith("<?xml")
        assert "<feed" in minimal_feed.to_atom()
        assert "<opml" in minimal_feed.to_opml()
        assert '"version"' in minimal_feed.to_json()
        assert minimal_feed.to_html().startswith("<!doctype html>")

    def test_write_methods_match_to_methods(self, minimal_feed):
        for fmt in ("rss", "atom", "opml", "json", "html"):
            buf = io.StringIO()
            getattr(minimal_feed, f"write_{fmt}")(buf)
            assert buf.getvalue() == getattr(minimal_feed, f"to_{fmt}")()

    def test_render_unknown_format(self, minimal_feed):
        with pytest.raises(UnknownFormatError):
            minimal_feed.render("rdf")
