"""Tests for JSON Feed output."""
import json
from datetime import datetime, timezone

from feedforge.formatters.jsonfeed import JSON_FEED_VERSION, JSONFeedFormatter, new_json_item
from feedforge.models import Author, Enclosure, Feed, Item, Link
from feedforge.serialize import to_json

CREATED = datetime(2026, 2, 12, 6, 0, tzinfo=timezone.utc)
UPDATED = datetime(2026, 2, 13, 18, 30, tzinfo=timezone.utc)


def _load(feed, **kw):
    return json.loads(JSONFeedFormatter(**kw).format(feed))


class TestJSONFeed:
    def test_top_level(self, full_feed):
        data = _load(full_feed)
        assert data["version"] == JSON_FEED_VERSION
        assert data["title"] == "jmoiron.net blog"
        assert data["home_page_url"] == "http://jmoiron.net/blog"
        assert data["description"] == "discussion about tech, footie, photos"
        assert data["icon"] == "http://jmoiron.net/logo.png"
        assert data["authors"] == [{"name": "Jason Moiron"}]
        assert len(data["items"]) == 3

    def test_empty_feed_keeps_items(self):
        data = _load(Feed())
        assert data == {"version": JSON_FEED_VERSION, "items": []}

    def test_item_fields(self, full_feed):
        second = _load(full_feed)["items"][1]
        assert second["url"] == "http://jmoiron.net/blog/logicless-template-redux/"
        assert second["external_url"] == "http://jmoiron.net/feed.xml"
        assert second["summary"] == "More thoughts on logicless templates"
        assert second["content_html"] == "<p>Full text</p>"
        assert second["image"] == "http://jmoiron.net/cover.jpg"
        assert second["attachments"] == [
            {"url": "http://jmoiron.net/cover.jpg", "mime_type": "image/jpeg", "size_in_bytes": 123}
        ]
        assert second["date_published"] == "2026-02-12T06:00:00Z"
        assert second["date_modified"] == "2026-02-13T18:30:00Z"

    def test_item_only_created(self):
        item = _load(Feed(items=[Item(id="1", created=CREATED)]))["items"][0]
        assert item["date_published"] == "2026-02-12T06:00:00Z"
        assert "date_modified" not in item

    def test_item_id_fallbacks(self):
        assert new_json_item(Item(id="x", link=Link(href="http://a"))).id == "x"
        assert new_json_item(Item(link=Link(href="http://a"), title="t")).id == "http://a"
        assert new_json_item(Item(title="t")).id == "t"
        anonymous = new_json_item(Item(description="d"), 3)
        assert anonymous.id and anonymous.id == new_json_item(Item(description="d"), 3).id

    def test_non_image_enclosure_is_attachment_only(self):
        item = new_json_item(Item(enclosure=Enclosure(url="http://a/x.mp3", type="audio/mpeg",
                                                       length="n/a")))
        assert item.image == ""
        assert item.attachments[0].size_in_bytes is None

    def test_missing_optionals_absent(self, minimal_feed):
        item = _load(minimal_feed)["items"][0]
        assert set(item) == {"id", "url", "title"}

    def test_author_email_only(self):
        data = _load(Feed(author=Author(email="a@b")))
        assert data["authors"] == [{"name": "a@b"}]

    def test_compact_indent(self, minimal_feed):
        output = JSONFeedFormatter(indent=None).format(minimal_feed)
        assert "\n" not in output

    def test_non_ascii_kept(self):
        assert "©" in JSONFeedFormatter().format(Feed(title="©"))

    def test_tree_is_editable(self, minimal_feed):
        tree = JSONFeedFormatter().build(minimal_feed)
        tree.next_url = "https://x/feed.json?page=2"
        assert json.loads(to_json(tree))["next_url"] == "https://x/feed.json?page=2"
