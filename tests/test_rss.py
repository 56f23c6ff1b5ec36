"""Tests for RSS 2.0 output."""
import xml.etree.ElementTree as ET
from datetime import datetime, timezone

import feedparser

from feedforge.formatters.rss_out import CONTENT_NS, RSSFormatter, new_rss_item
from feedforge.models import Author, Enclosure, Feed, Image, Item, Link
from feedforge.serialize import to_xml

CREATED = datetime(2026, 2, 12, 6, 0, tzinfo=timezone.utc)
UPDATED = datetime(2026, 2, 13, 18, 30, tzinfo=timezone.utc)


def _channel(feed):
    root = ET.fromstring(RSSFormatter().format(feed))
    assert root.tag == "rss"
    assert root.get("version") == "2.0"
    return root.find("channel")


class TestRSSChannel:
    def test_basic_fields(self, full_feed):
        ch = _channel(full_feed)
        assert ch.find("title").text == "jmoiron.net blog"
        assert ch.find("link").text == "http://jmoiron.net/blog"
        assert ch.find("description").text == "discussion about tech, footie, photos"
        assert ch.find("managingEditor").text == "jmoiron@jmoiron.net (Jason Moiron)"
        assert ch.find("copyright").text.startswith("This work is copyright")

    def test_pub_date_and_last_build(self):
        ch = _channel(Feed(title="x", created=CREATED))
        assert ch.find("pubDate").text == "Thu, 12 Feb 2026 06:00:00 +0000"
        # lastBuildDate only reflects an explicit update
        assert ch.find("lastBuildDate") is None

    def test_pub_date_falls_back_to_updated(self):
        ch = _channel(Feed(title="x", updated=UPDATED))
        assert ch.find("pubDate").text == "Fri, 13 Feb 2026 18:30:00 +0000"
        assert ch.find("lastBuildDate").text == "Fri, 13 Feb 2026 18:30:00 +0000"

    def test_managing_editor_single_field(self):
        assert _channel(Feed(author=Author(email="a@b"))).find("managingEditor").text == "a@b"
        assert _channel(Feed(author=Author(name="Ann"))).find("managingEditor").text == "Ann"

    def test_optional_fields_absent(self, minimal_feed):
        ch = _channel(minimal_feed)
        for tag in ("managingEditor", "pubDate", "lastBuildDate", "copyright", "image", "link"):
            assert ch.find(tag) is None

    def test_image(self, full_feed):
        image = _channel(full_feed).find("image")
        assert image.find("url").text == "http://jmoiron.net/logo.png"
        assert image.find("link").text == "http://jmoiron.net"
        assert image.find("width") is None

    def test_invalid_image_omitted(self):
        assert _channel(Feed(title="x", image=Image(title="no url"))).find("image") is None

    def test_tree_is_editable(self, minimal_feed):
        tree = RSSFormatter().build(minimal_feed)
        tree.generator = "feedforge"
        tree.ttl = 60
        ch = ET.fromstring(to_xml(tree)).find("channel")
        assert ch.find("generator").text == "feedforge"
        assert ch.find("ttl").text == "60"


class TestRSSItem:
    def test_item_fields(self, full_feed):
        items = _channel(full_feed).findall("item")
        assert len(items) == 3
        first = items[0]
        assert first.find("title").text == "Limiting Concurrency in Go"
        assert first.find("link").text == "http://jmoiron.net/blog/limiting-concurrency-in-go/"
        assert first.find("guid").text == "post-1"
        assert first.find("guid").get("isPermaLink") is None
        assert first.find("author").text == "Jason Moiron"
        assert first.find("pubDate").text == "Thu, 12 Feb 2026 06:00:00 +0000"

    def test_content_encoded(self, full_feed):
        second = _channel(full_feed).findall("item")[1]
        assert second.find(f"{{{CONTENT_NS}}}encoded").text == "<p>Full text</p>"
        assert second.find("source").text == "http://jmoiron.net/feed.xml"

    def test_enclosure_requires_type_and_length(self):
        full = new_rss_item(Item(enclosure=Enclosure(url="http://x/a.mp3", type="audio/mpeg",
                                                     length="10")))
        assert full.enclosure.url == "http://x/a.mp3"
        partial = new_rss_item(Item(enclosure=Enclosure(url="http://x/a.mp3")))
        assert partial.enclosure is None

    def test_permalink_flag(self):
        el = new_rss_item(Item(id="http://x/1", is_permalink=False)).to_element()
        assert el.find("guid").get("isPermaLink") == "false"

    def test_no_guid_without_id(self):
        assert new_rss_item(Item(title="t")).to_element().find("guid") is None

    def test_item_pub_date_uses_created_only(self):
        el = new_rss_item(Item(created=CREATED)).to_element()
        assert el.find("pubDate").text == "Thu, 12 Feb 2026 06:00:00 +0000"

    def test_description_escaped_in_xml(self):
        output = RSSFormatter().format(Feed(items=[Item(description="<b>x</b> & y")]))
        assert "&lt;b&gt;x&lt;/b&gt; &amp; y" in output


class TestRSSConsumable:
    def test_feedparser_reads_output(self, full_feed):
        parsed = feedparser.parse(RSSFormatter().format(full_feed))
        assert parsed.version == "rss20"
        assert parsed.feed.title == "jmoiron.net blog"
        assert len(parsed.entries) == 3
        assert parsed.entries[0].link == "http://jmoiron.net/blog/limiting-concurrency-in-go/"
        assert parsed.entries[0].published_parsed[:3] == (2026, 2, 12)

    def test_empty_feed(self):
        ch = _channel(Feed(title="Empty"))
        assert ch.findall("item") == []
