"""JSON Feed 1.1 output — https://www.jsonfeed.org/version/1.1/"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TextIO

from feedforge.models import Feed, Item
from feedforge.serialize import compact, to_json, write_json
from feedforge.utils import (
    RFC3339, any_time_format, first_of, stable_uuid, valid_author, valid_enclosure, valid_image,
    valid_link,
)

logger = logging.getLogger(__name__)

JSON_FEED_VERSION = "https://jsonfeed.org/version/1.1"


@dataclass
class JSONAuthor:
    name: str = ""
    url: str = ""
    avatar: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return compact({"name": self.name, "url": self.url, "avatar": self.avatar})


@dataclass
class JSONAttachment:
    url: str
    mime_type: str = ""
    title: str = ""
    size_in_bytes: Optional[int] = None
    duration_in_seconds: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return compact({
            "url": self.url,
            "mime_type": self.mime_type,
            "title": self.title,
            "size_in_bytes": self.size_in_bytes,
            "duration_in_seconds": self.duration_in_seconds,
        })


@dataclass
class JSONItem:
    id: str
    url: str = ""
    external_url: str = ""
    title: str = ""
    content_html: str = ""
    content_text: str = ""
    summary: str = ""
    image: str = ""
    banner_image: str = ""
    date_published: str = ""
    date_modified: str = ""
    authors: List[JSONAuthor] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    attachments: List[JSONAttachment] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return compact({
            "id": self.id,
            "url": self.url,
            "external_url": self.external_url,
            "title": self.title,
            "content_html": self.content_html,
            "content_text": self.content_text,
            "summary": self.summary,
            "image": self.image,
            "banner_image": self.banner_image,
            "date_published": self.date_published,
            "date_modified": self.date_modified,
            "authors": [a.to_dict() for a in self.authors],
            "tags": self.tags,
            "attachments": [a.to_dict() for a in self.attachments],
        }, keep=("id",))


@dataclass
class JSONFeed:
    title: str = ""
    version: str = JSON_FEED_VERSION
    home_page_url: str = ""
    feed_url: str = ""
    description: str = ""
    user_comment: str = ""
    next_url: str = ""
    icon: str = ""
    favicon: str = ""
    language: str = ""
    expired: Optional[bool] = None
    authors: List[JSONAuthor] = field(default_factory=list)
    items: List[JSONItem] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return compact({
            "version": self.version,
            "title": self.title,
            "home_page_url": self.home_page_url,
            "feed_url": self.feed_url,
            "description": self.description,
            "user_comment": self.user_comment,
            "next_url": self.next_url,
            "icon": self.icon,
            "favicon": self.favicon,
            "language": self.language,
            "expired": self.expired,
            "authors": [a.to_dict() for a in self.authors],
            "items": [i.to_dict() for i in self.items],
        }, keep=("items",))


def _size(length: str) -> Optional[int]:
    try:
        return int(length) if length else None
    except ValueError:
        return None


def new_json_item(i: Item, index: int = 0) -> JSONItem:
    link_href = i.link.href if valid_link(i.link) else ""
    item = JSONItem(
        # JSON Feed requires an id on every item
        id=first_of(i.id, link_href, i.title) or stable_uuid(str(index), i.description),
        url=link_href,
        title=i.title,
        summary=i.description,
        content_html=i.content,
        date_published=any_time_format(RFC3339, i.created, i.updated),
        date_modified=any_time_format(RFC3339, i.updated),
    )
    if valid_link(i.source):
        item.external_url = i.source.href
    if valid_author(i.author):
        item.authors.append(JSONAuthor(name=first_of(i.author.name, i.author.email)))
    if valid_enclosure(i.enclosure):
        enc = i.enclosure
        if enc.type.startswith("image/"):
            item.image = enc.url
        item.attachments.append(JSONAttachment(url=enc.url, mime_type=enc.type,
                                               size_in_bytes=_size(enc.length)))
    return item


class JSONFeedFormatter:
    """Format a feed as a JSON Feed 1.1 document."""

    name = "json"

    def __init__(self, indent: Optional[int] = 2):
        self.indent = indent

    def build(self, feed: Feed) -> JSONFeed:
        jf = JSONFeed(
            title=feed.title,
            description=first_of(feed.description, feed.subtitle),
        )
        if valid_link(feed.link):
            jf.home_page_url = feed.link.href
        if valid_author(feed.author):
            jf.authors.append(JSONAuthor(name=first_of(feed.author.name, feed.author.email)))
        if valid_image(feed.image):
            jf.icon = feed.image.url
        jf.items = [new_json_item(i, n) for n, i in enumerate(feed.items)]
        logger.debug(f"[JSON] Built feed with {len(jf.items)} items")
        return jf

    def format(self, feed: Feed) -> str:
        return to_json(self.build(feed), indent=self.indent)

    def write(self, feed: Feed, sink: TextIO) -> None:
        write_json(self.build(feed), sink, indent=self.indent)
