"""RSS 2.0 output formatter — https://www.rssboard.org/rss-specification"""
import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import List, Optional, TextIO

from feedforge.models import Feed, Item
from feedforge.serialize import sub, to_xml, write_xml
from feedforge.utils import (
    RFC1123Z, any_time_format, first_of, valid_author, valid_enclosure, valid_image, valid_link,
)

logger = logging.getLogger(__name__)

CONTENT_NS = "http://purl.org/rss/1.0/modules/content/"


@dataclass
class RssImage:
    url: str
    title: str = ""
    link: str = ""
    width: int = 0
    height: int = 0

    def to_element(self) -> ET.Element:
        image = ET.Element("image")
        sub(image, "url", self.url)
        sub(image, "title", self.title)
        sub(image, "link", self.link)
        sub(image, "width", self.width)
        sub(image, "height", self.height)
        return image


@dataclass
class RssEnclosure:
    url: str
    length: str
    type: str

    def to_element(self) -> ET.Element:
        return ET.Element("enclosure", url=self.url, length=self.length, type=self.type)


@dataclass
class RssGuid:
    id: str
    is_permalink: Optional[bool] = None


@dataclass
class RssItem:
    title: str = ""
    link: str = ""
    description: str = ""
    content: str = ""
    author: str = ""
    category: str = ""
    comments: str = ""
    enclosure: Optional[RssEnclosure] = None
    guid: Optional[RssGuid] = None
    pub_date: str = ""
    source: str = ""

    def to_element(self) -> ET.Element:
        item = ET.Element("item")
        sub(item, "title", self.title)
        sub(item, "link", self.link)
        sub(item, "description", self.description)
        sub(item, "content:encoded", self.content)
        sub(item, "author", self.author)
        sub(item, "category", self.category)
        sub(item, "comments", self.comments)
        if self.enclosure is not None:
            item.append(self.enclosure.to_element())
        if self.guid is not None:
            sub(item, "guid", self.guid.id, isPermaLink=self.guid.is_permalink)
        sub(item, "pubDate", self.pub_date)
        sub(item, "source", self.source)
        return item


@dataclass
class RssFeed:
    title: str = ""
    link: str = ""
    description: str = ""
    language: str = ""
    copyright: str = ""
    managing_editor: str = ""
    web_master: str = ""
    pub_date: str = ""
    last_build_date: str = ""
    category: str = ""
    generator: str = ""
    docs: str = ""
    ttl: int = 0
    image: Optional[RssImage] = None
    items: List[RssItem] = field(default_factory=list)

    def to_element(self) -> ET.Element:
        rss = ET.Element("rss", {"version": "2.0", "xmlns:content": CONTENT_NS})
        channel = ET.SubElement(rss, "channel")
        sub(channel, "title", self.title)
        sub(channel, "link", self.link)
        sub(channel, "description", self.description)
        sub(channel, "language", self.language)
        sub(channel, "copyright", self.copyright)
        sub(channel, "managingEditor", self.managing_editor)
        sub(channel, "webMaster", self.web_master)
        sub(channel, "pubDate", self.pub_date)
        sub(channel, "lastBuildDate", self.last_build_date)
        sub(channel, "category", self.category)
        sub(channel, "generator", self.generator)
        sub(channel, "docs", self.docs)
        sub(channel, "ttl", self.ttl)
        if self.image is not None:
            channel.append(self.image.to_element())
        for item in self.items:
            channel.append(item.to_element())
        return rss


def _managing_editor(author) -> str:
    if not valid_author(author):
        return ""
    if author.email and author.name:
        return f"{author.email} ({author.name})"
    return first_of(author.email, author.name)


def new_rss_item(i: Item) -> RssItem:
    item = RssItem(
        title=i.title,
        description=i.description,
        content=i.content,
        pub_date=any_time_format(RFC1123Z, i.created, i.updated),
    )
    if i.id:
        item.guid = RssGuid(id=i.id, is_permalink=i.is_permalink)
    if valid_link(i.link):
        item.link = i.link.href
    if valid_link(i.source):
        item.source = i.source.href
    # RSS requires both type and length on an enclosure
    if valid_enclosure(i.enclosure) and i.enclosure.type and i.enclosure.length:
        item.enclosure = RssEnclosure(url=i.enclosure.url, length=i.enclosure.length,
                                      type=i.enclosure.type)
    if valid_author(i.author):
        item.author = first_of(i.author.name, i.author.email)
    return item


class RSSFormatter:
    """Format a feed as an RSS 2.0 channel."""

    name = "rss"

    def __init__(self, indent: int = 2):
        self.indent = indent

    def build(self, feed: Feed) -> RssFeed:
        channel = RssFeed(
            title=feed.title,
            link=feed.link.href if valid_link(feed.link) else "",
            description=first_of(feed.description, feed.subtitle),
            managing_editor=_managing_editor(feed.author),
            pub_date=any_time_format(RFC1123Z, feed.created, feed.updated),
            last_build_date=any_time_format(RFC1123Z, feed.updated),
            copyright=feed.copyright,
        )
        if valid_image(feed.image):
            img = feed.image
            channel.image = RssImage(url=img.url, title=img.title, link=img.link,
                                     width=img.width, height=img.height)
        channel.items = [new_rss_item(i) for i in feed.items]
        logger.debug(f"[RSS] Built channel with {len(channel.items)} items")
        return channel

    def format(self, feed: Feed) -> str:
        return to_xml(self.build(feed), indent=" " * self.indent)

    def write(self, feed: Feed, sink: TextIO) -> None:
        write_xml(self.build(feed), sink, indent=" " * self.indent)
