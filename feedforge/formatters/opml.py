"""OPML 2.0 output — http://opml.org/spec2.opml"""
import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import List, TextIO

from feedforge.models import Feed, Item
from feedforge.serialize import attrs, sub, to_xml, write_xml
from feedforge.utils import RFC822, any_time_format, valid_author, valid_link

logger = logging.getLogger(__name__)


@dataclass
class OpmlOutline:
    text: str = ""  # required, always emitted
    type: str = ""
    is_comment: str = ""
    is_breakpoint: str = ""
    created: str = ""
    category: str = ""
    # subscription-list attributes (type="rss")
    title: str = ""
    description: str = ""
    xml_url: str = ""
    html_url: str = ""
    language: str = ""
    version: str = ""
    # inclusion attributes (type="link" / "include")
    url: str = ""
    outlines: List["OpmlOutline"] = field(default_factory=list)

    def to_element(self) -> ET.Element:
        el = ET.Element("outline", {"text": self.text})
        el.attrib.update(attrs(
            type=self.type,
            isComment=self.is_comment,
            isBreakpoint=self.is_breakpoint,
            created=self.created,
            category=self.category,
            title=self.title,
            description=self.description,
            xmlUrl=self.xml_url,
            htmlUrl=self.html_url,
            language=self.language,
            version=self.version,
            url=self.url,
        ))
        for child in self.outlines:
            el.append(child.to_element())
        return el


@dataclass
class OpmlHead:
    title: str = ""
    date_created: str = ""
    date_modified: str = ""
    owner_name: str = ""
    owner_email: str = ""
    owner_id: str = ""
    docs: str = ""
    expansion_state: str = ""
    vert_scroll_state: int = 0
    window_top: int = 0
    window_left: int = 0
    window_bottom: int = 0
    window_right: int = 0

    def to_element(self) -> ET.Element:
        head = ET.Element("head")
        sub(head, "title", self.title)
        sub(head, "dateCreated", self.date_created)
        sub(head, "dateModified", self.date_modified)
        sub(head, "ownerName", self.owner_name)
        sub(head, "ownerEmail", self.owner_email)
        sub(head, "ownerId", self.owner_id)
        sub(head, "docs", self.docs)
        sub(head, "expansionState", self.expansion_state)
        sub(head, "vertScrollState", self.vert_scroll_state)
        sub(head, "windowTop", self.window_top)
        sub(head, "windowLeft", self.window_left)
        sub(head, "windowBottom", self.window_bottom)
        sub(head, "windowRight", self.window_right)
        return head


@dataclass
class OpmlBody:
    outlines: List[OpmlOutline] = field(default_factory=list)

    def to_element(self) -> ET.Element:
        body = ET.Element("body")
        for outline in self.outlines:
            body.append(outline.to_element())
        return body


@dataclass
class OpmlFeed:
    head: OpmlHead = field(default_factory=OpmlHead)
    body: OpmlBody = field(default_factory=OpmlBody)
    version: str = "2.0"

    def to_element(self) -> ET.Element:
        opml = ET.Element("opml", version=self.version)
        opml.append(self.head.to_element())
        opml.append(self.body.to_element())
        return opml


def new_subscription_list_outline(item: Item) -> OpmlOutline:
    """Build a ``type="rss"`` outline pointing at another feed.

    The default conversion never emits these; callers assemble them by hand.
    """
    outline = OpmlOutline(
        text=item.title,
        type="rss",
        created=any_time_format(RFC822, item.created, item.updated),
        title=item.title,
        description=item.description,
    )
    if valid_link(item.source):
        outline.xml_url = item.source.href
        if valid_link(item.link):
            outline.html_url = item.link.href
    elif valid_link(item.link):
        outline.xml_url = item.link.href
    return outline


def new_inclusion_outline(item: Item) -> OpmlOutline:
    """Build a ``type="link"`` outline referencing the item's page."""
    outline = OpmlOutline(
        text=item.title,
        type="link",
        created=any_time_format(RFC822, item.created, item.updated),
    )
    if valid_link(item.source):
        outline.url = item.source.href
        if valid_link(item.link):
            outline.html_url = item.link.href
    elif valid_link(item.link):
        outline.url = item.link.href
    return outline


class OPMLFormatter:
    """Format a feed as an OPML 2.0 outline of its items."""

    name = "opml"

    def __init__(self, indent: int = 2):
        self.indent = indent

    def build(self, feed: Feed) -> OpmlFeed:
        head = OpmlHead(
            title=feed.title,
            date_created=any_time_format(RFC822, feed.created, feed.updated),
            # a feed never modified keeps no modification date
            date_modified=any_time_format(RFC822, feed.updated),
        )
        if valid_author(feed.author):
            head.owner_name = feed.author.name
            head.owner_email = feed.author.email
            head.owner_id = feed.author.email

        body = OpmlBody(outlines=[new_inclusion_outline(i) for i in feed.items])
        logger.debug(f"[OPML] Built {len(body.outlines)} outlines for {feed.title!r}")
        return OpmlFeed(head=head, body=body)

    def format(self, feed: Feed) -> str:
        return to_xml(self.build(feed), indent=" " * self.indent)

    def write(self, feed: Feed, sink: TextIO) -> None:
        write_xml(self.build(feed), sink, indent=" " * self.indent)
