"""Atom 1.0 feed output — https://www.rfc-editor.org/rfc/rfc4287"""
import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import List, Optional, TextIO
from urllib.parse import urlparse

from feedforge.models import Feed, Item
from feedforge.serialize import attrs, sub, to_xml, write_xml
from feedforge.utils import (
    DATE_ONLY, RFC3339, any_time_format, first_of, stable_uuid, valid_author, valid_enclosure,
    valid_image, valid_link,
)

logger = logging.getLogger(__name__)

ATOM_NS = "http://www.w3.org/2005/Atom"


@dataclass
class AtomPerson:
    name: str = ""
    email: str = ""
    uri: str = ""

    def to_element(self, tag: str = "author") -> ET.Element:
        person = ET.Element(tag)
        sub(person, "name", self.name)
        sub(person, "email", self.email)
        sub(person, "uri", self.uri)
        return person


@dataclass
class AtomLink:
    href: str
    rel: str = ""
    type: str = ""
    length: str = ""

    def to_element(self) -> ET.Element:
        return ET.Element("link", attrs(href=self.href, rel=self.rel, type_=self.type,
                                        length=self.length))


@dataclass
class AtomText:
    """Text construct (summary/content) with a ``type`` attribute."""

    content: str
    type: str = "html"

    def to_element(self, tag: str) -> ET.Element:
        el = ET.Element(tag, attrs(type_=self.type))
        el.text = self.content
        return el


@dataclass
class AtomEntry:
    id: str
    title: str = ""
    updated: str = ""
    published: str = ""
    links: List[AtomLink] = field(default_factory=list)
    summary: Optional[AtomText] = None
    content: Optional[AtomText] = None
    author: Optional[AtomPerson] = None
    rights: str = ""
    categories: List[str] = field(default_factory=list)

    def to_element(self) -> ET.Element:
        entry = ET.Element("entry")
        sub(entry, "title", self.title)
        for link in self.links:
            entry.append(link.to_element())
        sub(entry, "id", self.id)
        sub(entry, "updated", self.updated)
        sub(entry, "published", self.published)
        if self.summary is not None:
            entry.append(self.summary.to_element("summary"))
        if self.content is not None:
            entry.append(self.content.to_element("content"))
        if self.author is not None:
            entry.append(self.author.to_element())
        sub(entry, "rights", self.rights)
        for term in self.categories:
            sub(entry, "category", term=term)
        return entry


@dataclass
class AtomFeed:
    id: str
    title: str = ""
    subtitle: str = ""
    updated: str = ""
    link: Optional[AtomLink] = None
    author: Optional[AtomPerson] = None
    rights: str = ""
    logo: str = ""
    icon: str = ""
    generator: str = ""
    categories: List[str] = field(default_factory=list)
    entries: List[AtomEntry] = field(default_factory=list)

    def to_element(self) -> ET.Element:
        feed = ET.Element("feed", xmlns=ATOM_NS)
        sub(feed, "title", self.title)
        sub(feed, "id", self.id)
        sub(feed, "updated", self.updated)
        if self.link is not None:
            feed.append(self.link.to_element())
        sub(feed, "subtitle", self.subtitle)
        if self.author is not None:
            feed.append(self.author.to_element())
        sub(feed, "rights", self.rights)
        sub(feed, "logo", self.logo)
        sub(feed, "icon", self.icon)
        sub(feed, "generator", self.generator)
        for term in self.categories:
            sub(feed, "category", term=term)
        for entry in self.entries:
            feed.append(entry.to_element())
        return feed


def _entry_id(i: Item, index: int, feed_id: str) -> str:
    """Item id, else a tag: URI from link + date, else a name-based urn:uuid."""
    if i.id:
        return i.id
    if valid_link(i.link):
        date_str = any_time_format(DATE_ONLY, i.updated, i.created)
        if date_str:
            parsed = urlparse(i.link.href)
            host, path = parsed.netloc, parsed.path
            if not host:
                host, path = i.link.href, "/invalid.html"
            return f"tag:{host},{date_str}:{path}"
    return f"urn:uuid:{stable_uuid(feed_id, str(index), i.title, i.description)}"


def new_atom_entry(i: Item, index: int = 0, feed_id: str = "") -> AtomEntry:
    entry = AtomEntry(
        id=_entry_id(i, index, feed_id),
        title=i.title,
        updated=any_time_format(RFC3339, i.updated, i.created),
        published=any_time_format(RFC3339, i.created, i.updated),
    )
    link_rel = ""
    if valid_link(i.link):
        link_rel = first_of(i.link.rel, "alternate")
        entry.links.append(AtomLink(href=i.link.href, rel=link_rel, type=i.link.type,
                                    length=i.link.length))
    if valid_enclosure(i.enclosure) and link_rel != "enclosure":
        entry.links.append(AtomLink(href=i.enclosure.url, rel="enclosure",
                                    type=i.enclosure.type, length=i.enclosure.length))
    if valid_link(i.source):
        entry.links.append(AtomLink(href=i.source.href, rel="via", type=i.source.type))

    # description and content are assumed to carry HTML
    if i.description:
        entry.summary = AtomText(content=i.description, type="html")
    if i.content:
        entry.content = AtomText(content=i.content, type="html")
    if valid_author(i.author):
        entry.author = AtomPerson(name=i.author.name, email=i.author.email)
    return entry


class AtomFormatter:
    """Format a feed as an Atom 1.0 feed document."""

    name = "atom"

    def __init__(self, indent: int = 2):
        self.indent = indent

    def build(self, feed: Feed) -> AtomFeed:
        link_href = feed.link.href if valid_link(feed.link) else ""
        atom = AtomFeed(
            id=first_of(feed.id, link_href) or f"urn:uuid:{stable_uuid(feed.title, feed.description)}",
            title=feed.title,
            subtitle=first_of(feed.subtitle, feed.description),
            updated=any_time_format(RFC3339, feed.updated, feed.created),
            rights=feed.copyright,
        )
        if link_href:
            atom.link = AtomLink(href=link_href, rel=first_of(feed.link.rel, "alternate"),
                                 type=feed.link.type)
        if valid_author(feed.author):
            atom.author = AtomPerson(name=feed.author.name, email=feed.author.email)
        if valid_image(feed.image):
            atom.logo = feed.image.url
        atom.entries = [new_atom_entry(i, n, atom.id) for n, i in enumerate(feed.items)]
        logger.debug(f"[Atom] Built feed {atom.id} with {len(atom.entries)} entries")
        return atom

    def format(self, feed: Feed) -> str:
        return to_xml(self.build(feed), indent=" " * self.indent)

    def write(self, feed: Feed, sink: TextIO) -> None:
        write_xml(self.build(feed), sink, indent=" " * self.indent)
