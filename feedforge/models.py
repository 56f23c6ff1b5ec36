"""Generic, format-agnostic feed model.

Callers build a :class:`Feed` with :class:`Item` entries and ask for the
representation they need::

    feed = Feed(title="jmoiron.net blog", link=Link(href="http://jmoiron.net/blog"))
    feed.add(Item(title="Limiting Concurrency", link=Link(href="http://jmoiron.net/1")))
    rss = feed.to_rss()
    html = feed.to_html()

Renderers only read the model; nothing here is retained between calls.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, List, Optional, TextIO

from feedforge.utils import to_datetime


@dataclass
class Link:
    href: str = ""
    rel: str = ""
    type: str = ""
    length: str = ""


@dataclass
class Author:
    name: str = ""
    email: str = ""


@dataclass
class Image:
    url: str = ""
    title: str = ""
    link: str = ""  # the image's own hyperlink
    width: int = 0
    height: int = 0


@dataclass
class Enclosure:
    url: str = ""
    length: str = ""
    type: str = ""


@dataclass
class Item:
    title: str = ""
    link: Optional[Link] = None
    source: Optional[Link] = None  # originating feed / alternate location
    author: Optional[Author] = None
    description: str = ""  # may contain HTML
    content: str = ""  # may contain HTML
    id: str = ""
    is_permalink: Optional[bool] = None
    created: Optional[datetime] = None
    updated: Optional[datetime] = None
    enclosure: Optional[Enclosure] = None

    def __post_init__(self):
        self.created = to_datetime(self.created)
        self.updated = to_datetime(self.updated)


@dataclass
class Feed:
    title: str = ""
    link: Optional[Link] = None
    description: str = ""
    author: Optional[Author] = None
    created: Optional[datetime] = None
    updated: Optional[datetime] = None
    id: str = ""
    subtitle: str = ""
    items: List[Item] = field(default_factory=list)
    copyright: str = ""
    image: Optional[Image] = None

    def __post_init__(self):
        self.created = to_datetime(self.created)
        self.updated = to_datetime(self.updated)

    def add(self, item: Item) -> Item:
        self.items.append(item)
        return item

    def add_item(self, **fields: Any) -> Item:
        return self.add(Item(**fields))

    def sort(self, key: Callable[[Item], Any], reverse: bool = False) -> None:
        """Reorder items in place (stable)."""
        self.items.sort(key=key, reverse=reverse)

    def render(self, fmt: str, **options: Any) -> str:
        """Render with the formatter registered as ``fmt`` (rss, atom, opml, json, html)."""
        from feedforge.formatters import get_formatter
        return get_formatter(fmt, **options).format(self)

    def write(self, fmt: str, sink: TextIO, **options: Any) -> None:
        from feedforge.formatters import get_formatter
        get_formatter(fmt, **options).write(self, sink)

    def to_rss(self) -> str:
        return self.render("rss")

    def to_atom(self) -> str:
        return self.render("atom")

    def to_opml(self) -> str:
        return self.render("opml")

    def to_json(self) -> str:
        return self.render("json")

    def to_html(self) -> str:
        return self.render("html")

    def write_rss(self, sink: TextIO) -> None:
        self.write("rss", sink)

    def write_atom(self, sink: TextIO) -> None:
        self.write("atom", sink)

    def write_opml(self, sink: TextIO) -> None:
        self.write("opml", sink)

    def write_json(self, sink: TextIO) -> None:
        self.write("json", sink)

    def write_html(self, sink: TextIO) -> None:
        self.write("html", sink)
