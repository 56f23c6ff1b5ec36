"""HTML output — a standalone page rendering of a feed.

Unlike the other formats there is no intermediate tree: :class:`HTMLWriter`
streams markup straight into the caller's sink.  The first error raised by
the sink is kept, every later write becomes a no-op, and
:meth:`HTMLFormatter.write` raises it once the document walk is over.
"""
import html
import io
import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Optional, TextIO

from feedforge.errors import FeedWriteError
from feedforge.models import Feed, Item
from feedforge.utils import (
    RFC1123, any_time_format, author_name, first_of, valid_author, valid_enclosure,
    valid_image, valid_link,
)

logger = logging.getLogger(__name__)

HTML_INDENT = "    "
HTML_NEWLINE = "\n"

# Wordless so the page needs no translation.
SOURCE_GLYPH = " (↗)"


def escape(s: str) -> str:
    return html.escape(s, quote=True)


class HTMLWriter:
    """Indenting markup writer with a sticky error.

    Attribute arguments are flat ``key, value, key, value`` pairs; pairs with
    an empty value are skipped and values are always escaped.
    """

    def __init__(self, sink: TextIO, indent: str = HTML_INDENT):
        self.sink = sink
        self.indent_prefix = indent
        self.error: Optional[BaseException] = None
        self.level = 0
        self.writes = 0

    def _write(self, s: str) -> None:
        if self.error is not None:
            return
        try:
            self.sink.write(s)
        except (OSError, ValueError) as e:
            logger.debug(f"[HTML] Sink failed after {self.writes} writes: {e}")
            self.error = e
            return
        self.writes += 1

    def string(self, s: str) -> None:
        """Write ``s`` verbatim."""
        self._write(s)

    def safe_string(self, s: str) -> None:
        self._write(escape(s))

    def indent(self) -> None:
        for _ in range(self.level):
            if self.error is not None:
                return
            self._write(self.indent_prefix)

    def line(self, s: str) -> None:
        """Write an indented raw line."""
        self.indent()
        self._write(s)
        self._write(HTML_NEWLINE)

    def printf(self, fmt: str, *args) -> None:
        """Indented ``fmt % args`` line with string arguments escaped."""
        args = tuple(escape(a) if isinstance(a, str) else a for a in args)
        self.indent()
        self._write(fmt % args)
        self._write(HTML_NEWLINE)

    def open_tag(self, name: str, *attr_pairs: str) -> None:
        parts = ["<", name]
        for key, value in zip(attr_pairs[::2], attr_pairs[1::2]):
            if value:
                parts.append(f' {key}="{escape(value)}"')
        parts.append(">")
        self._write("".join(parts))

    def close_tag(self, name: str) -> None:
        self._write(f"</{name}>")

    def standalone_tag(self, name: str, *attr_pairs: str) -> None:
        """Void element (``<br>``, ``<img>``, ``<meta>``) on its own line."""
        self.indent()
        self.open_tag(name, *attr_pairs)
        self._write(HTML_NEWLINE)

    def tag(self, name: str, value: str, *attr_pairs: str) -> None:
        """``<name>escaped value</name>`` on one line."""
        self.indent()
        self.open_tag(name, *attr_pairs)
        self._write(escape(value))
        self.close_tag(name)
        self._write(HTML_NEWLINE)

    @contextmanager
    def wrapped(self, name: str, *attr_pairs: str) -> Iterator[None]:
        """Open ``name``, run the body one level deeper, then close it."""
        self.indent()
        self.open_tag(name, *attr_pairs)
        self._write(HTML_NEWLINE)
        self.level += 1
        try:
            yield
        finally:
            self.level -= 1
        self.indent()
        self.close_tag(name)
        self._write(HTML_NEWLINE)

    @contextmanager
    def maybe_wrapped(self, name: str, wrap: bool, *attr_pairs: str) -> Iterator[None]:
        if not wrap:
            yield
            return
        with self.wrapped(name, *attr_pairs):
            yield

    def wrap_tag(self, name: str, fn: Callable[[], None], *attr_pairs: str) -> None:
        with self.wrapped(name, *attr_pairs):
            fn()

    def maybe_wrap_tag(self, name: str, wrap: bool, fn: Callable[[], None], *attr_pairs: str) -> None:
        with self.maybe_wrapped(name, wrap, *attr_pairs):
            fn()


class HTMLFormatter:
    """Render a feed as a self-contained HTML page."""

    name = "html"

    def __init__(self, indent: int = len(HTML_INDENT)):
        self.indent = indent

    def format(self, feed: Feed) -> str:
        buf = io.StringIO()
        self.write(feed, buf)
        return buf.getvalue()

    def write(self, feed: Feed, sink: TextIO) -> None:
        """Stream the page into ``sink``.

        Raises FeedWriteError if the sink fails; whatever was written before
        the failure is incomplete HTML.
        """
        w = HTMLWriter(sink, indent=" " * self.indent)
        self._write_document(w, feed)
        if w.error is not None:
            raise FeedWriteError(w.error, writes=w.writes, fmt=self.name) from w.error

    def _write_document(self, w: HTMLWriter, feed: Feed) -> None:
        w.line("<!doctype html>")
        w.line("<html>")
        with w.wrapped("head"):
            self._write_head(w, feed)
        with w.wrapped("body"):
            self._write_body(w, feed)
        w.line("</html>")

    def _write_head(self, w: HTMLWriter, feed: Feed) -> None:
        if feed.title:
            w.tag("title", feed.title)
        if valid_link(feed.link):
            w.standalone_tag("link", "rel", first_of(feed.link.rel, "author"), "href", feed.link.href)
        if valid_author(feed.author):
            w.standalone_tag("meta", "name", "author", "value", author_name(feed.author, True))
        if feed.description:
            w.standalone_tag("meta", "name", "description", "value", feed.description)

    def _write_body(self, w: HTMLWriter, feed: Feed) -> None:
        if valid_image(feed.image):
            image = feed.image
            with w.wrapped("p"):
                w.maybe_wrap_tag(
                    "a", bool(image.link),
                    lambda: w.standalone_tag("img", "src", image.url, "title", image.title),
                    "href", image.link,
                )

        if feed.title:
            w.tag("h1", feed.title)
        if feed.subtitle:
            w.tag("h2", feed.subtitle)

        with w.wrapped("ul"):
            for item in feed.items:
                with w.wrapped("li"):
                    self._write_item(w, item)

        with w.wrapped("p"):
            if feed.copyright:
                w.printf("%s", feed.copyright)
            updated = any_time_format(RFC1123, feed.updated, feed.created)
            if updated:
                w.standalone_tag("br")
                w.tag("small", updated)

    def _write_item(self, w: HTMLWriter, item: Item) -> None:
        with w.wrapped("p"):
            if item.id:
                w.tag("a", "", "name", item.id)

            item_time = any_time_format(RFC1123, item.updated, item.created)
            title = first_of(item.title, item.id, item_time)
            if title == item_time:
                # the time is already the link text
                item_time = ""

            link = item.link.href if valid_link(item.link) else "#"
            w.tag("a", title, "href", link)

            if item_time:
                w.standalone_tag("br")
                w.tag("small", item_time)

        if valid_enclosure(item.enclosure):
            with w.wrapped("p"):
                w.standalone_tag("img", "src", item.enclosure.url)

        # description and content are written unescaped: they carry HTML
        if item.description:
            with w.maybe_wrapped("p", not item.description.startswith("<p>")):
                with w.maybe_wrapped("em", bool(item.content)):
                    w.line(item.description)

        if item.content:
            with w.maybe_wrapped("p", not item.content.startswith("<p>")):
                w.line(item.content)

        has_author = valid_author(item.author)
        has_source = valid_link(item.source)
        if has_author or has_source:
            with w.wrapped("p"), w.wrapped("cite"):
                if has_author:
                    name = author_name(item.author, False)
                    if item.author.email:
                        w.tag("a", name, "href", f"mailto:{item.author.email}")
                    else:
                        w.printf("%s", name)
                if has_source:
                    w.tag("a", SOURCE_GLYPH, "href", item.source.href)
                w.standalone_tag("br")
