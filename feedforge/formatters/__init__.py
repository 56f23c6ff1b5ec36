"""Output formatters, one per target format.

Every formatter exposes ``format(feed) -> str`` and ``write(feed, sink)``;
the structured ones also expose ``build(feed)`` returning their editable tree.
"""
import inspect
from typing import Any, Dict, Type

from feedforge.errors import UnknownFormatError

from .atom import AtomFormatter
from .html_out import HTMLFormatter
from .jsonfeed import JSONFeedFormatter
from .opml import OPMLFormatter
from .rss_out import RSSFormatter

FORMATTERS: Dict[str, Type] = {
    "rss": RSSFormatter,
    "atom": AtomFormatter,
    "opml": OPMLFormatter,
    "json": JSONFeedFormatter,
    "html": HTMLFormatter,
}


def get_formatter(name: str, **options: Any):
    """Instantiate the formatter registered as ``name``.

    Options the formatter does not accept (e.g. ``indent`` for HTML) are ignored.
    """
    try:
        cls = FORMATTERS[name.lower()]
    except KeyError:
        raise UnknownFormatError(
            f"Unknown format '{name}' (choose from: {', '.join(FORMATTERS)})"
        ) from None
    accepted = inspect.signature(cls).parameters
    return cls(**{k: v for k, v in options.items() if k in accepted and v is not None})


__all__ = ["AtomFormatter", "FORMATTERS", "HTMLFormatter", "JSONFeedFormatter", "OPMLFormatter",
           "RSSFormatter", "get_formatter"]
