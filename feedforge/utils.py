"""Shared fallback, validity and date-formatting helpers.

Every formatter decides what to emit through these functions, so a feed
renders the same fallbacks whatever the output format.
"""
import uuid
from datetime import date, datetime, timezone
from typing import Any, Callable, Optional, Union

from dateutil import parser as date_parser

# Layouts understood by format_time / any_time_format.  %a, %b and %Z are
# substituted with fixed English names so output does not depend on locale.
RFC822 = "%d %b %y %H:%M %Z"
RFC1123 = "%a, %d %b %Y %H:%M:%S %Z"
RFC1123Z = "%a, %d %b %Y %H:%M:%S %z"
DATE_ONLY = "%Y-%m-%d"

_DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

_ZERO = datetime.min


def to_datetime(value: Union[None, str, date, datetime]) -> Optional[datetime]:
    """Coerce a timestamp value to an aware datetime (naive means UTC).

    Accepts ``None``, ``date``/``datetime`` objects, and ISO-8601 or RFC-2822
    strings.  Empty values come back as ``None``.

    Raises ValueError on strings dateutil cannot parse.
    """
    if value is None or value == "":
        return None
    if isinstance(value, str):
        value = date_parser.parse(value)
    elif not isinstance(value, datetime):
        if not isinstance(value, date):
            raise ValueError(f"Unsupported timestamp value: {value!r}")
        value = datetime(value.year, value.month, value.day)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def is_zero_time(t: Optional[datetime]) -> bool:
    return t is None or t.replace(tzinfo=None) == _ZERO


def _is_zero(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, datetime):
        return is_zero_time(value)
    if isinstance(value, (str, int, float, list, tuple, dict)):
        return not value
    return False


def first_of(*candidates):
    """Return the first candidate that is not a zero value.

    Zero values are None, empty strings/containers, 0 and the zero
    timestamp.  When every candidate is zero the last one is returned.
    """
    for c in candidates:
        if not _is_zero(c):
            return c
    return candidates[-1] if candidates else None


def _zone_name(t: datetime) -> str:
    name = t.tzname()
    # fixed offsets without a name report themselves as "UTC+02:00"
    if not name or (name.startswith("UTC") and name != "UTC"):
        return t.strftime("%z")
    return name



def rfc3339(t: datetime) -> str:
    """Second-precision RFC 3339 timestamp, ``Z`` for UTC."""
    text = t.isoformat(timespec="seconds")
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


RFC3339: Callable[[datetime], str] = rfc3339


def format_time(layout: Union[str, Callable[[datetime], str]], t: datetime) -> str:
    if callable(layout):
        return layout(t)
    layout = (layout
              .replace("%a", _DAYS[t.weekday()])
              .replace("%b", _MONTHS[t.month - 1])
              .replace("%Z", _zone_name(t).replace("%", "%%")))
    return t.strftime(layout)


def any_time_format(layout, *times) -> str:
    """Format the first non-zero timestamp with ``layout``; ``""`` if none."""
    for t in times:
        t = to_datetime(t)
        if not is_zero_time(t):
            return format_time(layout, t)
    return ""


def valid_link(link) -> bool:
    return link is not None and bool(link.href)


def valid_author(author) -> bool:
    return author is not None and bool(author.name or author.email)


def valid_image(image) -> bool:
    return image is not None and bool(image.url)


def valid_enclosure(enclosure) -> bool:
    return enclosure is not None and bool(enclosure.url)


def author_name(author, combine: bool) -> str:
    """Display string for an author.

    With ``combine`` and both fields set this is ``"Name (email)"``; otherwise
    the name, falling back to the email.
    """
    if author is None:
        return ""
    if author.name and author.email:
        if combine:
            return f"{author.name} ({author.email})"
        return author.name
    return first_of(author.name, author.email)


def stable_uuid(*parts: str) -> str:
    """Name-based UUID, identical for identical input so renders are repeatable."""
    return str(uuid.uuid5(uuid.NAMESPACE_URL, "\x1f".join(parts)))
