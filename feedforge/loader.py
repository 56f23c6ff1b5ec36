"""YAML/JSON feed definition loader."""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from feedforge.models import Author, Enclosure, Feed, Image, Item, Link

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    # YAML turns bare numbers and dates into non-strings (title: 2024)
    return "" if value is None else str(value)


def _link(value: Any, what: str) -> Optional[Link]:
    if value is None:
        return None
    if isinstance(value, str):
        return Link(href=value)
    if isinstance(value, dict):
        return Link(href=_text(value.get("href")), rel=_text(value.get("rel")),
                    type=_text(value.get("type")), length=_text(value.get("length")))
    raise ValueError(f"{what} must be a URL string or a mapping with 'href'")


def _author(value: Any, what: str) -> Optional[Author]:
    if value is None:
        return None
    if isinstance(value, str):
        return Author(name=value)
    if isinstance(value, dict):
        return Author(name=_text(value.get("name")), email=_text(value.get("email")))
    raise ValueError(f"{what} must be a name string or a mapping with 'name'/'email'")


def _image(value: Any) -> Optional[Image]:
    if value is None:
        return None
    if isinstance(value, str):
        return Image(url=value)
    if not isinstance(value, dict):
        raise ValueError("'image' must be a URL string or a mapping with 'url'")
    return Image(url=_text(value.get("url")), title=_text(value.get("title")),
                 link=_text(value.get("link")), width=int(value.get("width", 0) or 0),
                 height=int(value.get("height", 0) or 0))


def _enclosure(value: Any, what: str) -> Optional[Enclosure]:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValueError(f"{what} must be a mapping with 'url'")
    return Enclosure(url=_text(value.get("url")), type=_text(value.get("type")),
                     length=_text(value.get("length")))


def item_from_dict(data: Dict[str, Any], index: int = 0) -> Item:
    what = f"Item #{index + 1}"
    if not isinstance(data, dict):
        raise ValueError(f"{what} must be a mapping")
    return Item(
        title=_text(data.get("title")),
        link=_link(data.get("link"), f"{what} 'link'"),
        source=_link(data.get("source"), f"{what} 'source'"),
        author=_author(data.get("author"), f"{what} 'author'"),
        description=_text(data.get("description")),
        content=_text(data.get("content")),
        id=_text(data.get("id")),
        is_permalink=data.get("is_permalink"),
        created=data.get("created"),
        updated=data.get("updated"),
        enclosure=_enclosure(data.get("enclosure"), f"{what} 'enclosure'"),
    )


def feed_from_dict(data: Dict[str, Any]) -> Feed:
    """Build a Feed from a plain mapping (as parsed from YAML or JSON)."""
    items = data.get("items") or []
    if not isinstance(items, list):
        raise ValueError("'items' must be a list")
    return Feed(
        title=_text(data.get("title")),
        link=_link(data.get("link"), "'link'"),
        description=_text(data.get("description")),
        author=_author(data.get("author"), "'author'"),
        created=data.get("created"),
        updated=data.get("updated"),
        id=_text(data.get("id")),
        subtitle=_text(data.get("subtitle")),
        items=[item_from_dict(item, i) for i, item in enumerate(items)],
        copyright=_text(data.get("copyright")),
        image=_image(data.get("image")),
    )


def load_feed_file(path: str) -> Feed:
    """Load a feed definition from a YAML or JSON file.

    Expected format (YAML):
        feed:
          title: My Blog
          link: https://example.com/
          items:
            - title: First post
              link: https://example.com/1
              created: 2026-02-14T10:00:00Z
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Feed file not found: {path}")

    content = p.read_text(encoding="utf-8")

    if p.suffix in (".yaml", ".yml"):
        data = yaml.safe_load(content)
    elif p.suffix == ".json":
        data = json.loads(content)
    else:
        raise ValueError(f"Unsupported feed file format: {p.suffix} (use .yaml, .yml, or .json)")

    if not isinstance(data, dict) or not isinstance(data.get("feed"), dict):
        raise ValueError("Feed file must contain a top-level 'feed' mapping")

    feed = feed_from_dict(data["feed"])
    logger.info(f"Loaded feed {feed.title!r} with {len(feed.items)} items from {path}")
    return feed
