"""Tree serializer: turns built feed trees into XML or JSON text.

Format trees are plain dataclasses exposing ``to_element()`` (XML) or
``to_dict()`` (JSON).  Fields whose value is empty are left out entirely, so
a tree never produces present-but-empty optional markup.
"""
import json
import logging
import xml.etree.ElementTree as ET
from typing import Any, Dict, Optional, TextIO
from xml.dom.minidom import parseString
from xml.parsers.expat import ExpatError

from feedforge.errors import SerializationError

logger = logging.getLogger(__name__)


def _attr_value(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None or value == "" or value == 0:
        return None
    return str(value)


def attrs(**pairs: Any) -> Dict[str, str]:
    """Attribute dict with empty values dropped.

    Keys may use a trailing underscore to dodge keywords (``type_``) and
    ``__`` for a namespace colon (``xmlns__content``).
    """
    out = {}
    for key, value in pairs.items():
        value = _attr_value(value)
        if value is None:
            continue
        out[key.rstrip("_").replace("__", ":")] = value
    return out


def sub(parent: ET.Element, tag: str, text: Any = None, **attributes: Any) -> Optional[ET.Element]:
    """Append ``<tag>text</tag>`` unless both text and attributes are empty."""
    text = _attr_value(text)
    attributes = attrs(**attributes)
    if text is None and not attributes:
        return None
    el = ET.SubElement(parent, tag, attributes)
    el.text = text
    return el


def to_xml(tree, indent: str = "  ") -> str:
    """Serialize a tree (or a bare Element) to an indented UTF-8 XML document."""
    root = tree.to_element() if hasattr(tree, "to_element") else tree
    try:
        raw = ET.tostring(root, encoding="unicode")
        return parseString(raw).toprettyxml(indent=indent, encoding="utf-8").decode("utf-8")
    except (TypeError, ValueError, ExpatError) as e:
        logger.debug(f"[XML] Failed to serialize <{root.tag}>: {e}")
        raise SerializationError(f"Could not serialize <{root.tag}> document: {e}") from e


def write_xml(tree, sink: TextIO, indent: str = "  ") -> None:
    sink.write(to_xml(tree, indent=indent))


def compact(data: Dict[str, Any], keep: tuple = ()) -> Dict[str, Any]:
    """Drop keys whose value is None, an empty string or an empty container.

    Keys named in ``keep`` survive even when empty.
    """
    return {k: v for k, v in data.items() if k in keep or v not in (None, "", [], {})}


# markup characters become \u escapes, other non-ASCII text is written as-is
_JSON_MARKUP_ESCAPES = {"<": "\\u003c", ">": "\\u003e", "&": "\\u0026"}


def to_json(tree, indent: Optional[int] = 2) -> str:
    data = tree.to_dict() if hasattr(tree, "to_dict") else tree
    try:
        text = json.dumps(data, indent=indent, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Could not serialize JSON feed: {e}") from e
    for char, escaped in _JSON_MARKUP_ESCAPES.items():
        text = text.replace(char, escaped)
    return text


def write_json(tree, sink: TextIO, indent: Optional[int] = 2) -> None:
    sink.write(to_json(tree, indent=indent))
