"""feedforge — render one generic feed as RSS, Atom, OPML, JSON Feed or HTML."""
from feedforge.models import Author, Enclosure, Feed, Image, Item, Link

__version__ = "1.0.0"

__all__ = ["Author", "Enclosure", "Feed", "Image", "Item", "Link", "__version__"]
