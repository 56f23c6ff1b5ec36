"""Shared test fixtures."""
from datetime import datetime, timezone

import pytest

from feedforge.models import Author, Enclosure, Feed, Image, Item, Link

CREATED = datetime(2026, 2, 12, 6, 0, tzinfo=timezone.utc)
UPDATED = datetime(2026, 2, 13, 18, 30, tzinfo=timezone.utc)


@pytest.fixture
def full_feed():
    feed = Feed(
        title="jmoiron.net blog",
        link=Link(href="http://jmoiron.net/blog"),
        description="discussion about tech, footie, photos",
        author=Author(name="Jason Moiron", email="jmoiron@jmoiron.net"),
        created=CREATED,
        copyright="This work is copyright © Benjamin Button",
        image=Image(url="http://jmoiron.net/logo.png", title="logo", link="http://jmoiron.net"),
    )
    feed.add(Item(
        title="Limiting Concurrency in Go",
        link=Link(href="http://jmoiron.net/blog/limiting-concurrency-in-go/"),
        description="A discussion on controlled parallelism in golang",
        author=Author(name="Jason Moiron", email="jmoiron@jmoiron.net"),
        created=CREATED,
        id="post-1",
    ))
    feed.add(Item(
        title="Logic-less Template Redux",
        link=Link(href="http://jmoiron.net/blog/logicless-template-redux/"),
        source=Link(href="http://jmoiron.net/feed.xml"),
        description="More thoughts on logicless templates",
        content="<p>Full text</p>",
        created=CREATED,
        updated=UPDATED,
        enclosure=Enclosure(url="http://jmoiron.net/cover.jpg", type="image/jpeg", length="123"),
    ))
    feed.add(Item(
        title="Idiomatic Code Reuse in Go",
        link=Link(href="http://jmoiron.net/blog/idiomatic-code-reuse-in-go/"),
        description="How to use interfaces <em>effectively</em>",
    ))
    return feed


@pytest.fixture
def minimal_feed():
    return Feed(title="Blog", items=[Item(title="Post", link=Link(href="http://x/1"))])
