"""Shared fixtures for Bluesky RSS tests."""

from unittest.mock import Mock

import pytest


@pytest.fixture
def raw_post():
    """Factory for raw post views as returned by getAuthorFeed."""

    def _make(
        text="Hello world",
        uri="at://did:plc:abc/app.bsky.feed.post/xyz",
        handle="oblachek.eu",
        created_at="2024-01-01T10:00:00.000Z",
        indexed_at="2024-01-01T10:00:05.000Z",
        reply=None,
        embed=None,
    ):
        record = {"$type": "app.bsky.feed.post", "text": text}
        if created_at is not None:
            record["createdAt"] = created_at
        if reply is not None:
            record["reply"] = reply
        post = {
            "uri": uri,
            "author": {"did": "did:plc:abc", "handle": handle},
            "record": record,
        }
        if indexed_at is not None:
            post["indexedAt"] = indexed_at
        if embed is not None:
            post["embed"] = embed
        return post

    return _make


@pytest.fixture
def repost_reason():
    """Factory for raw repost reasons."""

    def _make(
        did="did:plc:reposter",
        handle="friend.bsky.social",
        indexed_at="2024-02-02T12:00:00.000Z",
    ):
        by = {}
        if did is not None:
            by["did"] = did
        if handle is not None:
            by["handle"] = handle
        reason = {"$type": "app.bsky.feed.defs#reasonRepost", "by": by}
        if indexed_at is not None:
            reason["indexedAt"] = indexed_at
        return reason

    return _make


@pytest.fixture
def reply_ref():
    return {
        "root": {"uri": "at://did:plc:other/app.bsky.feed.post/root", "cid": "c1"},
        "parent": {"uri": "at://did:plc:other/app.bsky.feed.post/root", "cid": "c1"},
    }


@pytest.fixture
def quote_embed():
    return {
        "$type": "app.bsky.embed.record#view",
        "record": {
            "$type": "app.bsky.embed.record#viewRecord",
            "uri": "at://did:plc:other/app.bsky.feed.post/quoted",
        },
    }


@pytest.fixture
def images_embed():
    return {
        "$type": "app.bsky.embed.images#view",
        "images": [
            {
                "fullsize": "https://cdn.bsky.app/img/full/1.jpg",
                "thumb": "https://cdn.bsky.app/img/thumb/1.jpg",
                "alt": "A \"cat\" & a dog",
            },
            {"thumb": "https://cdn.bsky.app/img/thumb/2.jpg"},
            {"alt": "no url at all"},
        ],
    }


def make_response(payload=None, status_code=200, text="", reason="OK"):
    """Build a Mock mimicking requests.Response."""
    response = Mock()
    response.status_code = status_code
    response.reason = reason
    response.text = text
    response.json.return_value = payload if payload is not None else {}
    return response


@pytest.fixture
def response_factory():
    return make_response
