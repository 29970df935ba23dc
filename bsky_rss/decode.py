"""Decode raw Bluesky API JSON into typed feed models.

Every function here is total over JSON objects: missing or malformed
fields decode to defaults and unrecognized variants decode to their
"unknown" form instead of raising.
"""

from typing import Any

from .models import (
    Author,
    Embed,
    FeedItem,
    ImagesEmbed,
    ImageView,
    Post,
    PostRecord,
    Profile,
    RecordEmbed,
    RecordWithMediaEmbed,
    RepostReason,
    UnknownEmbed,
)

REASON_REPOST = "app.bsky.feed.defs#reasonRepost"
EMBED_IMAGES = "app.bsky.embed.images#view"
EMBED_RECORD = "app.bsky.embed.record#view"
EMBED_RECORD_WITH_MEDIA = "app.bsky.embed.recordWithMedia#view"


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _present(value: Any) -> bool:
    """Whether a JSON value counts as set; empty objects and arrays do."""
    return value is not None and value is not False and value != "" and value != 0


def _as_str(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def decode_author(raw: Any) -> Author:
    data = _as_dict(raw)
    return Author(
        did=_as_str(data.get("did")),
        handle=_as_str(data.get("handle")),
        display_name=_as_str(data.get("displayName")),
    )


def decode_image(raw: Any) -> ImageView:
    data = _as_dict(raw)
    return ImageView(
        fullsize=_as_str(data.get("fullsize")),
        thumb=_as_str(data.get("thumb")),
        alt=_as_str(data.get("alt")),
    )


def decode_embed(raw: Any) -> Embed | None:
    """Decode an embed view into one of the known embed variants.

    Args:
        raw: The ``embed`` value of a post view

    Returns:
        The matching embed variant, UnknownEmbed for unrecognized types,
        or None when there is no embed at all
    """
    if not isinstance(raw, dict):
        return None

    embed_type = raw.get("$type")

    if embed_type == EMBED_IMAGES:
        images = raw.get("images")
        if not isinstance(images, list):
            images = []
        return ImagesEmbed(images=tuple(decode_image(image) for image in images))

    if embed_type == EMBED_RECORD:
        # A record view without a record is not a quote
        if _present(raw.get("record")):
            return RecordEmbed()
        return UnknownEmbed(type_name=embed_type)

    if embed_type == EMBED_RECORD_WITH_MEDIA:
        record = raw.get("record")
        nested = _as_dict(record).get("record")
        return RecordWithMediaEmbed(
            has_record=_present(nested) or _present(record),
            media=decode_embed(raw.get("media")),
        )

    return UnknownEmbed(type_name=_as_str(embed_type))


def decode_reason(raw: Any) -> RepostReason | None:
    data = _as_dict(raw)
    if data.get("$type") != REASON_REPOST:
        return None
    return RepostReason(
        by=decode_author(data.get("by")),
        indexed_at=_as_str(data.get("indexedAt")),
    )


def decode_record(raw: Any) -> PostRecord:
    data = _as_dict(raw)
    text = data.get("text")
    return PostRecord(
        text=text if isinstance(text, str) else "",
        created_at=_as_str(data.get("createdAt")),
        is_reply=bool(data.get("reply")),
    )


def decode_post(raw: Any) -> Post:
    data = _as_dict(raw)
    return Post(
        uri=_as_str(data.get("uri")),
        author=decode_author(data.get("author")),
        record=decode_record(data.get("record")),
        embed=decode_embed(data.get("embed")),
        indexed_at=_as_str(data.get("indexedAt")),
    )


def decode_feed_item(raw: Any) -> FeedItem:
    """Decode one entry of an ``app.bsky.feed.getAuthorFeed`` page."""
    data = _as_dict(raw)
    return FeedItem(
        post=decode_post(data.get("post")),
        reason=decode_reason(data.get("reason")),
    )


def decode_profile(raw: Any) -> Profile:
    """Decode an ``app.bsky.actor.getProfile`` response."""
    data = _as_dict(raw)
    return Profile(
        handle=_as_str(data.get("handle")),
        display_name=_as_str(data.get("displayName")),
        description=_as_str(data.get("description")),
        did=_as_str(data.get("did")),
    )
