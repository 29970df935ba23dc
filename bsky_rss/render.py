"""Rendering of classified feed items into RSS item fields."""

import re
from datetime import UTC, datetime
from email.utils import format_datetime

from dateutil import parser as date_parser

from .classify import item_tags
from .models import (
    FeedItem,
    ImagesEmbed,
    ImageView,
    ItemTag,
    Post,
    RecordWithMediaEmbed,
    RenderedEntry,
    RepostReason,
)

PROFILE_URL = "https://bsky.app/profile/{handle}"
POST_URL = "https://bsky.app/profile/{handle}/post/{rkey}"

TITLE_PLACEHOLDER = "Bluesky post"
TITLE_MAX_LENGTH = 90
ELLIPSIS = "..."
IMAGE_ALT_PLACEHOLDER = "Bluesky image"
LINE_BREAK = "<br/>"

_WHITESPACE = re.compile(r"\s+")
# Code points outside the XML 1.0 Char production
_INVALID_XML_CHARS = re.compile(
    r"[^\x09\x0a\x0d\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)


def xml_escape(value) -> str:
    """Escape the five XML special characters.

    Characters that XML 1.0 does not allow at all are removed.

    Args:
        value: Value to escape; non-strings are converted with str()

    Returns:
        Escaped text safe for XML element content and attribute values
    """
    text = _INVALID_XML_CHARS.sub("", str(value))
    text = text.replace("&", "&amp;")
    text = text.replace("<", "&lt;")
    text = text.replace(">", "&gt;")
    text = text.replace('"', "&quot;")
    text = text.replace("'", "&apos;")
    return text


def format_date(value, now: datetime | None = None) -> str:
    """Format a timestamp as an RFC-1123 date in GMT.

    Accepts ISO-8601 strings, datetimes and epoch milliseconds. Anything
    that cannot be parsed is replaced by the current time.
    """
    if now is None:
        now = datetime.now(UTC)

    try:
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            parsed = datetime.fromtimestamp(value / 1000, tz=UTC)
        elif isinstance(value, str) and value.strip():
            parsed = date_parser.parse(value)
        else:
            parsed = now
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        parsed = parsed.astimezone(UTC)
    except (ValueError, OverflowError, OSError, TypeError):
        parsed = now.astimezone(UTC)

    return format_datetime(parsed, usegmt=True)


def text_to_title(text: str | None) -> str:
    collapsed = _WHITESPACE.sub(" ", text or "").strip()
    if not collapsed:
        return TITLE_PLACEHOLDER
    if len(collapsed) <= TITLE_MAX_LENGTH:
        return collapsed
    return collapsed[: TITLE_MAX_LENGTH - len(ELLIPSIS)] + ELLIPSIS


def title_with_tag_prefixes(text: str | None, tags: list[ItemTag]) -> str:
    """Build an item title, prefixed with "[Label]" for every non-post tag."""
    base_title = text_to_title(text)
    prefixes = " ".join(f"[{tag.label}]" for tag in tags if tag is not ItemTag.POST)
    if not prefixes:
        return base_title
    return f"{prefixes} {base_title}"


def post_url_from_uri(uri: str | None, handle: str) -> str:
    """Build the bsky.app URL of a post from its at:// URI.

    The record key is the last path segment of the URI. Without one the
    profile URL is returned instead.
    """
    rkey = (uri or "").split("/")[-1]
    if not rkey:
        return PROFILE_URL.format(handle=handle)
    return POST_URL.format(handle=handle, rkey=rkey)


def item_pub_date(item: FeedItem, now: datetime | None = None) -> str:
    if item.reason is not None:
        value = item.reason.indexed_at or item.post.indexed_at
    else:
        value = item.post.record.created_at or item.post.indexed_at
    return format_date(value, now=now)


def item_guid(item: FeedItem, link: str) -> str:
    """Stable identifier of an item.

    Reposts get a composite key so that the same post reposted twice, or
    reposted and also present as an original, yields distinct guids.
    """
    if item.reason is not None:
        by_did = item.reason.by.did or "unknown"
        reposted_at = item.reason.indexed_at or "unknown"
        post_uri = item.post.uri or link
        return f"repost:{by_did}:{reposted_at}:{post_uri}"
    return item.post.uri or link


def _embedded_images(post: Post) -> tuple[ImageView, ...]:
    embed = post.embed
    if isinstance(embed, RecordWithMediaEmbed):
        embed = embed.media
    if isinstance(embed, ImagesEmbed):
        return embed.images
    return ()


def render_image(image: ImageView) -> str | None:
    url = image.fullsize or image.thumb
    if not url:
        return None
    alt = xml_escape(image.alt or IMAGE_ALT_PLACEHOLDER)
    return f'<img src="{xml_escape(url)}" alt="{alt}" />'


def build_description(
    post: Post,
    post_url: str,
    tags: list[ItemTag],
    reason: RepostReason | None = None,
) -> str:
    """Build the HTML description of an item.

    Args:
        post: The post being described
        post_url: Public URL of the post
        tags: Tags assigned to the item
        reason: Repost reason, when the item is a repost

    Returns:
        HTML fragment with every text value already escaped
    """
    lines = []
    if ItemTag.REPLY in tags:
        lines.append("<strong>Reply</strong>")
    if ItemTag.QUOTE in tags:
        lines.append("<strong>Quote post</strong>")
    if ItemTag.REPOST in tags:
        by_handle = reason.by.handle if reason is not None else None
        by = f"@{xml_escape(by_handle)}" if by_handle else "this account"
        lines.append(f"<strong>Repost</strong> by {by}")

    text = post.record.text
    if text.strip():
        lines.append(xml_escape(text).replace("\n", LINE_BREAK))

    for image in _embedded_images(post):
        rendered = render_image(image)
        if rendered:
            lines.append(rendered)

    lines.append(f'<a href="{xml_escape(post_url)}">View post on Bluesky</a>')
    return LINE_BREAK.join(lines)


def render_entry(
    item: FeedItem, fallback_handle: str, now: datetime | None = None
) -> RenderedEntry:
    """Render a feed item into the fields of an RSS item.

    Args:
        item: Decoded feed item
        fallback_handle: Handle used for links when the post has no author handle
        now: Substitute time for missing or malformed timestamps

    Returns:
        RenderedEntry with a plain-text title and an HTML description
    """
    post = item.post
    tags = item_tags(item)
    link = post_url_from_uri(post.uri, post.author.handle or fallback_handle)
    return RenderedEntry(
        title=title_with_tag_prefixes(post.record.text, tags),
        link=link,
        pub_date=item_pub_date(item, now=now),
        guid=item_guid(item, link),
        description=build_description(post, link, tags, item.reason),
        tags=tuple(tags),
    )
