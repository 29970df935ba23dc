"""Data models for the Bluesky RSS generator."""

from dataclasses import dataclass, field
from enum import Enum


class ItemTag(str, Enum):
    """Semantic kind of a feed item."""

    POST = "post"
    REPLY = "reply"
    QUOTE = "quote"
    REPOST = "repost"

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class Author:
    """Author or reposting actor of a feed item."""

    did: str | None = None
    handle: str | None = None
    display_name: str | None = None


@dataclass(frozen=True)
class ImageView:
    """A single image inside an images embed."""

    fullsize: str | None = None
    thumb: str | None = None
    alt: str | None = None


@dataclass(frozen=True)
class ImagesEmbed:
    """app.bsky.embed.images#view"""

    images: tuple[ImageView, ...] = ()


@dataclass(frozen=True)
class RecordEmbed:
    """app.bsky.embed.record#view (a quoted post)."""


@dataclass(frozen=True)
class RecordWithMediaEmbed:
    """app.bsky.embed.recordWithMedia#view"""

    has_record: bool = False
    media: "Embed | None" = None


@dataclass(frozen=True)
class UnknownEmbed:
    """Any embed type that is not recognized."""

    type_name: str | None = None


Embed = ImagesEmbed | RecordEmbed | RecordWithMediaEmbed | UnknownEmbed


@dataclass(frozen=True)
class RepostReason:
    """Reason attached to a feed item that was reposted by someone."""

    by: Author = field(default_factory=Author)
    indexed_at: str | None = None


@dataclass(frozen=True)
class PostRecord:
    """The app.bsky.feed.post record of a post."""

    text: str = ""
    created_at: str | None = None
    is_reply: bool = False


@dataclass(frozen=True)
class Post:
    """A post view as returned by the feed API."""

    uri: str | None = None
    author: Author = field(default_factory=Author)
    record: PostRecord = field(default_factory=PostRecord)
    embed: Embed | None = None
    indexed_at: str | None = None


@dataclass(frozen=True)
class FeedItem:
    """Represents a single item of an author feed."""

    post: Post = field(default_factory=Post)
    reason: RepostReason | None = None


@dataclass(frozen=True)
class Profile:
    """Profile of the feed's actor, used for channel metadata."""

    handle: str | None = None
    display_name: str | None = None
    description: str | None = None
    did: str | None = None


@dataclass(frozen=True)
class RenderedEntry:
    """A feed item rendered into RSS item fields."""

    title: str
    link: str
    pub_date: str
    guid: str
    description: str
    tags: tuple[ItemTag, ...]
