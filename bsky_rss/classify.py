"""Classification of feed items into post, reply, quote and repost."""

from .models import FeedItem, ItemTag, Post, RecordEmbed, RecordWithMediaEmbed


def is_repost(item: FeedItem) -> bool:
    return item.reason is not None


def is_reply(post: Post) -> bool:
    return post.record.is_reply


def is_quote(post: Post) -> bool:
    """Whether the post embeds another record.

    Unknown embed types are never treated as quotes.
    """
    embed = post.embed
    if isinstance(embed, RecordEmbed):
        return True
    if isinstance(embed, RecordWithMediaEmbed):
        return embed.has_record
    return False


def item_tags(item: FeedItem) -> list[ItemTag]:
    """Return the non-empty list of tags describing a feed item.

    A repost is tagged only as a repost; otherwise reply and quote are
    combined, and an item that is neither is a plain post.
    """
    if is_repost(item):
        return [ItemTag.REPOST]

    tags = []
    if is_reply(item.post):
        tags.append(ItemTag.REPLY)
    if is_quote(item.post):
        tags.append(ItemTag.QUOTE)
    if not tags:
        tags.append(ItemTag.POST)
    return tags
