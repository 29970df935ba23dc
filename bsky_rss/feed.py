"""RSS 2.0 document assembly for a Bluesky author feed."""

from datetime import UTC, datetime
from pathlib import Path

from .config import FeedOptions
from .models import Profile, RenderedEntry
from .render import PROFILE_URL, format_date, xml_escape

RSS_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:atom="http://www.w3.org/2005/Atom">
  <channel>
  <title>{title}</title>
  <link>{link}</link>
  <description>{description}</description>
  <lastBuildDate>{last_build_date}</lastBuildDate>
{self_link}{items}
  </channel>
</rss>
"""


def normalize_output_path(out: str) -> str:
    """Normalize an output path into a relative URL path.

    Backslashes become slashes, empty and "." segments are dropped and ".."
    removes the previous segment without ever going above the root.
    """
    segments: list[str] = []
    for part in out.replace("\\", "/").split("/"):
        if not part or part == ".":
            continue
        if part == "..":
            if segments:
                segments.pop()
            continue
        segments.append(part)
    return "/".join(segments)


def self_link_url(site_url: str, out: str) -> str:
    return f"{site_url.rstrip('/')}/{normalize_output_path(out)}"


def channel_title(profile: Profile, handle: str) -> str:
    name = profile.display_name or f"@{handle}"
    return f"{name} on Bluesky"


def channel_description(profile: Profile, handle: str) -> str:
    if profile.description:
        return profile.description
    return f"Posts from @{handle} on Bluesky"


def render_item_xml(entry: RenderedEntry) -> str:
    """Serialize a rendered entry as an indented ``<item>`` element.

    The description is inserted as-is; every other value is escaped.
    """
    categories = []
    for tag in dict.fromkeys(entry.tags):
        categories.append(
            f"      <category>{xml_escape(tag.label.lower())}</category>"
        )

    lines = [
        "    <item>",
        f"      <title>{xml_escape(entry.title)}</title>",
        f"      <link>{xml_escape(entry.link)}</link>",
        f'      <guid isPermaLink="false">{xml_escape(entry.guid)}</guid>',
        f"      <pubDate>{xml_escape(entry.pub_date)}</pubDate>",
        *categories,
        f"      <description>{entry.description}</description>",
        "    </item>",
    ]
    return "\n".join(lines)


def render_rss_xml(
    profile: Profile,
    entries: list[RenderedEntry],
    options: FeedOptions,
    now: datetime | None = None,
) -> str:
    """Assemble the complete RSS document.

    Args:
        profile: Profile of the feed's actor
        entries: Rendered items, in feed order
        options: Run options (handle, output path, site URL)
        now: Build time; defaults to the current time

    Returns:
        The RSS 2.0 XML document as a string
    """
    handle = profile.handle or options.handle
    if now is None:
        now = datetime.now(UTC)

    self_link = ""
    if options.site_url:
        href = xml_escape(self_link_url(options.site_url, options.out))
        self_link = (
            f'  <atom:link href="{href}" rel="self" type="application/rss+xml" />\n'
        )

    return RSS_TEMPLATE.format(
        title=xml_escape(channel_title(profile, handle)),
        link=xml_escape(PROFILE_URL.format(handle=handle)),
        description=xml_escape(channel_description(profile, handle)),
        last_build_date=xml_escape(format_date(now)),
        self_link=self_link,
        items="\n".join(render_item_xml(entry) for entry in entries),
    )


def write_feed(path: Path, xml: str) -> Path:
    """Write a finished document to disk, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(xml, encoding="utf-8")
    return path
