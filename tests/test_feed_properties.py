"""Property-based tests for RSS document assembly."""

import re
import xml.etree.ElementTree as ET

from hypothesis import given
from hypothesis import strategies as st

from bsky_rss.config import FeedOptions
from bsky_rss.feed import normalize_output_path, render_rss_xml
from bsky_rss.models import FeedItem, Post, PostRecord, Profile
from bsky_rss.render import render_entry

# Any text, including control characters XML 1.0 forbids
xml_text = st.text(alphabet=st.characters(blacklist_categories=("Cs",)), max_size=120)
INVALID_XML_CHARS = re.compile(
    r"[^\x09\x0a\x0d\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)


def _as_parsed(text: str) -> str:
    """Text as an XML parser reports it: forbidden characters gone, newlines normalized."""
    text = INVALID_XML_CHARS.sub("", text)
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _outside_descriptions(xml: str) -> str:
    return re.sub(r"<description>.*?</description>", "", xml, flags=re.DOTALL)


class TestFeedProperties:
    """Property-based tests for render_rss_xml."""

    @given(display_name=xml_text, bio=xml_text, text=xml_text)
    def test_escaping_round_trip(self, display_name, bio, text):
        """
        For any text containing XML special characters, the document stays
        well-formed and no raw special character appears in text content
        outside the description fragments.
        """
        profile = Profile(
            handle="oblachek.eu",
            display_name=display_name or None,
            description=bio or None,
        )
        item = FeedItem(
            post=Post(
                uri="at://did:plc:abc/app.bsky.feed.post/xyz",
                record=PostRecord(text=text),
            )
        )
        xml = render_rss_xml(
            profile, [render_entry(item, "oblachek.eu")], FeedOptions()
        )

        root = ET.fromstring(xml.encode("utf-8"))
        channel = root.find("channel")
        expected_title = _as_parsed(f"{display_name or '@oblachek.eu'} on Bluesky")
        assert channel.findtext("title") == expected_title
        if bio:
            assert channel.findtext("description") == _as_parsed(bio)

        for element in re.findall(r">([^<]*)<", _outside_descriptions(xml)):
            assert '"' not in element
            assert "'" not in element
            assert ">" not in element

    @given(st.lists(st.sampled_from(["a", "b", ".", "..", "", "c.xml"]), max_size=10))
    def test_normalized_path_has_no_dot_segments(self, parts):
        normalized = normalize_output_path("/".join(parts))
        segments = normalized.split("/") if normalized else []

        assert "." not in segments
        assert ".." not in segments
        assert "" not in segments
        assert not normalized.startswith("/")
