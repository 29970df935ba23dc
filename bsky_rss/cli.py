"""Command-line entry point: generate an RSS file from a Bluesky author feed."""

import argparse
import re
import sys
from datetime import UTC, datetime
from pathlib import Path

from .bluesky import BlueskyClient
from .config import DEFAULT_HANDLE, DEFAULT_LIMIT, DEFAULT_OUTPUT, Config, FeedOptions
from .errors import ArgumentError, BskyRssError
from .feed import render_rss_xml, write_feed
from .logging_config import create_execution_logger, setup_structured_logging
from .render import render_entry


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting the process."""

    def error(self, message):
        raise ArgumentError(message)


def _parse_limit(value) -> int:
    if isinstance(value, int):
        limit = value
    elif isinstance(value, str) and re.fullmatch(r"\d+", value, re.ASCII):
        limit = int(value)
    else:
        raise ArgumentError("--limit must be a positive integer")
    if limit <= 0:
        raise ArgumentError("--limit must be a positive integer")
    return limit


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="bsky-rss",
        description="Generate an RSS 2.0 feed from a Bluesky author feed.",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument(
        "--handle",
        default=DEFAULT_HANDLE,
        help=f"Bluesky handle or DID (default: {DEFAULT_HANDLE})",
    )
    parser.add_argument(
        "--out",
        default=DEFAULT_OUTPUT,
        help=f"Output XML path (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "--limit",
        default=DEFAULT_LIMIT,
        help=f"Number of items in RSS (default: {DEFAULT_LIMIT})",
    )
    parser.add_argument(
        "--include-replies",
        action="store_true",
        help="Include replies (default: off)",
    )
    parser.add_argument(
        "--include-reposts",
        action="store_true",
        help="Include reposts (default: off)",
    )
    parser.add_argument(
        "--site-url",
        default="",
        help="Public site URL for atom:link self reference",
    )
    parser.add_argument(
        "-h", "--help", action="store_true", help="Show this message and exit"
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Raises:
        ArgumentError: On unknown flags or missing flag values
    """
    return build_parser().parse_args(argv)


def build_options(args: argparse.Namespace) -> FeedOptions:
    """Validate parsed arguments into FeedOptions.

    Raises:
        ArgumentError: On an empty handle or output path, or a limit that is
            not a positive integer
    """
    if not args.handle:
        raise ArgumentError("Missing --handle value")
    if not args.out:
        raise ArgumentError("Missing --out value")
    return FeedOptions(
        handle=args.handle,
        out=args.out,
        limit=_parse_limit(args.limit),
        include_replies=args.include_replies,
        include_reposts=args.include_reposts,
        site_url=args.site_url,
    )


def generate(
    options: FeedOptions,
    client: BlueskyClient | None = None,
    config: Config | None = None,
    execution_id: str | None = None,
) -> tuple[Path, int, str]:
    """Run the fetch, render and serialize pipeline and write the file.

    Args:
        options: Run options
        client: Bluesky client; one is created from ``config`` when omitted
        config: Environment configuration
        execution_id: Execution ID for logging context

    Returns:
        Tuple of (output path, number of items, feed handle)

    Raises:
        FetchError: If any Bluesky API call fails; nothing is written then
    """
    logger = create_execution_logger("cli", execution_id)
    if client is None:
        config = config or Config()
        client = BlueskyClient(config.get_api_config(), execution_id=logger.execution_id)

    logger.log_execution_start(handle=options.handle, limit=options.limit)

    actor = client.resolve_did(options.handle)
    profile = client.get_profile(actor)
    items = client.fetch_feed_items(
        actor,
        options.limit,
        include_replies=options.include_replies,
        include_reposts=options.include_reposts,
    )

    handle = profile.handle or options.handle
    now = datetime.now(UTC)
    entries = [render_entry(item, handle, now=now) for item in items]
    xml = render_rss_xml(profile, entries, options, now=now)

    output_path = write_feed(Path(options.out).resolve(), xml)

    logger.log_metrics(
        {
            "items_written": len(entries),
            "output_path": str(output_path),
            "self_link": bool(options.site_url),
        }
    )
    logger.log_execution_end(success=True, handle=handle, actor=actor)
    return output_path, len(entries), handle


def main(argv: list[str] | None = None) -> int:
    """Console entry point; returns the process exit status."""
    try:
        config = Config()
        setup_structured_logging(config.log_level)

        parser = build_parser()
        args = parser.parse_args(argv)
        if args.help:
            print(parser.format_help())
            return 0

        options = build_options(args)
        _, count, handle = generate(options, config=config)
    except (BskyRssError, ValueError, OSError) as e:
        logger = create_execution_logger("cli")
        logger.error(str(e), error_type=type(e).__name__)
        print(str(e), file=sys.stderr)
        return 1

    print(f"Generated {options.out} with {count} item(s) for @{handle}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
