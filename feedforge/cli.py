"""CLI entry point for feedforge."""
import argparse
import logging
import sys

from rich.console import Console

from feedforge import __version__
from feedforge.config import config_defaults, write_starter_config
from feedforge.errors import FeedError
from feedforge.formatters import FORMATTERS, get_formatter
from feedforge.loader import load_feed_file

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="feedforge",
        description="Render a feed definition as RSS, Atom, OPML, JSON Feed or HTML",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("feed_file", nargs="?", default=None,
                        help="Feed definition (.yaml, .yml or .json)")
    parser.add_argument("-f", "--format", choices=list(FORMATTERS), default="rss",
                        help="Output format (default: rss)")
    parser.add_argument("-o", "--output", type=str, default=None,
                        help="Write output to file instead of stdout")
    parser.add_argument("--indent", type=int, default=None,
                        help="Spaces per nesting level (default: 2, html: 4)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress status messages on stderr")
    parser.add_argument("--init-config", action="store_true",
                        help="Write a starter ~/.feedforge.yaml and exit")
    return parser


def main(argv=None):
    parser = build_parser()
    parser.set_defaults(**config_defaults())
    args = parser.parse_args(argv)
    console = Console(stderr=True)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    if args.init_config:
        path = write_starter_config()
        console.print(f"✅ Wrote starter config to {path}", style="green", markup=False)
        return

    if not args.feed_file:
        parser.error("a feed file is required")

    try:
        feed = load_feed_file(args.feed_file)
        formatter = get_formatter(args.format, indent=args.indent)
        if args.output:
            with open(args.output, "w", encoding="utf-8") as f:
                formatter.write(feed, f)
        else:
            output = formatter.format(feed)
    except (OSError, ValueError, FeedError) as e:
        logger.debug("Render failed", exc_info=True)
        console.print(f"❌ {e}", style="bold red", markup=False)
        sys.exit(1)

    if args.output:
        if not args.quiet:
            console.print(f"✅ Wrote {args.format} feed with {len(feed.items)} items to {args.output}", markup=False)
    else:
        print(output)


if __name__ == "__main__":
    main()
