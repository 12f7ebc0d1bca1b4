"""Main entry point for the Sitemap URL Extractor application."""

import argparse
import logging
import os
import sys
from typing import Iterable, Optional, TextIO

from .resolver import SitemapResolver

logger = logging.getLogger(__name__)


def log_level(verbose: bool = False) -> int:
    """Picks the log level from *verbose* or the ``LOG_LEVEL`` env var.

    Unknown level names fall back to INFO.
    """
    if verbose:
        return logging.DEBUG
    level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(verbose: bool = False) -> None:
    """Sends log records to stderr so stdout stays reserved for URLs."""
    logging.basicConfig(
        level=log_level(verbose),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def write_urls(urls: Iterable[str], stream: TextIO) -> int:
    """Writes one URL per line to *stream* and returns how many were written."""
    count = 0
    for url in urls:
        stream.write(url + "\n")
        count += 1
    return count


def export_urls(urls: Iterable[str], output_file: str) -> None:
    """Writes *urls* to *output_file*, replacing any previous content."""
    with open(output_file, "w", encoding="utf-8") as f:
        count = write_urls(urls, f)
    logger.info("Successfully exported %d URLs to %s", count, output_file)


def main(argv: Optional[list] = None):
    """Parses command-line arguments and runs the sitemap resolver."""
    parser = argparse.ArgumentParser(
        prog="sitemap-extractor",
        description="Fetch URLs from sitemaps recursively, following sitemap indexes.",
    )
    parser.add_argument(
        "sitemap_url", help="The root sitemap URL to start fetching from."
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output file path. If not specified, URLs are printed to stdout.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="HTTP request timeout in seconds",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    args = parser.parse_args(argv)

    # --- Argument Validation ---
    if args.timeout is not None and args.timeout <= 0:
        print("Error: --timeout must be a positive number.", file=sys.stderr)
        sys.exit(1)

    configure_logging(args.verbose)

    resolver = SitemapResolver(timeout=args.timeout)
    urls = resolver.resolve(args.sitemap_url)

    if args.output is None:
        write_urls(urls, sys.stdout)
        return

    try:
        export_urls(urls, args.output)
    except OSError as e:
        print(f"Error exporting URLs: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
