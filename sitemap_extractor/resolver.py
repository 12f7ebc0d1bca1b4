"""Module for resolving a sitemap tree into the page URLs it advertises."""

import logging
from typing import List, Optional, Set

from .errors import SitemapError
from .fetcher import SitemapFetcher
from .parser import ParsedDocument, SitemapIndex, SitemapParser

logger = logging.getLogger(__name__)


class SitemapResolver:
    """Walks a sitemap and its nested indexes depth-first, collecting URLs.

    The fetcher and parser can be injected, which keeps unit tests free of
    module-level patching. Any object with a ``fetch(url) -> bytes`` method
    will do as the fetcher, e.g. ``SitemapResolver(fetcher=stub).resolve(url)``.
    """

    def __init__(
        self,
        *,
        fetcher: Optional[SitemapFetcher] = None,
        parser: Optional[SitemapParser] = None,
        timeout: Optional[float] = None,
    ):
        # Use injected dependencies or fall back to concrete implementations
        self.fetcher = fetcher if fetcher is not None else SitemapFetcher(timeout=timeout)
        self.parser = parser if parser is not None else SitemapParser()

    def resolve(self, sitemap_url: str) -> List[str]:
        """Returns every URL reachable from *sitemap_url*, sorted.

        Failures never propagate: a broken nested sitemap is logged and
        skipped, and a broken root yields an empty list.
        """
        found_urls: Set[str] = set()
        visited: Set[str] = set()

        # Work-list instead of recursion so long chains of indexes can't
        # exhaust the interpreter stack. Children are pushed in reverse to
        # keep fetches depth-first and in document order.
        stack = [sitemap_url]
        while stack:
            current_url = stack.pop()
            # An index may (directly or indirectly) list itself.
            if current_url in visited:
                logger.warning("Skipping already visited sitemap: %s", current_url)
                continue
            visited.add(current_url)

            try:
                document = self._load(current_url)
            except SitemapError as e:
                if current_url == sitemap_url:
                    logger.error("Error extracting URLs from %s: %s", current_url, e)
                else:
                    logger.error("Error processing nested sitemap %s: %s", current_url, e)
                continue

            if isinstance(document, SitemapIndex):
                logger.info("Processing sitemap index: %s", current_url)
                stack.extend(reversed(document.entries))
                continue

            logger.info("Processing sitemap: %s", current_url)
            before = len(found_urls)
            found_urls.update(document.entries)
            logger.debug(
                "  Found %d new URLs in %s", len(found_urls) - before, current_url
            )

        return sorted(found_urls)

    def _load(self, sitemap_url: str) -> ParsedDocument:
        """Fetches and classifies one sitemap."""
        content = self.fetcher.fetch(sitemap_url)
        return self.parser.classify(content, location=sitemap_url)
