"""Recursively extract page URLs from a website's sitemaps."""

from .errors import (
    BadStatus,
    DecompressFailed,
    FetchError,
    MalformedSitemap,
    NetworkFailure,
    SitemapError,
    SitemapParseError,
)
from .fetcher import SitemapFetcher
from .parser import ParsedDocument, SitemapIndex, SitemapParser, UrlSet
from .resolver import SitemapResolver

__all__ = [
    "BadStatus",
    "DecompressFailed",
    "FetchError",
    "MalformedSitemap",
    "NetworkFailure",
    "ParsedDocument",
    "SitemapError",
    "SitemapFetcher",
    "SitemapIndex",
    "SitemapParseError",
    "SitemapParser",
    "SitemapResolver",
    "UrlSet",
]
