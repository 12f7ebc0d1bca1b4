"""Exceptions raised while fetching and classifying sitemap documents."""

from __future__ import annotations


class SitemapError(Exception):
    """Base class for failures tied to a single sitemap location."""

    def __init__(self, message: str, location: str | None = None):
        super().__init__(message)
        self.location = location


class FetchError(SitemapError):
    """The sitemap could not be retrieved."""


class NetworkFailure(FetchError):
    """The HTTP request itself failed (DNS, connection, timeout...)."""


class BadStatus(FetchError):
    """The server answered with a status other than 200."""

    def __init__(self, status_code: int, location: str | None = None):
        super().__init__(f"received non-200 status code: {status_code}", location)
        self.status_code = status_code


class DecompressFailed(FetchError):
    """A response selected for gzip decompression was not valid gzip."""


class SitemapParseError(SitemapError):
    """The fetched bytes could not be interpreted as a sitemap."""


class MalformedSitemap(SitemapParseError):
    """Neither a non-empty sitemap index nor a URL set."""
