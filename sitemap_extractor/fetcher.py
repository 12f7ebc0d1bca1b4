"""Module for fetching raw sitemap content.

Every request carries a fixed "User-Agent" header and an "Accept" header that
advertises XML and gzip payloads. Bodies are gunzipped when the URL ends in
``.gz`` or the server declares a gzip content type.

The user agent and timeout can be configured through a ``.env`` file placed
in the project root:

```env
# .env
SITEMAP_USER_AGENT=curl/8.7.1
REQUEST_TIMEOUT_SECONDS=30
```

The variables are loaded via *python-dotenv*.
"""

from __future__ import annotations

import gzip
import logging
import os
import zlib

import requests
from dotenv import load_dotenv

from .errors import BadStatus, DecompressFailed, NetworkFailure

logger = logging.getLogger(__name__)

# --- Environment configuration ------------------------------------------------

# Load variables from .env if present; silently ignore missing file
load_dotenv()

_DEFAULT_USER_AGENT = os.getenv("SITEMAP_USER_AGENT", "curl/8.7.1")
_DEFAULT_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "30"))

ACCEPT_HEADER = "application/xml,text/xml,application/gzip,*/*"
GZIP_CONTENT_TYPES = frozenset({"application/x-gzip", "application/gzip"})


def is_gzipped(url: str, content_type: str | None) -> bool:
    """Decide whether a response body should be gunzipped.

    Only the URL suffix and the declared media type are consulted; the body
    itself is never sniffed.
    """
    if url.endswith(".gz"):
        return True
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type in GZIP_CONTENT_TYPES


class SitemapFetcher:
    """Retrieves the raw bytes of sitemap documents."""

    def __init__(
        self,
        *,
        timeout: float | None = None,
        user_agent: str | None = None,
    ):
        """Create a new ``SitemapFetcher``.

        Parameters
        ----------
        timeout
            Maximum seconds to wait for an HTTP response. Defaults to the
            ``REQUEST_TIMEOUT_SECONDS`` env var or 30 seconds.
        user_agent
            Custom *User-Agent* header value. Defaults to the
            ``SITEMAP_USER_AGENT`` env var or ``curl/8.7.1``.
        """

        self.timeout = timeout if timeout is not None else _DEFAULT_TIMEOUT
        self.user_agent = user_agent or _DEFAULT_USER_AGENT

        # Prepared headers dict reused across requests
        self._headers = {"User-Agent": self.user_agent, "Accept": ACCEPT_HEADER}

    def fetch(self, url: str) -> bytes:
        """Fetch *url* and return its body, gunzipped where indicated.

        Raises
        ------
        NetworkFailure
            If the request could not be completed.
        BadStatus
            If the server answered with anything but 200.
        DecompressFailed
            If the body was selected for decompression but is not gzip.
        """
        logger.debug("Fetching %s", url)
        try:
            with requests.get(url, timeout=self.timeout, headers=self._headers) as resp:
                if resp.status_code != requests.codes.ok:
                    raise BadStatus(resp.status_code, url)
                content = resp.content
                content_type = resp.headers.get("Content-Type")
        except requests.exceptions.RequestException as e:
            raise NetworkFailure(f"error downloading sitemap: {e}", url) from e

        if is_gzipped(url, content_type):
            try:
                return gzip.decompress(content)
            except (OSError, EOFError, zlib.error) as e:
                raise DecompressFailed(f"error decompressing sitemap: {e}", url) from e

        return content
