import codecs  # Import codecs for BOM
import gzip

import pytest
import requests
from requests.structures import CaseInsensitiveDict

NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


def urlset(*locs):
    """Builds a <urlset> document listing *locs*."""
    entries = "".join(f"<url><loc>{loc}</loc></url>" for loc in locs)
    return f'<?xml version="1.0" encoding="UTF-8"?><urlset xmlns="{NS}">{entries}</urlset>'


def sitemapindex(*locs):
    """Builds a <sitemapindex> document listing *locs*."""
    entries = "".join(f"<sitemap><loc>{loc}</loc></sitemap>" for loc in locs)
    return (
        f'<?xml version="1.0" encoding="UTF-8"?>'
        f'<sitemapindex xmlns="{NS}">{entries}</sitemapindex>'
    )


GZIPPED_URLSET = gzip.compress(urlset("http://gz.com/page1", "http://gz.com/page2").encode("utf-8"))


# Helper class for mocking requests.get
class MockResponse:
    def __init__(self, xml_data, status_code=200, encoding="utf-8", headers=None):
        # Encode based on the provided encoding
        if isinstance(xml_data, str):
            self.content = xml_data.encode(encoding)
        else:  # Assume bytes if not string (e.g., for BOM or gzip)
            self.content = xml_data
        self.status_code = status_code
        self.headers = CaseInsensitiveDict(headers or {"Content-Type": "application/xml"})
        self.closed = False

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


# Fixed corpus served by the fake requests.get, keyed by URL
CORPUS = {
    # End-to-end example: overlapping children
    "http://x/index.xml": lambda: MockResponse(sitemapindex("http://x/a.xml", "http://x/b.xml")),
    "http://x/a.xml": lambda: MockResponse(urlset("http://x/1", "http://x/2")),
    "http://x/b.xml": lambda: MockResponse(urlset("http://x/2", "http://x/3")),
    # Partial failure: the second child answers 404
    "http://partial.com/index.xml": lambda: MockResponse(
        sitemapindex(
            "http://partial.com/one.xml",
            "http://partial.com/missing.xml",
            "http://partial.com/three.xml",
        )
    ),
    "http://partial.com/one.xml": lambda: MockResponse(urlset("http://partial.com/page1")),
    "http://partial.com/missing.xml": lambda: MockResponse(
        "<error>Not Found</error>", status_code=404
    ),
    "http://partial.com/three.xml": lambda: MockResponse(urlset("http://partial.com/page3")),
    # Dedup within a single document
    "http://dup.com/sitemap.xml": lambda: MockResponse(
        urlset("http://dup.com/a", "http://dup.com/a", "http://dup.com/b")
    ),
    # Cycle: A -> B -> A
    "http://cycle.com/a.xml": lambda: MockResponse(sitemapindex("http://cycle.com/b.xml")),
    "http://cycle.com/b.xml": lambda: MockResponse(
        sitemapindex("http://cycle.com/a.xml", "http://cycle.com/leaf.xml")
    ),
    "http://cycle.com/leaf.xml": lambda: MockResponse(urlset("http://cycle.com/page")),
    # Compressed payloads
    "http://gz.com/sitemap.xml.gz": lambda: MockResponse(
        GZIPPED_URLSET, headers={"Content-Type": "application/octet-stream"}
    ),
    "http://gz.com/sitemap.xml": lambda: MockResponse(
        GZIPPED_URLSET, headers={"Content-Type": "application/xml"}
    ),
    "http://gz.com/typed": lambda: MockResponse(
        GZIPPED_URLSET, headers={"Content-Type": "application/x-gzip"}
    ),
    "http://gz.com/broken.xml.gz": lambda: MockResponse(urlset("http://gz.com/never")),
    # Error cases
    "http://badxml.com/sitemap.xml": lambda: MockResponse("<root><unclosed-tag</root>"),
    "http://notfound.com/sitemap.xml": lambda: MockResponse(
        "<error>Not Found</error>", status_code=404
    ),
    "http://empty.com/index.xml": lambda: MockResponse(
        f'<sitemapindex xmlns="{NS}"></sitemapindex>'
    ),
    # Test UTF-8 BOM fallback, raw bytes including BOM
    "http://bom.com/sitemap.xml": lambda: MockResponse(
        codecs.BOM_UTF8 + urlset("http://bom.com/page1").encode("utf-8"), encoding=None
    ),
}


# Monkeypatch requests.get
@pytest.fixture
def patch_requests(monkeypatch):
    """Patches requests.get to return controlled responses or raise errors.

    Returns the list of URLs requested, in order.
    """
    requested = []

    def fake_get(url, **kwargs):  # Accept **kwargs to handle 'timeout' and 'headers'
        requested.append(url)
        if url.startswith("http://error.com/"):
            raise requests.exceptions.ConnectionError("Network error")
        if url in CORPUS:
            return CORPUS[url]()

        # Default fallback for unexpected URLs
        return MockResponse("<root/>", status_code=404)

    monkeypatch.setattr(requests, "get", fake_get)
    return requested
