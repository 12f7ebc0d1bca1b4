"""Module for classifying sitemap XML content."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import List, Optional, Union

from .errors import MalformedSitemap


@dataclass(frozen=True)
class SitemapIndex:
    """A document that points at further sitemaps."""

    entries: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class UrlSet:
    """A leaf document listing page URLs."""

    entries: List[str] = field(default_factory=list)


ParsedDocument = Union[SitemapIndex, UrlSet]


def _local_name(tag: str) -> str:
    # '{http://www.sitemaps.org/schemas/sitemap/0.9}urlset' -> 'urlset'
    return tag.rsplit("}", 1)[-1]


class SitemapParser:
    """Parses XML content and tells sitemap indexes from URL sets."""

    def parse_xml(self, content: bytes) -> Optional[ET.Element]:
        """Parse *content* into an element tree root, or ``None`` if it isn't XML."""
        try:
            return ET.fromstring(content)
        except ET.ParseError:
            pass
        # The server may have mislabelled the encoding of otherwise valid
        # UTF-8 XML, so try once more as text.
        try:
            return ET.fromstring(content.decode("utf-8-sig"))
        except (UnicodeDecodeError, ET.ParseError, ValueError):
            return None

    def extract_locations(self, root: ET.Element, root_tag: str, entry_tag: str) -> Optional[List[str]]:
        """Collects the ``<loc>`` of each direct *entry_tag* child of *root*.

        Returns ``None`` when *root* is not a *root_tag* element. Empty
        ``<loc>`` elements are skipped.
        """
        if _local_name(root.tag) != root_tag:
            return None

        locations = []
        for entry in root:
            if _local_name(entry.tag) != entry_tag:
                continue
            for child in entry:
                if _local_name(child.tag) == "loc" and child.text and child.text.strip():
                    locations.append(child.text.strip())
                    break
        return locations

    def classify(self, content: bytes, location: Optional[str] = None) -> ParsedDocument:
        """Classify *content* as a :class:`SitemapIndex` or a :class:`UrlSet`.

        An index only counts when it lists at least one sitemap; otherwise
        the document must be a (possibly empty) URL set. *location* is only
        used to label the error.

        Raises:
            MalformedSitemap: If the content is neither.
        """
        root = self.parse_xml(content)
        if root is None:
            raise MalformedSitemap("error parsing sitemap XML: not well-formed", location)

        sitemaps = self.extract_locations(root, "sitemapindex", "sitemap")
        if sitemaps:
            return SitemapIndex(sitemaps)

        urls = self.extract_locations(root, "urlset", "url")
        if urls is not None:
            return UrlSet(urls)

        raise MalformedSitemap(
            f"error parsing sitemap XML: unexpected root element <{_local_name(root.tag)}>",
            location,
        )
