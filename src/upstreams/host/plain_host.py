"""Fallback implementation of Host for plain download directories.

The directory holding the queried file is fetched as an HTML index. Every
link whose extracted project name equals the queried file's name is kept and
grouped by its extracted version.
"""

from __future__ import annotations

import logging
from urllib.parse import urljoin, urlsplit

import aiohttp
from bs4 import BeautifulSoup
from soupsieve import SelectorSyntaxError

from upstreams.exceptions import (
    ApiRequestError,
    InvalidVersionError,
    ParseError,
    UnsupportedError,
)
from upstreams.file import File
from upstreams.types import AssetKind, VersionedAsset, VersionMetadata
from upstreams.versioning import VersionExtractor, default_extractor

logger = logging.getLogger(__name__)


class PlainHost:
    """Versions scraped from the directory listing around a download URL."""

    ANCHOR_SELECTOR = "a[href]"
    LISTABLE_SCHEMES = ("http", "https")
    # Longer hrefs are skipped before pattern matching
    MAX_HREF_LENGTH = 1024

    def __init__(
        self,
        path: str,
        url: str,
        directory: str,
        extractor: VersionExtractor | None = None,
        headers: dict[str, str] | None = None,
    ):
        self.path = path
        self.url = url
        self.directory = directory
        self._extractor = extractor
        self._headers = headers

    @classmethod
    def from_url(
        cls,
        url: str,
        extractor: VersionExtractor | None = None,
        headers: dict[str, str] | None = None,
    ) -> PlainHost:
        """Split the URL path into the file path and its directory. Never fails."""
        url_path = urlsplit(url).path
        segments = url_path.split("/")[1:] if url_path.startswith("/") else url_path.split("/")
        return cls(
            path=url_path.lstrip("/"),
            url=url,
            directory="/".join(segments[:-1]),
            extractor=extractor,
            headers=headers,
        )

    @property
    def extractor(self) -> VersionExtractor:
        return self._extractor or default_extractor()

    @property
    def index_url(self) -> str:
        parsed = urlsplit(self.url)
        if not self.directory:
            return f"{parsed.scheme}://{parsed.netloc}/"
        return f"{parsed.scheme}://{parsed.netloc}/{self.directory}/"

    def versions(self) -> list[VersionMetadata]:
        scheme = urlsplit(self.url).scheme
        if scheme not in self.LISTABLE_SCHEMES:
            raise UnsupportedError(f"{scheme} URLs cannot be listed")

        hrefs = self.fetch_links()

        try:
            reference = self.extractor.extract(self.url)
        except InvalidVersionError as e:
            raise ParseError(f"cannot determine project name from {self.url}") from e
        logger.debug("Looking for %s in %d links", reference.name, len(hrefs))

        grouped: dict[str, set[VersionedAsset]] = {}
        for href in hrefs:
            if len(href) > self.MAX_HREF_LENGTH:
                logger.debug("Skipping href of %d characters", len(href))
                continue
            try:
                candidate = self.extractor.extract(href)
            except InvalidVersionError:
                continue
            if candidate.name != reference.name:
                continue
            try:
                resolved = self.resolve(href)
            except ValueError:
                logger.debug("Skipping malformed href %r", href)
                continue
            asset = VersionedAsset(url=resolved, kind=AssetKind.RELEASE)
            grouped.setdefault(candidate.version, set()).add(asset)

        logger.info("%s: found %d versions", reference.name, len(grouped))
        return [VersionMetadata(version=version, downloads=frozenset(assets)) for version, assets in grouped.items()]

    def fetch_links(self) -> list[str]:
        """Fetch the directory index and return every anchor's href.

        Raises:
            ApiRequestError: If the index cannot be fetched
            ParseError: If the anchor selector is invalid
        """
        logger.debug("Fetching %s", self.index_url)
        try:
            content = File(self.index_url, headers=self._headers).read_text()
        except (OSError, aiohttp.ClientError) as e:
            raise ApiRequestError(f"failed to fetch directory listing {self.index_url}", e) from e

        soup = BeautifulSoup(content, "html.parser")
        try:
            anchors = soup.select(self.ANCHOR_SELECTOR)
        except SelectorSyntaxError as e:
            raise ParseError(f"invalid anchor selector {self.ANCHOR_SELECTOR!r}: {e}") from e
        return [str(anchor["href"]) for anchor in anchors]

    def resolve(self, href: str) -> str:
        """Absolute hrefs are kept, relative ones are resolved against the index."""
        parsed = urlsplit(href)
        if parsed.scheme and parsed.netloc:
            return href
        return urljoin(self.index_url, href)
