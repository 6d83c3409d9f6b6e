"""GNOME download server implementation of Host."""

from __future__ import annotations

import json
import logging
from urllib.parse import urlsplit

import aiohttp
from pydantic import TypeAdapter, ValidationError

from upstreams.exceptions import ApiRequestError, ApiResponseError, InvalidUrlError
from upstreams.file import File
from upstreams.types import AssetKind, GnomeCache, VersionedAsset, VersionMetadata

logger = logging.getLogger(__name__)

_CACHE_FIELDS = ("format", "components", "versions", "meta")
_cache_adapter: TypeAdapter[GnomeCache] = TypeAdapter(GnomeCache)


def decode_cache(content: str, context: str) -> GnomeCache:
    """Decode a cache.json document.

    The server ships a positional array ``[format, components, versions,
    meta]``; a keyed object with the same names is accepted too.

    Raises:
        ApiResponseError: If the document is not JSON or has the wrong shape
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ApiResponseError(context, e) from e

    if isinstance(data, list):
        data = dict(zip(_CACHE_FIELDS, data))

    try:
        return _cache_adapter.validate_python(data)
    except ValidationError as e:
        raise ApiResponseError(context, e) from e


class GnomeHost:
    """Versions from a project's cache.json on a GNOME-style download server."""

    # Archive variants published per version
    ARCHIVE_KEYS = ("tar.xz", "tar.gz", "tar.bz2")

    def __init__(self, project: str, url: str, headers: dict[str, str] | None = None):
        self.project = project
        self.url = url
        self._headers = headers

    @classmethod
    def from_url(cls, url: str, headers: dict[str, str] | None = None) -> GnomeHost:
        """Parse the project from a ``/sources/{project}/...`` URL.

        Raises:
            InvalidUrlError: If the path does not start with sources/{project}
        """
        parts = [p for p in urlsplit(url).path.split("/") if p]
        if not parts or parts[0] != "sources":
            raise InvalidUrlError(f"{url} is not under /sources/")
        if len(parts) < 2:
            raise InvalidUrlError(f"{url} does not name a project")
        return cls(project=parts[1], url=url, headers=headers)

    @property
    def base_url(self) -> str:
        parsed = urlsplit(self.url)
        return f"{parsed.scheme}://{parsed.netloc}/sources/{self.project}/"

    @property
    def cache_url(self) -> str:
        return f"{self.base_url}cache.json"

    def versions(self) -> list[VersionMetadata]:
        context = f"failed to fetch release manifest for {self.project}"
        logger.debug("Fetching %s", self.cache_url)
        try:
            content = File(self.cache_url, headers=self._headers).read_text()
        except (OSError, aiohttp.ClientError) as e:
            raise ApiRequestError(context, e) from e

        cache = decode_cache(content, context)

        grouped: dict[str, set[VersionedAsset]] = {}
        # The endpoint is per project, every component in it belongs to us
        for component, releases in cache["components"].items():
            for version, files in releases.items():
                downloads = grouped.setdefault(version, set())
                for key in self.ARCHIVE_KEYS:
                    if key in files:
                        downloads.add(VersionedAsset(url=f"{self.base_url}{files[key]}", kind=AssetKind.RELEASE))
            logger.debug("%s: %d versions of component %s", self.project, len(releases), component)

        logger.info("%s: found %d versions", self.project, len(grouped))
        return [VersionMetadata(version=v, downloads=frozenset(d)) for v, d in grouped.items()]
