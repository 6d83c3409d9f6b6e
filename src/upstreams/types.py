"""Type definitions for version metadata and raw upstream records."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from typing_extensions import NotRequired, TypedDict


class AssetKind(StrEnum):
    """How a downloadable artifact came to exist."""

    # Explicitly published as part of a release
    RELEASE = "release"
    # Source snapshot produced for a tag, or an unclassified attachment
    AUTOGENERATED = "autogenerated"


class VersionedAssetInfo(TypedDict):
    """Serialized form of a VersionedAsset."""

    url: str
    kind: str
    released_at: str | None
    updated_at: str | None


class VersionMetadataInfo(TypedDict):
    """Serialized form of a VersionMetadata.

    Fields:
        version: Version string as published upstream
        downloads: Artifacts for this version, sorted by url then kind
        release_notes: Release body, when the host provides one
        released_at: Publication timestamp (ISO format) or None
    """

    version: str
    downloads: list[VersionedAssetInfo]
    release_notes: str | None
    released_at: str | None


@dataclass(frozen=True)
class VersionedAsset:
    """One downloadable artifact of a version.

    Equality covers every field, so sets of assets drop identical links.
    """

    url: str
    kind: AssetKind
    released_at: str | None = None
    updated_at: str | None = None

    def sort_key(self) -> tuple:
        # None sorts before any timestamp
        return (
            self.url,
            str(self.kind),
            (self.released_at is not None, self.released_at or ""),
            (self.updated_at is not None, self.updated_at or ""),
        )

    def to_dict(self) -> VersionedAssetInfo:
        return {
            "url": self.url,
            "kind": str(self.kind),
            "released_at": self.released_at,
            "updated_at": self.updated_at,
        }


@dataclass(frozen=True)
class VersionMetadata:
    """A distinct version discovered for an upstream location."""

    version: str
    downloads: frozenset[VersionedAsset] = field(default_factory=frozenset)
    release_notes: str | None = None
    released_at: str | None = None

    def sorted_downloads(self) -> list[VersionedAsset]:
        return sorted(self.downloads, key=VersionedAsset.sort_key)

    def to_dict(self) -> VersionMetadataInfo:
        return {
            "version": self.version,
            "downloads": [asset.to_dict() for asset in self.sorted_downloads()],
            "release_notes": self.release_notes,
            "released_at": self.released_at,
        }


# --- Raw upstream records ---


class GitHubTag(TypedDict):
    """Tag entry from GET /repos/{owner}/{repo}/tags."""

    name: str
    tarball_url: str


class GitHubReleaseAsset(TypedDict):
    """Release attachment metadata."""

    browser_download_url: str
    name: NotRequired[str]
    content_type: NotRequired[str]
    created_at: NotRequired[str | None]
    updated_at: NotRequired[str | None]


class GitHubRelease(TypedDict):
    """Release entry from GET /repos/{owner}/{repo}/releases."""

    tag_name: str
    tarball_url: str | None
    assets: list[GitHubReleaseAsset]
    body: NotRequired[str | None]
    published_at: NotRequired[str | None]


# Archive keys are not identifiers, so the functional syntax is required
GnomeFiles = TypedDict(
    "GnomeFiles",
    {
        "news": NotRequired[str],
        "changes": NotRequired[str],
        "sha256sum": NotRequired[str],
        "tar.xz": NotRequired[str],
        "tar.gz": NotRequired[str],
        "tar.bz2": NotRequired[str],
    },
)


class GnomeCache(TypedDict):
    """The cache.json manifest published under /sources/{project}/."""

    format: int
    components: dict[str, dict[str, GnomeFiles]]
    versions: NotRequired[dict[str, list[str]]]
    meta: NotRequired[Any]
