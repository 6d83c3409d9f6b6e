"""Host protocol and URL dispatch."""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol
from urllib.parse import urlsplit

from upstreams.exceptions import InvalidUrlError
from upstreams.types import VersionMetadata

if TYPE_CHECKING:
    from upstreams.config import Settings


class HostKind(StrEnum):
    """Host implementations selectable by name."""

    AUTO = "auto"
    GITHUB = "github"
    GNOME = "gnome"
    PLAIN = "plain"


class Host(Protocol):
    """Interface implemented by every upstream host.

    A host is built once per queried URL and lists the versions known for
    that location, each with its downloadable assets.
    """

    url: str

    def versions(self) -> list[VersionMetadata]:
        """Fetch all available versions.

        Returns:
            One VersionMetadata per distinct version string

        Raises:
            HostError: If the upstream cannot be queried or decoded
        """
        ...


def _github(url: str, settings: Settings | None) -> Host:
    from .github_host import GithubHost

    return GithubHost.from_url(url, headers=settings.github_headers() if settings else None)


def _gnome(url: str, settings: Settings | None) -> Host:
    from .gnome_host import GnomeHost

    return GnomeHost.from_url(url, headers=settings.http_headers() if settings else None)


def _plain(url: str, settings: Settings | None) -> Host:
    from .plain_host import PlainHost

    return PlainHost.from_url(
        url,
        extractor=settings.extractor() if settings else None,
        headers=settings.http_headers() if settings else None,
    )


HOSTS: dict[HostKind, Callable[[str, Settings | None], Host]] = {
    HostKind.GITHUB: _github,
    HostKind.GNOME: _gnome,
    HostKind.PLAIN: _plain,
}


def detect_kind(url: str) -> HostKind:
    """Pick the host kind for a URL: github.com is GitHub, anything else is plain."""
    if urlsplit(url).hostname == "github.com":
        return HostKind.GITHUB
    return HostKind.PLAIN


def from_url(url: str, kind: HostKind | str | None = None, settings: Settings | None = None) -> Host:
    """Build the host for a URL.

    Args:
        url: Absolute upstream URL
        kind: Force a host kind instead of detecting it from the URL
        settings: Headers and extractor configuration (defaults if None)

    Returns:
        Host instance for the URL

    Raises:
        InvalidUrlError: If the URL is not absolute, or the host rejects it
        ParseError: If a GitHub URL lacks owner or repository
        ValueError: If kind is not a known host kind
    """
    try:
        parsed = urlsplit(url)
    except ValueError as e:
        raise InvalidUrlError(f"{url!r} is not a valid URL: {e}") from e
    if not parsed.scheme or not parsed.netloc:
        raise InvalidUrlError(f"{url!r} is not an absolute URL")

    host_kind = HostKind(kind) if kind else HostKind.AUTO
    if host_kind is HostKind.AUTO:
        host_kind = detect_kind(url)

    return HOSTS[host_kind](url, settings)
