"""GitHub implementation of Host."""

from __future__ import annotations

import logging
from collections import defaultdict
from urllib.parse import urlsplit

from githubkit import GitHub
from githubkit.exception import RequestError, RequestFailed
from pydantic import ValidationError

from upstreams.exceptions import ApiRequestError, ApiResponseError, ParseError
from upstreams.types import AssetKind, GitHubRelease, GitHubTag, VersionedAsset, VersionMetadata

logger = logging.getLogger(__name__)


class GitHubClient:
    """Client for the GitHub REST API.

    Both listings go through githubkit's paginator, so each call returns the
    full collection.
    """

    def __init__(self, headers: dict[str, str] | None = None, github: GitHub | None = None):
        if headers is None:
            from upstreams.config import Settings

            headers = Settings().github_headers()
        self._headers = headers
        self._github = github or GitHub()

    def list_tags(self, owner: str, repo: str) -> list[GitHubTag]:
        """List all tags.

        Raises:
            ApiRequestError: On transport or HTTP status failure
            ApiResponseError: If the response does not decode
        """
        return self._collect(self._github.rest.repos.list_tags, owner, repo, "tags")

    def list_releases(self, owner: str, repo: str) -> list[GitHubRelease]:
        """List all releases.

        Raises:
            ApiRequestError: On transport or HTTP status failure
            ApiResponseError: If the response does not decode
        """
        return self._collect(self._github.rest.repos.list_releases, owner, repo, "releases")

    def _collect(self, request, owner: str, repo: str, what: str) -> list:
        context = f"failed to fetch {what} for {owner}/{repo}"
        try:
            items = self._github.paginate(request, owner=owner, repo=repo, headers=self._headers)
            return [item.model_dump(mode="json", exclude_unset=True) for item in items]
        except (RequestFailed, RequestError) as e:
            raise ApiRequestError(context, e) from e
        except ValidationError as e:
            raise ApiResponseError(context, e) from e


class GithubHost:
    """Versions from a GitHub repository's tags and releases."""

    def __init__(
        self,
        owner: str,
        repo: str,
        url: str,
        client: GitHubClient | None = None,
        headers: dict[str, str] | None = None,
    ):
        self.owner = owner
        self.repo = repo
        self.url = url
        self._client = client
        self._headers = headers

    @classmethod
    def from_url(
        cls,
        url: str,
        client: GitHubClient | None = None,
        headers: dict[str, str] | None = None,
    ) -> GithubHost:
        """Parse owner and repository from the first two path segments.

        Raises:
            ParseError: If either segment is missing
        """
        parts = [p for p in urlsplit(url).path.split("/") if p]
        if len(parts) < 2:
            raise ParseError(f"{url} does not name an owner and repository")
        return cls(owner=parts[0], repo=parts[1], url=url, client=client, headers=headers)

    @property
    def client(self) -> GitHubClient:
        if self._client is None:
            self._client = GitHubClient(headers=self._headers)
        return self._client

    def versions(self) -> list[VersionMetadata]:
        tags = self.client.list_tags(self.owner, self.repo)
        releases = self.client.list_releases(self.owner, self.repo)
        logger.debug("%s/%s: %d tags, %d releases", self.owner, self.repo, len(tags), len(releases))

        tags_by_name: dict[str, list[GitHubTag]] = defaultdict(list)
        for tag in tags:
            tags_by_name[tag["name"]].append(tag)
        releases_by_tag: dict[str, list[GitHubRelease]] = defaultdict(list)
        for release in releases:
            releases_by_tag[release["tag_name"]].append(release)

        # Tags first, then release-only tag names; dict keeps first-seen order
        identifiers = dict.fromkeys([t["name"] for t in tags] + [r["tag_name"] for r in releases])

        results = []
        for identifier in identifiers:
            downloads: dict[str, VersionedAsset] = {}
            for tag in tags_by_name.get(identifier, []):
                _add_asset(downloads, VersionedAsset(url=tag["tarball_url"], kind=AssetKind.AUTOGENERATED))

            matching = releases_by_tag.get(identifier, [])
            for release in matching:
                if release.get("tarball_url"):
                    _add_asset(downloads, VersionedAsset(url=release["tarball_url"], kind=AssetKind.RELEASE))
                # TODO: classify attachments by content_type once binaries and source archives are told apart
                for attachment in release.get("assets") or []:
                    _add_asset(
                        downloads,
                        VersionedAsset(
                            url=attachment["browser_download_url"],
                            kind=AssetKind.AUTOGENERATED,
                            released_at=attachment.get("created_at"),
                            updated_at=attachment.get("updated_at"),
                        ),
                    )

            release = matching[0] if matching else None
            results.append(
                VersionMetadata(
                    version=identifier,
                    downloads=frozenset(downloads.values()),
                    release_notes=release.get("body") if release else None,
                    released_at=release.get("published_at") if release else None,
                )
            )

        logger.info("%s/%s: found %d versions", self.owner, self.repo, len(results))
        return results


def _add_asset(downloads: dict[str, VersionedAsset], asset: VersionedAsset) -> None:
    """Keep one asset per URL; a release classification replaces an autogenerated one."""
    existing = downloads.get(asset.url)
    if existing is None or (asset.kind is AssetKind.RELEASE and existing.kind is not AssetKind.RELEASE):
        downloads[asset.url] = asset
