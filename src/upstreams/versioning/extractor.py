"""Split filenames and URLs into a project name and a version.

Extraction runs in two phases:
1. Forge archive URLs (GitHub tag archives, GitLab repository archives) are
   rewritten into a synthetic ``{project}-{asset}`` filename, since their
   trailing segment is usually just a tag such as ``v2.63.2.tar.gz``.
2. The filename is matched against the pattern table in priority order;
   the first pattern that captures both ``name`` and ``version`` wins.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from urllib.parse import urlsplit

from upstreams.exceptions import InvalidVersionError

from .patterns import VersionPattern, default_patterns

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Extraction:
    """Project name and version recovered from a path."""

    name: str
    version: str


class VersionExtractor:
    """Priority-ordered version pattern matcher.

    Usage:
        extractor = VersionExtractor()
        result = extractor.extract("myproject-1.2.3.tar.gz")
        # Extraction(name='myproject', version='1.2.3')
    """

    def __init__(self, patterns: Iterable[VersionPattern] | None = None):
        source = default_patterns() if patterns is None else list(patterns)
        # sorted() is stable, equal priorities keep insertion order
        self._patterns: list[VersionPattern] = sorted(source, key=lambda p: p.priority)

    @property
    def patterns(self) -> tuple[VersionPattern, ...]:
        return tuple(self._patterns)

    def add_pattern(self, pattern: VersionPattern) -> None:
        """Add a custom pattern. Patterns are tried lowest priority first."""
        self._patterns.append(pattern)
        self._patterns.sort(key=lambda p: p.priority)

    def extract(self, path: str) -> Extraction:
        """Extract name and version from a path or URL.

        Raises:
            InvalidVersionError: If no pattern matches
        """
        normalized = normalize_vcs_url(path)
        if normalized is not None:
            project, faux = normalized
            matched = self.match_filename(faux)
            if matched is None:
                raise InvalidVersionError(path)
            return Extraction(name=project, version=matched.version)

        matched = self.match_filename(path.rsplit("/", 1)[-1])
        if matched is None:
            raise InvalidVersionError(path)
        return matched

    def match_filename(self, filename: str) -> Extraction | None:
        """Run the pattern table over a bare filename."""
        for entry in self._patterns:
            match = entry.pattern.search(filename)
            if match is None:
                continue
            name = match.groupdict().get("name")
            version = match.groupdict().get("version")
            if name is not None and version is not None:
                logger.debug("%s matched %s pattern (priority %d)", filename, entry.style, entry.priority)
                return Extraction(name=name, version=version)
        return None


def normalize_vcs_url(path: str) -> tuple[str, str] | None:
    """Rewrite a forge archive URL into ``(project, synthetic filename)``.

    Returns None when the path is not a recognized forge archive URL.
    """
    if "github.com" not in path and "gitlab.com" not in path:
        return None

    try:
        url = urlsplit(path)
    except ValueError:
        return None
    if not url.scheme or not url.netloc:
        return None

    parts = url.path.split("/")
    if len(parts) < 3:
        return None
    project = parts[2]

    if url.hostname == "github.com" and "archive/refs/tags/" in url.path:
        return project, f"{project}-{parts[-1]}"
    if url.hostname == "gitlab.com" and "repository/archive.tar.gz" in url.path:
        return project, f"{project}-archive.tar.gz"
    return None


# Module-level shared instance, read-only after construction
_default_extractor: VersionExtractor | None = None


def default_extractor() -> VersionExtractor:
    global _default_extractor
    if _default_extractor is None:
        _default_extractor = VersionExtractor()
    return _default_extractor


def extract(path: str) -> Extraction:
    """Extract name and version using the built-in pattern table."""
    return default_extractor().extract(path)
