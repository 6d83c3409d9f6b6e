"""Version pattern definitions.

Each default pattern splits a filename into a ``name`` and a ``version``
named group. They share the same shape: a ``-`` or ``_`` separator, an
optional ``v`` that is not captured, and an optional archive suffix anchored
at the end of the string.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

from upstreams.exceptions import RegexError


class VersionStyle(StrEnum):
    """Versioning scheme a pattern targets. Informational only."""

    SEMVER = "semver"  # 1.2.3
    DATE_BASED = "date_based"  # 20250211, 2024.01.31
    RELEASE_SERIES = "release_series"  # 3.24.33
    SIMPLE = "simple"  # 46.1


@dataclass(frozen=True)
class VersionPattern:
    """A compiled pattern with its matching priority (lower is tried first)."""

    style: VersionStyle
    pattern: re.Pattern[str]
    priority: int

    @classmethod
    def compile(cls, style: VersionStyle | str, source: str, priority: int, flags: int = 0) -> VersionPattern:
        """Compile a pattern string.

        Args:
            style: Versioning style the pattern targets
            source: Regular expression with ``name`` and ``version`` groups
            priority: Matching priority, lower is tried first
            flags: Extra ``re`` flags

        Raises:
            RegexError: If the pattern does not compile
        """
        try:
            compiled = re.compile(source, flags)
        except re.error as e:
            raise RegexError(source, e) from e
        return cls(style=VersionStyle(style), pattern=compiled, priority=priority)


_ARCHIVE_SUFFIX = r"(?:\.(?:tar(?:\.[^/]*)?|zip|tgz))?$"

# (style, verbose pattern source, priority)
DEFAULT_PATTERNS: list[tuple[VersionStyle, str, int]] = [
    (
        VersionStyle.DATE_BASED,
        r"""
        (?P<name>[^/]+)
        [-_]
        v?(?P<version>\d{8}(?:[-]\d+\.\d+)?)
        """
        + _ARCHIVE_SUFFIX,
        5,
    ),
    (
        VersionStyle.SEMVER,
        r"""
        (?P<name>[^/]+)
        [-_]
        v?(?P<version>(?:\d+[._]\d+[._]\d+
            (?:[-.](?:rc|alpha|beta|dev|pre|post|build|\d+))*
        ))
        """
        + _ARCHIVE_SUFFIX,
        10,
    ),
    (
        VersionStyle.DATE_BASED,
        r"""
        (?P<name>[^/]+)
        [-_]
        v?(?P<version>\d{4}[._]\d{2}[._]\d{2})
        (?:[-_.][\d.]+)?  # trailing version suffix
        """
        + _ARCHIVE_SUFFIX,
        25,
    ),
    (
        VersionStyle.SIMPLE,
        r"""
        (?P<name>[^/]+)
        [-_]
        v?(?P<version>\d+\.\d+)
        """
        + _ARCHIVE_SUFFIX,
        30,
    ),
    (
        VersionStyle.SIMPLE,
        r"""
        (?P<name>[^/]+)
        [-_]
        v?(?P<version>\d+)
        """
        + _ARCHIVE_SUFFIX,
        35,
    ),
    (
        VersionStyle.SIMPLE,
        r"""
        (?P<name>.*?)
        [-]
        (?P<version>[^-/]+?)
        (?:\.(?:tar(?:\.[^/]*)?|zip|tgz)|\.[\w]+)?$
        """,
        100,
    ),
]


def default_patterns() -> list[VersionPattern]:
    """Compile the built-in pattern table, sorted by priority."""
    patterns = [VersionPattern.compile(style, source, priority, re.VERBOSE) for style, source, priority in DEFAULT_PATTERNS]
    return sorted(patterns, key=lambda p: p.priority)
