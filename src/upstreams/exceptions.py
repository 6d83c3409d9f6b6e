"""Exception hierarchy for upstream version discovery.

Host errors describe why a location could not be listed; version errors
describe why a filename could not be split into name and version.
"""

from __future__ import annotations


class UpstreamsError(Exception):
    """Base exception for all upstreams errors."""


class ConfigurationError(UpstreamsError):
    """Configuration file cannot be read or holds invalid values."""


# --- Host errors ---


class HostError(UpstreamsError):
    """Base class for errors raised while resolving a host's versions."""


class InvalidUrlError(HostError):
    """The location does not have the shape a host requires."""

    def __init__(self, reason: str):
        super().__init__(f"invalid URL format: {reason}")
        self.reason = reason


class ParseError(HostError):
    """The URL is well formed but required parts are missing or invalid."""

    def __init__(self, reason: str):
        super().__init__(f"failed to parse repository info: {reason}")
        self.reason = reason


class ApiRequestError(HostError):
    """A request to an upstream endpoint failed at the transport level."""

    def __init__(self, context: str, source: BaseException | None = None):
        super().__init__(f"API request failed: {context}")
        self.context = context
        self.source = source


class ApiResponseError(HostError):
    """An upstream endpoint answered but the body could not be decoded."""

    def __init__(self, context: str, source: BaseException | None = None):
        super().__init__(f"failed to parse API response: {context}")
        self.context = context
        self.source = source


class UnsupportedError(HostError):
    """The operation is not supported by this host."""

    def __init__(self, reason: str):
        super().__init__(f"operation not supported: {reason}")
        self.reason = reason


# --- Version errors ---


class VersionError(UpstreamsError):
    """Base class for version extraction errors."""


class InvalidVersionError(VersionError):
    """No pattern could extract a version from the path."""

    def __init__(self, path: str = ""):
        super().__init__(f"No version found in path: {path}" if path else "No version found in path")
        self.path = path


class RegexError(VersionError):
    """A custom version pattern failed to compile."""

    def __init__(self, pattern: str, source: BaseException | None = None):
        detail = f": {source}" if source else ""
        super().__init__(f"Invalid regex pattern {pattern!r}{detail}")
        self.pattern = pattern
        self.source = source
