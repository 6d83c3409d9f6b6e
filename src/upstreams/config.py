"""TOML configuration for upstreams.

Lookup order: explicit path, ``$UPSTREAMS_CONFIG``, then ``config.toml`` in
the user config directory. A missing default file yields default settings.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomlkit
from platformdirs import user_config_dir
from tomlkit.exceptions import TOMLKitError

from . import __version__
from .exceptions import ConfigurationError
from .file import File
from .versioning import VersionExtractor, VersionPattern, VersionStyle

CONFIG_ENV = "UPSTREAMS_CONFIG"
CONFIG_DIR = Path(user_config_dir("upstreams", "upstreams"))

DEFAULT_USER_AGENT = f"upstreams/{__version__}"
DEFAULT_ACCEPT = "application/vnd.github.v3+json"
DEFAULT_API_VERSION = "2022-11-28"
LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


@dataclass(frozen=True)
class PatternConfig:
    """A custom version pattern declared under [[patterns]]."""

    style: VersionStyle
    pattern: str
    priority: int


@dataclass(frozen=True)
class Settings:
    """Runtime settings, defaults apply to anything not in the file."""

    log_level: str = "info"
    user_agent: str = DEFAULT_USER_AGENT
    github_accept: str = DEFAULT_ACCEPT
    github_api_version: str = DEFAULT_API_VERSION
    patterns: tuple[PatternConfig, ...] = field(default_factory=tuple)

    def http_headers(self) -> dict[str, str]:
        return {"User-Agent": self.user_agent}

    def github_headers(self) -> dict[str, str]:
        return {
            "Accept": self.github_accept,
            "User-Agent": self.user_agent,
            "X-GitHub-Api-Version": self.github_api_version,
        }

    def extractor(self) -> VersionExtractor:
        """Build an extractor with the configured patterns added.

        Raises:
            RegexError: If a configured pattern does not compile
        """
        extractor = VersionExtractor()
        for entry in self.patterns:
            extractor.add_pattern(VersionPattern.compile(entry.style, entry.pattern, entry.priority))
        return extractor


def default_config_path() -> Path:
    env = os.environ.get(CONFIG_ENV)
    return Path(env) if env else CONFIG_DIR / "config.toml"


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings from a TOML file.

    Args:
        path: Config file. Defaults to ``default_config_path()``, which may
            be absent.

    Raises:
        ConfigurationError: If an explicit file is missing, or any file is
            not valid TOML or holds invalid values
    """
    explicit = path is not None
    config_file = File(Path(path) if explicit else default_config_path())

    if not config_file.exists():
        if explicit:
            raise ConfigurationError(f"Config file not found: {config_file}")
        return Settings()

    try:
        document = tomlkit.parse(config_file.read_text())
    except TOMLKitError as e:
        raise ConfigurationError(f"Invalid TOML in {config_file}: {e}") from e

    return parse_settings(document.unwrap(), source=str(config_file))


def parse_settings(data: dict[str, Any], source: str = "<config>") -> Settings:
    """Validate a plain config mapping into Settings."""
    http = _table(data, "http", source)
    github = _table(data, "github", source)

    log_level = _string(data, "log_level", "info", source).lower()
    if log_level not in LOG_LEVELS:
        raise ConfigurationError(f"{source}: log_level must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")

    patterns = data.get("patterns", [])
    if not isinstance(patterns, list):
        raise ConfigurationError(f"{source}: patterns must be an array of tables")

    return Settings(
        log_level=log_level,
        user_agent=_string(http, "user_agent", DEFAULT_USER_AGENT, source),
        github_accept=_string(github, "accept", DEFAULT_ACCEPT, source),
        github_api_version=_string(github, "api_version", DEFAULT_API_VERSION, source),
        patterns=tuple(_pattern(entry, source) for entry in patterns),
    )


def _table(data: dict, key: str, source: str) -> dict:
    value = data.get(key, {})
    if not isinstance(value, dict):
        raise ConfigurationError(f"{source}: [{key}] must be a table")
    return value


def _string(data: dict, key: str, default: str, source: str) -> str:
    value = data.get(key, default)
    if not isinstance(value, str):
        raise ConfigurationError(f"{source}: {key} must be a string")
    return value


def _pattern(entry: Any, source: str) -> PatternConfig:
    if not isinstance(entry, dict):
        raise ConfigurationError(f"{source}: each [[patterns]] entry must be a table")

    pattern = entry.get("pattern")
    if not isinstance(pattern, str):
        raise ConfigurationError(f"{source}: [[patterns]] entry needs a string 'pattern'")

    priority = entry.get("priority", 50)
    if not isinstance(priority, int) or isinstance(priority, bool) or not 0 <= priority <= 255:
        raise ConfigurationError(f"{source}: pattern priority must be an integer between 0 and 255")

    try:
        style = VersionStyle(entry.get("style", VersionStyle.SIMPLE))
    except ValueError as e:
        choices = ", ".join(s.value for s in VersionStyle)
        raise ConfigurationError(f"{source}: unknown pattern style {entry.get('style')!r} (expected {choices})") from e

    return PatternConfig(style=style, pattern=pattern, priority=priority)
