"""CLI interface for upstreams."""

import logging
import os
import sys
from pathlib import Path
from typing import Literal

import tyro
from rich.console import Console

from .config import Settings, load_settings
from .exceptions import UpstreamsError
from .host import HostKind, from_url

LOG_ENV = "UPSTREAMS_LOG"

# Rich console for colorized JSON on stdout
console = Console()

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Send log records to stderr so stdout stays machine readable."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def check(
    locations: tyro.conf.Positional[list[str]],
    host: Literal["auto", "github", "gnome", "plain"] = "auto",
    extract_only: bool = False,
    config: Path | None = None,
    log_level: str | None = None,
) -> None:
    """List upstream versions for each location.

    For every location, prints the extracted name and version to stderr and
    the known versions as JSON to stdout. The first failure aborts the run.

    Args:
        locations: Upstream URLs (release tarballs or repository URLs)
        host: Host implementation to use (auto detects from the URL)
        extract_only: Only print the extracted name and version
        config: Config file (default: $UPSTREAMS_CONFIG or the user config dir)
        log_level: Logging level (default: $UPSTREAMS_LOG or the config value)
    """
    settings = load_settings(config)
    configure_logging(log_level or os.environ.get(LOG_ENV) or settings.log_level)
    run(locations, settings, host=HostKind(host), extract_only=extract_only)


def run(
    locations: list[str],
    settings: Settings,
    host: HostKind = HostKind.AUTO,
    extract_only: bool = False,
) -> None:
    """Process locations one at a time, raising on the first failure."""
    extractor = settings.extractor()
    for location in locations:
        extraction = extractor.extract(location)
        print(f"name = {extraction.name}, version = {extraction.version}", file=sys.stderr)
        if extract_only:
            continue

        upstream = from_url(location, kind=host, settings=settings)
        logger.debug("Using %s for %s", type(upstream).__name__, location)
        versions = upstream.versions()
        console.print_json(data=[v.to_dict() for v in versions])


def main(args: list[str] | None = None) -> None:
    """Upstreams - discover released versions of upstream projects."""
    try:
        tyro.cli(check, args=args)
    except UpstreamsError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
