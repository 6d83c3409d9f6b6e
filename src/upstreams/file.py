"""File helpers for reading local or remote documents."""

from __future__ import annotations

from pathlib import Path

from upath import UPath


class File:
    """Unified file wrapper over UPath supporting local and remote reads."""

    def __init__(self, path: str | Path | UPath, headers: dict[str, str] | None = None):
        if isinstance(path, UPath):
            self.url = str(path)
            self.path = path
        elif isinstance(path, (str, Path)):
            # keep the exact string, UPath may normalize a trailing slash away
            self.url = str(path)
            self.path = UPath(self.url, client_kwargs={"headers": headers}) if headers else UPath(self.url)
        else:
            raise TypeError(f"File expects a path or URL, got {type(path).__name__}")

    @property
    def is_remote(self) -> bool:
        protocol = getattr(self.path, "protocol", None) or "file"
        return protocol not in ("", "file", "local")

    def read_bytes(self) -> bytes:
        """Read the whole document.

        Raises:
            OSError: Not found or connection failures
            aiohttp.ClientError: HTTP status failures for remote documents
        """
        if self.is_remote:
            return self.path.fs.cat_file(self.url)
        return self.path.read_bytes()

    def read_text(self, encoding: str = "utf-8") -> str:
        return self.read_bytes().decode(encoding, errors="replace")

    # Delegate to self.path
    def __getattr__(self, name):
        return getattr(self.path, name)

    def __str__(self) -> str:
        return self.url

    def __repr__(self) -> str:
        return f"File({self.url!r})"
