"""Pytest configuration and fixtures"""

from unittest.mock import MagicMock

import pytest


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Isolated directory with no user config leaking into tests"""
    monkeypatch.setenv("UPSTREAMS_CONFIG", str(tmp_path / "missing.toml"))
    monkeypatch.delenv("UPSTREAMS_LOG", raising=False)
    return tmp_path


@pytest.fixture
def github_client():
    """GitHubClient stand-in with empty tag and release listings"""
    client = MagicMock()
    client.list_tags.return_value = []
    client.list_releases.return_value = []
    return client


@pytest.fixture
def fake_file():
    """Build a File replacement whose read_text returns canned content per URL"""

    def build(pages: dict[str, str]):
        requested: list[str] = []

        def make(url, headers=None):
            requested.append(url)
            handle = MagicMock()
            if url not in pages:
                handle.read_text.side_effect = FileNotFoundError(url)
            else:
                handle.read_text.return_value = pages[url]
            return handle

        factory = MagicMock(side_effect=make)
        factory.requested = requested
        return factory

    return build
