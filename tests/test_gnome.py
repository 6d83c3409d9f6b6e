"""Tests for the GNOME manifest host."""

import json
from unittest.mock import patch

import pytest

from upstreams import ApiRequestError, ApiResponseError
from upstreams.host.gnome_host import GnomeHost, decode_cache
from upstreams.types import AssetKind, VersionedAsset

CACHE_URL = "https://download.gnome.org/sources/NetworkManager/cache.json"
BASE = "https://download.gnome.org/sources/NetworkManager/"

COMPONENTS = {
    "NetworkManager": {
        "1.50.0": {
            "tar.xz": "1.50/NetworkManager-1.50.0.tar.xz",
            "sha256sum": "1.50/NetworkManager-1.50.0.sha256sum",
            "news": "1.50/NetworkManager-1.50.0.news",
        },
        "1.48.10": {
            "tar.xz": "1.48/NetworkManager-1.48.10.tar.xz",
            "tar.gz": "1.48/NetworkManager-1.48.10.tar.gz",
            "tar.bz2": "1.48/NetworkManager-1.48.10.tar.bz2",
        },
        "0.9.0": {"changes": "0.9/NetworkManager-0.9.0.changes"},
    }
}

# The array form served by download.gnome.org
CACHE_ARRAY = json.dumps(
    [4, COMPONENTS, {"NetworkManager": ["0.9.0", "1.48.10", "1.50.0"]}, ["LATEST-IS-1.50.0"]]
)
CACHE_OBJECT = json.dumps({"format": 4, "components": COMPONENTS, "versions": {}, "meta": {}})


@pytest.fixture
def host():
    return GnomeHost.from_url("https://download.gnome.org/sources/NetworkManager/1.50/")


@pytest.mark.parametrize("content", [CACHE_ARRAY, CACHE_OBJECT])
def test_versions(host, fake_file, content):
    """Test every (component, version) becomes one version with its archives."""
    fake = fake_file({CACHE_URL: content})
    with patch("upstreams.host.gnome_host.File", fake):
        versions = host.versions()

    assert fake.requested == [CACHE_URL]
    by_version = {v.version: v for v in versions}
    assert list(by_version) == ["1.50.0", "1.48.10", "0.9.0"]
    assert by_version["1.50.0"].downloads == frozenset(
        {VersionedAsset(url=f"{BASE}1.50/NetworkManager-1.50.0.tar.xz", kind=AssetKind.RELEASE)}
    )
    assert {a.url for a in by_version["1.48.10"].downloads} == {
        f"{BASE}1.48/NetworkManager-1.48.10.tar.xz",
        f"{BASE}1.48/NetworkManager-1.48.10.tar.gz",
        f"{BASE}1.48/NetworkManager-1.48.10.tar.bz2",
    }
    assert by_version["0.9.0"].downloads == frozenset()
    assert all(v.release_notes is None and v.released_at is None for v in versions)


def test_versions_merge_components_sharing_a_version(host, fake_file):
    """Test versions stay unique across components."""
    components = {
        "NetworkManager": {"1.0": {"tar.xz": "1.0/NetworkManager-1.0.tar.xz"}},
        "NetworkManager-docs": {"1.0": {"tar.xz": "1.0/NetworkManager-docs-1.0.tar.xz"}},
    }
    fake = fake_file({CACHE_URL: json.dumps([4, components, {}, []])})
    with patch("upstreams.host.gnome_host.File", fake):
        (meta,) = host.versions()

    assert meta.version == "1.0"
    assert len(meta.downloads) == 2


def test_versions_fetch_failure(host, fake_file):
    """Test transport errors surface as ApiRequestError."""
    with patch("upstreams.host.gnome_host.File", fake_file({})):
        with pytest.raises(ApiRequestError, match="NetworkManager"):
            host.versions()


@pytest.mark.parametrize(
    "content",
    [
        "<html>not json</html>",
        json.dumps({"format": 4}),
        json.dumps([4, ["not", "a", "map"]]),
        json.dumps([4, {"NetworkManager": {"1.0": "1.0/file.tar.xz"}}]),
    ],
)
def test_versions_bad_manifest(host, fake_file, content):
    """Test undecodable or wrongly shaped manifests surface as ApiResponseError."""
    with patch("upstreams.host.gnome_host.File", fake_file({CACHE_URL: content})):
        with pytest.raises(ApiResponseError):
            host.versions()


def test_decode_cache_array_and_object_agree():
    """Test both manifest layouts decode to the same components."""
    assert decode_cache(CACHE_ARRAY, "ctx")["components"] == decode_cache(CACHE_OBJECT, "ctx")["components"]


def test_decode_cache_ignores_unknown_archive_keys():
    """Test unknown keys in a files entry are tolerated."""
    content = json.dumps([4, {"glib": {"2.80.0": {"tar.zst": "2.80/glib-2.80.0.tar.zst"}}}, {}, []])
    assert "2.80.0" in decode_cache(content, "ctx")["components"]["glib"]


@pytest.mark.integration
def test_gnome_versions_live():
    """Test listing versions from download.gnome.org."""
    versions = GnomeHost.from_url("https://download.gnome.org/sources/gnome-disk-utility/46/").versions()
    assert "46.1" in {v.version for v in versions}
