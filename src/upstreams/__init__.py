"""Upstreams - discover released versions and downloads of upstream projects."""

__version__ = "0.1.0"

from .exceptions import (  # noqa: E402
    ApiRequestError as ApiRequestError,
    ApiResponseError as ApiResponseError,
    ConfigurationError as ConfigurationError,
    HostError as HostError,
    InvalidUrlError as InvalidUrlError,
    InvalidVersionError as InvalidVersionError,
    ParseError as ParseError,
    RegexError as RegexError,
    UnsupportedError as UnsupportedError,
    UpstreamsError as UpstreamsError,
    VersionError as VersionError,
)
from .types import (  # noqa: E402
    AssetKind as AssetKind,
    VersionedAsset as VersionedAsset,
    VersionMetadata as VersionMetadata,
)
from .versioning import Extraction as Extraction, VersionExtractor as VersionExtractor, extract as extract  # noqa: E402
from .host import Host as Host, HostKind as HostKind, from_url as from_url  # noqa: E402
from . import host as host  # noqa: E402
from . import versioning as versioning  # noqa: E402
