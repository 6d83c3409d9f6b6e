"""Upstream hosts that list versions for a location."""

from .provider import HOSTS as HOSTS
from .provider import Host as Host
from .provider import HostKind as HostKind
from .provider import detect_kind as detect_kind
from .provider import from_url as from_url

__all__ = ["HOSTS", "Host", "HostKind", "detect_kind", "from_url"]
