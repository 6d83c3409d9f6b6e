"""Version extraction from filenames and forge archive URLs."""

from .extractor import Extraction as Extraction
from .extractor import VersionExtractor as VersionExtractor
from .extractor import default_extractor as default_extractor
from .extractor import extract as extract
from .extractor import normalize_vcs_url as normalize_vcs_url
from .patterns import DEFAULT_PATTERNS as DEFAULT_PATTERNS
from .patterns import VersionPattern as VersionPattern
from .patterns import VersionStyle as VersionStyle

__all__ = [
    "DEFAULT_PATTERNS",
    "Extraction",
    "VersionExtractor",
    "VersionPattern",
    "VersionStyle",
    "default_extractor",
    "extract",
    "normalize_vcs_url",
]
