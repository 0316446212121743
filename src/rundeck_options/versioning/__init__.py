"""Version parsing and ordering."""

from .models import Ordering, TokenKind, VersionKey, VersionRecord, VersionToken
from .parser import parse_version
from .comparator import compare_keys, compare_tokens, compare_versions, sort_records, version_sort_key

__all__ = [
    "Ordering",
    "TokenKind",
    "VersionKey",
    "VersionRecord",
    "VersionToken",
    "parse_version",
    "compare_keys",
    "compare_tokens",
    "compare_versions",
    "sort_records",
    "version_sort_key",
]
