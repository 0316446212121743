"""Search index access and version ranking."""

from .index import SearchIndex, SearchUnavailable, format_label, hit_to_record
from .query import SortHint, TermFilter, VersionFilter, build_snapshot_filter, build_version_filter
from .ranker import VersionRanker

__all__ = [
    "SearchIndex",
    "SearchUnavailable",
    "format_label",
    "hit_to_record",
    "SortHint",
    "TermFilter",
    "VersionFilter",
    "build_snapshot_filter",
    "build_version_filter",
    "VersionRanker",
]
