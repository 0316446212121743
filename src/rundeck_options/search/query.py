"""Filter descriptions sent to the search index."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from ..constants import Constants
from ..resolution.coordinates import is_blank
from ..resolution.models import Coordinate

FIELD_FORMAT = "format"
FIELD_REPOSITORY = "repository_name"
FIELD_GROUP_ID = "attributes.maven2.groupId"
FIELD_ARTIFACT_ID = "attributes.maven2.artifactId"
FIELD_CLASSIFIER = "assets.attributes.maven2.classifier"
FIELD_EXTENSION = "assets.attributes.maven2.extension"
FIELD_BASE_VERSION = "assets.attributes.maven2.baseVersion"
FIELD_LAST_UPDATED = "assets.last_updated"


@dataclass(frozen=True)
class TermFilter:
    """Exact match on a single indexed field."""
    field: str
    value: str


@dataclass(frozen=True)
class SortHint:
    """Ordering the index applies before results come back."""
    field: str
    descending: bool = True


@dataclass(frozen=True)
class VersionFilter:
    """Partial coordinate used to select candidate versions.

    Blank fields do not constrain the search.
    """
    repository: Optional[str] = None
    group_id: Optional[str] = None
    artifact_id: Optional[str] = None
    classifier: Optional[str] = None
    extension: Optional[str] = None

    @classmethod
    def from_coordinate(cls, coord: Coordinate) -> "VersionFilter":
        return cls(
            repository=coord.repository,
            group_id=coord.group_id,
            artifact_id=coord.artifact_id,
            classifier=coord.classifier,
            extension=coord.extension,
        )


def _terms(pairs: List[Tuple[str, Optional[str]]]) -> Tuple[TermFilter, ...]:
    filters = [TermFilter(FIELD_FORMAT, Constants.MAVEN_FORMAT)]
    filters.extend(TermFilter(field, value) for field, value in pairs if not is_blank(value))
    return tuple(filters)


def build_version_filter(version_filter: VersionFilter) -> Tuple[TermFilter, ...]:
    """Conjunctive filter over the non-blank fields plus the Maven format."""
    return _terms([
        (FIELD_REPOSITORY, version_filter.repository),
        (FIELD_GROUP_ID, version_filter.group_id),
        (FIELD_ARTIFACT_ID, version_filter.artifact_id),
        (FIELD_CLASSIFIER, version_filter.classifier),
        (FIELD_EXTENSION, version_filter.extension),
    ])


def build_snapshot_filter(coord: Coordinate, base_version: str) -> Tuple[TermFilter, ...]:
    """Filter selecting every timestamped build of a ``-SNAPSHOT`` version."""
    return _terms([
        (FIELD_REPOSITORY, coord.repository),
        (FIELD_GROUP_ID, coord.group_id),
        (FIELD_ARTIFACT_ID, coord.artifact_id),
        (FIELD_BASE_VERSION, base_version),
    ])


def recency_sort() -> Tuple[SortHint, ...]:
    return (SortHint(FIELD_LAST_UPDATED, descending=True),)


def to_elasticsearch(filters: Tuple[TermFilter, ...], sort: Tuple[SortHint, ...], offset: int, limit: int) -> Dict[str, Any]:
    """Render a filter description as an Elasticsearch ``_search`` body."""
    body: Dict[str, Any] = {
        "from": offset,
        "size": limit,
        "query": {
            "bool": {
                "filter": [{"term": {f.field: f.value}} for f in filters],
            }
        },
    }
    if sort:
        body["sort"] = [{s.field: {"order": "desc" if s.descending else "asc"}} for s in sort]
    return body
