"""Version ranking over search index results.

The index can only order by recency, so a wide window of hits is fetched and
re-sorted by version locally. Superseded snapshot builds of the same base
version are not collapsed; every indexed build is listed.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ..constants import Constants
from ..resolution.models import Coordinate
from ..versioning.comparator import sort_records
from ..versioning.models import VersionRecord
from .index import SearchIndex, hits_to_records
from .query import VersionFilter, build_snapshot_filter, build_version_filter, recency_sort

logger = logging.getLogger(__name__)


class VersionRanker:
    """Ranks candidate versions latest first."""

    def __init__(self, index: SearchIndex, window: int = Constants.SEARCH_WINDOW):
        self._index = index
        self._window = window

    def rank(self, version_filter: VersionFilter, limit: int = Constants.DEFAULT_LIMIT) -> List[VersionRecord]:
        """Return at most ``limit`` records matching ``version_filter``, latest first."""
        if limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")

        logger.info("Ranking versions for %s, limit: %s", version_filter, limit)
        filters = build_version_filter(version_filter)
        sources = self._index.search(filters, recency_sort(), 0, max(limit, self._window))
        records = sort_records(hits_to_records(sources))
        logger.debug("Ranked %d candidate versions", len(records))
        return records[:limit]

    def latest_version(self, coord: Coordinate) -> Optional[str]:
        """Highest-ranked version for ``coord``, or None when nothing matches."""
        ranked = self.rank(VersionFilter.from_coordinate(coord), 1)
        return ranked[0].value if ranked else None

    def latest_snapshot(self, coord: Coordinate, base_version: str) -> Optional[str]:
        """Newest timestamped build of ``base_version`` (e.g. ``17.25-SNAPSHOT``)."""
        logger.info("Looking up latest snapshot of %s:%s:%s", coord.group_id, coord.artifact_id, base_version)
        filters = build_snapshot_filter(coord, base_version)
        sources = self._index.search(filters, (), 0, self._window)
        records = sort_records(hits_to_records(sources))
        if not records:
            logger.debug("No snapshot builds indexed for %s", base_version)
            return None
        return records[0].value
