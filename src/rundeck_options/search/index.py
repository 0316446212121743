"""Search index contract and mapping of index hits to version records."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional, Sequence

from ..constants import Constants
from ..versioning.models import VersionRecord
from .query import SortHint, TermFilter

logger = logging.getLogger(__name__)


class SearchUnavailable(RuntimeError):
    """The search index could not be queried."""


class SearchIndex(ABC):
    """Answers structured filter queries over indexed component metadata."""

    @abstractmethod
    def search(
        self,
        filters: Sequence[TermFilter],
        sort: Sequence[SortHint],
        offset: int,
        limit: int,
    ) -> List[Mapping[str, Any]]:
        """Return the source documents of matching components.

        Each document carries ``version`` and an ``assets`` list whose entries
        hold an ``attributes`` mapping.

        Raises:
            SearchUnavailable: the index could not be reached or rejected the query.
        """


def _last_modified(source: Mapping[str, Any]) -> Optional[datetime]:
    """Read ``assets[0].attributes.content.last_modified`` (epoch millis)."""
    assets = source.get("assets") or []
    if not assets:
        return None
    attributes = assets[0].get("attributes") or {}
    content = attributes.get("content") or {}
    millis = content.get("last_modified")
    if millis is None:
        return None
    try:
        return datetime.fromtimestamp(int(millis) / 1000.0, tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        logger.debug("Ignoring unreadable last_modified %r", millis)
        return None


def format_label(version: str, last_modified: Optional[datetime]) -> str:
    """``"1.2.3 (2018-01-02 19:20:26)"``, or ``"1.2.3 (null)"`` without a timestamp."""
    stamp = last_modified.strftime(Constants.LABEL_DATE_FORMAT) if last_modified else "null"
    return f"{version} ({stamp})"


def hit_to_record(source: Mapping[str, Any]) -> VersionRecord:
    """Map one index document to a version record."""
    version = str(source.get("version") or "")
    last_modified = _last_modified(source)
    return VersionRecord(label=format_label(version, last_modified), value=version, last_modified=last_modified)


def hits_to_records(sources: Sequence[Mapping[str, Any]]) -> List[VersionRecord]:
    return [hit_to_record(source) for source in sources]
