"""Search index backed by the repository manager's Elasticsearch component index."""
from __future__ import annotations

import json
import logging
from typing import Any, List, Mapping, Optional, Sequence

import requests

from ..common.logging_utils import Timer, extra_context, is_debug_enabled, safe_url
from ..constants import Constants
from .index import SearchIndex, SearchUnavailable
from .query import SortHint, TermFilter, to_elasticsearch

logger = logging.getLogger(__name__)


class ElasticsearchIndex(SearchIndex):
    """Queries ``<url>/<index>/_search`` with a filter-only bool query."""

    def __init__(
        self,
        url: str = Constants.DEFAULT_SEARCH_URL,
        index: str = Constants.DEFAULT_SEARCH_INDEX,
        timeout: int = Constants.REQUEST_TIMEOUT,
        username: Optional[str] = None,
        password: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        self._endpoint = f"{url.rstrip('/')}/{index}/_search"
        self._timeout = timeout
        self._session = session or requests.Session()
        if username:
            self._session.auth = (username, password or "")

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def search(
        self,
        filters: Sequence[TermFilter],
        sort: Sequence[SortHint],
        offset: int,
        limit: int,
    ) -> List[Mapping[str, Any]]:
        body = to_elasticsearch(tuple(filters), tuple(sort), offset, limit)
        target = safe_url(self._endpoint)
        with Timer() as t:
            if is_debug_enabled(logger):
                logger.debug(
                    "Search request %s",
                    json.dumps(body),
                    extra=extra_context(event="search_request", component="elasticsearch", action="POST", target=target),
                )
            try:
                res = self._session.post(self._endpoint, json=body, timeout=self._timeout)
            except requests.Timeout as exc:
                logger.error("Search request timed out after %s seconds", self._timeout)
                raise SearchUnavailable(f"search timed out: {target}") from exc
            except requests.RequestException as exc:  # includes ConnectionError
                logger.error("Search connection error: %s", exc)
                raise SearchUnavailable(f"search connection error: {target}") from exc

        if res.status_code != 200:
            logger.warning(
                "Search non-2xx handled",
                extra=extra_context(
                    event="search_response",
                    outcome="handled_non_2xx",
                    status_code=res.status_code,
                    duration_ms=t.duration_ms(),
                    target=target,
                ),
            )
            raise SearchUnavailable(f"search returned HTTP {res.status_code}")

        try:
            payload = res.json()
        except ValueError as exc:
            raise SearchUnavailable("search returned invalid JSON") from exc

        hits = (payload.get("hits") or {}).get("hits") or []
        if is_debug_enabled(logger):
            logger.debug(
                "Search response ok",
                extra=extra_context(
                    event="search_response",
                    outcome="success",
                    status_code=res.status_code,
                    duration_ms=t.duration_ms(),
                    hit_count=len(hits),
                ),
            )
        return [hit.get("_source") or {} for hit in hits]
