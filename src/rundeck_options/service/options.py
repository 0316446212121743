"""Rundeck option operations: version listing and artifact content."""

from __future__ import annotations

import logging
from contextlib import ExitStack
from dataclasses import dataclass
from typing import BinaryIO, List, Optional

from ..constants import Constants
from ..resolution.coordinates import is_blank, resolve_location
from ..resolution.errors import (
    AssetNotFound,
    BucketNotFound,
    InvalidCoordinate,
    RepositoryNotFound,
    ResolutionError,
    UnsupportedFormat,
)
from ..resolution.models import Coordinate
from ..search.query import VersionFilter
from ..search.ranker import VersionRanker
from ..storage.base import ArtifactStorage, RepositoryCatalog, transaction
from ..versioning.models import VersionRecord

logger = logging.getLogger(__name__)


@dataclass
class ContentResult:
    """An artifact ready to be streamed. The caller closes ``stream``."""
    file_name: str
    content_type: str
    stream: BinaryIO
    size: Optional[int] = None

    @property
    def content_disposition(self) -> str:
        return f'attachment;filename="{self.file_name}"'


class RundeckOptionsService:
    """Resolves coordinates against the catalog, index and storage it is given."""

    def __init__(
        self,
        catalog: RepositoryCatalog,
        ranker: VersionRanker,
        storage: ArtifactStorage,
        snapshots_repository: str = Constants.SNAPSHOTS_REPOSITORY,
    ):
        self._catalog = catalog
        self._ranker = ranker
        self._storage = storage
        self._snapshots_repository = snapshots_repository

    def versions(self, version_filter: VersionFilter, limit: int = Constants.DEFAULT_LIMIT) -> List[VersionRecord]:
        """List matching versions, latest first, at most ``limit`` of them."""
        return self._ranker.rank(version_filter, limit)

    def latest_version(self, coord: Coordinate) -> Optional[str]:
        return self._ranker.latest_version(coord)

    def content(self, coord: Coordinate) -> Optional[ContentResult]:
        """Open the artifact for ``coord``; None when it cannot be found.

        A blank version resolves to the latest indexed version first.
        """
        try:
            return self._fetch(coord)
        except ResolutionError as e:
            logger.debug("Content for %s not found: %s: %s", coord, type(e).__name__, e)
            return None

    def _fetch(self, coord: Coordinate) -> ContentResult:
        if is_blank(coord.repository) or is_blank(coord.group_id) or is_blank(coord.artifact_id):
            raise InvalidCoordinate(
                f"repository={coord.repository!r}, groupId={coord.group_id!r}, artifactId={coord.artifact_id!r}"
            )

        version = coord.version
        if is_blank(version):
            version = self._ranker.latest_version(coord)
            if is_blank(version):
                raise InvalidCoordinate(f"no versions indexed for {coord}")
            logger.debug("Defaulted %s to latest version %s", coord, version)

        repository = self._catalog.get(coord.repository)
        if repository is None:
            raise RepositoryNotFound(coord.repository)
        if repository.format != Constants.MAVEN_FORMAT:
            raise UnsupportedFormat(f"{repository.name} is {repository.format}")

        with ExitStack() as on_error:
            with transaction(self._storage, repository) as tx:
                bucket = tx.find_bucket(repository)
                if bucket is None:
                    raise BucketNotFound(repository.name)

                location = resolve_location(
                    coord.with_version(version),
                    version,
                    self._ranker.latest_snapshot,
                    self._snapshots_repository,
                )
                asset = tx.find_asset(location.relative_path, bucket)
                if asset is None:
                    raise AssetNotFound(location.relative_path)

                tx.mark_downloaded(asset)
                blob = tx.require_blob(asset)
                on_error.callback(blob.stream.close)
            # committed; the caller owns the stream from here
            on_error.pop_all()

        logger.info("Serving %s from %s", location.relative_path, repository.name)
        return ContentResult(
            file_name=location.file_name,
            content_type=blob.content_type or Constants.DEFAULT_CONTENT_TYPE,
            stream=blob.stream,
            size=blob.size,
        )
