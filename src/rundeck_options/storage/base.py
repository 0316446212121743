"""Repository catalog and artifact storage contracts."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, BinaryIO, Iterator, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Repository:
    """A named repository and its format identifier (e.g. ``maven2``)."""
    name: str
    format: str


@dataclass(frozen=True)
class Bucket:
    """Storage area holding one repository's assets."""
    repository_name: str
    location: Any


@dataclass
class Asset:
    """A stored file, addressed by its repository-relative path."""
    name: str
    blob_ref: Any
    last_downloaded: Optional[datetime] = None

    def mark_downloaded(self, when: Optional[datetime] = None) -> None:
        self.last_downloaded = when or datetime.now(timezone.utc)


@dataclass
class Blob:
    """Open byte stream of an asset. Callers close ``stream``."""
    stream: BinaryIO
    content_type: Optional[str] = None
    size: Optional[int] = None


class RepositoryCatalog(ABC):
    """Maps repository names to repositories."""

    @abstractmethod
    def get(self, name: str) -> Optional[Repository]:
        """Return the repository called ``name``, or None."""


class StorageTx(ABC):
    """One unit of work against artifact storage."""

    @abstractmethod
    def begin(self) -> None:
        """Start the transaction."""

    @abstractmethod
    def commit(self) -> None:
        """Persist pending changes and end the transaction."""

    @property
    @abstractmethod
    def is_active(self) -> bool:
        """True between ``begin`` and ``commit``."""

    @abstractmethod
    def find_bucket(self, repository: Repository) -> Optional[Bucket]:
        """Return the repository's bucket, or None."""

    @abstractmethod
    def find_asset(self, path: str, bucket: Bucket) -> Optional[Asset]:
        """Return the asset stored at ``path``, or None."""

    @abstractmethod
    def save_asset(self, asset: Asset) -> None:
        """Record changes made to ``asset``."""

    @abstractmethod
    def require_blob(self, asset: Asset) -> Blob:
        """Open the asset's content."""

    def mark_downloaded(self, asset: Asset) -> None:
        asset.mark_downloaded()
        self.save_asset(asset)


class ArtifactStorage(ABC):
    """Hands out transactions for a repository's storage."""

    @abstractmethod
    def new_tx(self, repository: Repository) -> StorageTx:
        """Create an unstarted transaction for ``repository``."""


@contextmanager
def transaction(storage: ArtifactStorage, repository: Repository) -> Iterator[StorageTx]:
    """Begin a transaction and commit it on every exit path."""
    tx = storage.new_tx(repository)
    tx.begin()
    try:
        yield tx
    finally:
        if tx.is_active:
            tx.commit()
            logger.debug("Committed storage transaction for %s", repository.name)
