"""Artifact storage over local directories laid out as Maven repositories.

Each configured repository maps to a directory. Download marks are kept in a
JSON file at the repository root and written back when a transaction commits.
"""

from __future__ import annotations

import json
import logging
import mimetypes
import os
import tempfile
import threading
from datetime import datetime
from pathlib import Path
from typing import Dict, Mapping, Optional

from ..common.logging_utils import extra_context, is_debug_enabled
from ..constants import Constants
from .base import ArtifactStorage, Asset, Blob, Bucket, Repository, RepositoryCatalog, StorageTx

logger = logging.getLogger(__name__)


class StaticCatalog(RepositoryCatalog):
    """Catalog built from configuration."""

    def __init__(self, repositories: Mapping[str, Repository]):
        self._repositories = dict(repositories)

    def get(self, name: str) -> Optional[Repository]:
        return self._repositories.get(name)


_ROOT_LOCKS: Dict[Path, threading.Lock] = {}
_ROOT_LOCKS_GUARD = threading.Lock()


def _root_lock(root: Path) -> threading.Lock:
    """One lock per repository directory, shared by every transaction on it."""
    key = root.resolve()
    with _ROOT_LOCKS_GUARD:
        return _ROOT_LOCKS.setdefault(key, threading.Lock())


def _read_marks(marks: Path) -> Dict[str, str]:
    if not marks.is_file():
        return {}
    try:
        with open(marks, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable download marks %s: %s", marks, e)
        return {}
    if not isinstance(data, dict):
        return {}
    return {str(k): str(v) for k, v in data.items()}


class FilesystemTx(StorageTx):
    """Transaction over one repository directory.

    Marks saved during the transaction are merged into the marks file on
    commit, so concurrent transactions on the same directory keep each
    other's writes.
    """

    def __init__(self, root: Optional[Path]):
        self._root = root
        self._active = False
        self._downloads: Dict[str, str] = {}
        self._pending: Dict[str, str] = {}

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def _downloads_file(self) -> Optional[Path]:
        return self._root / Constants.DOWNLOADS_FILE if self._root else None

    def begin(self) -> None:
        self._active = True
        self._pending = {}
        self._downloads = {}
        marks = self._downloads_file
        if marks and self._root.is_dir():
            with _root_lock(self._root):
                self._downloads = _read_marks(marks)

    def commit(self) -> None:
        marks = self._downloads_file
        try:
            if self._pending and marks:
                with _root_lock(self._root):
                    merged = _read_marks(marks)
                    merged.update(self._pending)
                    self._write_marks(marks, merged)
                self._downloads.update(self._pending)
        finally:
            self._active = False
            self._pending = {}

    def _write_marks(self, marks: Path, data: Dict[str, str]) -> None:
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=marks.parent, prefix=marks.name, suffix=".tmp", delete=False
        ) as f:
            json.dump(data, f, indent=2, sort_keys=True)
            tmp = f.name
        try:
            os.replace(tmp, marks)
        except OSError:
            os.unlink(tmp)
            raise

    def find_bucket(self, repository: Repository) -> Optional[Bucket]:
        if self._root is None or not self._root.is_dir():
            return None
        return Bucket(repository_name=repository.name, location=self._root)

    def find_asset(self, path: str, bucket: Bucket) -> Optional[Asset]:
        root = Path(bucket.location).resolve()
        candidate = (root / path).resolve()
        if root not in candidate.parents:
            logger.warning("Rejected path outside repository: %s", path)
            return None
        if is_debug_enabled(logger):
            logger.debug(
                "Asset lookup",
                extra=extra_context(event="asset_lookup", component="storage", target=path, found=candidate.is_file()),
            )
        if not candidate.is_file():
            return None
        stamp = self._pending.get(path) or self._downloads.get(path)
        return Asset(
            name=path,
            blob_ref=candidate,
            last_downloaded=datetime.fromisoformat(stamp) if stamp else None,
        )

    def save_asset(self, asset: Asset) -> None:
        if asset.last_downloaded is not None:
            self._pending[asset.name] = asset.last_downloaded.isoformat()

    def require_blob(self, asset: Asset) -> Blob:
        path = Path(asset.blob_ref)
        content_type, _ = mimetypes.guess_type(path.name)
        return Blob(stream=open(path, "rb"), content_type=content_type, size=path.stat().st_size)


class FilesystemStorage(ArtifactStorage):
    """Maps repository names to directories."""

    def __init__(self, roots: Mapping[str, os.PathLike]):
        self._roots = {name: Path(root) for name, root in roots.items()}

    def new_tx(self, repository: Repository) -> StorageTx:
        return FilesystemTx(self._roots.get(repository.name))
