"""Repository catalog and artifact storage."""

from .base import (
    ArtifactStorage,
    Asset,
    Blob,
    Bucket,
    Repository,
    RepositoryCatalog,
    StorageTx,
    transaction,
)
from .filesystem import FilesystemStorage, StaticCatalog

__all__ = [
    "ArtifactStorage",
    "Asset",
    "Blob",
    "Bucket",
    "Repository",
    "RepositoryCatalog",
    "StorageTx",
    "transaction",
    "FilesystemStorage",
    "StaticCatalog",
]
