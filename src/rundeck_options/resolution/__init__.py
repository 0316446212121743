"""Coordinate resolution."""

from .coordinates import build_file_name, is_blank, resolve_location, snapshot_directory
from .errors import (
    AssetNotFound,
    BucketNotFound,
    InvalidCoordinate,
    RepositoryNotFound,
    ResolutionError,
    UnsupportedFormat,
)
from .models import Coordinate, ResolvedLocation

__all__ = [
    "Coordinate",
    "ResolvedLocation",
    "resolve_location",
    "build_file_name",
    "snapshot_directory",
    "is_blank",
    "ResolutionError",
    "InvalidCoordinate",
    "RepositoryNotFound",
    "UnsupportedFormat",
    "BucketNotFound",
    "AssetNotFound",
]
