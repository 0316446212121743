"""Coordinate to storage path resolution, including snapshot handling."""

import logging
from typing import Callable, Optional

from ..constants import Constants
from .errors import InvalidCoordinate
from .models import Coordinate, ResolvedLocation

logger = logging.getLogger(__name__)

# (coordinate, base version) -> timestamped file version, or None if unknown
SnapshotLookup = Callable[[Coordinate, str], Optional[str]]


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def build_file_name(artifact_id: str, version: str, classifier: str = "", extension: str = Constants.DEFAULT_EXTENSION) -> str:
    """Return ``<artifactId>-<version>[-<classifier>].<extension>``."""
    suffix = "" if is_blank(classifier) else f"-{classifier}"
    return f"{artifact_id}-{version}{suffix}.{extension}"


def is_snapshot_version(version: str) -> bool:
    """True for symbolic snapshot versions such as ``17.25-SNAPSHOT``."""
    return Constants.SNAPSHOT_MARKER in version


def snapshot_directory(version: str) -> str:
    """Map a timestamped snapshot version to its ``-SNAPSHOT`` directory.

    ``17.25-20180102.192026-6`` -> ``17.25-SNAPSHOT``
    """
    base = version.split("-", 1)[0]
    return base + Constants.SNAPSHOT_MARKER


def resolve_location(
    coord: Coordinate,
    version: str,
    snapshot_lookup: SnapshotLookup,
    snapshots_repository: str = Constants.SNAPSHOTS_REPOSITORY,
) -> ResolvedLocation:
    """Compute the storage path and file name for ``coord`` at ``version``.

    In the snapshots repository, directories are named by the symbolic
    ``-SNAPSHOT`` version while files carry a build timestamp. A timestamped
    version is mapped back to its directory; a symbolic one is mapped forward
    to the newest timestamped file through ``snapshot_lookup``.

    Raises:
        InvalidCoordinate: groupId, artifactId or version is blank, or no
            timestamped build exists for a symbolic snapshot version.
    """
    if is_blank(coord.group_id) or is_blank(coord.artifact_id) or is_blank(version):
        raise InvalidCoordinate(
            f"groupId={coord.group_id!r}, artifactId={coord.artifact_id!r}, version={version!r}"
        )

    path_version = version
    file_version = version

    if coord.repository == snapshots_repository:
        # version MAY look like 17.25-20180102.192026-6 or just 17.25-SNAPSHOT
        if not is_snapshot_version(version):
            path_version = snapshot_directory(version)
        else:
            resolved = snapshot_lookup(coord, version)
            if is_blank(resolved):
                raise InvalidCoordinate(f"no snapshot build found for {version}")
            file_version = resolved

    file_name = build_file_name(coord.artifact_id, file_version, coord.classifier, coord.extension)
    path = "/".join([coord.group_id.replace(".", "/"), coord.artifact_id, path_version, file_name])
    logger.debug("Resolved %s at %s to path %s", coord, version, path)
    return ResolvedLocation(relative_path=path, file_name=file_name)
