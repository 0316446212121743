"""Maven coordinate and location models."""

from dataclasses import dataclass, replace
from typing import Optional

from ..constants import Constants


@dataclass(frozen=True)
class Coordinate:
    """Logical identity of an artifact. ``version=None`` means "latest"."""
    repository: str
    group_id: str
    artifact_id: str
    version: Optional[str] = None
    classifier: str = ""
    extension: str = Constants.DEFAULT_EXTENSION

    def with_version(self, version: Optional[str]) -> "Coordinate":
        return replace(self, version=version)

    def __str__(self) -> str:
        parts = [self.group_id, self.artifact_id, self.version or "latest"]
        if self.classifier:
            parts.append(self.classifier)
        return f"{self.repository}:" + ":".join(parts) + f"@{self.extension}"


@dataclass(frozen=True)
class ResolvedLocation:
    """Physical location of an artifact inside its repository."""
    relative_path: str
    file_name: str
