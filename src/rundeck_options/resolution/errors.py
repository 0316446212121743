"""Failures raised while resolving a coordinate to stored content.

All of them are reported to callers as "not found".
"""


class ResolutionError(LookupError):
    """Base class for resolution failures."""


class InvalidCoordinate(ResolutionError):
    """A required coordinate field is missing or blank."""


class RepositoryNotFound(ResolutionError):
    """The named repository does not exist."""


class UnsupportedFormat(ResolutionError):
    """The repository exists but is not a Maven repository."""


class BucketNotFound(ResolutionError):
    """The repository has no storage bucket."""


class AssetNotFound(ResolutionError):
    """No asset is stored at the resolved path."""
