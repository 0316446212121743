"""Data models for version parsing and ranking."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, IntEnum
from typing import Optional, Tuple, Union


class TokenKind(Enum):
    """Tag distinguishing the two kinds of version token."""
    NUMERIC = "numeric"
    ALPHABETIC = "alphabetic"


class Ordering(IntEnum):
    """Three-way comparison result; values match the cmp_to_key convention."""
    LESS = -1
    EQUAL = 0
    GREATER = 1


@dataclass(frozen=True)
class VersionToken:
    """One alphanumeric run of a version string.

    ``value`` is an ``int`` for NUMERIC tokens and a ``str`` for ALPHABETIC ones.
    """
    kind: TokenKind
    value: Union[int, str]

    @classmethod
    def numeric(cls, value: int) -> "VersionToken":
        return cls(TokenKind.NUMERIC, value)

    @classmethod
    def alphabetic(cls, value: str) -> "VersionToken":
        return cls(TokenKind.ALPHABETIC, value)

    def __str__(self) -> str:
        return str(self.value)


# Parsed, comparable form of a version string.
VersionKey = Tuple[VersionToken, ...]


@dataclass(frozen=True)
class VersionRecord:
    """A ranked version as returned to option callers."""
    label: str
    value: str
    last_modified: Optional[datetime] = None

    def to_option(self) -> dict:
        """Return the ``{"name", "value"}`` shape Rundeck expects for remote options."""
        return {"name": self.label, "value": self.value}
