"""Total ordering over parsed version keys.

Tokens are compared position by position. Same-kind tokens compare by value;
an alphabetic token always outranks a numeric one at the same position, so a
release qualifier such as ``RC`` beats a dated build like ``20171024``:

    17.20-RC-20171025.155355-1  >  17.20-20171024.222631-7

When one key is a strict prefix of the other, the shorter key ranks lower.
"""

import functools
from typing import Callable, Iterable, List

from .models import Ordering, TokenKind, VersionKey, VersionRecord, VersionToken
from .parser import parse_version


def _cmp(a, b) -> Ordering:
    if a < b:
        return Ordering.LESS
    if a > b:
        return Ordering.GREATER
    return Ordering.EQUAL


def compare_tokens(a: VersionToken, b: VersionToken) -> Ordering:
    """Compare two tokens; alphabetic beats numeric on a kind mismatch."""
    if a.kind is b.kind:
        return _cmp(a.value, b.value)
    if a.kind is TokenKind.ALPHABETIC:
        return Ordering.GREATER
    return Ordering.LESS


def compare_keys(a: VersionKey, b: VersionKey, descending: bool = False) -> Ordering:
    """Compare two version keys in ascending order, or descending if asked."""
    if descending:
        a, b = b, a
    for mine, theirs in zip(a, b):
        result = compare_tokens(mine, theirs)
        if result is not Ordering.EQUAL:
            return result
    return _cmp(len(a), len(b))


def compare_versions(a: str, b: str, descending: bool = False) -> Ordering:
    """Parse and compare two raw version strings."""
    return compare_keys(parse_version(a), parse_version(b), descending=descending)


# Sort key for raw version strings, ascending.
version_sort_key: Callable[[VersionKey], object] = functools.cmp_to_key(compare_keys)


def sort_records(records: Iterable[VersionRecord]) -> List[VersionRecord]:
    """Return records latest first. Stable for records with equal versions."""
    keyed = [(parse_version(record.value), record) for record in records]
    keyed.sort(key=lambda item: version_sort_key(item[0]), reverse=True)
    return [record for _, record in keyed]
