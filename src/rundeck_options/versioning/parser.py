"""Tokenizer turning raw version strings into comparable version keys."""

import logging
from typing import List

from ..common.logging_utils import is_debug_enabled
from ..constants import Constants
from .models import VersionKey, VersionToken

logger = logging.getLogger(__name__)


def _make_token(run: str) -> VersionToken:
    """Numeric when the run is a 32-bit integer, alphabetic otherwise."""
    try:
        number = int(run)
    except ValueError:
        return VersionToken.alphabetic(run)
    if number > Constants.MAX_NUMERIC_TOKEN:
        return VersionToken.alphabetic(run)
    return VersionToken.numeric(number)


def parse_version(raw: str) -> VersionKey:
    """Split ``raw`` into tokens on every character that is not a letter or decimal digit.

    Sample versions:
        17.22-RC-20171110.165811-1 -> 17, 22, RC, 20171110, 165811, 1
        0.0.0-24-develop           -> 0, 0, 0, 24, develop

    Never raises; empty input yields an empty key.
    """
    tokens: List[VersionToken] = []
    buffer: List[str] = []
    for ch in raw or "":
        if ch.isalpha() or ch.isdecimal():
            buffer.append(ch)
        elif buffer:
            tokens.append(_make_token("".join(buffer)))
            buffer = []
    if buffer:
        tokens.append(_make_token("".join(buffer)))

    if is_debug_enabled(logger):
        logger.debug("Version %s - parts: %s", raw, [str(t) for t in tokens])
    return tuple(tokens)
