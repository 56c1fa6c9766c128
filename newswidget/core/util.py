"""Miscellaneous helpers used across the app."""

from __future__ import annotations

import re
from datetime import datetime

SOFT_HYPHEN = "\u00ad"

_HASH_PARAM = re.compile(r"hash=[a-z0-9%+/=_-]+", re.IGNORECASE)
_LONG_WORD = re.compile(r"\S{20,}")


def timestamp(moment: datetime | None = None) -> str:
    """Return ``moment`` (default: now) as ``YYYY-MM-DD HH:MM:SS``."""
    return (moment or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")


def scrub_hash(message: str) -> str:
    """Drop the ``hash=...`` query value from an error message."""
    return _HASH_PARAM.sub("", message)


def shyphenate(text: str, every: int = 10) -> str:
    """Insert soft hyphens into long words so they can wrap in narrow panels."""

    def _split(match: re.Match[str]) -> str:
        word = match.group(0)
        return SOFT_HYPHEN.join(word[i : i + every] for i in range(0, len(word), every))

    return _LONG_WORD.sub(_split, text)
