"""Dashboard version and version constraint helpers."""

from __future__ import annotations

import re

VERSION = "1.4.0"

# Pre-release words in ascending order; a plain number sorts between rc and pl.
_SPECIAL = {
    "dev": 0,
    "alpha": 1,
    "a": 1,
    "beta": 2,
    "b": 2,
    "rc": 3,
    "#": 4,
    "pl": 5,
    "p": 5,
}
_OPERATORS = (">=", "<=", "==", "!=", ">", "<", "=")
_TOKEN = re.compile(r"\d+|[a-z]+")
_ZERO = (_SPECIAL["#"], 0)
_VERSION_START = re.compile(r"v?\d", re.IGNORECASE)


def _canonical(version: str) -> list[str]:
    cleaned = version.replace(" ", "").lower().lstrip("v")
    return _TOKEN.findall(cleaned)


def _rank(token: str) -> tuple[int, int]:
    if token.isdigit():
        return _SPECIAL["#"], int(token)
    # Unknown words sort below dev.
    return _SPECIAL.get(token, -1), 0


def compare_versions(left: str, right: str) -> int:
    """Return -1, 0 or 1 comparing ``left`` against ``right``."""
    a = _canonical(left)
    b = _canonical(right)
    for index in range(max(len(a), len(b))):
        # A missing part counts as zero: 5.0 == 5.0.0 and 5.0 > 5.0-beta.
        x = _rank(a[index]) if index < len(a) else _ZERO
        y = _rank(b[index]) if index < len(b) else _ZERO
        if x != y:
            return -1 if x < y else 1
    return 0


def _check(op: str, current: str, target: str) -> bool:
    result = compare_versions(current, target)
    if op in ("==", "="):
        return result == 0
    if op == "!=":
        return result != 0
    if op == ">":
        return result > 0
    if op == ">=":
        return result >= 0
    if op == "<":
        return result < 0
    return result <= 0


def satisfies(constraint: str | None, current: str = VERSION) -> bool:
    """Return True when ``current`` meets every clause of ``constraint``.

    Clauses are comma separated, each an optional operator followed by a
    version. A bare version targets installations older than it.
    """
    if not constraint or not str(constraint).strip():
        return True
    for clause in str(constraint).split(","):
        clause = clause.strip()
        if not clause:
            continue
        op = "<"
        for candidate in _OPERATORS:
            if clause.startswith(candidate):
                op = candidate
                clause = clause[len(candidate):].strip()
                break
        if not _VERSION_START.match(clause):
            return False
        if not _check(op, current, clause):
            return False
    return True
