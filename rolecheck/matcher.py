"""Glob matching of permission names against grant patterns.

Patterns use extended shell-glob syntax through ``wcmatch.glob``:

* ``*`` matches any run of characters except ``/``
* ``**`` matches across ``/``
* ``?`` matches exactly one character
* ``[...]`` character classes and ``{a,b}`` brace expansion
* a leading ``!`` negates the pattern

Each pattern is judged on its own. A lone negated pattern such as
``!billing.*`` therefore matches every permission outside ``billing.``.
"""
from __future__ import annotations

from typing import Iterable

from wcmatch import glob

GLOB_FLAGS = (
    glob.GLOBSTAR
    | glob.BRACE
    | glob.NEGATE
    | glob.NEGATEALL
    | glob.EXTGLOB
    | glob.FORCEUNIX
)


def matches(candidate: str, pattern: str) -> bool:
    return glob.globmatch(candidate, pattern, flags=GLOB_FLAGS)


def matches_any(candidate: str, patterns: Iterable[str]) -> bool:
    """Return True if ``candidate`` matches at least one of ``patterns``."""
    return any(matches(candidate, pattern) for pattern in patterns)


def validate_pattern(pattern: str) -> None:
    """Translate ``pattern`` once so unusable patterns fail before matching.

    Raises:
        TypeError: pattern is not a string
        ValueError: pattern is empty or rejected by wcmatch
    """
    if not isinstance(pattern, str):
        raise TypeError(f"pattern must be a string, not {type(pattern).__name__}")
    if not pattern:
        raise ValueError("pattern is empty")
    try:
        glob.translate(pattern, flags=GLOB_FLAGS)
    except Exception as e:
        raise ValueError(f"pattern {pattern!r} is not a valid glob: {e}") from e
