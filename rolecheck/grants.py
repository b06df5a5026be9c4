"""The grants table: an immutable mapping of role names to glob patterns."""
from __future__ import annotations

from collections.abc import Iterable as IterableABC, Mapping
from typing import Any, Dict, Iterable, Iterator, List, Tuple

from loguru import logger

from .errors import InvalidGrantError
from .matcher import validate_pattern


def _build(table: Any) -> Tuple[Dict[str, Tuple[str, ...]], List[str]]:
    built: Dict[str, Tuple[str, ...]] = {}
    issues: List[str] = []

    if not isinstance(table, Mapping):
        issues.append(
            f"grants must be a mapping of role names to pattern lists, "
            f"not {type(table).__name__}"
        )
        return built, issues

    for role, patterns in table.items():
        if not isinstance(role, str):
            issues.append(f"role name {role!r} is not a string")
            continue

        # A bare string would otherwise be iterated character by character
        if isinstance(patterns, (str, bytes)) or not isinstance(patterns, IterableABC):
            issues.append(f"role {role!r}: patterns must be a list of strings")
            continue

        patterns = tuple(patterns)
        for index, pattern in enumerate(patterns):
            try:
                validate_pattern(pattern)
            except (TypeError, ValueError) as e:
                issues.append(f"role {role!r}, pattern #{index}: {e}")
        built[role] = patterns

    return built, issues


def validate_grants(table: Any) -> Tuple[bool, List[str]]:
    """
    Check a role -> patterns mapping without building a table.

    Args:
        table: Candidate grants mapping

    Returns:
        Tuple of (is_valid, list_of_issues)
    """
    _, issues = _build(table)
    return len(issues) == 0, issues


class Grants(Mapping):
    """Read-only ``Mapping[str, tuple[str, ...]]`` of role names to patterns.

    Every pattern is validated when the table is built, so a malformed grant
    fails here rather than at the first permission check. Role order is the
    insertion order of the source mapping.
    """

    __slots__ = ("_table",)

    def __init__(self, table: Mapping[str, Iterable[str]] | None = None):
        built, issues = _build({} if table is None else table)
        if issues:
            logger.error(f"Rejected grants table with {len(issues)} issue(s)")
            raise InvalidGrantError(issues)
        self._table = built
        logger.debug(f"Grants table built for {len(built)} role(s)")

    @classmethod
    def coerce(cls, table: Any) -> "Grants":
        """Return ``table`` itself if it is already a Grants, else build one."""
        if isinstance(table, cls):
            return table
        return cls(table)

    def __getitem__(self, role: str) -> Tuple[str, ...]:
        return self._table[role]

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, role: object) -> bool:
        return role in self._table

    def __repr__(self) -> str:
        return f"Grants({self._table!r})"

    def effective_patterns(self, roles: Iterable[str]) -> Tuple[str, ...]:
        """Concatenate the patterns of every known role, in role order.

        Unknown roles contribute nothing; duplicates are kept.
        """
        patterns: List[str] = []
        for role in roles:
            if role in self._table:
                patterns.extend(self._table[role])
        return tuple(patterns)
