"""Find which roles would grant a permission."""
from __future__ import annotations

from typing import Any, List, Union

from .grants import Grants
from .matcher import matches_any

_UNSET: Any = object()


class RoleFinder:
    """``find_roles`` with the grants table applied."""

    __slots__ = ("grants",)

    def __init__(self, grants: Grants):
        self.grants = grants

    def __call__(self, permission: str) -> List[str]:
        if not isinstance(permission, str):
            raise TypeError(
                f"permission must be a string, not {type(permission).__name__}"
            )
        return [
            role
            for role, patterns in self.grants.items()
            if matches_any(permission, patterns)
        ]

    def __repr__(self) -> str:
        return f"RoleFinder(roles={list(self.grants)!r})"


def find_roles(grants: Any, permission: str = _UNSET) -> Union[RoleFinder, List[str]]:
    """
    List the roles with at least one pattern matching ``permission``.

    Roles come back in the iteration order of ``grants``. Roles without
    patterns never match. The result is a fresh list, empty when nothing
    matches.

    >>> find_roles({"reader": ["content.read"], "superadmin": ["*"]}, "content.read")
    ['reader', 'superadmin']
    """
    finder = RoleFinder(Grants.coerce(grants))
    if permission is _UNSET:
        return finder
    return finder(permission)
