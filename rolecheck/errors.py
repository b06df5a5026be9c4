"""Exceptions raised by rolecheck.

A negative authorization result is never an exception: ``check_permission``
returns ``False`` and ``find_roles`` returns an empty list. These classes cover
invalid input tables and explicit enforcement only.
"""
from __future__ import annotations

from typing import List, Optional, Sequence


class RolecheckError(Exception):
    """Base class for all rolecheck errors."""


class InvalidGrantError(RolecheckError, ValueError):
    """A grants table contains a role or pattern that cannot be evaluated."""

    def __init__(self, issues: Sequence[str]):
        self.issues: List[str] = list(issues)
        super().__init__(
            f"Invalid grants table: {len(self.issues)} issue(s): "
            + "; ".join(self.issues)
        )


class GrantsFileError(RolecheckError):
    """A grants file could not be parsed into a role -> patterns mapping."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class PermissionDenied(RolecheckError, PermissionError):
    def __init__(self, permission: str, roles: Optional[Sequence[str]] = None):
        self.permission = permission
        self.roles = list(roles or [])
        super().__init__(f"Access denied: {permission}")
