"""Check whether a set of roles grants a permission.

``check_permission`` can be applied one argument at a time::

    >>> create_verifier = check_permission({
    ...     "content-reader": ["content.read", "images.read"],
    ...     "content-writer": ["content.write", "images.upload"],
    ...     "superadmin": ["*"],
    ... })
    >>> can_bob = create_verifier(["content-reader", "content-writer"])
    >>> can_bob("content.read")
    True
    >>> can_bob("users.create")
    False
    >>> create_verifier(["superadmin"], "users.create")
    True
"""
from __future__ import annotations

from functools import wraps
from typing import Any, Callable, Iterable, Tuple, Union

from .errors import PermissionDenied
from .grants import Grants
from .matcher import matches_any

_UNSET: Any = object()


def _role_tuple(roles: Iterable[str]) -> Tuple[str, ...]:
    if isinstance(roles, (str, bytes)):
        raise TypeError("roles must be a sequence of role names, not a single string")
    return tuple(roles)


def _check_name(permission: str) -> str:
    if not isinstance(permission, str):
        raise TypeError(
            f"permission must be a string, not {type(permission).__name__}"
        )
    return permission


class PermissionVerifier:
    """A permission predicate bound to a grants table and a role set.

    The effective pattern list is gathered once, at binding time. Patterns
    are only matched when the verifier is called.
    """

    __slots__ = ("grants", "roles", "patterns")

    def __init__(self, grants: Grants, roles: Iterable[str]):
        self.grants = grants
        self.roles = _role_tuple(roles)
        self.patterns = grants.effective_patterns(self.roles)

    def __call__(self, permission: str) -> bool:
        return matches_any(_check_name(permission), self.patterns)

    def __repr__(self) -> str:
        return f"PermissionVerifier(roles={list(self.roles)!r})"

    def require(self, permission: str) -> Callable:
        """Decorate a callable so it raises PermissionDenied unless granted."""

        def wrapper(fn: Callable) -> Callable:
            @wraps(fn)
            def inner(*args, **kwargs):
                if not self(permission):
                    raise PermissionDenied(permission, self.roles)
                return fn(*args, **kwargs)

            return inner

        return wrapper


class VerifierFactory:
    """``check_permission`` with only the grants table applied."""

    __slots__ = ("grants",)

    def __init__(self, grants: Grants):
        self.grants = grants

    def for_roles(self, roles: Iterable[str]) -> PermissionVerifier:
        return PermissionVerifier(self.grants, roles)

    def __call__(
        self, roles: Iterable[str], permission: str = _UNSET
    ) -> Union[PermissionVerifier, bool]:
        verifier = self.for_roles(roles)
        if permission is _UNSET:
            return verifier
        return verifier(permission)

    def __repr__(self) -> str:
        return f"VerifierFactory(roles={list(self.grants)!r})"


def check_permission(
    grants: Any, roles: Iterable[str] = _UNSET, permission: str = _UNSET
) -> Union[VerifierFactory, PermissionVerifier, bool]:
    """
    Decide whether any of ``roles`` grants ``permission``.

    Args:
        grants: Mapping of role names to glob patterns, or a Grants table
        roles: Role names held by the principal; unknown names are ignored
        permission: Permission name to test

    Returns:
        A VerifierFactory when only ``grants`` is given, a PermissionVerifier
        when ``roles`` is also given, otherwise the boolean answer.

    Raises:
        InvalidGrantError: ``grants`` contains an unusable role or pattern
    """
    factory = VerifierFactory(Grants.coerce(grants))
    if roles is _UNSET:
        if permission is not _UNSET:
            raise TypeError("permission given without roles")
        return factory
    return factory(roles, permission)
