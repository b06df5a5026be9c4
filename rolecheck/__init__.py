"""Role-based permission checks over glob-pattern grants.

Roles are named bundles of grants and a principal may hold any number of
them. There is no inheritance between roles: compose them instead.
"""
from .checker import PermissionVerifier, VerifierFactory, check_permission
from .errors import GrantsFileError, InvalidGrantError, PermissionDenied, RolecheckError
from .grants import Grants, validate_grants
from .resolver import RoleFinder, find_roles

__all__ = [
    "check_permission",
    "find_roles",
    "Grants",
    "validate_grants",
    "PermissionVerifier",
    "VerifierFactory",
    "RoleFinder",
    "RolecheckError",
    "InvalidGrantError",
    "GrantsFileError",
    "PermissionDenied",
]
