"""Authorization dependencies for FastAPI routes.

The host decides who the principal is. A role provider turns the request
into a role set; everything after that is rolecheck's job.
"""
from __future__ import annotations

from typing import Any, Callable, Iterable, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from loguru import logger

from rolecheck import Grants, PermissionDenied, check_permission, find_roles
from rolecheck.checker import PermissionVerifier
from rolecheck.config import Settings, split_roles
from rolecheck_api.metrics import AUTHZ_DECISIONS

RoleProvider = Callable[[Request], List[str]]


def compose_roles(user_roles: Optional[Iterable[str]], settings: Settings) -> List[str]:
    """Base roles plus either the authenticated role and user roles, or the anonymous role."""
    roles = list(settings.base_roles)
    if user_roles is None:
        roles.append(settings.anonymous_role)
    else:
        roles.append(settings.authenticated_role)
        roles.extend(user_roles)
    return roles


def header_role_provider(settings: Settings) -> RoleProvider:
    """Read the principal's roles from a comma-separated request header.

    Only suitable behind a proxy that sets the header after authenticating.
    """

    def provider(request: Request) -> List[str]:
        raw = request.headers.get(settings.roles_header)
        return compose_roles(None if raw is None else split_roles(raw), settings)

    return provider


class AuthContext:
    def __init__(self, has: PermissionVerifier):
        self.has = has

    @property
    def roles(self) -> List[str]:
        return list(self.has.roles)


class Authorizer:
    def __init__(
        self,
        grants: Any,
        role_provider: Optional[RoleProvider] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or Settings.from_env()
        self.grants = Grants.coerce(grants)
        self.create_verifier = check_permission(self.grants)
        self.get_required_roles = find_roles(self.grants)
        self.role_provider = role_provider or header_role_provider(self.settings)

    def context_for(self, request: Request) -> AuthContext:
        return AuthContext(self.create_verifier.for_roles(self.role_provider(request)))

    def denial_message(self, permission: str, roles: Iterable[str]) -> str:
        return (
            "You must have one of the following roles: "
            f"{'; '.join(self.get_required_roles(permission))}. "
            f"You have: {'; '.join(roles)}."
        )


def get_authorizer(request: Request) -> Authorizer:
    authorizer = getattr(request.app.state, "authorizer", None)
    if authorizer is None:
        raise RuntimeError("No Authorizer installed; call install_authorizer(app, ...)")
    return authorizer


def get_auth(request: Request) -> AuthContext:
    auth = getattr(request.state, "auth", None)
    if auth is None:
        auth = get_authorizer(request).context_for(request)
        request.state.auth = auth
    return auth


def record_decision(granted: bool) -> None:
    AUTHZ_DECISIONS.labels(outcome="granted" if granted else "denied").inc()


def require_permission(permission: str) -> Callable[..., AuthContext]:
    """Dependency factory: 403 unless the principal holds ``permission``."""

    def dependency(request: Request, auth: AuthContext = Depends(get_auth)) -> AuthContext:
        granted = auth.has(permission)
        record_decision(granted)
        if granted:
            return auth

        logger.info(f"Denied {permission} for roles {auth.roles}")
        raise HTTPException(
            status_code=403,
            detail=get_authorizer(request).denial_message(permission, auth.roles),
        )

    return dependency


def enforce(auth: AuthContext, *permissions: str) -> AuthContext:
    """Require every one of ``permissions`` inside a route body.

    Counts one decision. Raises PermissionDenied naming the first missing
    permission.
    """
    for permission in permissions:
        if not auth.has(permission):
            record_decision(False)
            raise PermissionDenied(permission, auth.roles)
    record_decision(True)
    return auth


def permission_denied_handler(request: Request, exc: PermissionDenied) -> JSONResponse:
    logger.info(f"Denied {exc.permission} for roles {exc.roles}")
    return JSONResponse(
        status_code=403,
        content={"detail": f"Insufficient permissions: {exc.permission}"},
    )


def install_authorizer(app: FastAPI, authorizer: Authorizer) -> None:
    app.state.authorizer = authorizer
    app.add_exception_handler(PermissionDenied, permission_denied_handler)
