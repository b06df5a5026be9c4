# rolecheck_api/server.py
import sys
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import Body, Depends, FastAPI, Request
from loguru import logger
from prometheus_client import make_asgi_app

from rolecheck.config import Settings, load_grants
from rolecheck_api.middleware.auth import (
    AuthContext,
    Authorizer,
    enforce,
    get_auth,
    get_authorizer,
    install_authorizer,
    require_permission,
)
from rolecheck_api.schemas import NewUser, PermissionCheck, RoleLookup

# Used when ROLECHECK_GRANTS_FILE is not set.
DEMO_GRANTS: Dict[str, list] = {
    "everyone": ["content.read.homepage"],
    "unauthenticated": ["user.create.reader"],
    "authenticated": ["content.read.{post,comment}"],
    "reader": ["content.write.comment"],
    "writer": ["content.write.post", "content.read.feedback"],
    "editor": ["content.*.feedback", "user.create.{reader,writer}"],
    "admin": ["*"],
}


_log_handler_id: Optional[int] = None


def configure_logging(level: str) -> int:
    """Add (or replace) this server's stderr sink. Sinks owned by the host are left alone."""
    global _log_handler_id
    if _log_handler_id is not None:
        logger.remove(_log_handler_id)
    _log_handler_id = logger.add(sys.stderr, level=level)
    return _log_handler_id


def build_authorizer(settings: Settings) -> Authorizer:
    if settings.grants_file:
        grants = load_grants(settings.grants_file)
    else:
        logger.warning("ROLECHECK_GRANTS_FILE not set, using demo grants")
        grants = DEMO_GRANTS
    return Authorizer(grants, settings=settings)


def create_app(authorizer: Optional[Authorizer] = None) -> FastAPI:
    if authorizer is None:
        settings = Settings.from_env()
        configure_logging(settings.log_level)
        authorizer = build_authorizer(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Authorization ready. Roles defined: {len(authorizer.grants)}")
        yield

    app = FastAPI(title="rolecheck demo API", lifespan=lifespan)
    install_authorizer(app, authorizer)

    # Mount Prometheus Metrics Endpoint
    app.mount("/metrics", make_asgi_app())

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.get("/auth/check", response_model=PermissionCheck)
    def auth_check(permission: str, auth: AuthContext = Depends(get_auth)):
        return PermissionCheck(
            permission=permission, roles=auth.roles, granted=auth.has(permission)
        )

    @app.get("/auth/roles", response_model=RoleLookup)
    def auth_roles(permission: str, request: Request):
        roles = get_authorizer(request).get_required_roles(permission)
        return RoleLookup(permission=permission, roles=roles)

    # --- Demo content API ---

    @app.get("/", dependencies=[Depends(require_permission("content.read.homepage"))])
    def homepage():
        return {"welcome": True, "to": "The blog of Alice"}

    @app.get("/comments", dependencies=[Depends(require_permission("content.read.comment"))])
    def list_comments():
        return [
            {"author": 1, "comment": "Hello world"},
            {"author": 3, "comment": "How does this work?"},
        ]

    @app.get("/posts/{post_id}", dependencies=[Depends(require_permission("content.read.post"))])
    def get_post(post_id: int):
        return {"id": post_id, "author": 1, "body": "Once upon a time..."}

    @app.get(
        "/posts/{post_id}/feedback",
        dependencies=[Depends(require_permission("content.read.feedback"))],
    )
    def get_feedback(post_id: int):
        return [{"post": post_id, "author": 2, "score": 90, "comment": "Good stuff!"}]

    @app.post("/comments", dependencies=[Depends(require_permission("content.write.comment"))])
    def create_comment(payload: Dict[str, Any] = Body(default={})):
        return payload

    @app.post("/posts", dependencies=[Depends(require_permission("content.write.post"))])
    def create_post(payload: Dict[str, Any] = Body(default={})):
        return payload

    @app.post(
        "/posts/{post_id}/feedback",
        dependencies=[Depends(require_permission("content.write.feedback"))],
    )
    def create_feedback(post_id: int, payload: Dict[str, Any] = Body(default={})):
        return payload

    @app.post("/users")
    def create_user(user: NewUser, auth: AuthContext = Depends(get_auth)):
        # Assigning a role requires its own permission
        enforce(auth, *(f"user.create.{role}" for role in user.roles))
        return user

    return app


app = create_app()
