"""Environment-driven settings and grants file loading."""
from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from dotenv import load_dotenv
from loguru import logger

from .errors import GrantsFileError
from .grants import Grants

try:
    load_dotenv()
except Exception as e:  # pragma: no cover
    logger.warning(f"Failed to load .env file: {e}")


def split_roles(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


@dataclass
class Settings:
    """Runtime settings for hosts embedding rolecheck."""

    grants_file: Optional[str] = None
    base_roles: List[str] = field(default_factory=lambda: ["everyone"])
    authenticated_role: str = "authenticated"
    anonymous_role: str = "unauthenticated"
    roles_header: str = "X-User-Roles"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        base_roles = os.getenv("ROLECHECK_BASE_ROLES")
        return cls(
            grants_file=os.getenv("ROLECHECK_GRANTS_FILE") or None,
            base_roles=(
                split_roles(base_roles) if base_roles is not None else ["everyone"]
            ),
            authenticated_role=os.getenv("ROLECHECK_AUTHENTICATED_ROLE", "authenticated"),
            anonymous_role=os.getenv("ROLECHECK_ANONYMOUS_ROLE", "unauthenticated"),
            roles_header=os.getenv("ROLECHECK_ROLES_HEADER", "X-User-Roles"),
            log_level=os.getenv("ROLECHECK_LOG_LEVEL", "INFO").upper(),
        )


def load_grants(path: Union[str, Path]) -> Grants:
    """
    Load a grants table from a JSON file.

    The file holds one object mapping role names to lists of glob patterns.
    Role order in the file is kept.

    Raises:
        FileNotFoundError: path does not exist
        GrantsFileError: file is not a JSON object
        InvalidGrantError: a role or pattern is unusable
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise GrantsFileError(str(path), f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise GrantsFileError(str(path), "top level must be an object of role -> patterns")

    grants = Grants(data)
    logger.info(f"Loaded {len(grants)} role(s) from {path}")
    return grants
