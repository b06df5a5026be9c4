from typing import List

from pydantic import BaseModel, Field


class PermissionCheck(BaseModel):
    permission: str
    roles: List[str]
    granted: bool


class RoleLookup(BaseModel):
    permission: str
    roles: List[str] = Field(..., description="Roles that would grant the permission")


class NewUser(BaseModel):
    name: str
    roles: List[str] = Field(default_factory=list)
