# app/models/project.py
from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

from app.models.user import UserRef


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be blank")
    return v


class CreateProjectRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    key: str = Field(..., min_length=1, max_length=20)
    members: List[str] = []

    @field_validator("name", "key")
    @classmethod
    def strip_required(cls, v):
        return _strip_required(v)


class UpdateProjectRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=120)
    key: Optional[str] = Field(None, min_length=1, max_length=20)
    members: Optional[List[str]] = None

    @field_validator("name", "key")
    @classmethod
    def strip_optional(cls, v):
        return None if v is None else _strip_required(v)


class AddMembersRequest(BaseModel):
    user_ids: List[str] = Field(..., min_length=1)


class ProjectOut(BaseModel):
    id: str
    name: str
    key: str
    members: List[UserRef] = []
    created_by: Optional[UserRef] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class DeleteProjectResponse(BaseModel):
    ok: bool = True
    id: str
    deleted_tasks: int
