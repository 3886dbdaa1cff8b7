from datetime import datetime
from enum import Enum
from pydantic import BaseModel, EmailStr
from typing import Optional


class UserRole(str, Enum):
    ADMIN = "admin"
    MEMBER = "member"


class UserRef(BaseModel):
    id: str
    name: str
    email: EmailStr


class UserOut(BaseModel):
    id: str
    name: str
    email: EmailStr
    role: UserRole
    created_at: Optional[datetime] = None


class UpdateRoleRequest(BaseModel):
    role: UserRole
