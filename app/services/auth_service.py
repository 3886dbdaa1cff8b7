# app/services/auth_service.py
import logging
from typing import Any, Dict

from fastapi import HTTPException

from app.core.security import create_access_token, hash_password, verify_password
from app.models.auth import AuthResponse, LoginRequest, RegisterRequest
from app.models.user import UserOut, UserRole
from app.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


def to_user_out(user: Dict[str, Any]) -> UserOut:
    return UserOut(
        id=user["id"],
        name=user.get("name", ""),
        email=user["email"],
        role=user.get("role", UserRole.MEMBER.value),
        created_at=user.get("created_at"),
    )


def _auth_response(user: Dict[str, Any]) -> AuthResponse:
    return AuthResponse(access_token=create_access_token(user), user=to_user_out(user))


# ---------- Core auth ----------

def register_user(db, req: RegisterRequest) -> AuthResponse:
    users = UserRepository(db)
    email = req.email.strip().lower()
    if users.get_by_email(email):
        raise HTTPException(status_code=409, detail="Email already exists")

    user = users.create(
        {
            "name": req.name,
            "email": email,
            "password_hash": hash_password(req.password),
            "role": UserRole.MEMBER.value,
        }
    )
    logger.info("Registered user %s", user["id"])
    return _auth_response(user)


def password_login(db, req: LoginRequest) -> AuthResponse:
    user = UserRepository(db).get_by_email(req.email)
    if not user or not verify_password(req.password, user.get("password_hash", "")):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return _auth_response(user)
