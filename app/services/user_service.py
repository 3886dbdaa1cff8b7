# app/services/user_service.py
import logging
from typing import List

from fastapi import HTTPException

from app.models.user import UserOut, UserRole
from app.repositories.user_repository import UserRepository
from app.services.auth_service import to_user_out

logger = logging.getLogger(__name__)


def list_users(db) -> List[UserOut]:
    users = UserRepository(db).all()
    users.sort(key=lambda u: (u.get("name", "").lower(), u.get("email", "")))
    return [to_user_out(u) for u in users]


def set_user_role(db, user_id: str, role: UserRole) -> UserOut:
    user = UserRepository(db).update(user_id, {"role": role.value})
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    logger.info("User %s role set to %s", user_id, role.value)
    return to_user_out(user)
