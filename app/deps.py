import logging
from typing import List

import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.firebase import get_firestore
from app.core.security import decode_access_token
from app.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

security = HTTPBearer()


def get_db():
    return get_firestore()


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db = Depends(get_db),
):
    token = credentials.credentials
    try:
        decoded = decode_access_token(token)
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.InvalidTokenError as e:
        raise HTTPException(status_code=401, detail=f"Invalid token: {e}")

    user = UserRepository(db).get(decoded["sub"])
    if not user:
        raise HTTPException(status_code=401, detail="User no longer exists")
    return user

def require_roles(required: List[str]):
    """
    Dependency generator: enforce minimal one role match.
    Usage: Depends(require_roles(["admin"]))
    """
    def _checker(current_user = Depends(get_current_user)):
        if current_user.get("role") not in set(required):
            logger.warning("Role check failed for user %s (role=%s, required=%s)",
                           current_user["id"], current_user.get("role"), required)
            raise HTTPException(status_code=403, detail="Forbidden: insufficient role")
        return current_user
    return _checker
