from typing import List
from fastapi import APIRouter, Depends, Path
from app.models.user import UserOut, UpdateRoleRequest
from app.services.user_service import list_users, set_user_role
from app.deps import get_current_user, get_db, require_roles
router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=List[UserOut], summary="List users (for member/assignee pickers)")
def get_users(db = Depends(get_db), _user = Depends(get_current_user)):
    return list_users(db)


# ===== ADMIN ONLY: Set user role =====
@router.put("/{user_id}/role", response_model=UserOut, summary="Set user role (admin only)")
def admin_set_role(
    body: UpdateRoleRequest,
    user_id: str = Path(...),
    db = Depends(get_db),
    _admin = Depends(require_roles(["admin"])),
):
    return set_user_role(db, user_id, body.role)
