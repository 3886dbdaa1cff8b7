from fastapi import APIRouter, Depends, status
from app.models.auth import RegisterRequest, LoginRequest, AuthResponse
from app.models.user import UserOut
from app.services.auth_service import register_user, password_login, to_user_out
from app.deps import get_current_user, get_db

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED,
             summary="Register a new member account")
def register(req: RegisterRequest, db = Depends(get_db)):
    # Public: self sign-up always creates a member
    return register_user(db, req)


@router.post("/login", response_model=AuthResponse, summary="Login with email & password")
def login(req: LoginRequest, db = Depends(get_db)):
    return password_login(db, req)

@router.get("/me", response_model=UserOut, summary="Current user profile (with role)")
def me(current_user = Depends(get_current_user)):
    return to_user_out(current_user)
