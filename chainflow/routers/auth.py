"""
Auth Router — registration, login and session endpoints
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from chainflow.database import get_db
from chainflow.models.user import User
from chainflow.schemas.user import (
    UserCreate,
    UserResponse,
    LoginRequest,
    TokenResponse,
    ChangePasswordRequest,
    MessageResponse,
)
from chainflow.dependencies import get_current_user
from chainflow.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(db)


@router.post("/register", response_model=TokenResponse, status_code=201)
def register(data: UserCreate, service: AuthService = Depends(get_auth_service)):
    return service.register(data)


@router.post("/login", response_model=TokenResponse)
def login(data: LoginRequest, service: AuthService = Depends(get_auth_service)):
    return service.login(data)


@router.get("/me", response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/update-password", response_model=TokenResponse)
def update_password(
    data: ChangePasswordRequest,
    service: AuthService = Depends(get_auth_service),
    current_user: User = Depends(get_current_user),
):
    return service.change_password(current_user, data)


@router.post("/logout", response_model=MessageResponse)
def logout(
    service: AuthService = Depends(get_auth_service),
    current_user: User = Depends(get_current_user),
):
    return service.logout(current_user)
