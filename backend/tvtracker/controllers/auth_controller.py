from fastapi import APIRouter, Depends, Response, status

from tvtracker.auth.dependencies import get_current_identity
from tvtracker.domain.dto import (
    AuthResponse,
    LoginRequest,
    PasswordChange,
    ProfileUpdate,
    RegisterRequest,
    UserResponse
)
from tvtracker.domain.models import Identity
from tvtracker.service.auth_service import AuthService
from tvtracker.service.dependencies import get_auth_service

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
    responses={401: {"description": "Not authenticated"}}
)

@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=AuthResponse)
def register(
    user_data: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    user, token = auth_service.register_user(user_data.email, user_data.username, user_data.password)
    return AuthResponse(user=UserResponse.model_validate(user), token=token)

@router.post("/login", response_model=AuthResponse)
def login(
    credentials: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    user, token = auth_service.authenticate_user(credentials.email, credentials.password)
    return AuthResponse(user=UserResponse.model_validate(user), token=token)

@router.get("/me", response_model=UserResponse)
def read_profile(
    identity: Identity = Depends(get_current_identity),
    auth_service: AuthService = Depends(get_auth_service)
):
    return UserResponse.model_validate(auth_service.get_profile(identity.subject_id))

@router.patch("/me", response_model=UserResponse)
def update_profile(
    profile: ProfileUpdate,
    identity: Identity = Depends(get_current_identity),
    auth_service: AuthService = Depends(get_auth_service)
):
    user = auth_service.update_profile(identity.subject_id, username=profile.username, email=profile.email)
    return UserResponse.model_validate(user)

@router.post("/me/password", status_code=status.HTTP_204_NO_CONTENT)
def change_password(
    passwords: PasswordChange,
    identity: Identity = Depends(get_current_identity),
    auth_service: AuthService = Depends(get_auth_service)
):
    auth_service.change_password(identity.subject_id, passwords.current_password, passwords.new_password)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
