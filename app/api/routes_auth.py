# File: app/api/routes_auth.py

"""
Auth API routes: register, login, current user, logout.

Register and login both answer with the public user record and set the
HTTP-only session cookie.
"""

from fastapi import APIRouter, Depends, Response, status

from app.api.deps import get_current_user, get_storage
from app.core.security import clear_session_cookie, create_session_token, set_session_cookie
from app.schemas.user import LoginRequest, MessageResponse, RegisterRequest, UserRecord, UserResponse
from app.services.auth_service import authenticate_user, register_user
from app.services.storage import Storage

router = APIRouter()


def start_session(response: Response, user: UserRecord) -> UserResponse:
    set_session_cookie(response, create_session_token(user.id))
    return UserResponse(user=user.to_public())


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account and start a session",
)
def register(payload: RegisterRequest, response: Response, storage: Storage = Depends(get_storage)):
    user = register_user(storage, payload)
    return start_session(response, user)


@router.post("/login", response_model=UserResponse, summary="Start a session")
def login(payload: LoginRequest, response: Response, storage: Storage = Depends(get_storage)):
    user = authenticate_user(storage, email=payload.email, password=payload.password)
    return start_session(response, user)


@router.get("/me", response_model=UserResponse, summary="Current session user")
def read_current_user(current_user: UserRecord = Depends(get_current_user)):
    return UserResponse(user=current_user.to_public())


@router.post("/logout", response_model=MessageResponse, summary="End the session")
def logout(response: Response):
    clear_session_cookie(response)
    return MessageResponse(message="Logged out successfully")
