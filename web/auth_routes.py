"""
FastAPI routes for authentication.

Prefix: /auth

Thin adapter over AuthenticationService: form fields go into the same
LoginForm/SignupForm the terminal client uses, and failures are mapped to
HTTP status codes.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Form, HTTPException, status
from pydantic import BaseModel

from authapp.auth.errors import AuthError
from authapp.auth.forms import LoginForm, SignupForm
from authapp.auth.service import AuthenticationService
from authapp.models.user import User
from .auth_deps import get_auth_service, get_current_user


router = APIRouter(prefix="/auth", tags=["auth"])

ERROR_STATUS = {
    AuthError.EMAIL_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    AuthError.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    AuthError.INCORRECT_PASSWORD: status.HTTP_401_UNAUTHORIZED,
    AuthError.PERSISTENCE_FAILURE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


class UserPublic(BaseModel):
    id: str
    name: str
    email: str
    created_at: str


def _user_to_public(user: User) -> UserPublic:
    return UserPublic(
        id=user.id,
        name=user.name,
        email=user.email,
        created_at=user.created_at.isoformat(),
    )


def _raise_for(error: AuthError) -> None:
    raise HTTPException(
        status_code=ERROR_STATUS.get(error, status.HTTP_400_BAD_REQUEST),
        detail={"error": error.value, "message": error.message},
    )


@router.post("/signup", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
async def signup(
    name: str = Form(""),
    email: str = Form(""),
    password: str = Form(""),
    confirm_password: Optional[str] = Form(None),
    service: AuthenticationService = Depends(get_auth_service),
) -> Any:
    """
    Create an account and sign it in.

    Request (form-encoded):
        name, email, password, confirm_password (optional; checked when sent)
    """
    form = SignupForm(
        name=name,
        email=email,
        password=password,
        confirm_password=password if confirm_password is None else confirm_password,
    )
    outcome = form.submit(service)
    if not outcome.ok:
        _raise_for(outcome.error)
    return _user_to_public(outcome.value)


@router.post("/login", response_model=UserPublic)
async def login(
    email: str = Form(""),
    password: str = Form(""),
    service: AuthenticationService = Depends(get_auth_service),
) -> Any:
    """Sign in an existing account."""
    form = LoginForm(email=email, password=password)
    outcome = form.submit(service)
    if not outcome.ok:
        _raise_for(outcome.error)
    return _user_to_public(outcome.value)


@router.post("/logout")
async def logout(service: AuthenticationService = Depends(get_auth_service)) -> Dict[str, str]:
    """Sign out. Always succeeds, even when nobody is signed in."""
    service.logout()
    return {"status": "success"}


@router.get("/me", response_model=UserPublic)
async def me(current_user: User = Depends(get_current_user)) -> UserPublic:
    """Return the signed-in user."""
    return _user_to_public(current_user)
