"""
FastAPI dependencies for authentication.
"""

from fastapi import Depends, HTTPException, Request, status

from authapp.auth.service import AuthenticationService
from authapp.models.user import User


def get_auth_service(request: Request) -> AuthenticationService:
    """The service instance attached to the app by create_app()"""
    return request.app.state.auth_service


async def get_current_user(
    service: AuthenticationService = Depends(get_auth_service),
) -> User:
    """Dependency for routes that need a signed-in user"""
    user = service.current_user
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return user
