"""
Login endpoint: exchanges a username/password for a bearer token.
"""
from fastapi import APIRouter, Depends, HTTPException, status

from ..deps import get_auth_service
from ..schemas import AuthResponse, LoginRequest, MessageResponse
from ..services import AuthService

router = APIRouter(tags=["auth"])

INVALID_CREDENTIALS = "Username or password is incorrect"


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={400: {"description": "Invalid credentials", "model": MessageResponse}},
    summary="Authenticate and obtain a bearer token",
)
def login(credentials: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    response = auth.authenticate(credentials.username, credentials.password)
    if response is None:
        # Same message whether the username or the password was wrong
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_CREDENTIALS)
    return response
