"""
User endpoints: registration and lookup.
"""
from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..deps import get_current_user, get_user_service
from ..models import User
from ..schemas import MessageResponse, UserCreate, UserRead
from ..services import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"description": "Username already exists", "model": MessageResponse}},
    summary="Register a user",
)
def create_user(
    payload: UserCreate,
    response: Response,
    users: UserService = Depends(get_user_service),
):
    # DuplicateUsernameError is mapped to 409 by the app-level handler
    user = users.create(payload.username, payload.password)
    response.headers["Location"] = f"/users/{user.id}"
    return user


@router.get(
    "/me",
    response_model=UserRead,
    responses={401: {"description": "Missing or invalid bearer token", "model": MessageResponse}},
    summary="Current user from the bearer token",
)
def read_current_user(user: User = Depends(get_current_user)):
    return user


@router.get(
    "/{user_id}",
    response_model=UserRead,
    responses={404: {"description": "User not found", "model": MessageResponse}},
    summary="Get a user by id",
)
def get_user(user_id: int, users: UserService = Depends(get_user_service)):
    user = users.get(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user
