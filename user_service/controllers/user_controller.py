"""
Request handlers for the users resource.

Each handler receives an already validated body (see ``schemas.user``),
calls ``UserService`` and turns the result into a status code.
"""
from typing import List

from fastapi import Depends, HTTPException, Response, status

from ..dependencies import get_user_service
from ..schemas.user import UserCreate, UserUpdate, UserResponse
from ..services.user_service import UserService

USER_NOT_FOUND = "User not found"


def create_user(
    user_data: UserCreate,
    service: UserService = Depends(get_user_service)
) -> UserResponse:
    """Create a new user"""
    user = service.create_user({"name": user_data.name, "email": user_data.email})
    return UserResponse.model_validate(user)


def get_all_users(service: UserService = Depends(get_user_service)) -> List[UserResponse]:
    """List all users"""
    return [UserResponse.model_validate(user) for user in service.get_all_users()]


def get_user_by_id(
    user_id: int,
    service: UserService = Depends(get_user_service)
) -> UserResponse:
    """Get a specific user by ID"""
    user = service.get_user_by_id(user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=USER_NOT_FOUND)
    return UserResponse.model_validate(user)


def update_user(
    user_id: int,
    user_update: UserUpdate,
    service: UserService = Depends(get_user_service)
) -> UserResponse:
    """Update a user with the fields present in the body"""
    # Explicit nulls are treated like omitted fields
    update_data = user_update.model_dump(exclude_unset=True, exclude_none=True)

    user = service.update_user(user_id, update_data)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=USER_NOT_FOUND)
    return UserResponse.model_validate(user)


def delete_user(
    user_id: int,
    service: UserService = Depends(get_user_service)
) -> Response:
    """Delete a user"""
    if service.delete_user(user_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=USER_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
