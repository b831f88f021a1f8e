from typing import List

from fastapi import APIRouter, status

from ..controllers import user_controller
from ..schemas.user import Message, UserResponse

router = APIRouter()

NOT_FOUND = {404: {"model": Message, "description": "User not found"}}
CONFLICT = {409: {"model": Message, "description": "Email already in use"}}

router.add_api_route(
    "/users",
    user_controller.create_user,
    methods=["POST"],
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses=CONFLICT
)
router.add_api_route(
    "/users",
    user_controller.get_all_users,
    methods=["GET"],
    response_model=List[UserResponse]
)
router.add_api_route(
    "/users/{user_id}",
    user_controller.get_user_by_id,
    methods=["GET"],
    response_model=UserResponse,
    responses=NOT_FOUND
)
router.add_api_route(
    "/users/{user_id}",
    user_controller.update_user,
    methods=["PUT"],
    response_model=UserResponse,
    responses={**NOT_FOUND, **CONFLICT}
)
router.add_api_route(
    "/users/{user_id}",
    user_controller.delete_user,
    methods=["DELETE"],
    response_model=None,
    status_code=status.HTTP_204_NO_CONTENT,
    responses=NOT_FOUND
)
