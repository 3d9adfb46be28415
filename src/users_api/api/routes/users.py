"""
Users API routes
"""

import logging
from typing import List
from fastapi import APIRouter, HTTPException, Depends, Request, status
from pydantic import ValidationError

from users_api.api.dependencies import get_users_service
from users_api.models.user import User, InfoResponse
from users_api.services.users_service import UsersService

router = APIRouter()
logger = logging.getLogger(__name__)


async def parse_user_body(request: Request) -> User:
    """Decode the request body into a User, raising ValidationError on bad input"""
    body = await request.body()
    return User.model_validate_json(body)


def _validation_summary(exc: ValidationError) -> str:
    return "; ".join(error.get("msg", "invalid value") for error in exc.errors())


@router.get("/", response_model=List[User], status_code=status.HTTP_200_OK)
async def list_users(users_service: UsersService = Depends(get_users_service)):
    """List every user"""
    result = await users_service.list_users()

    if not result.success:
        logger.error(f"failed to collect user informations from db: {result.error}")
        raise HTTPException(status_code=500, detail="failed to collect user informations from db")

    return result.data


@router.get("/{username}", response_model=User, status_code=status.HTTP_202_ACCEPTED)
async def get_user(
    username: str,
    users_service: UsersService = Depends(get_users_service)
):
    """Get a user by name"""
    if not username:
        raise HTTPException(status_code=400, detail="failed to parse the request")

    result = await users_service.get_user(username)

    if not result.success:
        raise HTTPException(status_code=500, detail=result.error)

    return result.data


@router.post("/", response_model=InfoResponse, status_code=status.HTTP_202_ACCEPTED)
async def add_user(
    request: Request,
    users_service: UsersService = Depends(get_users_service)
):
    """Create a new user"""
    try:
        new_user = await parse_user_body(request)
    except ValidationError as e:
        raise HTTPException(
            status_code=400,
            detail=f"failed to parse the request, {_validation_summary(e)}"
        )

    logger.info(f"Adding user: {new_user.model_dump()}")
    result = await users_service.insert_user(new_user)

    if not result.success:
        raise HTTPException(
            status_code=500,
            detail="failed to update user details in db, please contact admin"
        )

    return InfoResponse(info=f"new user `{new_user.name}` added successfully!")


@router.put("/", response_model=InfoResponse, status_code=status.HTTP_202_ACCEPTED)
async def update_user(
    request: Request,
    users_service: UsersService = Depends(get_users_service)
):
    """Overwrite the details of the user matching the body's name"""
    try:
        user = await parse_user_body(request)
    except ValidationError as e:
        logger.warning(f"update handler: {_validation_summary(e)}")
        raise HTTPException(
            status_code=400,
            detail="failed to parse the request, verify the given details and try again"
        )

    result = await users_service.update_user(user)

    if not result.success:
        raise HTTPException(status_code=500, detail=result.error)

    return InfoResponse(info=f"given user `{user.name}` detail has been updated")


# Only here so a DELETE with no username segment gets 400 instead of 405
@router.delete("/", include_in_schema=False)
async def remove_user_without_name():
    """DELETE without a username segment"""
    raise HTTPException(status_code=400, detail="invalid request")


@router.delete("/{username}", response_model=InfoResponse, status_code=status.HTTP_202_ACCEPTED)
async def remove_user(
    username: str,
    users_service: UsersService = Depends(get_users_service)
):
    """Delete a user by name"""
    if not username:
        raise HTTPException(status_code=400, detail="invalid request")

    result = await users_service.delete_user(username)

    if not result.success:
        raise HTTPException(status_code=500, detail=result.error)

    return InfoResponse(info=f"given user `{username}` removed")
