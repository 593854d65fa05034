"""
RecipeShare Backend - User, Pantry and Location Route Handlers
==============================================================

What:  GET /api/user/{id}, GET /api/users, POST /api/user, GET /api/pantry/{id},
       GET /api/locations.
How:   `?columns=` narrows user rows through the UserService allow-list
       (UserID, UserName, Points, UserLevel).
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from recipeshare.database import Database, get_database
from recipeshare.exceptions import NotFoundError
from recipeshare.routes import split_columns
from recipeshare.schemas.common import CreatedResponse, ErrorResponse, RecordListResponse
from recipeshare.schemas.user import UserCreate
from recipeshare.services.pantry_service import location_service, pantry_service
from recipeshare.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Users"])

_COLUMNS_QUERY = Query(default=None, description="Comma-separated: UserID,UserName,Points,UserLevel")


@router.get(
    "/user/{user_id}",
    response_model=RecordListResponse,
    responses={
        400: {"description": "Unknown column requested", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
    },
    summary="Get a user with their rank",
)
async def get_user(
    user_id: int = Path(description="UserID"),
    columns: Optional[str] = _COLUMNS_QUERY,
    db: Database = Depends(get_database),
) -> RecordListResponse:
    users = await user_service.fetch_user(db, user_id, columns=split_columns(columns))
    if not users:
        raise NotFoundError(message="User not found", context={"user_id": user_id})
    return RecordListResponse(data=users)


@router.get(
    "/users",
    response_model=RecordListResponse,
    responses={
        400: {"description": "Unknown column requested", "model": ErrorResponse},
        404: {"description": "No users", "model": ErrorResponse},
    },
    summary="List all users with their rank",
)
async def list_users(
    columns: Optional[str] = _COLUMNS_QUERY,
    db: Database = Depends(get_database),
) -> RecordListResponse:
    users = await user_service.fetch_all_users(db, columns=split_columns(columns))
    if not users:
        raise NotFoundError(message="No users found")
    return RecordListResponse(data=users)


@router.post(
    "/user",
    status_code=201,
    response_model=CreatedResponse,
    responses={400: {"description": "Missing UserName", "model": ErrorResponse}},
    summary="Create a user",
)
async def create_user(
    body: UserCreate,
    db: Database = Depends(get_database),
) -> CreatedResponse:
    user_id = await user_service.create_user(db, body.user_name)
    return CreatedResponse(message="User created", data={"UserID": user_id})


@router.get(
    "/pantry/{user_id}",
    response_model=RecordListResponse,
    responses={404: {"description": "No pantries", "model": ErrorResponse}},
    tags=["Pantries"],
    summary="Get the pantries saved by a user",
)
async def get_pantries(
    user_id: int = Path(description="UserID"),
    db: Database = Depends(get_database),
) -> RecordListResponse:
    pantries = await pantry_service.fetch_pantries(db, user_id)
    if not pantries:
        raise NotFoundError(message="No pantries found", context={"user_id": user_id})
    return RecordListResponse(data=pantries)


@router.get(
    "/locations",
    response_model=RecordListResponse,
    responses={404: {"description": "No locations", "model": ErrorResponse}},
    tags=["Locations"],
    summary="List all locations",
)
async def list_locations(db: Database = Depends(get_database)) -> RecordListResponse:
    locations = await location_service.fetch_all_locations(db)
    if not locations:
        raise NotFoundError(message="No locations found")
    return RecordListResponse(data=locations)
