"""
RecipeShare Backend - Like Route Handlers
=========================================

What:  Liked-recipe listings and the like/unlike toggles used by the recipe grid.
"""

from fastapi import APIRouter, Depends, Path

from recipeshare.database import Database, get_database
from recipeshare.exceptions import NotFoundError
from recipeshare.schemas.common import ErrorResponse, MessageResponse, RecordListResponse
from recipeshare.schemas.recipe import LikeRequest
from recipeshare.services.like_service import like_service

router = APIRouter(prefix="/api", tags=["Likes"])

_NOT_FOUND = {404: {"description": "No liked recipes", "model": ErrorResponse}}


@router.get("/recipes/liked", response_model=RecordListResponse, responses=_NOT_FOUND)
async def list_liked_recipes(db: Database = Depends(get_database)) -> RecordListResponse:
    recipes = await like_service.fetch_liked_recipes(db)
    if not recipes:
        raise NotFoundError(message="No liked recipes found")
    return RecordListResponse(data=recipes)


@router.get("/recipes/liked-by-all", response_model=RecordListResponse, responses=_NOT_FOUND)
async def list_recipes_liked_by_all(
    db: Database = Depends(get_database),
) -> RecordListResponse:
    recipes = await like_service.fetch_recipes_liked_by_all(db)
    if not recipes:
        raise NotFoundError(message="No recipes liked by all users")
    return RecordListResponse(data=recipes)


@router.get("/recipes/liked/{user_id}", response_model=RecordListResponse, responses=_NOT_FOUND)
async def list_user_liked_recipes(
    user_id: int = Path(description="UserID"),
    db: Database = Depends(get_database),
) -> RecordListResponse:
    recipes = await like_service.fetch_user_liked_recipes(db, user_id)
    if not recipes:
        raise NotFoundError(message="No liked recipes found", context={"user_id": user_id})
    return RecordListResponse(data=recipes)


@router.post(
    "/likeRecipe",
    response_model=MessageResponse,
    responses={409: {"description": "Unknown user or recipe", "model": ErrorResponse}},
)
async def like_recipe(
    body: LikeRequest,
    db: Database = Depends(get_database),
) -> MessageResponse:
    rows = await like_service.like_recipe(db, body.user_id, body.recipe_id)
    return MessageResponse(message="Recipe liked", data={"rowsAffected": rows})


@router.post("/unlikeRecipe", response_model=MessageResponse, responses=_NOT_FOUND)
async def unlike_recipe(
    body: LikeRequest,
    db: Database = Depends(get_database),
) -> MessageResponse:
    rows = await like_service.unlike_recipe(db, body.user_id, body.recipe_id)
    if rows == 0:
        raise NotFoundError(
            message="Recipe was not liked by this user",
            context={"user_id": body.user_id, "recipe_id": body.recipe_id},
        )
    return MessageResponse(message="Recipe unliked", data={"rowsAffected": rows})
