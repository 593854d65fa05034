"""
RecipeShare Backend - Recipe Route Handlers
===========================================

What:  GET /api/recipes, GET/PUT/DELETE /api/recipe/{id}, POST /api/recipe,
       GET /api/cuisines.
How:   Parses query/path/body, delegates to RecipeService, wraps the result
       in the {"data": ...} envelope. Empty reads and zero-row writes raise
       NotFoundError (→ 404).
Who:   Called by the frontend recipe grid, recipe detail and editor pages.

Query examples:
    /api/recipes?img=1                          recipes with their images
    /api/recipes?img=1&captionless=1            only images lacking captions
    /api/recipes?columns=r.RecipeName,Cuisine   narrowed column list
    /api/recipes?filter=Greek                   cuisine filter
    /api/recipes?id=3                           one recipe
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from recipeshare.database import Database, get_database
from recipeshare.exceptions import NotFoundError
from recipeshare.routes import is_flag_set, split_columns
from recipeshare.schemas.common import (
    CreatedResponse,
    ErrorResponse,
    MessageResponse,
    RecordListResponse,
)
from recipeshare.schemas.recipe import RecipeCreate, RecipeUpdate
from recipeshare.services.recipe_service import recipe_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Recipes"])


@router.get(
    "/recipes",
    response_model=RecordListResponse,
    responses={
        400: {"description": "Unknown column requested", "model": ErrorResponse},
        404: {"description": "No recipes matched", "model": ErrorResponse},
    },
    summary="List or search recipes",
)
async def list_recipes(
    img: Optional[str] = Query(default=None, description="Join images; blank, 0 or false is off"),
    captionless: Optional[str] = Query(default=None, description="With img: only images without a caption"),
    cuisine: Optional[str] = Query(default=None, alias="filter", description="Exact cuisine"),
    recipe_id: Optional[int] = Query(default=None, alias="id", description="Single RecipeID"),
    columns: Optional[str] = Query(default=None, description="Comma-separated column names"),
    db: Database = Depends(get_database),
) -> RecordListResponse:
    recipes = await recipe_service.fetch_recipes(
        db,
        columns=split_columns(columns),
        cuisine=cuisine,
        recipe_id=recipe_id,
        include_images=is_flag_set(img),
        captionless=is_flag_set(captionless),
    )
    if not recipes:
        raise NotFoundError(message="No recipes found")
    return RecordListResponse(data=recipes)


@router.get(
    "/recipe/{recipe_id}",
    response_model=RecordListResponse,
    responses={404: {"description": "Recipe not found", "model": ErrorResponse}},
    summary="Get a single recipe",
)
async def get_recipe(
    recipe_id: int = Path(description="RecipeID"),
    db: Database = Depends(get_database),
) -> RecordListResponse:
    recipe = await recipe_service.fetch_recipe_by_id(db, recipe_id)
    if not recipe:
        raise NotFoundError(message="Recipe not found", context={"recipe_id": recipe_id})
    return RecordListResponse(data=recipe)


@router.post(
    "/recipe",
    status_code=201,
    response_model=CreatedResponse,
    responses={
        400: {"description": "Malformed recipe body", "model": ErrorResponse},
        409: {"description": "Unknown user or cuisine", "model": ErrorResponse},
    },
    summary="Create a recipe",
    description=(
        "Creates a recipe and returns its generated RecipeID. "
        "Use that ID with POST /api/steps/{id} to add the instructions."
    ),
)
async def create_recipe(
    recipe: RecipeCreate,
    db: Database = Depends(get_database),
) -> CreatedResponse:
    recipe_id = await recipe_service.create_recipe(db, recipe)
    return CreatedResponse(message="Recipe created", data={"RecipeID": recipe_id})


@router.put(
    "/recipe/{recipe_id}",
    response_model=MessageResponse,
    responses={404: {"description": "Recipe not found", "model": ErrorResponse}},
    summary="Update a recipe",
)
async def update_recipe(
    recipe: RecipeUpdate,
    recipe_id: int = Path(description="RecipeID"),
    db: Database = Depends(get_database),
) -> MessageResponse:
    rows = await recipe_service.update_recipe(db, recipe_id, recipe)
    if rows == 0:
        raise NotFoundError(
            message="Recipe not found or not updated", context={"recipe_id": recipe_id}
        )
    return MessageResponse(message="Recipe updated", data={"rowsAffected": rows})


@router.delete(
    "/recipe/{recipe_id}",
    response_model=MessageResponse,
    responses={404: {"description": "Recipe not found", "model": ErrorResponse}},
    summary="Delete a recipe with its steps, images and likes",
)
async def delete_recipe(
    recipe_id: int = Path(description="RecipeID"),
    db: Database = Depends(get_database),
) -> MessageResponse:
    rows = await recipe_service.delete_recipe(db, recipe_id)
    if rows == 0:
        raise NotFoundError(
            message="Recipe not found or not deleted", context={"recipe_id": recipe_id}
        )
    return MessageResponse(message="Recipe deleted", data={"rowsAffected": rows})


@router.get(
    "/cuisines",
    response_model=RecordListResponse,
    responses={404: {"description": "No cuisines", "model": ErrorResponse}},
    summary="List cuisines and their recipe level",
)
async def list_cuisines(db: Database = Depends(get_database)) -> RecordListResponse:
    cuisines = await recipe_service.fetch_cuisines(db)
    if not cuisines:
        raise NotFoundError(message="No cuisines found")
    return RecordListResponse(data=cuisines)
