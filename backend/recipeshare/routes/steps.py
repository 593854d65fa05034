"""
RecipeShare Backend - Step and Image Route Handlers
===================================================

What:  GET /api/recipe/{id}/steps, POST /api/steps/{id}, GET /api/images/{id}.

Creating a recipe is two calls: POST /api/recipe returns the RecipeID, then
POST /api/steps/{RecipeID} with {"steps": [...]} stores the instructions in
order, all or nothing.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from recipeshare.database import Database, get_database
from recipeshare.exceptions import NotFoundError
from recipeshare.routes import is_flag_set
from recipeshare.schemas.common import CreatedResponse, ErrorResponse, RecordListResponse
from recipeshare.schemas.recipe import StepsCreate
from recipeshare.services.image_service import image_service
from recipeshare.services.step_service import step_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Steps & Images"])


@router.get(
    "/recipe/{recipe_id}/steps",
    response_model=RecordListResponse,
    responses={404: {"description": "No steps", "model": ErrorResponse}},
    summary="Get the steps of a recipe in order",
)
async def get_recipe_steps(
    recipe_id: int = Path(description="RecipeID"),
    db: Database = Depends(get_database),
) -> RecordListResponse:
    steps = await step_service.fetch_recipe_steps(db, recipe_id)
    if not steps:
        raise NotFoundError(
            message="No steps found for this recipe", context={"recipe_id": recipe_id}
        )
    return RecordListResponse(data=steps)


@router.post(
    "/steps/{recipe_id}",
    status_code=201,
    response_model=CreatedResponse,
    responses={
        404: {"description": "Recipe not found", "model": ErrorResponse},
        409: {"description": "Step conflicts with existing data", "model": ErrorResponse},
    },
    summary="Append ordered steps to a recipe",
)
async def insert_steps(
    body: StepsCreate,
    recipe_id: int = Path(description="RecipeID"),
    db: Database = Depends(get_database),
) -> CreatedResponse:
    numbers = await step_service.insert_steps(db, recipe_id, body.steps)
    return CreatedResponse(
        message="Steps inserted successfully",
        data={"RecipeID": recipe_id, "StepNumbers": numbers},
    )


@router.get(
    "/images/{recipe_id}",
    response_model=RecordListResponse,
    responses={404: {"description": "No images", "model": ErrorResponse}},
    summary="Get the images of a recipe",
)
async def get_images(
    recipe_id: int = Path(description="RecipeID"),
    captionless: Optional[str] = Query(default=None, description="Only images without a caption"),
    db: Database = Depends(get_database),
) -> RecordListResponse:
    images = await image_service.fetch_images_by_id(db, recipe_id, captionless=is_flag_set(captionless))
    if not images:
        raise NotFoundError(message="Images not found", context={"recipe_id": recipe_id})
    return RecordListResponse(data=images)
