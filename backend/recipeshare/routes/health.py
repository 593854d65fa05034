"""
RecipeShare Backend - Health Check Routes
=========================================

What:  GET /api/check-db-connection and GET /api/test.
How:   check-db-connection borrows one pooled connection and runs a trivial
       query; test answers without touching the database.
Who:   Called by Docker health checks and the frontend's connectivity banner.

Status levels:
    200 {"data": "connected"}     database reachable
    503 {"error": "unable to connect", ...}  database unreachable or pool closed
"""

import logging

from fastapi import APIRouter, Depends

from recipeshare.database import Database, get_database
from recipeshare.exceptions import StoreUnavailableError
from recipeshare.schemas.common import ErrorResponse, TextResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Health"])


@router.get(
    "/check-db-connection",
    response_model=TextResponse,
    responses={503: {"description": "Database unreachable", "model": ErrorResponse}},
    summary="Database connectivity check",
)
async def check_db_connection(db: Database = Depends(get_database)) -> TextResponse:
    if not await db.ping():
        raise StoreUnavailableError(message="unable to connect")
    return TextResponse(data="connected")


@router.get("/test", response_model=TextResponse, summary="Liveness probe")
async def test() -> TextResponse:
    return TextResponse(data="Hello world!")
