"""
RecipeShare Backend - Response Envelopes
========================================

What:  Pydantic models for the `{data: ...}` / `{error: ...}` JSON envelopes
       every endpoint returns.
How:   Routes declare these as `response_model`; the global exception
       handlers in main.py build `ErrorResponse` bodies.

Envelope examples:
    200  {"data": [{"RecipeID": 1, "RecipeName": "Pasta Verde", ...}]}
    201  {"message": "Recipe created", "data": {"RecipeID": 42}}
    404  {"error": "Recipe not found", "code": "not_found", "request_id": "a1b2c3d4"}
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class RecordListResponse(BaseModel):
    """Rows returned by a read executor, keyed by public field names."""

    data: List[Dict[str, Any]] = Field(description="Result rows")


class CreatedResponse(BaseModel):
    """Returned with HTTP 201 after an insert."""

    message: str = Field(description="Human-readable success message")
    data: Dict[str, Any] = Field(description="Generated identifiers")


class MessageResponse(BaseModel):
    message: str = Field(description="Human-readable success message")
    data: Optional[Dict[str, Any]] = Field(default=None, description="Affected row counts")


class TextResponse(BaseModel):
    data: str


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Fields:
        error: Human-readable description, safe to show to users
        code: Machine-readable kind (not_found, validation_error, ...)
        details: Optional extra context (e.g. which field failed validation)
        request_id: Correlation ID for tracing this error in server logs
    """

    error: str = Field(description="Human-readable error description")
    code: str = Field(description="Machine-readable error kind")
    details: Optional[Dict[str, Any]] = Field(default=None)
    request_id: Optional[str] = Field(default=None)
