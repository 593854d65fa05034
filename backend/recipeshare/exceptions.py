"""
RecipeShare Backend - Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for every failure a request can hit.
How:   Each exception class carries a safe message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return `{"error": ...}` envelopes with the matching HTTP status code.
Who:   Raised by the connection provider, the query executors and the routes.
When:  During request processing.

Exception Hierarchy:
    RecipeShareError (base)               → 500
    ├── ValidationError                   → 400 Bad Request (client can fix)
    ├── NotFoundError                     → 404 Not Found
    ├── ConstraintViolationError          → 409 Conflict
    ├── StoreUnavailableError             → 503 Service Unavailable
    └── DatabaseError                     → 500 Internal Server Error

An executor never answers "empty", "null" or "zero" to mean "something broke":
the caller either gets a value or one of these exceptions, so "not found",
"store unavailable" and "constraint violation" stay distinguishable all the
way to the response code.
"""

from typing import Any, Dict, Optional


class RecipeShareError(Exception):
    """
    Base exception for all RecipeShare application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500
    code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(RecipeShareError):
    """
    Raised when client input fails validation.

    When:    Unknown column names, malformed bodies or query strings.
    HTTP:    400 Bad Request
    """

    status_code = 400
    code = "validation_error"

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(RecipeShareError):
    """
    Raised when a requested resource does not exist.

    Zero matched rows is not a database failure, so executors return empty
    lists and the routes (or an executor that needs the row) raise this.
    HTTP:    404 Not Found
    """

    status_code = 404
    code = "not_found"

    def __init__(
        self,
        message: str = "The requested resource was not found",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConstraintViolationError(RecipeShareError):
    """
    Raised when the store rejects a write because of a constraint.

    When:    Duplicate key, missing foreign key row, NOT NULL violation.
    HTTP:    409 Conflict
    """

    status_code = 409
    code = "constraint_violation"

    def __init__(
        self,
        message: str = "The request conflicts with existing data.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreUnavailableError(RecipeShareError):
    """
    Raised when no database connection can be obtained or kept.

    When:    Pool acquisition timed out, database unreachable, connection
             dropped mid-statement, or the pool is closing.
    HTTP:    503 Service Unavailable
    """

    status_code = 503
    code = "store_unavailable"

    def __init__(
        self,
        message: str = "The database is temporarily unavailable. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(RecipeShareError):
    """
    Raised when a statement fails for any other reason.

    The message returned to the client is always generic; the SQL text and
    driver error are logged server-side only.
    HTTP:    500 Internal Server Error
    """

    status_code = 500
    code = "server_error"

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
