"""
Restaurants API — Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for the failure cases of the CRUD and
       login services.
How:   Each exception carries a user-facing message and an optional context
       dict. Global handlers registered in main.py turn them into structured
       JSON responses with the right status code.
Who:   Raised by services and the security dependency; caught by handlers.

Exception Hierarchy:
    RestaurantsAPIError (base)
    ├── ValidationError          → 400 Bad Request (id mismatch, bad categoryId)
    ├── AuthenticationError      → 401 Unauthorized (missing/invalid token)
    ├── NotFoundError            → 404 Not Found
    │   └── StoreUnavailableError → 404 Not Found (entity set unreadable)
    ├── ConflictError            → 500 Internal Server Error (unresolved commit conflict)
    └── DatabaseError            → 500 Internal Server Error

Services never return error values; they raise, and the caller either lets the
exception reach the global handler or catches the specific type it can act on.
"""

from typing import Any, Dict, Optional


class RestaurantsAPIError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned for 5xx errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(RestaurantsAPIError):
    """
    Raised when a request is well-formed but violates a business rule.

    When:    PUT body id differs from the path id; a restaurant references a
             category that does not exist.
    HTTP:    400 Bad Request

    Schema-level problems (missing fields, over-long strings) never reach the
    services: FastAPI rejects them with 422 first.
    """

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


class AuthenticationError(RestaurantsAPIError):
    """
    Raised when a protected endpoint is called without a valid bearer token.

    HTTP:    401 Unauthorized, with `WWW-Authenticate: Bearer`
    """

    def __init__(
        self,
        message: str = "Not authenticated",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(RestaurantsAPIError):
    """
    Raised when a requested resource does not exist.

    When:    GET/PUT/DELETE on an unknown id; login with unknown credentials.
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing rows; services convert that None into
    this exception. An explicit `message` overrides the generated one, which
    is how the login service reports "User not found".
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"The requested {resource} was not found"
            if resource_id is not None:
                message = f"{resource.capitalize()} with id {resource_id} not found."
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StoreUnavailableError(NotFoundError):
    """
    Raised when a read hits an entity set the database cannot serve.

    When:    The table is missing or the connection dropped mid-query
             (OperationalError on SQLite, ProgrammingError on PostgreSQL)
             during a list/get/search.
    HTTP:    404 Not Found, like any other missing resource.
    """

    def __init__(
        self,
        entity_set: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            resource=entity_set,
            message=f"Entity set '{entity_set}' is unavailable.",
            context=context,
        )
        self.entity_set = entity_set


class ConflictError(RestaurantsAPIError):
    """
    Raised when a write affected no rows but the row still exists.

    When:    Category update whose UPDATE matched nothing, yet the existence
             re-check finds the id (a concurrent writer got there first).
    HTTP:    500 Internal Server Error; there is no automatic resolution.
    """

    def __init__(
        self,
        message: str = "The record was modified concurrently. Please try again.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(RestaurantsAPIError):
    """
    Raised when database operations fail unexpectedly.

    When:    Connection lost, constraint violation, deadlock, etc.
    HTTP:    500 Internal Server Error

    The message returned to the client is generic. Driver details (SQL,
    constraint names) go to the server log through `context` only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
