"""
Cash Card Service — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the different failure outcomes.
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) map them to
       HTTP status codes.
Who:   Raised by the security layer and services; caught by global handlers.

Exception Hierarchy:
    CashCardError (base)
    ├── AuthenticationError  → 401 Unauthorized (missing or bad credentials)
    ├── AuthorizationError   → 403 Forbidden (authenticated, wrong role)
    ├── ValidationError      → 400 Bad Request (client can fix)
    ├── NotFoundError        → 404 Not Found (absent OR owned by someone else)
    └── DatabaseError        → 500 Internal Server Error

Client errors are answered with an empty body. `context` is for server-side
logs only and is never returned to the caller.
"""

from typing import Any, Dict, Optional


class CashCardError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  Human-readable error description
        context:  Additional debug info (logged, never returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class AuthenticationError(CashCardError):
    """
    Raised when a request carries no credentials or credentials that do not
    match the user directory.

    HTTP: 401 Unauthorized, with a Basic challenge header.
    The message never says whether the username or the password was wrong.
    """

    def __init__(
        self,
        message: str = "Authentication required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AuthorizationError(CashCardError):
    """
    Raised when an authenticated user lacks the role required by the endpoint.

    HTTP: 403 Forbidden
    """

    def __init__(
        self,
        username: str,
        required_role: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["username"] = username
        ctx["required_role"] = required_role
        super().__init__(
            message=f"User '{username}' lacks required role '{required_role}'",
            context=ctx,
        )
        self.username = username
        self.required_role = required_role


class ValidationError(CashCardError):
    """
    Raised when client input fails a business rule that schema validation
    cannot express (e.g. an unknown sort property).

    HTTP: 400 Bad Request
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


class NotFoundError(CashCardError):
    """
    Raised when a requested resource does not exist for the caller.

    HTTP: 404 Not Found

    A card owned by another user is reported exactly like a missing card,
    so callers cannot probe which ids exist.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(CashCardError):
    """
    Raised when database operations fail unexpectedly.

    HTTP: 500 Internal Server Error
    The client always gets a generic message; details stay in the logs.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
