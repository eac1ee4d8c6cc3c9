"""
AudioCraft Backend: Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for every failure the API reports.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching status code.
Who:   Raised by services and dependencies; caught by global handlers.

Exception Hierarchy:
    AudioCraftError (base)
    ├── ValidationError          → 400 Bad Request
    ├── ConflictError            → 400 Bad Request (duplicate account)
    ├── UnauthenticatedError     → 401 Unauthorized
    ├── CreditsExhaustedError    → 403 Forbidden
    ├── NotFoundError            → 404 Not Found
    ├── FileStorageError         → 500 Internal Server Error
    └── ConfigurationError       → 500 Internal Server Error

The `message` is safe to return to clients. The `context` dict is only ever
logged server-side.
"""

from typing import Any, Dict, Optional


class AudioCraftError(Exception):
    """
    Base exception for all AudioCraft application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500
    error_code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(AudioCraftError):
    """
    Raised when client input fails a business rule.

    When:    Upload exceeds the size ceiling.
    HTTP:    400 Bad Request
    """

    status_code = 400
    error_code = "validation_error"

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


class ConflictError(AudioCraftError):
    """
    Raised when signup targets an email that already has an account.

    HTTP:    400 Bad Request (the public contract has always used 400 here)
    """

    status_code = 400
    error_code = "conflict"

    def __init__(
        self,
        message: str = "User already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UnauthenticatedError(AudioCraftError):
    """
    Raised for bad credentials and for missing, malformed, expired or
    forged bearer tokens.

    Login uses one message for "unknown email" and "wrong password" so the
    response never reveals whether an account exists.

    HTTP:    401 Unauthorized
    """

    status_code = 401
    error_code = "unauthenticated"

    def __init__(
        self,
        message: str = "Invalid token",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class CreditsExhaustedError(AudioCraftError):
    """
    Raised when an account without an active subscription has no free
    credits left. Nothing is charged.

    HTTP:    403 Forbidden
    """

    status_code = 403
    error_code = "credits_exhausted"

    def __init__(
        self,
        message: str = "No credits remaining",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(AudioCraftError):
    """
    Raised when a requested resource does not exist.

    When:    A valid token names an account the store no longer has.
    HTTP:    404 Not Found
    """

    status_code = 404
    error_code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(
            message=message or f"The requested {resource} was not found",
            context=ctx,
        )


class FileStorageError(AudioCraftError):
    """
    Raised when the upload directory cannot be written.

    HTTP:    500 Internal Server Error (paths stay in the logs)
    """

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConfigurationError(AudioCraftError):
    """
    Raised when required configuration (the token signing key) is missing.

    The lifespan refuses to start in that case; this exception covers code
    paths reached without a lifespan, such as tests that skip it.
    """

    def __init__(
        self,
        message: str = "Server is not configured",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
