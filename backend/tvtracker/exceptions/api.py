from typing import Any, Optional


class ApiError(Exception):
    """Base class for errors that are served to the client."""
    status_code = 500
    code = "INTERNAL_SERVER_ERROR"
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(ApiError):
    """Raised for malformed or out-of-range input."""
    status_code = 400
    code = "VALIDATION_ERROR"
    default_message = "Invalid request data"


class AuthenticationError(ApiError):
    """Raised when the caller's identity cannot be established."""
    status_code = 401
    code = "UNAUTHORIZED"
    default_message = "Authentication required"


class AuthorizationError(ApiError):
    """Raised when a known identity is not allowed to do something."""
    status_code = 403
    code = "FORBIDDEN"
    default_message = "Access forbidden"


class NotFoundError(ApiError):
    status_code = 404
    code = "NOT_FOUND"
    default_message = "Resource not found"


class ConflictError(ApiError):
    status_code = 409
    code = "CONFLICT"
    default_message = "Resource already exists"


class InternalError(ApiError):
    pass


class MethodNotAllowedError(ApiError):
    status_code = 405
    code = "METHOD_NOT_ALLOWED"
    default_message = "Method not allowed"
