from tvtracker.exceptions.api import AuthenticationError, AuthorizationError, ConflictError


class MissingTokenError(AuthenticationError):
    """Raised when a request carries no bearer token"""
    code = "AUTH_TOKEN_REQUIRED"
    default_message = "Authentication token required"


class InvalidTokenError(AuthenticationError):
    """Raised when a token has a bad signature, a malformed payload or has expired"""
    code = "INVALID_TOKEN"
    default_message = "Invalid or expired token"


class UnknownSubjectError(AuthenticationError):
    """Raised when a valid token refers to an account that no longer exists"""
    code = "USER_NOT_FOUND"
    default_message = "User not found"


class InvalidCredentialsException(AuthenticationError):
    """Raised when login credentials are invalid"""
    code = "INVALID_CREDENTIALS"
    default_message = "Invalid email or password"


class InsufficientRoleError(AuthorizationError):
    """Raised when the caller's role is not among the required roles"""
    code = "INSUFFICIENT_PERMISSIONS"
    default_message = "Insufficient permissions"


class UserAlreadyExistsException(ConflictError):
    """Raised when attempting to register a user with an existing username or email"""
    code = "USER_EXISTS"
