from tvtracker.exceptions.api import ConflictError, NotFoundError, ValidationError


class InvalidRatingError(ValidationError):
    """Raised when a rating's target type, score or review is invalid."""
    pass


class TargetNotFoundError(NotFoundError):
    """Raised when the movie or series being rated does not exist."""
    default_message = "Target not found"


class NotFoundOrForbiddenError(NotFoundError):
    """Raised when a rating does not exist or the requester may not modify it."""
    default_message = "Rating not found or you are not allowed to modify it"


class DuplicateRatingError(ConflictError):
    """Raised when the author has already rated the target."""
    default_message = "You have already rated this target"
