class RepositoryException(Exception):
    """Base for errors raised by the SQLAlchemy repositories."""


class EntityNotFoundException(RepositoryException):
    """A user, title, season or rating to be changed is not stored."""


class DuplicateEntityException(RepositoryException):
    """The write hit a unique index.

    Covers taken emails and usernames, a second rating by the same author
    for one target, and repeated season or episode numbers.
    """


class InvalidEntityDataException(RepositoryException):
    """A stored row holds values the domain model rejects, such as an unknown target type."""


class RepositoryOperationException(RepositoryException):
    """The database call itself failed; the session has been rolled back."""
