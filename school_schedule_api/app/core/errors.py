"""
Error taxonomy shared by the services and the HTTP layer.

Services reject a mutation by raising one of these exceptions before
touching the dataset.  Each class carries the HTTP status code the API
answers with; ``main.create_app`` registers a handler that renders them
as ``{"error": <message>}``.
"""

from fastapi import status


class SchedulingError(ValueError):
    """Base class for every expected failure of a request."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingField(SchedulingError):
    """A required input is absent or blank."""


class InvalidReference(SchedulingError):
    """A foreign id does not resolve to an existing record."""


class InvalidArgument(SchedulingError):
    """A value is outside of its allowed set or format."""


class Conflict(SchedulingError):
    """The mutation would break a uniqueness, dependency or temporal rule."""


class NotFound(SchedulingError):
    """The id in the path does not resolve."""

    status_code = status.HTTP_404_NOT_FOUND


class StoreFailure(SchedulingError):
    """The underlying file or database could not be read or written."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
