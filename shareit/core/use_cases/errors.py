from __future__ import annotations


class BookingServiceError(Exception):
    """Base for failures a use case reports to its caller: a field name plus a readable detail."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message

    @property
    def errors(self) -> dict[str, str]:
        return {self.field: self.message}


class NotFoundError(BookingServiceError):
    """Raise to map to HTTP 404. Also used when the caller may not see the entity."""


class BadRequestError(BookingServiceError):
    """Raise to map to HTTP 400 (business validation)."""


class AlreadyExistsError(BookingServiceError):
    """Raise to map to HTTP 409."""
