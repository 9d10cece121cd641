"""Errors raised by the hotel services."""

from dataclasses import dataclass


class HotelServiceError(Exception):
    """Base class for hotel service failures."""


class HotelNotFoundError(HotelServiceError):
    """No hotel matches the identifier under either key."""

    def __init__(self, identifier: str) -> None:
        super().__init__(f"Hotel not found: {identifier}")
        self.identifier = identifier


@dataclass
class ValidationProblem:
    """A single rejected input field."""

    field: str
    message: str


class ValidationError(HotelServiceError):
    """Client input was malformed or incomplete."""

    def __init__(self, problems: list[ValidationProblem]) -> None:
        super().__init__("; ".join(f"{p.field}: {p.message}" for p in problems))
        self.problems = problems


class UploadError(HotelServiceError):
    """The media host rejected or failed an upload in the batch."""


class PersistenceError(HotelServiceError):
    """The store rejected a read or write."""


class ConcurrentUpdateError(HotelServiceError):
    """The record kept changing underneath an update."""

    def __init__(self, record_id: str, attempts: int) -> None:
        super().__init__(f"Hotel {record_id} changed during {attempts} update attempts")
        self.record_id = record_id
        self.attempts = attempts
