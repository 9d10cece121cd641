"""Domain models for hotel listings."""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

MatchedKey = Literal["id", "hotel_id"]


@dataclass(frozen=True)
class HotelRecord:
    """Persisted hotel listing."""

    id: UUID
    hotel_id: str | None
    user_id: str
    name: str
    city: str
    country: str
    description: str
    type: str
    facilities: list[str]
    price_per_night: float
    image_urls: list[str]
    last_updated: datetime
    version: int


@dataclass(frozen=True)
class HotelResolution:
    """A resolved hotel and the key that matched it."""

    record: HotelRecord
    matched_by: MatchedKey


@dataclass(frozen=True)
class ImageUpload:
    """An image file received from a client."""

    filename: str | None
    content_type: str
    data: bytes


class HotelPatch(BaseModel):
    """Descriptive fields supplied by a client; unset fields are left alone."""

    hotel_id: str | None = None
    name: str | None = None
    city: str | None = None
    country: str | None = None
    description: str | None = None
    type: str | None = None
    price_per_night: float | None = Field(default=None, ge=0)
    facilities: list[str] | None = None

    @field_validator("name", "city", "country", "description", "type")
    @classmethod
    def _not_blank(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("facilities")
    @classmethod
    def _facilities_not_blank(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return value
        if not value:
            raise ValueError("At least one facility is required")
        if not all(item.strip() for item in value):
            raise ValueError("Each facility must be a non-empty string")
        return value

    def changes(self) -> dict[str, object]:
        """Return only the fields the client actually supplied."""
        return self.model_dump(exclude_unset=True)


class HotelFields(HotelPatch):
    """Descriptive fields required to create a hotel."""

    name: str
    city: str
    country: str
    description: str
    type: str
    price_per_night: float = Field(ge=0)
    facilities: list[str]
