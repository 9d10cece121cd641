"""Hotel record resolution and update pipeline."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from hotel_booking.domain.errors import (
    ConcurrentUpdateError,
    HotelNotFoundError,
    PersistenceError,
)
from hotel_booking.domain.hotels import (
    HotelFields,
    HotelPatch,
    HotelRecord,
    HotelResolution,
    ImageUpload,
)
from hotel_booking.services.uploads import ImageUploadService

logger = logging.getLogger(__name__)


class HotelRepository(Protocol):
    """Persistence interface for hotel records."""

    def get_by_id(self, record_id: UUID, owner_id: str | None) -> HotelRecord | None:
        """Return the hotel with this primary key, optionally owner-scoped."""

    def get_by_hotel_id(
        self, hotel_id: str, owner_id: str | None
    ) -> HotelRecord | None:
        """Return the first hotel with this business key, optionally owner-scoped."""

    def list_by_owner(self, owner_id: str) -> list[HotelRecord]:
        """Return all hotels owned by a user."""

    def create_hotel(self, payload: dict[str, object]) -> HotelRecord:
        """Insert a hotel row and return it."""

    def update_hotel(
        self, record_id: UUID, payload: dict[str, object], expected_version: int
    ) -> HotelRecord | None:
        """Update a hotel only if its version still matches.

        Returns None when no row was updated, either because the record is
        gone or because another writer bumped its version first.
        """


@dataclass
class HotelService:
    """Application service for hotel listings."""

    repository: HotelRepository
    upload_service: ImageUploadService
    max_update_attempts: int = 3

    def resolve(self, identifier: str, owner_id: str | None = None) -> HotelResolution:
        """Find a hotel by primary key, falling back to its business key."""
        primary_key = _parse_primary_key(identifier)
        if primary_key is not None:
            try:
                record = self.repository.get_by_id(primary_key, owner_id)
            except PersistenceError:
                logger.warning(
                    "Primary key lookup failed, trying hotel id",
                    exc_info=True,
                    extra={"identifier": identifier},
                )
                record = None
            if record is not None:
                return HotelResolution(record=record, matched_by="id")
        record = self.repository.get_by_hotel_id(identifier, owner_id)
        if record is not None:
            return HotelResolution(record=record, matched_by="hotel_id")
        raise HotelNotFoundError(identifier)

    def get_hotel(self, identifier: str, owner_id: str) -> HotelRecord:
        """Return one of the owner's hotels."""
        return self.resolve(identifier, owner_id).record

    def list_hotels(self, owner_id: str) -> list[HotelRecord]:
        """Return all of the owner's hotels."""
        return self.repository.list_by_owner(owner_id)

    async def create_hotel(
        self,
        owner_id: str,
        fields: HotelFields,
        images: Sequence[ImageUpload],
    ) -> HotelRecord:
        """Upload images and insert a new hotel owned by the caller."""
        image_urls = await self.upload_service.upload_all(images)
        payload: dict[str, object] = {
            **fields.model_dump(),
            "user_id": owner_id,
            "image_urls": image_urls,
            "last_updated": datetime.now(tz=UTC),
            "version": 1,
        }
        record = self.repository.create_hotel(payload)
        logger.info(
            "Hotel created",
            extra={"record_id": str(record.id), "images": len(image_urls)},
        )
        return record

    async def update_hotel(
        self,
        identifier: str,
        owner_id: str,
        patch: HotelPatch,
        new_images: Sequence[ImageUpload],
    ) -> HotelRecord:
        """Merge a patch and new images onto one of the owner's hotels."""
        resolution = self.resolve(identifier, owner_id)
        new_urls = await self.upload_service.upload_all(new_images)
        return self._apply(resolution, patch.changes(), new_urls)

    def change_price(self, identifier: str, new_price: float) -> HotelRecord:
        """Set the nightly price of any hotel."""
        resolution = self.resolve(identifier)
        patch = HotelPatch(price_per_night=new_price)
        return self._apply(resolution, patch.changes(), [])

    def _apply(
        self,
        resolution: HotelResolution,
        changes: dict[str, object],
        new_urls: list[str],
    ) -> HotelRecord:
        current = resolution.record
        for attempt in range(1, self.max_update_attempts + 1):
            payload = _merge(current, changes, new_urls)
            updated = self.repository.update_hotel(current.id, payload, current.version)
            if updated is not None:
                logger.info(
                    "Hotel updated",
                    extra={
                        "record_id": str(current.id),
                        "matched_by": resolution.matched_by,
                        "version": updated.version,
                    },
                )
                return updated
            fresh = self.repository.get_by_id(current.id, current.user_id)
            if fresh is None:
                raise HotelNotFoundError(str(current.id))
            logger.warning(
                "Hotel version conflict, retrying",
                extra={"record_id": str(current.id), "attempt": attempt},
            )
            current = fresh
        raise ConcurrentUpdateError(str(current.id), self.max_update_attempts)


def _merge(
    current: HotelRecord, changes: dict[str, object], new_urls: list[str]
) -> dict[str, object]:
    """Build the stored fields for an update of the current record."""
    return {
        **changes,
        "image_urls": [*current.image_urls, *new_urls],
        "last_updated": datetime.now(tz=UTC),
        "version": current.version + 1,
    }


def _parse_primary_key(identifier: str) -> UUID | None:
    """Return the identifier as a primary key, or None if it cannot be one."""
    try:
        return UUID(identifier)
    except ValueError:
        return None
