"""Supabase-backed hotel repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client, PostgrestAPIError

from hotel_booking.domain.errors import PersistenceError
from hotel_booking.domain.hotels import HotelRecord
from hotel_booking.services.hotels import HotelRepository

_COLUMNS = (
    "id, hotel_id, user_id, name, city, country, description, type, facilities, "
    "price_per_night, image_urls, last_updated, version"
)


@dataclass
class SupabaseHotelRepository(HotelRepository):
    """Supabase implementation for hotel persistence."""

    client: Client
    table_name: str = "hotels"

    def get_by_id(self, record_id: UUID, owner_id: str | None) -> HotelRecord | None:
        """Return the hotel with this primary key, if present."""
        query = self.client.table(self.table_name).select(_COLUMNS).eq(
            "id", str(record_id)
        )
        if owner_id is not None:
            query = query.eq("user_id", owner_id)
        return self._first(query.limit(1))

    def get_by_hotel_id(
        self, hotel_id: str, owner_id: str | None
    ) -> HotelRecord | None:
        """Return the first hotel with this business key, if present."""
        query = self.client.table(self.table_name).select(_COLUMNS).eq(
            "hotel_id", hotel_id
        )
        if owner_id is not None:
            query = query.eq("user_id", owner_id)
        return self._first(query.limit(1))

    def list_by_owner(self, owner_id: str) -> list[HotelRecord]:
        """Return the owner's hotels, most recently updated first."""
        query = (
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("user_id", owner_id)
            .order("last_updated", desc=True)
        )
        return [_parse_hotel(row) for row in self._execute(query)]

    def create_hotel(self, payload: dict[str, object]) -> HotelRecord:
        """Insert a hotel row and return it."""
        rows = self._execute(
            self.client.table(self.table_name).insert(_to_row(payload))
        )
        if not rows:
            raise PersistenceError("Failed to create hotel in Supabase")
        return _parse_hotel(rows[0])

    def update_hotel(
        self, record_id: UUID, payload: dict[str, object], expected_version: int
    ) -> HotelRecord | None:
        """Update the listed columns if the stored version still matches."""
        rows = self._execute(
            self.client.table(self.table_name)
            .update(_to_row(payload))
            .eq("id", str(record_id))
            .eq("version", expected_version)
        )
        if not rows:
            return None
        return _parse_hotel(rows[0])

    def _first(self, query) -> HotelRecord | None:  # type: ignore[no-untyped-def]
        rows = self._execute(query)
        if rows:
            return _parse_hotel(rows[0])
        return None

    @staticmethod
    def _execute(query) -> list[dict[str, object]]:  # type: ignore[no-untyped-def]
        try:
            response = query.execute()
        except PostgrestAPIError as exc:
            raise PersistenceError(f"Supabase request failed: {exc}") from exc
        return response.data or []


def _to_row(payload: dict[str, object]) -> dict[str, object]:
    """Convert domain values to JSON-friendly column values."""
    row: dict[str, object] = {}
    for key, value in payload.items():
        if isinstance(value, datetime):
            row[key] = value.isoformat()
        elif isinstance(value, UUID):
            row[key] = str(value)
        else:
            row[key] = value
    return row


def _parse_hotel(row: dict[str, object]) -> HotelRecord:
    last_updated = row["last_updated"]
    return HotelRecord(
        id=UUID(str(row["id"])),
        hotel_id=row.get("hotel_id"),
        user_id=str(row["user_id"]),
        name=str(row["name"]),
        city=str(row["city"]),
        country=str(row["country"]),
        description=str(row["description"]),
        type=str(row["type"]),
        facilities=list(row.get("facilities") or []),
        price_per_night=float(row["price_per_night"]),
        image_urls=list(row.get("image_urls") or []),
        last_updated=(
            datetime.fromisoformat(last_updated)
            if isinstance(last_updated, str)
            else last_updated
        ),
        version=int(row.get("version") or 1),
    )
