"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

import jwt
import pytest

from hotel_booking.config import Settings
from hotel_booking.containers import AppContainer
from hotel_booking.domain.errors import UploadError
from hotel_booking.domain.hotels import HotelRecord, ImageUpload
from hotel_booking.services.hotels import HotelRepository, HotelService
from hotel_booking.services.uploads import ImageUploadService, MediaHost

JWT_SECRET = "jwt-secret"


@dataclass
class InMemoryHotelRepository(HotelRepository):
    """In-memory hotel repository for tests."""

    hotels: dict[UUID, HotelRecord] = field(default_factory=dict)
    updates: list[tuple[UUID, dict[str, object], int]] = field(default_factory=list)
    on_update: list = field(default_factory=list)

    def get_by_id(self, record_id: UUID, owner_id: str | None) -> HotelRecord | None:
        hotel = self.hotels.get(record_id)
        if hotel is None or (owner_id is not None and hotel.user_id != owner_id):
            return None
        return hotel

    def get_by_hotel_id(
        self, hotel_id: str, owner_id: str | None
    ) -> HotelRecord | None:
        for hotel in self.hotels.values():
            if hotel.hotel_id == hotel_id and (
                owner_id is None or hotel.user_id == owner_id
            ):
                return hotel
        return None

    def list_by_owner(self, owner_id: str) -> list[HotelRecord]:
        return [hotel for hotel in self.hotels.values() if hotel.user_id == owner_id]

    def create_hotel(self, payload: dict[str, object]) -> HotelRecord:
        hotel = HotelRecord(id=uuid4(), **payload)
        self.hotels[hotel.id] = hotel
        return hotel

    def update_hotel(
        self, record_id: UUID, payload: dict[str, object], expected_version: int
    ) -> HotelRecord | None:
        self.updates.append((record_id, payload, expected_version))
        if self.on_update:
            self.on_update.pop(0)(self, record_id)
        current = self.hotels.get(record_id)
        if current is None or current.version != expected_version:
            return None
        updated = replace(current, **payload)
        self.hotels[record_id] = updated
        return updated


@dataclass
class FakeMediaHost(MediaHost):
    """Media host that returns predictable URLs and can fail on demand."""

    fail_on: set[bytes] = field(default_factory=set)
    uploaded: list[tuple[bytes, str]] = field(default_factory=list)

    async def upload(self, data: bytes, content_type: str) -> str:
        if data in self.fail_on:
            raise UploadError(f"rejected {data!r}")
        self.uploaded.append((data, content_type))
        return f"https://media.example.com/{data.decode()}.jpg"


def make_image(name: str, content_type: str = "image/jpeg") -> ImageUpload:
    return ImageUpload(
        filename=f"{name}.jpg", content_type=content_type, data=name.encode()
    )


def make_hotel(**overrides: object) -> HotelRecord:
    values: dict[str, object] = {
        "id": uuid4(),
        "hotel_id": "h1",
        "user_id": "u1",
        "name": "Sea View",
        "city": "Lisbon",
        "country": "Portugal",
        "description": "Rooms by the water",
        "type": "Boutique",
        "facilities": ["wifi", "pool"],
        "price_per_night": 100.0,
        "image_urls": ["https://media.example.com/existing.jpg"],
        "last_updated": datetime(2024, 1, 1, tzinfo=UTC),
        "version": 1,
    }
    values.update(overrides)
    return HotelRecord(**values)


def make_token(user_id: str, secret: str = JWT_SECRET) -> str:
    return jwt.encode({"userId": user_id}, secret, algorithm="HS256")


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        admin_token="admin-token",
        jwt_secret_key=JWT_SECRET,
        cloudinary_cloud_name="demo",
        cloudinary_api_key="cloud-key",
        cloudinary_api_secret="cloud-secret",
    )


@pytest.fixture
def hotel_repository() -> InMemoryHotelRepository:
    return InMemoryHotelRepository()


@pytest.fixture
def media_host() -> FakeMediaHost:
    return FakeMediaHost()


@pytest.fixture
def hotel_service(
    hotel_repository: InMemoryHotelRepository, media_host: FakeMediaHost
) -> HotelService:
    return HotelService(
        repository=hotel_repository,
        upload_service=ImageUploadService(media_host),
    )


@pytest.fixture
def container(settings: Settings, hotel_service: HotelService) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        upload_service=hotel_service.upload_service,
        hotel_service=hotel_service,
        close_resources=close_resources,
    )
