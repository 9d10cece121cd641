"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from hotel_booking.adapters.cloudinary_media_host import HttpxCloudinaryMediaHost
from hotel_booking.adapters.supabase_hotel_repository import SupabaseHotelRepository
from hotel_booking.config import Settings
from hotel_booking.services.hotels import HotelService
from hotel_booking.services.uploads import ImageUploadService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    upload_service: ImageUploadService
    hotel_service: HotelService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    hotel_repository = SupabaseHotelRepository(
        supabase_client, table_name=resolved_settings.hotels_table
    )
    media_host = HttpxCloudinaryMediaHost.create(
        cloud_name=resolved_settings.cloudinary_cloud_name,
        api_key=resolved_settings.cloudinary_api_key,
        api_secret=resolved_settings.cloudinary_api_secret,
        timeout=resolved_settings.cloudinary_timeout_seconds,
    )
    upload_service = ImageUploadService(
        media_host=media_host,
        max_images=resolved_settings.max_images_per_request,
        max_image_bytes=resolved_settings.max_image_bytes,
    )
    hotel_service = HotelService(
        repository=hotel_repository,
        upload_service=upload_service,
        max_update_attempts=resolved_settings.update_max_attempts,
    )

    async def close_resources() -> None:
        await media_host.close()

    return AppContainer(
        settings=resolved_settings,
        upload_service=upload_service,
        hotel_service=hotel_service,
        close_resources=close_resources,
    )
