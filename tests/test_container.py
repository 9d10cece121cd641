"""Tests for container wiring."""

import asyncio

from hotel_booking.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)
    assert container.hotel_service.upload_service is container.upload_service
    assert container.upload_service.max_images == settings.max_images_per_request
    asyncio.run(container.close_resources())
