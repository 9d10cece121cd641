"""ASGI entrypoint for the hotel booking API."""

from hotel_booking.api.app import create_app
from hotel_booking.containers import build_container

app = create_app(build_container())
