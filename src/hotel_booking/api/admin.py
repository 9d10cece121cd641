"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from hotel_booking.api.auth import require_admin
from hotel_booking.api.hotels import serialize_hotel

if TYPE_CHECKING:
    from hotel_booking.containers import AppContainer

router = APIRouter(prefix="/api/admin", tags=["admin"])


class ChangePriceRequest(BaseModel):
    """Body of a price change request."""

    hotel_id: str = Field(alias="hotelId", min_length=1)
    new_price: float = Field(alias="newPrice", ge=0)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.post("/change-price", dependencies=[Depends(require_admin)])
async def change_price(body: ChangePriceRequest, request: Request) -> dict[str, object]:
    """Set the nightly price of a hotel by id or hotel id."""
    container: AppContainer = request.app.state.container
    record = container.hotel_service.change_price(body.hotel_id, body.new_price)
    return serialize_hotel(record)
