"""Owner-facing hotel listing endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

import pydantic
from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status

from hotel_booking.api.auth import current_user_id
from hotel_booking.domain.errors import ValidationError, ValidationProblem
from hotel_booking.domain.hotels import HotelFields, HotelPatch, HotelRecord, ImageUpload

if TYPE_CHECKING:
    from hotel_booking.containers import AppContainer

router = APIRouter(prefix="/api/my-hotels", tags=["my-hotels"])

ModelT = TypeVar("ModelT", bound=HotelPatch)

_WIRE_NAMES = {
    "hotel_id": "hotelId",
    "price_per_night": "pricePerNight",
}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_hotel(  # noqa: PLR0913
    request: Request,
    hotel_id: str | None = Form(default=None, alias="hotelId"),
    name: str | None = Form(default=None),
    city: str | None = Form(default=None),
    country: str | None = Form(default=None),
    description: str | None = Form(default=None),
    type: str | None = Form(default=None),  # noqa: A002
    price_per_night: str | None = Form(default=None, alias="pricePerNight"),
    facilities: list[str] | None = Form(default=None),
    image_files: list[UploadFile] | None = File(default=None, alias="imageFiles"),
    user_id: str = Depends(current_user_id),
) -> dict[str, object]:
    """Create a hotel owned by the caller."""
    container: AppContainer = request.app.state.container
    fields = _parse(
        HotelFields,
        hotel_id=hotel_id,
        name=name,
        city=city,
        country=country,
        description=description,
        type=type,
        price_per_night=price_per_night,
        facilities=facilities,
    )
    images = await _read_images(image_files)
    record = await container.hotel_service.create_hotel(user_id, fields, images)
    return serialize_hotel(record)


@router.get("")
async def list_hotels(
    request: Request, user_id: str = Depends(current_user_id)
) -> list[dict[str, object]]:
    """Return the caller's hotels."""
    container: AppContainer = request.app.state.container
    records = container.hotel_service.list_hotels(user_id)
    return [serialize_hotel(record) for record in records]


@router.get("/{identifier}")
async def get_hotel(
    identifier: str, request: Request, user_id: str = Depends(current_user_id)
) -> dict[str, object]:
    """Return one of the caller's hotels by id or hotel id."""
    container: AppContainer = request.app.state.container
    return serialize_hotel(container.hotel_service.get_hotel(identifier, user_id))


@router.put("/{identifier}")
async def update_hotel(  # noqa: PLR0913
    identifier: str,
    request: Request,
    hotel_id: str | None = Form(default=None, alias="hotelId"),
    name: str | None = Form(default=None),
    city: str | None = Form(default=None),
    country: str | None = Form(default=None),
    description: str | None = Form(default=None),
    type: str | None = Form(default=None),  # noqa: A002
    price_per_night: str | None = Form(default=None, alias="pricePerNight"),
    facilities: list[str] | None = Form(default=None),
    image_files: list[UploadFile] | None = File(default=None, alias="imageFiles"),
    user_id: str = Depends(current_user_id),
) -> dict[str, object]:
    """Merge changed fields and new images onto one of the caller's hotels."""
    container: AppContainer = request.app.state.container
    patch = _parse(
        HotelPatch,
        hotel_id=hotel_id,
        name=name,
        city=city,
        country=country,
        description=description,
        type=type,
        price_per_night=price_per_night,
        facilities=facilities,
    )
    images = await _read_images(image_files)
    record = await container.hotel_service.update_hotel(
        identifier, user_id, patch, images
    )
    return serialize_hotel(record)


def serialize_hotel(record: HotelRecord) -> dict[str, object]:
    """Return the JSON representation of a hotel."""
    return {
        "id": str(record.id),
        "hotelId": record.hotel_id,
        "userId": record.user_id,
        "name": record.name,
        "city": record.city,
        "country": record.country,
        "description": record.description,
        "type": record.type,
        "facilities": record.facilities,
        "pricePerNight": record.price_per_night,
        "imageUrls": record.image_urls,
        "lastUpdated": record.last_updated.isoformat(),
        "version": record.version,
    }


def _parse(model: type[ModelT], **values: object) -> ModelT:
    """Validate submitted form values, ignoring fields that were not sent."""
    supplied = {key: value for key, value in values.items() if value is not None}
    try:
        return model.model_validate(supplied)
    except pydantic.ValidationError as exc:
        raise ValidationError(
            [
                ValidationProblem(
                    field=".".join(
                        _WIRE_NAMES.get(str(part), str(part)) for part in error["loc"]
                    ),
                    message=error["msg"],
                )
                for error in exc.errors()
            ]
        ) from exc


async def _read_images(files: list[UploadFile] | None) -> list[ImageUpload]:
    images = []
    for upload in files or []:
        images.append(
            ImageUpload(
                filename=upload.filename,
                content_type=upload.content_type or "application/octet-stream",
                data=await upload.read(),
            )
        )
    return images
