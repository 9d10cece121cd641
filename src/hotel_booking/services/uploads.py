"""Image upload batching for hotel listings."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from hotel_booking.domain.errors import UploadError, ValidationError, ValidationProblem
from hotel_booking.domain.hotels import ImageUpload

logger = logging.getLogger(__name__)


class MediaHost(Protocol):
    """Interface for the external image host."""

    async def upload(self, data: bytes, content_type: str) -> str:
        """Upload image bytes and return the hosted URL."""


@dataclass
class ImageUploadService:
    """Validates image batches and uploads them concurrently."""

    media_host: MediaHost
    max_images: int = 6
    max_image_bytes: int = 5 * 1024 * 1024

    def validate(self, images: Sequence[ImageUpload]) -> None:
        """Reject batches that are too large or contain non-image files."""
        problems: list[ValidationProblem] = []
        if len(images) > self.max_images:
            problems.append(
                ValidationProblem(
                    field="imageFiles",
                    message=f"At most {self.max_images} images are allowed",
                )
            )
        for index, image in enumerate(images):
            label = image.filename or f"imageFiles[{index}]"
            if not image.content_type.startswith("image/"):
                problems.append(
                    ValidationProblem(field=label, message="File must be an image")
                )
            if len(image.data) > self.max_image_bytes:
                problems.append(
                    ValidationProblem(
                        field=label,
                        message=f"File exceeds {self.max_image_bytes} bytes",
                    )
                )
        if problems:
            raise ValidationError(problems)

    async def upload_all(self, images: Sequence[ImageUpload]) -> list[str]:
        """Upload every image and return URLs in input order.

        Uploads run concurrently. If any one of them fails the whole batch
        fails with UploadError and no URLs are returned.
        """
        self.validate(images)
        if not images:
            return []
        results = await asyncio.gather(
            *(self.media_host.upload(image.data, image.content_type) for image in images),
            return_exceptions=True,
        )
        failures = [result for result in results if isinstance(result, BaseException)]
        if failures:
            logger.warning(
                "Image batch failed",
                extra={"batch_size": len(images), "failed": len(failures)},
            )
            first = failures[0]
            if isinstance(first, UploadError):
                raise first
            raise UploadError("Image upload failed") from first
        return [str(url) for url in results]
