"""Cloudinary image upload client."""

import base64
import hashlib
import time
from dataclasses import dataclass

import httpx

from hotel_booking.domain.errors import UploadError
from hotel_booking.services.uploads import MediaHost


@dataclass
class HttpxCloudinaryMediaHost(MediaHost):
    """Uploads images to Cloudinary using signed requests."""

    cloud_name: str
    api_key: str
    api_secret: str
    http_client: httpx.AsyncClient
    timeout: float = 30.0
    base_url: str = "https://api.cloudinary.com/v1_1"

    @classmethod
    def create(
        cls, cloud_name: str, api_key: str, api_secret: str, timeout: float = 30.0
    ) -> "HttpxCloudinaryMediaHost":
        """Create a Cloudinary client with a managed httpx session."""
        return cls(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def upload(self, data: bytes, content_type: str) -> str:
        """Upload one image and return its hosted URL."""
        timestamp = str(int(time.time()))
        form = {
            "file": _to_data_uri(data, content_type),
            "api_key": self.api_key,
            "timestamp": timestamp,
            "signature": _sign({"timestamp": timestamp}, self.api_secret),
        }
        url = f"{self.base_url}/{self.cloud_name}/image/upload"
        try:
            response = await self.http_client.post(url, data=form, timeout=self.timeout)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise UploadError(f"Cloudinary upload failed: {exc}") from exc
        payload = response.json()
        hosted_url = payload.get("secure_url") or payload.get("url")
        if not hosted_url:
            raise UploadError("Cloudinary response did not include a URL")
        return str(hosted_url)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _to_data_uri(data: bytes, content_type: str) -> str:
    encoded = base64.b64encode(data).decode("utf-8")
    return f"data:{content_type};base64,{encoded}"


def _sign(params: dict[str, str], api_secret: str) -> str:
    """Sign upload parameters the way Cloudinary expects."""
    to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params))
    return hashlib.sha1(f"{to_sign}{api_secret}".encode()).hexdigest()  # noqa: S324
