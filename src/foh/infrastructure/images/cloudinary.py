from __future__ import annotations

import hashlib
import logging
import time

import httpx

from foh.application.ports.images import ImageHost, ImageUploadError

logger = logging.getLogger(__name__)

UPLOAD_URL = "https://api.cloudinary.com/v1_1/{cloud_name}/image/upload"


def sign_params(params: dict[str, str], api_secret: str) -> str:
    """Cloudinary signature: sha1 of the sorted params joined with '&' plus the secret."""
    to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params))
    return hashlib.sha1(f"{to_sign}{api_secret}".encode("utf-8")).hexdigest()


class CloudinaryImageHost(ImageHost):
    def __init__(
        self,
        cloud_name: str | None,
        api_key: str | None,
        api_secret: str | None,
        folder: str,
        timeout_seconds: float = 15.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._cloud_name = cloud_name
        self._api_key = api_key
        self._api_secret = api_secret
        self._folder = folder
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    def upload(self, content: bytes, filename: str, content_type: str | None) -> str:
        if not (self._cloud_name and self._api_key and self._api_secret):
            raise ImageUploadError("image hosting is not configured")

        params = {"folder": self._folder, "timestamp": str(int(time.time()))}
        data = {
            **params,
            "api_key": self._api_key,
            "signature": sign_params(params, self._api_secret),
        }
        files = {"file": (filename, content, content_type or "application/octet-stream")}
        url = UPLOAD_URL.format(cloud_name=self._cloud_name)
        try:
            with httpx.Client(timeout=self._timeout_seconds, transport=self._transport) as client:
                response = client.post(url, data=data, files=files)
                response.raise_for_status()
                payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("image_upload_failed", extra={"upload_filename": filename}, exc_info=True)
            raise ImageUploadError("image host upload failed") from exc

        secure_url = payload.get("secure_url")
        if not secure_url:
            raise ImageUploadError("image host returned no url")
        return str(secure_url)
