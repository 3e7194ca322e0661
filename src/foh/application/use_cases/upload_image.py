from __future__ import annotations

import logging

from foh.application.dto.responses import UploadResponse
from foh.application.ports.images import ImageHost

logger = logging.getLogger(__name__)

MAX_IMAGE_BYTES = 10 * 1024 * 1024


class EmptyUploadError(Exception):
    pass


class UnsupportedUploadError(Exception):
    pass


class UploadImage:
    def __init__(self, host: ImageHost) -> None:
        self._host = host

    def execute(self, content: bytes, filename: str, content_type: str | None) -> UploadResponse:
        if not content:
            raise EmptyUploadError("no file uploaded")
        if len(content) > MAX_IMAGE_BYTES:
            raise UnsupportedUploadError(f"file exceeds {MAX_IMAGE_BYTES} bytes")
        if content_type and not content_type.startswith("image/"):
            raise UnsupportedUploadError(f"unsupported content type {content_type}")

        # ImageUploadError from the host propagates as a gateway failure
        url = self._host.upload(content, filename, content_type)
        logger.info("image_uploaded", extra={"bytes": len(content)})
        return UploadResponse(url=url)
