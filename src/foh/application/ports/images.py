from __future__ import annotations

from typing import Protocol


class ImageHost(Protocol):
    def upload(self, content: bytes, filename: str, content_type: str | None) -> str: ...


class ImageUploadError(Exception):
    pass
