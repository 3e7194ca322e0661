from __future__ import annotations

from fastapi import APIRouter, Depends, File, UploadFile, status

from foh.api.dependencies import MANAGEMENT, get_image_host, require_roles
from foh.application.dto.responses import UploadResponse
from foh.application.ports.images import ImageHost
from foh.application.ports.security import SessionClaims
from foh.application.use_cases.upload_image import UploadImage

router = APIRouter(prefix="/api/uploads", tags=["uploads"])


@router.post("/images", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_image(
    file: UploadFile = File(...),
    _: SessionClaims = Depends(require_roles(*MANAGEMENT)),
    host: ImageHost = Depends(get_image_host),
) -> UploadResponse:
    content = await file.read()
    return UploadImage(host).execute(content, file.filename or "upload", file.content_type)
