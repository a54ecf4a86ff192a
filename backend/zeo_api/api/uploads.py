from fastapi import APIRouter, HTTPException, Depends, status, UploadFile, File, Form
import logging
import os
import time

from zeo_api.core.config import settings
from zeo_api.auth.middleware import get_current_admin, CurrentAdmin
from zeo_api.services.catalog import slugify

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["uploads"])

ALLOWED_EXTENSIONS = {
    ".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg",
    ".mp4", ".webm", ".mov", ".avi", ".mkv"
}


def is_media(content_type: str, extension: str) -> bool:
    """Images and videos only; either the MIME type or the extension must say so."""
    content_type = content_type or ""
    return (
        content_type.startswith("image/")
        or content_type.startswith("video/")
        or extension in ALLOWED_EXTENSIONS
    )


@router.post("/upload")
async def upload_file(
    file: UploadFile = File(...),
    folder: str = Form(default="general"),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    """Store an uploaded image or video under ``/uploads/<folder>/``."""
    base_name, extension = os.path.splitext(file.filename or "")
    extension = extension.lower()

    if not is_media(file.content_type, extension):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Only image and video files are allowed. Detected: {file.content_type or 'None'}"
        )

    content = await file.read()
    if not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    if len(content) > settings.max_upload_mb * 1024 * 1024:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File exceeds the {settings.max_upload_mb}MB limit"
        )

    folder_slug = slugify(folder)
    target_dir = os.path.join(settings.uploads_dir, folder_slug)
    os.makedirs(target_dir, exist_ok=True)

    # Timestamped names avoid stale browser caches after a replacement
    filename = f"{slugify(base_name)}_{int(time.time() * 1000)}{extension}"
    with open(os.path.join(target_dir, filename), "wb") as fh:
        fh.write(content)

    url = f"/uploads/{folder_slug}/{filename}"
    logger.info(f"File uploaded to {url} by {current_admin.email}")

    return {
        "success": True,
        "url": f"{settings.public_base_url.rstrip('/')}{url}" if settings.public_base_url else url,
        "filename": filename
    }
