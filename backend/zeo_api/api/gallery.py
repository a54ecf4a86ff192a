from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from typing import List, Optional
import logging

from zeo_api.core.json_store import JsonStore, get_store, utc_now
from zeo_api.auth.middleware import get_current_admin, CurrentAdmin
from zeo_api.services import catalog

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["gallery"])


class PhotoCreate(BaseModel):
    title: Optional[str] = ""
    image: str
    alt: Optional[str] = None
    gridSpan: str = "col-span-1 row-span-1"
    order: Optional[int] = None
    isActive: bool = True

    class Config:
        extra = "allow"


class PhotoUpdate(BaseModel):
    title: Optional[str] = None
    image: Optional[str] = None
    order: Optional[int] = None
    isActive: Optional[bool] = None

    class Config:
        extra = "allow"


class MetadataUpdate(BaseModel):
    pageTitle: Optional[str] = None
    pageSubtitle: Optional[str] = None


class ReorderRequest(BaseModel):
    photoIds: List[int]


@router.get("/gallery")
async def get_gallery(store: JsonStore = Depends(get_store)):
    """Get active photos in display order with the page metadata."""
    photos = catalog.ordered(catalog.visible(store["gallery"].all(), "isActive"), "order")
    return {"gallery": photos, "metadata": store.gallery_metadata()}


@router.get("/gallery/metadata")
async def get_gallery_metadata(store: JsonStore = Depends(get_store)):
    return store.gallery_metadata()


@router.get("/admin/gallery")
async def get_admin_gallery(
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    return {
        "gallery": catalog.ordered(store["gallery"].all(), "order"),
        "metadata": store.gallery_metadata()
    }


@router.post("/admin/gallery", status_code=status.HTTP_201_CREATED)
async def create_photo(
    photo_data: PhotoCreate,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    """Add a photo. ``image`` is usually a URL returned by the upload endpoint."""
    gallery = store["gallery"]
    data = photo_data.model_dump()
    data["alt"] = data.get("alt") or data.get("title") or ""
    data["order"] = data.get("order") or len(gallery.items) + 1
    data["uploadedAt"] = utc_now()

    photo = gallery.insert(data, save=False)
    store.touch_gallery()

    logger.info(f"Gallery photo {photo['id']} added by {current_admin.email}")
    return photo


@router.put("/admin/gallery/metadata")
async def update_gallery_metadata(
    metadata: MetadataUpdate,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    return store.touch_gallery(pageTitle=metadata.pageTitle, pageSubtitle=metadata.pageSubtitle)


@router.patch("/admin/gallery/reorder")
async def reorder_gallery(
    request: ReorderRequest,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    """Set ``order`` to each photo's 1-based position in ``photoIds``."""
    gallery = store["gallery"]
    for position, photo_id in enumerate(request.photoIds, start=1):
        photo = gallery.get(photo_id)
        if photo is not None:
            photo["order"] = position

    store.touch_gallery()
    return {
        "success": True,
        "message": "Gallery photos reordered successfully",
        "gallery": catalog.ordered(gallery.all(), "order")
    }


@router.put("/admin/gallery/{photo_id}")
async def update_photo(
    photo_id: int,
    photo_data: PhotoUpdate,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    existing = catalog.get_or_404(store["gallery"], photo_id, "Gallery photo")

    update_data = photo_data.model_dump(exclude_unset=True)
    if update_data.get("image") and update_data["image"] != existing.get("image"):
        update_data["uploadedAt"] = utc_now()

    photo = store["gallery"].replace(photo_id, update_data, save=False)
    store.touch_gallery()
    return photo


@router.delete("/admin/gallery/{photo_id}")
async def delete_photo(
    photo_id: int,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    catalog.get_or_404(store["gallery"], photo_id, "Gallery photo")
    store["gallery"].remove(photo_id, save=False)
    store.touch_gallery()

    logger.info(f"Gallery photo {photo_id} deleted by {current_admin.email}")
    return {"message": "Gallery photo deleted successfully"}
