from fastapi import APIRouter, HTTPException, Depends, status
from pydantic import BaseModel
from typing import List, Optional
import logging

from zeo_api.core.json_store import JsonStore, get_store
from zeo_api.auth.middleware import get_current_admin, CurrentAdmin
from zeo_api.services import catalog

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["sliders"])

DEFAULT_VIDEO_POSTER = "https://images.unsplash.com/photo-1506905925346-21bda4d32df4?q=80&w=1920&h=1080&fit=crop"


class SliderCreate(BaseModel):
    title: Optional[str] = ""
    subtitle: Optional[str] = ""
    location: Optional[str] = ""
    image: Optional[str] = ""
    video: Optional[str] = ""
    video_start_time: int = 0
    order_index: Optional[int] = None
    is_active: bool = True
    button_text: Optional[str] = ""
    button_url: Optional[str] = ""
    button_style: str = "primary"
    show_button: bool = True

    class Config:
        extra = "allow"


class SliderUpdate(BaseModel):
    order_index: Optional[int] = None
    is_active: Optional[bool] = None

    class Config:
        extra = "allow"


class OrderItem(BaseModel):
    id: int
    order_index: int


@router.get("/sliders")
async def get_sliders(store: JsonStore = Depends(get_store)):
    """Get active sliders in display order."""
    return catalog.ordered(catalog.visible(store["sliders"].all(), "is_active"), "order_index")


@router.get("/sliders/{slider_id}")
async def get_slider(slider_id: int, store: JsonStore = Depends(get_store)):
    return catalog.get_or_404(store["sliders"], slider_id, "Slider")


@router.get("/admin/sliders")
async def get_admin_sliders(
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    return catalog.ordered(store["sliders"].all(), "order_index")


@router.put("/admin/sliders/order")
async def update_slider_order(
    positions: List[OrderItem],
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    """Persist a drag-and-drop reorder."""
    return catalog.apply_order(store["sliders"], [p.model_dump() for p in positions])


@router.get("/admin/sliders/{slider_id}")
async def get_admin_slider(
    slider_id: int,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    return catalog.get_or_404(store["sliders"], slider_id, "Slider")


@router.post("/admin/sliders", status_code=status.HTTP_201_CREATED)
async def create_slider(
    slider_data: SliderCreate,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    """Create a slide. A video slide without an image gets a default poster."""
    data = slider_data.model_dump()
    if data["order_index"] is None:
        data["order_index"] = len(store["sliders"].items) + 1
    if data.get("video") and not data.get("image"):
        data["image"] = DEFAULT_VIDEO_POSTER

    if not (data.get("image") or data.get("video")):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A slider needs an image or a video"
        )

    slider = store["sliders"].insert(data)
    logger.info(f"Slider {slider['id']} created by {current_admin.email}")
    return slider


@router.put("/admin/sliders/{slider_id}")
async def update_slider(
    slider_id: int,
    slider_data: SliderUpdate,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    catalog.get_or_404(store["sliders"], slider_id, "Slider")
    return store["sliders"].replace(slider_id, slider_data.model_dump(exclude_unset=True))


@router.delete("/admin/sliders/{slider_id}")
async def delete_slider(
    slider_id: int,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    catalog.get_or_404(store["sliders"], slider_id, "Slider")
    store["sliders"].remove(slider_id)

    logger.info(f"Slider {slider_id} deleted by {current_admin.email}")
    return {"message": "Slider deleted successfully"}
