from fastapi import APIRouter, HTTPException, Depends, status
from pydantic import BaseModel, Field
from typing import Optional
import logging

from zeo_api.core.json_store import JsonStore, get_store
from zeo_api.auth.middleware import get_current_admin, CurrentAdmin
from zeo_api.services import catalog
from zeo_api.services.catalog import slugify

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["activities"])


class ActivityCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    slug: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = ""
    featured: bool = False

    class Config:
        extra = "allow"


class ActivityUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = None
    type: Optional[str] = None
    featured: Optional[bool] = None

    class Config:
        extra = "allow"


@router.get("/activities")
async def get_activities(
    type: Optional[str] = None,
    limit: Optional[int] = None,
    store: JsonStore = Depends(get_store)
):
    """Get activities, optionally of one type."""
    activities = store["activities"].all()
    if type:
        activities = [activity for activity in activities if activity.get("type") == type]
    return catalog.apply_limit(activities, limit)


@router.get("/activities/{identifier}")
async def get_activity(identifier: str, store: JsonStore = Depends(get_store)):
    """Get an activity by slug or ID."""
    return catalog.resolve_or_404(store["activities"], identifier, "Activity")


@router.get("/activities/{slug}/tours")
async def get_activity_tours(slug: str, store: JsonStore = Depends(get_store)):
    activity = catalog.resolve_or_404(store["activities"], slug, "Activity")
    tours = catalog.visible(store["tours"].all(), "listed")
    return catalog.tours_for_activity(tours, activity)


@router.get("/admin/activities")
async def get_admin_activities(
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    return store["activities"].all()


@router.get("/admin/activities/{activity_id}")
async def get_admin_activity(
    activity_id: int,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    return catalog.get_or_404(store["activities"], activity_id, "Activity")


@router.post("/admin/activities", status_code=status.HTTP_201_CREATED)
async def create_activity(
    activity_data: ActivityCreate,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    """Create a new activity."""
    data = activity_data.model_dump()
    data["slug"] = data.get("slug") or slugify(data["name"])

    if store["activities"].get_by_slug(data["slug"]):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="An activity with this slug already exists"
        )

    activity = store["activities"].insert(data)
    logger.info(f"Activity {activity['id']} created by {current_admin.email}")
    return activity


@router.put("/admin/activities/{activity_id}")
async def update_activity(
    activity_id: int,
    activity_data: ActivityUpdate,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    catalog.get_or_404(store["activities"], activity_id, "Activity")
    return store["activities"].replace(activity_id, activity_data.model_dump(exclude_unset=True))


@router.delete("/admin/activities/{activity_id}")
async def delete_activity(
    activity_id: int,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    catalog.get_or_404(store["activities"], activity_id, "Activity")
    store["activities"].remove(activity_id)

    logger.info(f"Activity {activity_id} deleted by {current_admin.email}")
    return {"message": "Activity deleted successfully"}
