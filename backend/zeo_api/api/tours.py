from fastapi import APIRouter, HTTPException, Depends, Query, status
from pydantic import BaseModel, Field
from typing import List, Optional, Dict, Any
import logging

from zeo_api.core.json_store import JsonStore, get_store
from zeo_api.auth.middleware import get_current_admin, CurrentAdmin
from zeo_api.services import catalog
from zeo_api.services.catalog import slugify
from zeo_api.services.relations import update_destination_relationships, detach_tour

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["tours"])


class TourCreate(BaseModel):
    title: str = Field(..., min_length=1, description="Tour title")
    slug: Optional[str] = Field(None, description="URL slug, derived from the title when empty")
    category: Optional[str] = None
    destination: Optional[str] = None
    location: Optional[str] = None
    duration: Optional[str] = None
    price: Optional[float] = None
    listed: bool = True
    featured: bool = False
    primary_destination_id: Optional[int] = None
    secondary_destination_ids: List[int] = Field(default_factory=list)

    class Config:
        extra = "allow"


class TourUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    slug: Optional[str] = None
    price: Optional[float] = None
    listed: Optional[bool] = None
    featured: Optional[bool] = None
    primary_destination_id: Optional[int] = None
    secondary_destination_ids: Optional[List[int]] = None

    class Config:
        extra = "allow"


class ListingUpdate(BaseModel):
    listed: bool


def parse_tour_id(tour_id: str) -> int:
    if not tour_id.isdigit():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid tour ID")
    return int(tour_id)


@router.get("/tours")
async def get_tours(
    search: Optional[str] = None,
    category: Optional[str] = None,
    location: Optional[str] = None,
    destination: Optional[str] = Query(None, description="Destination slug"),
    activity: Optional[str] = Query(None, description="Activity slug"),
    featured: Optional[bool] = None,
    limit: Optional[int] = None,
    store: JsonStore = Depends(get_store)
):
    """Get listed tours, optionally filtered."""
    tours = catalog.visible(store["tours"].all(), "listed")

    tours = catalog.equals_ignore_case(tours, "category", category)
    tours = catalog.equals_ignore_case(tours, "location", location)
    tours = catalog.search(tours, search, catalog.TOUR_SEARCH_FIELDS)

    if destination:
        dest = store["destinations"].get_by_slug(destination)
        tours = catalog.tours_for_destination(tours, dest) if dest else []

    if activity:
        act = store["activities"].get_by_slug(activity)
        tours = catalog.tours_for_activity(tours, act) if act else []

    if featured is not None:
        tours = [tour for tour in tours if tour.get("featured") == featured]

    return catalog.apply_limit(tours, limit)


@router.get("/tours/slug/{slug}")
async def get_tour_by_slug(slug: str, store: JsonStore = Depends(get_store)):
    """Get a listed tour by its slug."""
    tour = store["tours"].get_by_slug(slug)
    if not tour or not tour.get("listed", True):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tour not found")
    return tour


@router.get("/tours/{tour_id}")
async def get_tour(tour_id: str, store: JsonStore = Depends(get_store)):
    """Get a listed tour by ID."""
    tour = store["tours"].get(parse_tour_id(tour_id))
    if not tour or not tour.get("listed", True):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tour not found")
    return tour


@router.get("/admin/tours")
async def get_admin_tours(
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    """Get every tour, listed or not."""
    return store["tours"].all()


@router.get("/admin/tours/{tour_id}")
async def get_admin_tour(
    tour_id: int,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    return catalog.get_or_404(store["tours"], tour_id, "Tour")


@router.post("/admin/tours", status_code=status.HTTP_201_CREATED)
async def create_tour(
    tour_data: TourCreate,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    """Create a new tour and link it to its destinations."""
    data = tour_data.model_dump()
    data["slug"] = data.get("slug") or slugify(data["title"])

    if store["tours"].get_by_slug(data["slug"]):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A tour with this slug already exists"
        )

    tour = store["tours"].insert(data)

    update_destination_relationships(
        store,
        tour["id"],
        tour.get("primary_destination_id"),
        tour.get("secondary_destination_ids")
    )

    logger.info(f"Tour {tour['id']} created by {current_admin.email}")
    return tour


@router.put("/admin/tours/{tour_id}")
async def update_tour(
    tour_id: int,
    tour_data: TourUpdate,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    """Replace a tour with the submitted object and re-link destinations."""
    existing = catalog.get_or_404(store["tours"], tour_id, "Tour")
    old_primary_id = existing.get("primary_destination_id") or existing.get("destination_id")
    old_secondary_ids = existing.get("secondary_destination_ids") or []

    tour = store["tours"].replace(tour_id, tour_data.model_dump(exclude_unset=True))

    update_destination_relationships(
        store,
        tour_id,
        tour.get("primary_destination_id"),
        tour.get("secondary_destination_ids"),
        old_primary_id,
        old_secondary_ids
    )

    logger.info(f"Tour {tour_id} updated by {current_admin.email}")
    return tour


@router.patch("/admin/tours/{tour_id}/listing")
async def update_tour_listing(
    tour_id: int,
    listing: ListingUpdate,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    """Show or hide a tour on the public site."""
    catalog.get_or_404(store["tours"], tour_id, "Tour")
    return store["tours"].replace(tour_id, {"listed": listing.listed})


@router.delete("/admin/tours/{tour_id}")
async def delete_tour(
    tour_id: int,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    catalog.get_or_404(store["tours"], tour_id, "Tour")
    store["tours"].remove(tour_id)
    detach_tour(store, tour_id)

    logger.info(f"Tour {tour_id} deleted by {current_admin.email}")
    return {"message": "Tour deleted successfully"}
