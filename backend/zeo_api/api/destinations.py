from fastapi import APIRouter, HTTPException, Depends, status
from pydantic import BaseModel, Field
from typing import List, Optional
import logging

from zeo_api.core.json_store import JsonStore, get_store
from zeo_api.auth.middleware import get_current_admin, CurrentAdmin
from zeo_api.services import catalog

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["destinations"])

DEFAULT_DESTINATION_IMAGE = (
    "https://images.unsplash.com/photo-1506905925346-21bda4d32df4?q=80&w=2070&auto=format&fit=crop"
)


class DestinationCreate(BaseModel):
    slug: Optional[str] = Field(None, max_length=255, description="URL slug, derived from the title when empty")
    title: str = Field(..., min_length=1, max_length=255, description="Destination name")
    country: str = Field(..., min_length=1, max_length=100, description="Country")
    region: Optional[str] = Field("", description="Region")
    image: Optional[str] = Field(None, description="Image URL")
    featured: bool = False
    listed: bool = True
    highlights: List[str] = Field(default_factory=list)


class DestinationUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    country: Optional[str] = Field(None, min_length=1, max_length=100)
    region: Optional[str] = None
    image: Optional[str] = None
    featured: Optional[bool] = None
    listed: Optional[bool] = None

    class Config:
        extra = "allow"


def destination_type(country: str) -> str:
    return "nepal" if country.lower() == "nepal" else "international"


def with_tour_count(destination: dict) -> dict:
    return {**destination, "tourCount": len(destination.get("relatedTours") or [])}


@router.get("/destinations")
async def get_destinations(
    country: Optional[str] = None,
    limit: Optional[int] = None,
    store: JsonStore = Depends(get_store)
):
    """Get listed destinations with their current tour counts."""
    destinations = catalog.visible(store["destinations"].all(), "listed")
    destinations = catalog.equals_ignore_case(destinations, "country", country)
    return catalog.apply_limit([with_tour_count(d) for d in destinations], limit)


@router.get("/destinations/{slug}")
async def get_destination(slug: str, store: JsonStore = Depends(get_store)):
    """Get a destination by slug."""
    destination = store["destinations"].get_by_slug(slug)
    if not destination or not destination.get("listed", True):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Destination not found")
    return with_tour_count(destination)


@router.get("/destinations/{slug}/tours")
async def get_destination_tours(slug: str, store: JsonStore = Depends(get_store)):
    """Get the listed tours of a destination."""
    destination = store["destinations"].get_by_slug(slug)
    if not destination:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Destination not found")

    tours = catalog.visible(store["tours"].all(), "listed")
    return catalog.tours_for_destination(tours, destination)


@router.get("/admin/destinations")
async def get_admin_destinations(
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    """Get all destinations, including unlisted ones."""
    return [with_tour_count(d) for d in store["destinations"].all()]


@router.get("/admin/destinations/{identifier}")
async def get_admin_destination(
    identifier: str,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    return with_tour_count(catalog.resolve_or_404(store["destinations"], identifier, "Destination"))


@router.post("/admin/destinations", status_code=status.HTTP_201_CREATED)
async def create_destination(
    destination_data: DestinationCreate,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    """Create a new destination."""
    slug = destination_data.slug or catalog.slugify(destination_data.title)
    if store["destinations"].get_by_slug(slug):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A destination with this slug already exists"
        )

    title = destination_data.title
    country = destination_data.country
    destination = store["destinations"].insert({
        "name": title,
        "slug": slug,
        "title": title,
        "country": country,
        "region": destination_data.region or "",
        "image": destination_data.image or DEFAULT_DESTINATION_IMAGE,
        "featured": destination_data.featured,
        "listed": destination_data.listed,
        "href": f"/destinations/{slug}",
        "type": destination_type(country),
        "description": f"Discover the beauty and culture of {title} in {country}.",
        "highlights": destination_data.highlights,
        "bestTime": "Year-round",
        "relatedTours": [],
        "relatedActivities": []
    })

    logger.info(f"Destination {destination['slug']} created by {current_admin.email}")
    return with_tour_count(destination)


@router.put("/admin/destinations/{identifier}")
async def update_destination(
    identifier: str,
    destination_data: DestinationUpdate,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    """Update a destination found by slug or ID."""
    existing = catalog.resolve_or_404(store["destinations"], identifier, "Destination")

    update_data = destination_data.model_dump(exclude_unset=True)
    # Renaming keeps name and title in step
    if destination_data.title:
        update_data["name"] = destination_data.title
    if destination_data.country:
        update_data["type"] = destination_type(destination_data.country)
    if destination_data.title and "description" not in update_data:
        update_data["description"] = (
            f"Discover the beauty and culture of {destination_data.title} "
            f"in {destination_data.country or existing.get('country')}."
        )

    destination = store["destinations"].replace(existing["id"], update_data)
    return with_tour_count(destination)


@router.delete("/admin/destinations/{identifier}")
async def delete_destination(
    identifier: str,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    """Delete a destination found by slug or ID."""
    existing = catalog.resolve_or_404(store["destinations"], identifier, "Destination")
    store["destinations"].remove(existing["id"])

    logger.info(f"Destination {existing.get('slug')} deleted by {current_admin.email}")
    return {"message": "Destination deleted successfully"}
