from fastapi import APIRouter, HTTPException, Depends, status
from typing import Optional
import logging

from zeo_api.core.json_store import JsonStore, get_store
from zeo_api.services import catalog

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["search"])

FEATURED_LIMIT = 6


@router.get("/search")
async def search(
    q: Optional[str] = None,
    type: Optional[str] = None,
    store: JsonStore = Depends(get_store)
):
    """Search listed tours and destinations and all activities.

    ``type`` restricts the result to one of ``tours``, ``destinations`` or
    ``activities``.
    """
    if not q:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Search query is required")

    results = {}
    if not type or type == "tours":
        tours = catalog.visible(store["tours"].all(), "listed")
        results["tours"] = catalog.search(tours, q, catalog.TOUR_SEARCH_FIELDS)
    if not type or type == "destinations":
        destinations = catalog.visible(store["destinations"].all(), "listed")
        results["destinations"] = catalog.search(destinations, q, catalog.DESTINATION_SEARCH_FIELDS)
    if not type or type == "activities":
        results["activities"] = catalog.search(store["activities"].all(), q, catalog.ACTIVITY_SEARCH_FIELDS)

    return results


@router.get("/featured")
async def get_featured(store: JsonStore = Depends(get_store)):
    """Up to six featured items of each kind for the home page."""
    def featured(records):
        return [record for record in records if record.get("featured")][:FEATURED_LIMIT]

    return {
        "destinations": featured(catalog.visible(store["destinations"].all(), "listed")),
        "activities": featured(store["activities"].all()),
        "tours": featured(catalog.visible(store["tours"].all(), "listed"))
    }
