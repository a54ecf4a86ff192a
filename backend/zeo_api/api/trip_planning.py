from fastapi import APIRouter, HTTPException, Depends, Query, status
from pydantic import BaseModel
from typing import List, Optional, Union
import logging

from zeo_api.core.json_store import JsonStore, get_store
from zeo_api.auth.middleware import get_current_admin, CurrentAdmin
from zeo_api.api.enquiries import EMAIL_PATTERN
from zeo_api.models import TRIP_PLAN_STATUSES
from zeo_api.services import catalog, trip_planner

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["trip-planning"])


class TripPlanSubmission(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    destinations: Optional[Union[List[str], str]] = None
    activities: Optional[Union[List[str], str]] = None
    duration: Optional[str] = None
    budget: Optional[Union[str, int]] = None
    difficulty: Optional[str] = None
    groupSize: Optional[Union[str, int]] = None
    travelDates: Optional[str] = None
    specialRequirements: Optional[str] = None
    message: Optional[str] = None


class TripPlanUpdate(BaseModel):
    status: Optional[str] = None
    assignedTo: Optional[str] = None
    notes: Optional[str] = None

    class Config:
        extra = "allow"


class TripPlanStatus(BaseModel):
    status: str


def as_list(value: Union[List[str], str, None]) -> List[str]:
    if not value:
        return []
    return list(value) if isinstance(value, list) else [value]


def check_status(value: Optional[str]):
    if value is not None and value not in TRIP_PLAN_STATUSES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Status must be one of: {', '.join(TRIP_PLAN_STATUSES)}"
        )


@router.get("/trip-planning/recommendations")
async def get_recommendations(
    destinations: Optional[str] = None,
    activities: Optional[str] = None,
    duration: Optional[str] = None,
    budget: Optional[str] = None,
    difficulty: Optional[str] = None,
    groupSize: Optional[str] = None,
    travelDates: Optional[str] = None,
    store: JsonStore = Depends(get_store)
):
    """Listed tours matching the trip planning preferences."""
    wanted_destinations = trip_planner.split_csv(destinations)
    wanted_activities = trip_planner.split_csv(activities)
    matched = trip_planner.recommend(
        catalog.visible(store["tours"].all(), "listed"),
        store["destinations"].all(),
        wanted_destinations,
        wanted_activities,
        difficulty,
        budget
    )
    return {
        "success": True,
        "recommendations": [trip_planner.summary(tour) for tour in matched[:trip_planner.MAX_RECOMMENDATIONS]],
        "totalFound": len(matched),
        "criteria": {
            "destinations": wanted_destinations,
            "activities": wanted_activities,
            "duration": duration,
            "budget": budget,
            "difficulty": difficulty,
            "groupSize": groupSize,
            "travelDates": travelDates
        }
    }


@router.get("/trip-planning/destinations")
async def get_planning_destinations(
    destination_type: Optional[str] = Query(None, alias="type"),
    store: JsonStore = Depends(get_store)
):
    """Listed destinations with tour counts, activity types and price ranges."""
    tours = catalog.visible(store["tours"].all(), "listed")
    destinations = catalog.visible(store["destinations"].all(), "listed")
    if destination_type:
        destinations = [d for d in destinations if d.get("type") == destination_type]
    return [trip_planner.enrich_destination(d, tours) for d in destinations]


@router.get("/trip-planning/activities")
async def get_planning_activities(store: JsonStore = Depends(get_store)):
    tours = catalog.visible(store["tours"].all(), "listed")
    return [trip_planner.enrich_activity(a, tours) for a in store["activities"].all()]


@router.post("/trip-planning/submit", status_code=status.HTTP_201_CREATED)
async def submit_trip_plan(
    submission: TripPlanSubmission,
    store: JsonStore = Depends(get_store)
):
    """Store a public trip planning request for follow-up."""
    destinations = as_list(submission.destinations)
    activities = as_list(submission.activities)
    if not (submission.name and submission.email and destinations and activities):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Name, email, destinations, and activities are required"
        )

    if not EMAIL_PATTERN.match(submission.email.strip()):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please provide a valid email address"
        )

    trip_plan = store["trip_plans"].insert({
        "name": submission.name.strip(),
        "email": submission.email.strip().lower(),
        "phone": (submission.phone or "").strip(),
        "destinations": destinations,
        "activities": activities,
        "duration": submission.duration or "",
        "budget": str(submission.budget or ""),
        "difficulty": submission.difficulty or "",
        "groupSize": str(submission.groupSize or ""),
        "travelDates": submission.travelDates or "",
        "specialRequirements": (submission.specialRequirements or "").strip(),
        "message": (submission.message or "").strip(),
        "status": "pending"
    })

    logger.info(f"Trip plan {trip_plan['id']} received for {', '.join(destinations)}")
    return {
        "success": True,
        "message": (
            "Your trip planning request has been submitted successfully. "
            "We will get back to you with personalized recommendations soon!"
        ),
        "tripPlan": {
            "id": trip_plan["id"],
            "name": trip_plan["name"],
            "destinations": trip_plan["destinations"],
            "activities": trip_plan["activities"],
            "created_at": trip_plan["created_at"]
        }
    }


@router.get("/admin/trip-plans")
async def get_admin_trip_plans(
    status_filter: Optional[str] = Query(None, alias="status"),
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    """All trip plans, newest first, optionally with one status."""
    trip_plans = store["trip_plans"].all()
    if status_filter:
        trip_plans = [tp for tp in trip_plans if tp.get("status") == status_filter]
    return catalog.newest_first(trip_plans)


@router.get("/admin/trip-plans/{trip_plan_id}")
async def get_admin_trip_plan(
    trip_plan_id: int,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    return catalog.get_or_404(store["trip_plans"], trip_plan_id, "Trip plan")


@router.put("/admin/trip-plans/{trip_plan_id}")
async def update_trip_plan(
    trip_plan_id: int,
    trip_plan_data: TripPlanUpdate,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    catalog.get_or_404(store["trip_plans"], trip_plan_id, "Trip plan")
    check_status(trip_plan_data.status)
    return store["trip_plans"].replace(trip_plan_id, trip_plan_data.model_dump(exclude_unset=True, exclude_none=True))


@router.delete("/admin/trip-plans/{trip_plan_id}")
async def delete_trip_plan(
    trip_plan_id: int,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    catalog.get_or_404(store["trip_plans"], trip_plan_id, "Trip plan")
    store["trip_plans"].remove(trip_plan_id)

    logger.info(f"Trip plan {trip_plan_id} deleted by {current_admin.email}")
    return {"message": "Trip plan deleted successfully"}


@router.patch("/admin/trip-plans/{trip_plan_id}/status")
async def update_trip_plan_status(
    trip_plan_id: int,
    status_data: TripPlanStatus,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    catalog.get_or_404(store["trip_plans"], trip_plan_id, "Trip plan")
    check_status(status_data.status)
    trip_plan = store["trip_plans"].replace(trip_plan_id, {"status": status_data.status})
    return {
        "success": True,
        "message": f"Trip plan status updated to {status_data.status}",
        "tripPlan": trip_plan
    }
