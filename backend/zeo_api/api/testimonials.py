from fastapi import APIRouter, HTTPException, Depends, Query, status
from pydantic import BaseModel
from typing import Optional
from datetime import date
import logging

from zeo_api.core.json_store import JsonStore, get_store
from zeo_api.auth.middleware import get_current_admin, CurrentAdmin
from zeo_api.services import catalog

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["testimonials"])


class TestimonialSubmission(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    country: Optional[str] = None
    tour: Optional[str] = None
    rating: Optional[int] = None
    title: Optional[str] = None
    message: Optional[str] = None


class TestimonialUpdate(BaseModel):
    rating: Optional[int] = None
    is_featured: Optional[bool] = None
    is_approved: Optional[bool] = None

    class Config:
        extra = "allow"


def approved(store: JsonStore) -> list:
    return [t for t in store["testimonials"].all() if t.get("is_approved")]


@router.get("/testimonials")
async def get_testimonials(
    featured: Optional[bool] = None,
    limit: Optional[int] = None,
    store: JsonStore = Depends(get_store)
):
    """Get approved testimonials, newest first."""
    testimonials = approved(store)
    if featured:
        testimonials = [t for t in testimonials if t.get("is_featured")]
    return catalog.apply_limit(catalog.newest_first(testimonials), limit)


@router.get("/testimonials/{testimonial_id}")
async def get_testimonial(testimonial_id: int, store: JsonStore = Depends(get_store)):
    testimonial = store["testimonials"].get(testimonial_id)
    if not testimonial or not testimonial.get("is_approved"):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Testimonial not found")
    return testimonial


@router.post("/testimonials", status_code=status.HTTP_201_CREATED)
async def submit_testimonial(
    submission: TestimonialSubmission,
    store: JsonStore = Depends(get_store)
):
    """Accept a public testimonial. It stays hidden until approved."""
    required = [submission.name, submission.email, submission.tour,
                submission.rating, submission.title, submission.message]
    if not all(required):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="All fields are required")

    if not 1 <= submission.rating <= 5:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Rating must be between 1 and 5")

    testimonial = store["testimonials"].insert({
        "name": submission.name.strip(),
        "email": submission.email.strip().lower(),
        "country": (submission.country or "").strip(),
        "tour": submission.tour.strip(),
        "rating": submission.rating,
        "title": submission.title.strip(),
        "message": submission.message.strip(),
        "image": "",
        "date": date.today().isoformat(),
        "is_featured": False,
        "is_approved": False
    })

    logger.info(f"Testimonial {testimonial['id']} submitted for review")
    return {
        "success": True,
        "message": "Testimonial submitted successfully. It will be reviewed before being published.",
        "testimonial": testimonial
    }


@router.get("/admin/testimonials")
async def get_admin_testimonials(
    status_filter: Optional[str] = Query(None, alias="status"),
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    """Get all testimonials, optionally only ``approved`` or ``pending`` ones."""
    testimonials = store["testimonials"].all()
    if status_filter == "approved":
        testimonials = [t for t in testimonials if t.get("is_approved")]
    elif status_filter == "pending":
        testimonials = [t for t in testimonials if not t.get("is_approved")]
    return catalog.newest_first(testimonials)


@router.get("/admin/testimonials/{testimonial_id}")
async def get_admin_testimonial(
    testimonial_id: int,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    return catalog.get_or_404(store["testimonials"], testimonial_id, "Testimonial")


@router.put("/admin/testimonials/{testimonial_id}")
async def update_testimonial(
    testimonial_id: int,
    testimonial_data: TestimonialUpdate,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    catalog.get_or_404(store["testimonials"], testimonial_id, "Testimonial")
    if testimonial_data.rating is not None and not 1 <= testimonial_data.rating <= 5:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Rating must be between 1 and 5")

    return store["testimonials"].replace(testimonial_id, testimonial_data.model_dump(exclude_unset=True))


@router.delete("/admin/testimonials/{testimonial_id}")
async def delete_testimonial(
    testimonial_id: int,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    catalog.get_or_404(store["testimonials"], testimonial_id, "Testimonial")
    store["testimonials"].remove(testimonial_id)

    logger.info(f"Testimonial {testimonial_id} deleted by {current_admin.email}")
    return {"message": "Testimonial deleted successfully"}


@router.patch("/admin/testimonials/{testimonial_id}/approve")
async def approve_testimonial(
    testimonial_id: int,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    catalog.get_or_404(store["testimonials"], testimonial_id, "Testimonial")
    testimonial = store["testimonials"].replace(testimonial_id, {"is_approved": True})
    return {
        "success": True,
        "message": "Testimonial approved successfully",
        "testimonial": testimonial
    }


@router.patch("/admin/testimonials/{testimonial_id}/featured")
async def toggle_testimonial_featured(
    testimonial_id: int,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    """Flip the featured flag."""
    existing = catalog.get_or_404(store["testimonials"], testimonial_id, "Testimonial")
    testimonial = store["testimonials"].replace(
        testimonial_id, {"is_featured": not existing.get("is_featured")}
    )
    state = "featured" if testimonial["is_featured"] else "unfeatured"
    return {
        "success": True,
        "message": f"Testimonial {state} successfully",
        "testimonial": testimonial
    }
