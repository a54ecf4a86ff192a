from fastapi import APIRouter, HTTPException, Depends, status
from pydantic import BaseModel
from typing import Optional, Union
import logging
import re

from zeo_api.core.json_store import JsonStore, get_store, utc_now
from zeo_api.auth.middleware import get_current_admin, CurrentAdmin
from zeo_api.services import catalog

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["enquiries"])

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

TOUR_TITLES = {
    "everest": "Everest Base Camp Trek",
    "kailash": "Kailash Mansarovar Yatra",
    "annapurna": "Annapurna Circuit Trek",
    "kathmandu": "Kathmandu Valley Tour",
    "langtang": "Langtang Valley Trek",
    "pokhara": "Pokhara City Tour",
    "other": "Custom Tour Package",
}


class EnquirySubmission(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    destination: Optional[str] = None
    tour_title: Optional[str] = None
    travelers: Optional[Union[str, int]] = None
    date: Optional[str] = None
    message: Optional[str] = None


class EnquiryUpdate(BaseModel):
    assigned_to: Optional[str] = None
    notes: Optional[str] = None

    class Config:
        extra = "allow"


def tour_title_for(destination: str) -> str:
    """Known destinations map to a flagship tour; anything else gets a generic title."""
    key = destination.strip().lower()
    if key in TOUR_TITLES:
        return TOUR_TITLES[key]
    name = destination.strip()
    return f"{name[:1].upper()}{name[1:]} Tour"


@router.post("/contact/enquiry", status_code=status.HTTP_201_CREATED)
async def submit_enquiry(
    submission: EnquirySubmission,
    store: JsonStore = Depends(get_store)
):
    """Store a public contact enquiry."""
    if not (submission.name and submission.email and submission.destination and submission.message):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Name, email, destination, and message are required"
        )

    if not EMAIL_PATTERN.match(submission.email.strip()):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please provide a valid email address"
        )

    enquiry = store["enquiries"].insert({
        "name": submission.name.strip(),
        "email": submission.email.strip().lower(),
        "phone": (submission.phone or "").strip(),
        "destination": submission.destination.strip(),
        "tour_title": (submission.tour_title or "").strip() or tour_title_for(submission.destination),
        "travelers": str(submission.travelers or "1").strip(),
        "date": (submission.date or "").strip(),
        "message": submission.message.strip(),
        "assigned_to": None,
        "notes": "",
        "responded_at": None,
        "source": "website_contact_form"
    })

    logger.info(f"Enquiry {enquiry['id']} received for {enquiry['destination']}")
    return {
        "success": True,
        "message": "Your enquiry has been submitted successfully. We will get back to you soon!",
        "enquiry": {
            "id": enquiry["id"],
            "name": enquiry["name"],
            "destination": enquiry["destination"],
            "created_at": enquiry["created_at"]
        }
    }


@router.get("/admin/enquiries")
async def get_admin_enquiries(
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    """Get all enquiries, newest first."""
    return catalog.newest_first(store["enquiries"].all())


@router.get("/admin/enquiries/{enquiry_id}")
async def get_admin_enquiry(
    enquiry_id: int,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    return catalog.get_or_404(store["enquiries"], enquiry_id, "Enquiry")


@router.put("/admin/enquiries/{enquiry_id}")
async def update_enquiry(
    enquiry_id: int,
    enquiry_data: EnquiryUpdate,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    catalog.get_or_404(store["enquiries"], enquiry_id, "Enquiry")
    return store["enquiries"].replace(enquiry_id, enquiry_data.model_dump(exclude_unset=True))


@router.delete("/admin/enquiries/{enquiry_id}")
async def delete_enquiry(
    enquiry_id: int,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    catalog.get_or_404(store["enquiries"], enquiry_id, "Enquiry")
    store["enquiries"].remove(enquiry_id)

    logger.info(f"Enquiry {enquiry_id} deleted by {current_admin.email}")
    return {"message": "Enquiry deleted successfully"}


@router.patch("/admin/enquiries/{enquiry_id}/respond")
async def mark_enquiry_responded(
    enquiry_id: int,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    catalog.get_or_404(store["enquiries"], enquiry_id, "Enquiry")
    enquiry = store["enquiries"].replace(enquiry_id, {"responded_at": utc_now()})
    return {
        "success": True,
        "message": "Enquiry marked as responded",
        "enquiry": enquiry
    }
