from fastapi import APIRouter, HTTPException, Depends, Body, status
from typing import Any, Dict
import logging

from zeo_api.core.json_store import JsonStore, get_store
from zeo_api.auth.middleware import get_current_admin, CurrentAdmin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["contact"])


@router.get("/contact")
async def get_contact(store: JsonStore = Depends(get_store)):
    """Get the company contact document."""
    return store.contact


@router.put("/admin/contact")
async def update_contact(
    contact: Dict[str, Any] = Body(...),
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    """Replace the contact document as a whole."""
    company = contact.get("company") or {}
    email = (contact.get("contact") or {}).get("email") or {}
    if not company.get("name") or not email.get("primary"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Company name and primary email are required"
        )

    logger.info(f"Contact information updated by {current_admin.email}")
    return store.save_contact(contact)
