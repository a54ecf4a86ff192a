from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field
from typing import Dict, List, Optional
import logging

from zeo_api.core.json_store import JsonStore, get_store
from zeo_api.auth.middleware import get_current_admin, CurrentAdmin
from zeo_api.services import catalog
from zeo_api.api.sliders import OrderItem

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["team"])


class TeamMemberCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    role: str = Field(..., min_length=1, max_length=255)
    image: Optional[str] = ""
    bio: Optional[str] = ""
    order_index: Optional[int] = None
    is_active: bool = True
    social: Dict[str, str] = Field(default_factory=dict)

    class Config:
        extra = "allow"


class TeamMemberUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    role: Optional[str] = Field(None, min_length=1, max_length=255)
    order_index: Optional[int] = None
    is_active: Optional[bool] = None
    social: Optional[Dict[str, str]] = None

    class Config:
        extra = "allow"


@router.get("/team")
async def get_team(store: JsonStore = Depends(get_store)):
    """Get active team members in display order."""
    return catalog.ordered(catalog.visible(store["team"].all(), "is_active"), "order_index")


@router.get("/admin/team")
async def get_admin_team(
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    return catalog.ordered(store["team"].all(), "order_index")


@router.put("/admin/team/order")
async def update_team_order(
    positions: List[OrderItem],
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    """Persist a drag-and-drop reorder."""
    logger.info(f"Team reordered by {current_admin.email}")
    return catalog.apply_order(store["team"], [p.model_dump() for p in positions])


@router.get("/admin/team/{member_id}")
async def get_admin_team_member(
    member_id: int,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    return catalog.get_or_404(store["team"], member_id, "Team member")


@router.post("/admin/team", status_code=status.HTTP_201_CREATED)
async def create_team_member(
    member_data: TeamMemberCreate,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    data = member_data.model_dump()
    if data["order_index"] is None:
        data["order_index"] = len(store["team"].items) + 1

    member = store["team"].insert(data)
    logger.info(f"Team member {member['id']} created by {current_admin.email}")
    return member


@router.put("/admin/team/{member_id}")
async def update_team_member(
    member_id: int,
    member_data: TeamMemberUpdate,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    catalog.get_or_404(store["team"], member_id, "Team member")
    return store["team"].replace(member_id, member_data.model_dump(exclude_unset=True))


@router.delete("/admin/team/{member_id}")
async def delete_team_member(
    member_id: int,
    store: JsonStore = Depends(get_store),
    current_admin: CurrentAdmin = Depends(get_current_admin)
):
    catalog.get_or_404(store["team"], member_id, "Team member")
    store["team"].remove(member_id)

    logger.info(f"Team member {member_id} deleted by {current_admin.email}")
    return {"message": "Team member deleted successfully"}
