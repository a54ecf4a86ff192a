from typing import Any, List, Optional
from pydantic import Field
from .base import RecordModel

TRIP_PLAN_STATUSES = ("pending", "contacted", "in_progress", "completed", "cancelled")


class TripPlan(RecordModel):
    status: str = "pending"
    destinations: List[str] = Field(default_factory=list)
    activities: List[str] = Field(default_factory=list)
    assignedTo: Optional[str] = None
    notes: str = ""
    recommendations: List[Any] = Field(default_factory=list)
