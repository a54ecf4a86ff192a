from typing import List, Optional
from pydantic import Field
from .base import RecordModel


class Tour(RecordModel):
    listed: bool = True
    featured: bool = False
    primary_destination_id: Optional[int] = None
    secondary_destination_ids: List[int] = Field(default_factory=list)
