from typing import Dict
from pydantic import Field
from .base import RecordModel


class TeamMember(RecordModel):
    order_index: int = 0
    is_active: bool = True
    social: Dict[str, str] = Field(default_factory=dict)
