from typing import List
from pydantic import Field
from .base import RecordModel


class Destination(RecordModel):
    listed: bool = True
    featured: bool = False
    relatedTours: List[int] = Field(default_factory=list)  # tour ids
