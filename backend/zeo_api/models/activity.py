from .base import RecordModel


class Activity(RecordModel):
    featured: bool = False
