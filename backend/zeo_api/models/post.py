from .base import RecordModel


class BlogPost(RecordModel):
    featured: bool = False
