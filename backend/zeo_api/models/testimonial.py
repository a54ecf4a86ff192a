from .base import RecordModel


class Testimonial(RecordModel):
    # Submissions wait for approval, so both flags start off
    is_featured: bool = False
    is_approved: bool = False
