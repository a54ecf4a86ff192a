from typing import Optional
from .base import RecordModel


class Enquiry(RecordModel):
    responded_at: Optional[str] = None
    source: str = "website_contact_form"
