from .base import RecordModel
from .destination import Destination
from .tour import Tour
from .activity import Activity
from .enquiry import Enquiry
from .testimonial import Testimonial
from .post import BlogPost
from .slider import Slider
from .team import TeamMember
from .gallery import GalleryPhoto, GalleryMetadata
from .trip_plan import TripPlan, TRIP_PLAN_STATUSES

__all__ = [
    "RecordModel",
    "Destination",
    "Tour",
    "Activity",
    "Enquiry",
    "Testimonial",
    "BlogPost",
    "Slider",
    "TeamMember",
    "GalleryPhoto",
    "GalleryMetadata",
    "TripPlan",
    "TRIP_PLAN_STATUSES",
]
