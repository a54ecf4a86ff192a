"""In-memory collections backed by JSON files.

Each collection is read in full at startup and the whole file is rewritten
after every mutation. There is no locking and no atomic rename: the last
writer wins.
"""

import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Type

from pydantic import ValidationError

from zeo_api.models import (
    RecordModel,
    Destination,
    Tour,
    Activity,
    Enquiry,
    Testimonial,
    BlogPost,
    Slider,
    TeamMember,
    GalleryPhoto,
    GalleryMetadata,
    TripPlan,
)

logger = logging.getLogger(__name__)

TOUR_DETAILS_DIR = "tour-details"


class StorageError(Exception):
    """Raised when a collection cannot be written back to disk."""


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class Collection:
    """A list of records stored in one JSON file.

    Files are either a bare JSON array or an object holding the array under
    ``key`` (plus sibling keys such as gallery metadata, kept in ``meta``).
    The layout found on load is the layout written on save.
    """

    def __init__(self, name: str, filename: str, model: Type[RecordModel], key: Optional[str] = None):
        self.name = name
        self.filename = filename
        self.model = model
        self.key = key
        self.default_key = key
        self.items: List[Dict[str, Any]] = []
        self.meta: Dict[str, Any] = {}
        self.data_dir: Optional[str] = None

    @property
    def path(self) -> str:
        return os.path.join(self.data_dir or "", self.filename)

    def load(self, data_dir: str):
        """Read the collection file, falling back to an empty list on any error."""
        self.data_dir = data_dir
        self.key = self.default_key
        self.items = []
        self.meta = {}

        if not os.path.exists(self.path):
            logger.info(f"No data file for {self.name} at {self.path}, starting empty")
            return

        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                raw = json.load(fh)
        except (OSError, ValueError) as e:
            logger.error(f"Error loading {self.filename}: {e}")
            return

        if isinstance(raw, dict):
            records = raw.get(self.key or self.name, [])
            self.meta = {k: v for k, v in raw.items() if k != (self.key or self.name)}
            self.key = self.key or self.name
        else:
            records = raw
            self.key = None

        for position, record in enumerate(records):
            if not isinstance(record, dict):
                continue
            try:
                self.items.append(self.model.normalize(record))
            except ValidationError as e:
                logger.error(f"Skipping invalid record {position} in {self.filename}: {e}")

    def save(self):
        if self.data_dir is None:
            raise StorageError(f"Collection {self.name} has not been loaded")

        payload: Any = self.items
        if self.key:
            payload = {self.key: self.items, **self.meta}

        try:
            os.makedirs(self.data_dir, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as fh:
                json.dump(payload, fh, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.error(f"Error saving {self.filename}: {e}", exc_info=True)
            raise StorageError(f"Failed to save {self.name} data to file")

    def all(self) -> List[Dict[str, Any]]:
        return list(self.items)

    def get(self, record_id: int) -> Optional[Dict[str, Any]]:
        return next((item for item in self.items if item.get("id") == record_id), None)

    def get_by_slug(self, slug: str) -> Optional[Dict[str, Any]]:
        return next((item for item in self.items if item.get("slug") == slug), None)

    def resolve(self, identifier: str) -> Optional[Dict[str, Any]]:
        """Find by slug first, then by numeric id."""
        record = self.get_by_slug(identifier)
        if record is None and identifier.isdigit():
            record = self.get(int(identifier))
        return record

    def next_id(self) -> int:
        return max((item.get("id") or 0 for item in self.items), default=0) + 1

    def insert(self, data: Dict[str, Any], save: bool = True) -> Dict[str, Any]:
        now = utc_now()
        record = self.model.normalize({
            **data,
            "id": self.next_id(),
            "created_at": data.get("created_at") or now,
            "updated_at": now,
        })
        self.items.append(record)
        if save:
            self.save()
        return record

    def replace(self, record_id: int, data: Dict[str, Any], save: bool = True) -> Optional[Dict[str, Any]]:
        """Overlay ``data`` on the stored record, keeping its id."""
        for index, item in enumerate(self.items):
            if item.get("id") == record_id:
                record = self.model.normalize({
                    **item,
                    **data,
                    "id": record_id,
                    "updated_at": utc_now(),
                })
                self.items[index] = record
                if save:
                    self.save()
                return record
        return None

    def remove(self, record_id: int, save: bool = True) -> Optional[Dict[str, Any]]:
        for index, item in enumerate(self.items):
            if item.get("id") == record_id:
                removed = self.items.pop(index)
                if save:
                    self.save()
                return removed
        return None


class TourCollection(Collection):
    """Tours from ``tours.json`` merged with per-tour files in ``tour-details/``.

    A detailed file replaces the basic record with the same id. Everything
    is written back to ``tours.json``.
    """

    def load(self, data_dir: str):
        super().load(data_dir)

        details_dir = os.path.join(data_dir, TOUR_DETAILS_DIR)
        if not os.path.isdir(details_dir):
            return

        by_id = {item.get("id"): index for index, item in enumerate(self.items)}
        for filename in sorted(os.listdir(details_dir)):
            if not filename.endswith(".json"):
                continue
            try:
                with open(os.path.join(details_dir, filename), "r", encoding="utf-8") as fh:
                    detail = self.model.normalize(json.load(fh))
            except (OSError, ValueError) as e:
                logger.error(f"Error loading tour detail file {filename}: {e}")
                continue

            if detail.get("id") in by_id:
                self.items[by_id[detail["id"]]] = detail
            else:
                by_id[detail.get("id")] = len(self.items)
                self.items.append(detail)

        # Detailed tours are always written wrapped, like the basic file
        self.key = self.key or "tours"


class JsonStore:
    """All collections of the site plus the singleton contact document."""

    def __init__(self):
        self.data_dir: Optional[str] = None
        self.collections: Dict[str, Collection] = {
            "destinations": Collection("destinations", "destinations.json", Destination),
            "tours": TourCollection("tours", "tours.json", Tour, key="tours"),
            "activities": Collection("activities", "activities.json", Activity),
            "enquiries": Collection("enquiries", "enquiries.json", Enquiry, key="enquiries"),
            "testimonials": Collection("testimonials", "testimonials.json", Testimonial),
            "posts": Collection("posts", "posts.json", BlogPost),
            "sliders": Collection("sliders", "sliders.json", Slider),
            "team": Collection("team", "team.json", TeamMember),
            "gallery": Collection("gallery", "gallery.json", GalleryPhoto, key="gallery"),
            "trip_plans": Collection("trip_plans", "trip-plans.json", TripPlan, key="tripPlans"),
        }
        self.contact: Dict[str, Any] = {}

    def __getitem__(self, name: str) -> Collection:
        return self.collections[name]

    @property
    def contact_path(self) -> str:
        return os.path.join(self.data_dir or "", "contact.json")

    def load(self, data_dir: str):
        self.data_dir = data_dir
        for collection in self.collections.values():
            collection.load(data_dir)

        self.contact = {}
        if os.path.exists(self.contact_path):
            try:
                with open(self.contact_path, "r", encoding="utf-8") as fh:
                    self.contact = json.load(fh)
            except (OSError, ValueError) as e:
                logger.error(f"Error loading contact.json: {e}")

        logger.info(
            "JSON data loaded: " + ", ".join(f"{count} {name}" for name, count in self.counts().items())
        )

    def counts(self) -> Dict[str, int]:
        return {name: len(collection.items) for name, collection in self.collections.items()}

    def gallery_metadata(self) -> Dict[str, Any]:
        gallery = self.collections["gallery"]
        metadata = GalleryMetadata.model_validate(gallery.meta.get("metadata") or {}).model_dump()
        gallery.meta["metadata"] = metadata
        return metadata

    def touch_gallery(self, **updates: Any) -> Dict[str, Any]:
        """Refresh gallery metadata (photo count, timestamp, titles) and save."""
        gallery = self.collections["gallery"]
        gallery.key = gallery.key or "gallery"
        metadata = self.gallery_metadata()
        metadata.update({k: v for k, v in updates.items() if v})
        metadata["totalPhotos"] = len(gallery.items)
        metadata["lastUpdated"] = utc_now()
        gallery.save()
        return metadata

    def save_contact(self, contact: Dict[str, Any]) -> Dict[str, Any]:
        self.contact = contact
        try:
            os.makedirs(self.data_dir or ".", exist_ok=True)
            with open(self.contact_path, "w", encoding="utf-8") as fh:
                json.dump(contact, fh, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.error(f"Error saving contact.json: {e}", exc_info=True)
            raise StorageError("Failed to save contact data to file")
        return contact


# Global store instance
store = JsonStore()


def get_store() -> JsonStore:
    """Dependency returning the process-wide store."""
    return store
