"""Query helpers shared by the public list endpoints.

All of them are linear passes over the in-memory collections.
"""

import re
from typing import Any, Dict, Iterable, List, Optional, Sequence

from fastapi import HTTPException, status

from zeo_api.core.json_store import Collection

TOUR_SEARCH_FIELDS = ("title", "description", "location", "category", "destination", "highlights")
DESTINATION_SEARCH_FIELDS = ("name", "title", "description", "country", "region")
ACTIVITY_SEARCH_FIELDS = ("name", "description")


def _text_values(value: Any) -> Iterable[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value if v is not None]
    return [str(value)]


def matches_search(record: Dict[str, Any], term: str, fields: Sequence[str]) -> bool:
    """Case-insensitive substring match against any of ``fields``."""
    needle = term.lower()
    return any(
        needle in text.lower()
        for field in fields
        for text in _text_values(record.get(field))
    )


def search(records: List[Dict[str, Any]], term: Optional[str], fields: Sequence[str]) -> List[Dict[str, Any]]:
    if not term:
        return records
    return [record for record in records if matches_search(record, term, fields)]


def equals_ignore_case(records: List[Dict[str, Any]], field: str, value: Optional[str]) -> List[Dict[str, Any]]:
    if not value:
        return records
    wanted = value.lower()
    return [record for record in records if str(record.get(field) or "").lower() == wanted]


def visible(records: List[Dict[str, Any]], flag: str) -> List[Dict[str, Any]]:
    """Drop records whose visibility flag is explicitly off."""
    return [record for record in records if record.get(flag, True)]


def apply_limit(records: List[Dict[str, Any]], limit: Optional[int]) -> List[Dict[str, Any]]:
    if limit and limit > 0:
        return records[:limit]
    return records


def newest_first(records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return sorted(records, key=lambda record: record.get("created_at") or "", reverse=True)


def ordered(records: List[Dict[str, Any]], field: str) -> List[Dict[str, Any]]:
    return sorted(records, key=lambda record: record.get(field) or 0)


def get_or_404(collection: Collection, record_id: int, label: str) -> Dict[str, Any]:
    record = collection.get(record_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{label} not found")
    return record


def resolve_or_404(collection: Collection, identifier: str, label: str) -> Dict[str, Any]:
    record = collection.resolve(identifier)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{label} not found")
    return record


def tours_for_destination(tours: List[Dict[str, Any]], destination: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Tours linked by relationship ids or by the destination name string."""
    related = set(destination.get("relatedTours") or [])
    names = {destination.get("name"), destination.get("title")} - {None}
    return [
        tour for tour in tours
        if tour.get("id") in related
        or tour.get("primary_destination_id") == destination.get("id")
        or destination.get("id") in (tour.get("secondary_destination_ids") or [])
        or tour.get("destination") in names
    ]


def tours_for_activity(tours: List[Dict[str, Any]], activity: Dict[str, Any]) -> List[Dict[str, Any]]:
    name = activity.get("name")
    return [tour for tour in tours if name and name in (tour.get("activities") or [])]


def slugify(text: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", (text or "").lower()).strip("-")
    return slug or "item"


def apply_order(collection: Collection, positions: Sequence[Dict[str, Any]], field: str = "order_index") -> List[Dict[str, Any]]:
    """Write new positions (``[{id, order_index}]``) and save once."""
    for position in positions:
        record = collection.get(position["id"])
        if record is not None:
            record[field] = position[field]
    collection.save()
    return ordered(collection.all(), field)
