import logging
from typing import List, Optional

from zeo_api.core.json_store import JsonStore

logger = logging.getLogger(__name__)


def update_destination_relationships(
    store: JsonStore,
    tour_id: int,
    new_primary_id: Optional[int],
    new_secondary_ids: Optional[List[int]] = None,
    old_primary_id: Optional[int] = None,
    old_secondary_ids: Optional[List[int]] = None,
):
    """Move ``tour_id`` from the old destinations' ``relatedTours`` to the new ones."""
    destinations = store["destinations"]

    old_ids = [dest_id for dest_id in [old_primary_id, *(old_secondary_ids or [])] if dest_id]
    new_ids = [dest_id for dest_id in [new_primary_id, *(new_secondary_ids or [])] if dest_id]
    if not old_ids and not new_ids:
        return

    for destination in destinations.items:
        related = list(destination.get("relatedTours") or [])
        if destination.get("id") in old_ids:
            related = [related_id for related_id in related if related_id != tour_id]
        if destination.get("id") in new_ids and tour_id not in related:
            related.append(tour_id)
        destination["relatedTours"] = related

    destinations.save()
    logger.info(f"Tour {tour_id} linked to destinations {new_ids}")


def detach_tour(store: JsonStore, tour_id: int):
    """Remove a deleted tour from every destination."""
    destinations = store["destinations"]
    changed = False

    for destination in destinations.items:
        related = destination.get("relatedTours") or []
        if tour_id in related:
            destination["relatedTours"] = [related_id for related_id in related if related_id != tour_id]
            changed = True

    if changed:
        destinations.save()
