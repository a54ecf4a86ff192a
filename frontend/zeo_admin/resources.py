"""Local copies of admin collections and the calls that change them.

``ResourceList`` holds what was last fetched. ``MutationDispatcher`` sends
create/update/delete requests and refetches the whole list after each
success. ``DebouncedSync`` is for changes applied locally first (listing
toggles, reordering): it waits for a quiet period, saves the group in one
go and restores the pre-change snapshot if the save fails.
"""

import copy
import logging
import threading
import time
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Sequence, Set

from zeo_admin.api_client import APIClient
from zeo_admin.config import SYNC_DEBOUNCE_SECONDS, UPLOAD_DELAY_SECONDS, UPLOAD_FOLDERS

logger = logging.getLogger(__name__)

Record = Dict[str, Any]
SaveFn = Callable[[List[Record], Set[Any]], Dict[str, Any]]


class ResourceList:
    """The last fetched state of one admin collection."""

    def __init__(self, client: APIClient, resource: str):
        self.client = client
        self.resource = resource
        self.items: List[Record] = []
        self.meta: Dict[str, Any] = {}
        self.error: Optional[str] = None
        self.lock = threading.Lock()

    def fetch(self) -> bool:
        response = self.client.list_items(self.resource)
        if not response["success"]:
            self.error = response["error"]
            logger.warning(f"Fetching {self.resource} failed: {self.error}")
            return False

        data = response["data"]
        meta: Dict[str, Any] = {}
        # Wrapped collections (the gallery) carry metadata next to the list
        if isinstance(data, dict):
            meta = {key: value for key, value in data.items() if key != self.resource}
            data = data.get(self.resource, [])

        with self.lock:
            self.items = list(data)
            self.meta = meta
            self.error = None
        return True

    def find(self, item_id) -> Optional[Record]:
        return next((item for item in self.items if item.get("id") == item_id), None)


class MutationDispatcher:
    """One HTTP request per change, then a full refetch on success."""

    def __init__(self, resources: ResourceList):
        self.resources = resources
        self.client = resources.client
        self.error: Optional[str] = None

    def _dispatch(self, response: Dict[str, Any]) -> Dict[str, Any]:
        if response["success"]:
            self.error = None
            self.resources.fetch()
        else:
            self.error = response["error"]
            logger.warning(f"{self.resources.resource} change rejected: {self.error}")
        return response

    def create(self, data: Record) -> Dict[str, Any]:
        return self._dispatch(self.client.create_item(self.resources.resource, data))

    def update(self, item_id, data: Record) -> Dict[str, Any]:
        return self._dispatch(self.client.update_item(self.resources.resource, item_id, data))

    def delete(self, item_id) -> Dict[str, Any]:
        return self._dispatch(self.client.delete_item(self.resources.resource, item_id))

    def call(self, response: Dict[str, Any]) -> Dict[str, Any]:
        """Refetch after a resource specific action such as approving a testimonial."""
        return self._dispatch(response)


class DebouncedSync:
    """Apply changes locally now and save them after ``delay`` seconds of quiet.

    Each new change restarts the timer, so a burst of changes is saved once.
    The snapshot taken before the first change of a burst is restored when
    that save fails. Changes made while a save is running form the next
    burst; if the running save fails they are replayed on the restored
    snapshot so they are still saved.
    """

    def __init__(
        self,
        resources: ResourceList,
        save: SaveFn,
        delay: float = SYNC_DEBOUNCE_SECONDS,
        timer_factory: Callable[..., Any] = threading.Timer
    ):
        self.resources = resources
        self.save = save
        self.delay = delay
        self.timer_factory = timer_factory
        self._timer = None
        self._snapshot: Optional[List[Record]] = None
        self._changed: Set[Any] = set()
        self._mutations: List[Callable[[List[Record]], None]] = []
        self._save_lock = threading.Lock()
        self.last_error: Optional[str] = None

    @property
    def pending(self) -> bool:
        return self._snapshot is not None

    def change(self, item_id, mutate: Callable[[List[Record]], None]):
        """Run ``mutate`` on the local items and (re)start the save timer."""
        with self.resources.lock:
            if self._snapshot is None:
                self._snapshot = copy.deepcopy(self.resources.items)
            mutate(self.resources.items)
            self._changed.add(item_id)
            self._mutations.append(mutate)

            if self._timer is not None:
                self._timer.cancel()
            self._timer = self.timer_factory(self.delay, self.flush)
            self._timer.daemon = True
            self._timer.start()

    def flush(self) -> Optional[Dict[str, Any]]:
        """Save pending changes now. Returns the save response, or None if nothing was pending."""
        # One save at a time, so a failed burst is reverted before the next one is sent
        with self._save_lock:
            with self.resources.lock:
                if self._snapshot is None:
                    return None
                if self._timer is not None:
                    self._timer.cancel()
                    self._timer = None
                snapshot, changed = self._snapshot, self._changed
                self._snapshot, self._changed, self._mutations = None, set(), []
                items = copy.deepcopy(self.resources.items)

            response = self.save(items, changed)

            if response["success"]:
                self.last_error = None
                return response

            with self.resources.lock:
                if self._snapshot is not None:
                    self._snapshot = copy.deepcopy(snapshot)
                    for mutate in self._mutations:
                        mutate(snapshot)
                self.resources.items = snapshot
                self.resources.error = response["error"]
            self.last_error = response["error"]
            logger.error(f"Saving {self.resources.resource} failed, local changes reverted: {response['error']}")
            return response

    def cancel(self):
        with self.resources.lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None


# Optimistic changes

def toggle_flag(item_id, field: str) -> Callable[[List[Record]], None]:
    """Mutation flipping a boolean flag. An absent flag counts as set."""
    def mutate(items: List[Record]):
        for item in items:
            if item.get("id") == item_id:
                item[field] = item.get(field) is False
    return mutate


def move_item(item_id, offset: int, field: str = "order_index") -> Callable[[List[Record]], None]:
    """Mutation moving one item ``offset`` places and renumbering ``field`` from 1."""
    def mutate(items: List[Record]):
        ordered = sorted(items, key=lambda item: item.get(field) or 0)
        index = next((i for i, item in enumerate(ordered) if item.get("id") == item_id), None)
        if index is None:
            return
        target = min(max(index + offset, 0), len(ordered) - 1)
        ordered.insert(target, ordered.pop(index))
        for position, item in enumerate(ordered, start=1):
            item[field] = position
        items[:] = ordered
    return mutate


# Save functions for DebouncedSync

def save_tour_listing(client: APIClient) -> SaveFn:
    """PATCH the listing flag of every changed tour, stopping at the first failure."""
    def save(items: List[Record], changed: Set[Any]) -> Dict[str, Any]:
        response: Dict[str, Any] = {"success": True, "data": []}
        for item in items:
            if item.get("id") in changed:
                response = client.set_tour_listing(item["id"], item.get("listed") is not False)
                if not response["success"]:
                    return response
        return response
    return save


def save_order(client: APIClient, resource: str) -> SaveFn:
    def save(items: List[Record], changed: Set[Any]) -> Dict[str, Any]:
        positions = [{"id": item["id"], "order_index": item.get("order_index") or 0} for item in items]
        return client.update_order(resource, positions)
    return save


def save_gallery_order(client: APIClient) -> SaveFn:
    def save(items: List[Record], changed: Set[Any]) -> Dict[str, Any]:
        ordered = sorted(items, key=lambda item: item.get("order") or 0)
        return client.reorder_gallery([item["id"] for item in ordered])
    return save


# Uploads

def upload_gallery_photos(
    client: APIClient,
    files: Sequence[Any],
    delay: float = UPLOAD_DELAY_SECONDS,
    sleep: Callable[[float], None] = time.sleep
) -> Dict[str, Any]:
    """Upload files one after another and add each as a gallery photo.

    ``files`` are ``(filename, bytes, content_type)`` tuples. Stops at the
    first failure; photos added before it stay in the gallery.
    """
    created: List[Record] = []
    title = f"Kailash Gallery Photo {date.today().isoformat()}"

    for index, (filename, data, content_type) in enumerate(files):
        if index:
            sleep(delay)

        upload = client.upload_file(data, filename, UPLOAD_FOLDERS["gallery"], content_type)
        if not upload["success"]:
            return {"success": False, "error": upload["error"], "created": created}

        photo = client.create_item("gallery", {"title": title, "alt": title, "image": upload["data"]["url"]})
        if not photo["success"]:
            return {"success": False, "error": photo["error"], "created": created}
        created.append(photo["data"])

    return {"success": True, "created": created}


def missing_fields(data: Record, required: Dict[str, str]) -> List[str]:
    """Labels of required fields left empty, checked before anything is sent."""
    return [label for field, label in required.items() if not str(data.get(field) or "").strip()]
