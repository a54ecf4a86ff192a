"""Filter, sort and paginate records for the admin list pages.

Every page runs the same pipeline over the records fetched from the API:
``filter_items`` (free-text search plus exact-match filters), ``sort_items``
(one sort key at a time) and ``Paginator`` (fixed page size, 1-based pages).
What differs per resource is captured in a ``ListConfig``.
"""

import math
import re
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel, Field

from zeo_admin.config import ITEMS_PER_PAGE, PAGE_WINDOW_SIZE, TOURS_PER_PAGE

ASC = "asc"
DESC = "desc"

Record = Dict[str, Any]
Accessor = Callable[[Record], Any]


# Sort keys

def text_key(field: str) -> Accessor:
    return lambda item: str(item.get(field) or "").lower()


def duration_key(field: str = "duration") -> Accessor:
    """First run of digits in a duration string such as ``"12 days"``, else 0."""
    def key(item: Record) -> int:
        match = re.search(r"\d+", str(item.get(field) or ""))
        return int(match.group()) if match else 0
    return key


def number_key(field: str = "price") -> Accessor:
    def key(item: Record) -> float:
        try:
            return float(item.get(field) or 0)
        except (TypeError, ValueError):
            return 0
    return key


def flag_key(field: str) -> Accessor:
    # An absent flag counts as set
    return lambda item: 0 if item.get(field) is False else 1


def flag_status(field: str, on: str, off: str) -> Accessor:
    return lambda item: off if item.get(field) is False else on


# Pipeline stages

def matches_search(item: Record, term: str, fields: Sequence[str]) -> bool:
    needle = term.lower()
    return any(needle in str(item.get(field) or "").lower() for field in fields)


def filter_items(
    items: Sequence[Record],
    search: str = "",
    search_fields: Sequence[str] = (),
    filters: Sequence[Tuple[Accessor, Any]] = ()
) -> List[Record]:
    """Keep items matching the search term and every non-empty filter value.

    Search is a case-insensitive substring match on any of ``search_fields``.
    Filters compare the accessor value to the wanted value exactly.
    """
    result = list(items)
    if search:
        result = [item for item in result if matches_search(item, search, search_fields)]
    for accessor, wanted in filters:
        if wanted in (None, ""):
            continue
        result = [item for item in result if accessor(item) == wanted]
    return result


def sort_items(items: Sequence[Record], key: Accessor, direction: str = ASC) -> List[Record]:
    """Return a sorted copy. Python's sort is stable, so ties keep input order either way."""
    return sorted(items, key=key, reverse=direction == DESC)


class SortState(BaseModel):
    field: Optional[str] = None
    direction: str = ASC

    def toggle(self, field: str) -> "SortState":
        """Same field flips direction, a new field starts ascending."""
        if field == self.field:
            return SortState(field=field, direction=DESC if self.direction == ASC else ASC)
        return SortState(field=field, direction=ASC)


class PageInfo(BaseModel):
    page: int
    total_pages: int
    total_items: int
    start_item: int
    end_item: int
    has_previous: bool
    has_next: bool
    page_numbers: List[int] = Field(default_factory=list)


def page_window(current: int, total_pages: int, size: int = PAGE_WINDOW_SIZE) -> List[int]:
    """Up to ``size`` page numbers centred on ``current``, shifted at either end."""
    if total_pages <= size:
        return list(range(1, total_pages + 1))
    half = size // 2
    if current <= half + 1:
        first = 1
    elif current >= total_pages - half:
        first = total_pages - size + 1
    else:
        first = current - half
    return list(range(first, first + size))


class Paginator:
    """Fixed-size pages over an already filtered and sorted list."""

    def __init__(self, items_per_page: int):
        if items_per_page < 1:
            raise ValueError("items_per_page must be positive")
        self.items_per_page = items_per_page

    def total_pages(self, total_items: int) -> int:
        return math.ceil(total_items / self.items_per_page)

    def page_slice(self, items: Sequence[Record], page: int) -> List[Record]:
        # A page past the end is simply empty
        start = (page - 1) * self.items_per_page
        return list(items[start:start + self.items_per_page])

    def info(self, total_items: int, page: int) -> PageInfo:
        total_pages = self.total_pages(total_items)
        return PageInfo(
            page=page,
            total_pages=total_pages,
            total_items=total_items,
            start_item=min((page - 1) * self.items_per_page + 1, total_items),
            end_item=min(page * self.items_per_page, total_items),
            has_previous=page > 1,
            has_next=page < total_pages,
            page_numbers=page_window(page, total_pages)
        )

    @staticmethod
    def previous(page: int) -> int:
        return page - 1 if page > 1 else page

    def next(self, page: int, total_items: int) -> int:
        return page + 1 if page < self.total_pages(total_items) else page


class ListConfig:
    """What a resource's list page searches, filters and sorts on."""

    def __init__(
        self,
        resource: str,
        label: str,
        search_fields: Sequence[str],
        sort_keys: Dict[str, Accessor],
        filters: Optional[Dict[str, Accessor]] = None,
        default_sort: Optional[str] = None,
        items_per_page: int = ITEMS_PER_PAGE
    ):
        self.resource = resource
        self.label = label
        self.search_fields = tuple(search_fields)
        self.sort_keys = sort_keys
        self.filters = filters or {}
        self.default_sort = default_sort
        self.items_per_page = items_per_page

    def new_state(self) -> "ListState":
        return ListState(sort=SortState(field=self.default_sort))

    def sort_choices(self) -> List[Optional[str]]:
        """Sortable fields; without a default sort the fetched order (None) comes first."""
        fields: List[Optional[str]] = list(self.sort_keys)
        return fields if self.default_sort else [None] + fields

    def filter_options(self, items: Sequence[Record], name: str) -> List[Any]:
        """Distinct non-empty values of a filter, for select boxes."""
        accessor = self.filters[name]
        return sorted({accessor(item) for item in items if accessor(item) not in (None, "")}, key=str)


class ListState(BaseModel):
    """Search, filters, sort and page of one list page.

    Changing the search term or a filter always returns to page 1.
    """

    search: str = ""
    filters: Dict[str, Any] = Field(default_factory=dict)
    sort: SortState = Field(default_factory=SortState)
    page: int = 1

    def set_search(self, term: str):
        if term != self.search:
            self.search = term
            self.page = 1

    def set_filter(self, name: str, value: Any):
        if self.filters.get(name) != value:
            self.filters[name] = value
            self.page = 1

    def toggle_sort(self, field: str):
        self.sort = self.sort.toggle(field)

    def choose_sort(self, field: Optional[str]):
        """Selecting a new field sorts ascending, re-selecting the current one is a no-op."""
        if field == self.sort.field:
            return
        self.sort = SortState() if field is None else SortState(field=field, direction=ASC)

    def go_to(self, page: int):
        self.page = max(page, 1)


class ListView(BaseModel):
    items: List[Record]
    matched: List[Record]
    info: PageInfo


def apply(config: ListConfig, state: ListState, items: Sequence[Record]) -> ListView:
    """Run the whole pipeline for one render."""
    filters = [(config.filters[name], value) for name, value in state.filters.items() if name in config.filters]
    matched = filter_items(items, state.search, config.search_fields, filters)

    if state.sort.field in config.sort_keys:
        matched = sort_items(matched, config.sort_keys[state.sort.field], state.sort.direction)

    paginator = Paginator(config.items_per_page)
    return ListView(
        items=paginator.page_slice(matched, state.page),
        matched=matched,
        info=paginator.info(len(matched), state.page)
    )


# Tours carry a destination id; names come from the destinations list

def destination_names(destinations: Sequence[Record]) -> Dict[Any, str]:
    return {d["id"]: d.get("title") or d.get("name") for d in destinations if d.get("id") is not None}


def with_destination_names(tours: Sequence[Record], destinations: Sequence[Record]) -> List[Record]:
    """Copies of ``tours`` whose ``destination`` is the name of their primary destination.

    A tour whose primary destination is unknown keeps its stored ``destination``.
    """
    names = destination_names(destinations)
    return [
        {**tour, "destination": names.get(tour.get("primary_destination_id")) or tour.get("destination")}
        for tour in tours
    ]


# Per-resource list pages

TOURS = ListConfig(
    resource="tours",
    label="tours",
    search_fields=("title", "description", "location", "category", "destination"),
    sort_keys={
        "title": text_key("title"),
        "category": text_key("category"),
        "destination": lambda item: str(item.get("destination") or item.get("location") or "").lower(),
        "duration": duration_key("duration"),
        "price": number_key("price"),
        "listed": flag_key("listed"),
    },
    filters={
        "destination": lambda item: item.get("destination"),
        "status": flag_status("listed", "listed", "unlisted"),
    },
    default_sort="title",
    items_per_page=TOURS_PER_PAGE
)

DESTINATIONS = ListConfig(
    resource="destinations",
    label="destinations",
    search_fields=("name", "title", "country", "region", "description"),
    sort_keys={
        "title": text_key("title"),
        "country": text_key("country"),
        "region": text_key("region"),
        "tours": number_key("tourCount"),
        "featured": flag_key("featured"),
        "listed": flag_key("listed"),
    },
    filters={
        "country": lambda item: item.get("country"),
        "type": lambda item: item.get("type"),
        "status": flag_status("listed", "listed", "unlisted"),
    },
    default_sort="title"
)

ACTIVITIES = ListConfig(
    resource="activities",
    label="activities",
    search_fields=("name", "description", "type"),
    sort_keys={
        "name": text_key("name"),
        "type": text_key("type"),
        "featured": flag_key("featured"),
    },
    filters={"type": lambda item: item.get("type")},
    default_sort="name"
)

ENQUIRIES = ListConfig(
    resource="enquiries",
    label="enquiries",
    search_fields=("name", "email", "destination", "tour_title", "message"),
    sort_keys={
        "created_at": text_key("created_at"),
        "name": text_key("name"),
        "destination": text_key("destination"),
    },
    filters={
        "destination": lambda item: item.get("destination"),
        "status": lambda item: "responded" if item.get("responded_at") else "new",
    }
)

BLOG = ListConfig(
    resource="posts",
    label="blog posts",
    search_fields=("title", "excerpt", "content", "author", "category"),
    sort_keys={
        "title": text_key("title"),
        "category": text_key("category"),
        "date": text_key("date"),
        "featured": flag_key("featured"),
    },
    filters={"category": lambda item: item.get("category")},
    default_sort="title"
)

TESTIMONIALS = ListConfig(
    resource="testimonials",
    label="testimonials",
    search_fields=("name", "email", "country", "tour", "title", "message"),
    sort_keys={
        "name": text_key("name"),
        "rating": number_key("rating"),
        "date": text_key("date"),
    },
    filters={
        "status": lambda item: "approved" if item.get("is_approved") else "pending",
        "featured": lambda item: "featured" if item.get("is_featured") else "regular",
    }
)

TRIP_PLANS = ListConfig(
    resource="trip-plans",
    label="trip plans",
    search_fields=("name", "email", "destinations", "activities", "message"),
    sort_keys={
        "created_at": text_key("created_at"),
        "name": text_key("name"),
        "status": text_key("status"),
        "budget": number_key("budget"),
    },
    filters={
        "status": lambda item: item.get("status") or "pending",
        "difficulty": lambda item: item.get("difficulty"),
    }
)
