"""Tour recommendations and option lists for the trip planning form."""

from typing import Any, Dict, List, Optional, Sequence

from zeo_api.services import catalog

MAX_RECOMMENDATIONS = 10
# A tour may cost this much more than the stated budget
BUDGET_TOLERANCE = 1.2


def split_csv(value: Optional[str]) -> List[str]:
    return [part.strip() for part in (value or "").split(",") if part.strip()]


def activity_names(tour: Dict[str, Any]) -> List[str]:
    """Tour activities are stored either as names or as objects with a ``name``."""
    names = []
    for activity in tour.get("activities") or []:
        name = activity.get("name") if isinstance(activity, dict) else activity
        if name:
            names.append(str(name).lower())
    return names


def price_range(tours: Sequence[Dict[str, Any]]) -> Dict[str, float]:
    prices = [tour.get("price") or 0 for tour in tours]
    return {"min": min(prices), "max": max(prices)} if prices else {"min": 0, "max": 0}


def destination_names(tour: Dict[str, Any], destinations_by_id: Dict[int, Dict[str, Any]]) -> List[str]:
    ids = [tour.get("primary_destination_id")] + list(tour.get("secondary_destination_ids") or [])
    names = [tour.get("location"), tour.get("destination")]
    for destination_id in ids:
        destination = destinations_by_id.get(destination_id)
        if destination:
            names.extend([destination.get("name"), destination.get("title")])
    return [str(name).lower() for name in names if name]


def offers_activity(tour: Dict[str, Any], name: str) -> bool:
    needle = name.lower()
    return needle in str(tour.get("category") or "").lower() or any(needle in a for a in activity_names(tour))


def recommend(
    tours: Sequence[Dict[str, Any]],
    destinations: Sequence[Dict[str, Any]],
    wanted_destinations: Sequence[str] = (),
    wanted_activities: Sequence[str] = (),
    difficulty: Optional[str] = None,
    budget: Optional[str] = None
) -> List[Dict[str, Any]]:
    """Tours matching every given criterion, best rated first, cheaper first on ties."""
    destinations_by_id = {d.get("id"): d for d in destinations}
    matched = list(tours)

    if wanted_destinations:
        wanted = [d.lower() for d in wanted_destinations]
        matched = [
            tour for tour in matched
            if any(w in name for w in wanted for name in destination_names(tour, destinations_by_id))
        ]

    if wanted_activities:
        matched = [
            tour for tour in matched
            if any(offers_activity(tour, activity) for activity in wanted_activities)
        ]

    if difficulty:
        matched = [tour for tour in matched if difficulty.lower() in str(tour.get("difficulty") or "").lower()]

    if budget and budget.strip().isdigit():
        limit = int(budget) * BUDGET_TOLERANCE
        matched = [tour for tour in matched if tour.get("price") and tour["price"] <= limit]

    return sorted(matched, key=lambda tour: (-(tour.get("rating") or 0), tour.get("price") or 0))


def summary(tour: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": tour.get("id"),
        "title": tour.get("title"),
        "description": tour.get("description"),
        "price": tour.get("price"),
        "duration": tour.get("duration"),
        "difficulty": tour.get("difficulty"),
        "rating": tour.get("rating"),
        "image": tour.get("image"),
        "location": tour.get("location"),
        "category": tour.get("category"),
        "highlights": (tour.get("highlights") or [])[:3],
        "bestTime": tour.get("best_time"),
        "groupSize": tour.get("group_size"),
    }


def enrich_destination(destination: Dict[str, Any], tours: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
    related = catalog.tours_for_destination(list(tours), destination)
    return {
        **destination,
        "tourCount": len(related),
        "activityTypes": sorted({tour["category"] for tour in related if tour.get("category")}),
        "priceRange": price_range(related),
    }


def enrich_activity(activity: Dict[str, Any], tours: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
    name = activity.get("name")
    related = [tour for tour in tours if name and offers_activity(tour, name)]
    return {
        **activity,
        "tourCount": len(related),
        "priceRange": price_range(related),
        "difficultyLevels": sorted({tour["difficulty"] for tour in related if tour.get("difficulty")}),
    }
