"""Filter state and its URL hash form

Hash layout: #[open-now/][status|all/][category-slug[/primary]]
e.g. "#open-now/haunts/food-drink/coffee". `primary` only applies to Food & Drink.
"""
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel

from .display import slugify
from .hours import is_open_now

FOOD_AND_DRINK = "Food & Drink"
OPEN_NOW_PREFIX = "open-now"
VALID_STATUSES = ("all", "haunts", "queue")
VALID_PRIMARIES = ("coffee", "bar", "restaurant")


class FilterState(BaseModel):
    status: str = "all"
    category: str = "all"
    primary: str = "all"
    open_now: bool = False


def find_category_by_slug(slug: Optional[str], places: list) -> Optional[str]:
    """'food-drink' → 'Food & Drink'; 'all' for empty, None if no place has it"""
    if not slug or slug == "all":
        return "all"
    for place in places:
        if slugify(place.category) == slug:
            return place.category
    return None


def encode_filter_hash(state: FilterState) -> str:
    parts = []

    if state.open_now:
        parts.append(OPEN_NOW_PREFIX)

    has_category = state.category != "all"
    has_primary = state.primary != "all" and state.category == FOOD_AND_DRINK

    if state.status != "all":
        parts.append(state.status)
    elif has_category or has_primary:
        parts.append("all")

    if has_category:
        parts.append(slugify(state.category))
    elif has_primary:
        parts.append(slugify(FOOD_AND_DRINK))

    if has_primary:
        parts.append(state.primary)

    return "#" + "/".join(parts) if parts else ""


def decode_filter_hash(hash_str: Optional[str], places: list = ()) -> FilterState:
    """Unknown segments are ignored rather than rejected"""
    state = FilterState()
    if not hash_str or hash_str == "#":
        return state

    parts = [p for p in hash_str.lstrip("#").split("/") if p]
    if not parts:
        return state

    idx = 0
    if parts[idx] == OPEN_NOW_PREFIX:
        state.open_now = True
        idx += 1

    if idx < len(parts) and parts[idx] in VALID_STATUSES:
        state.status = parts[idx]
        idx += 1

    if idx < len(parts):
        category = find_category_by_slug(parts[idx], places)
        if category:
            state.category = category
            idx += 1

    if idx < len(parts) and state.category == FOOD_AND_DRINK and parts[idx] in VALID_PRIMARIES:
        state.primary = parts[idx]

    return state


def matches(place, state: FilterState) -> bool:
    if state.status != "all" and place.status != state.status:
        return False
    if state.category != "all" and place.category != state.category:
        return False
    if state.primary != "all" and place.category == FOOD_AND_DRINK and place.primary != state.primary:
        return False
    return True


def filter_places(places: list, state: FilterState, at: datetime = None) -> list:
    """Places passing the filter; open_now is judged at `at`"""
    result = [p for p in places if matches(p, state)]
    if state.open_now:
        result = [p for p in result if is_open_now(p.hours, at)]
    return result


def group_places_by_category(places: list) -> Dict[str, List]:
    by_category = {}
    for place in places:
        by_category.setdefault(place.category, []).append(place)
    return by_category
