"""Place search service"""
from datetime import datetime
from typing import List, Optional, Tuple
from sqlalchemy import func
from sqlalchemy.orm import Session

from ..models import Place
from .display import get_place_icon, slugify
from .filters import FOOD_AND_DRINK, FilterState, group_places_by_category
from .geo import bounding_box, distance_to
from .hours import is_open_now


def _filtered_query(db: Session, state: FilterState):
    query = db.query(Place)

    if state.status != "all":
        query = query.filter(Place.status == state.status)

    if state.category != "all":
        query = query.filter(Place.category == state.category)

    # primary only narrows Food & Drink
    if state.primary != "all" and state.category == FOOD_AND_DRINK:
        query = query.filter(Place.primary == state.primary)

    return query.order_by(Place.name)


def search_places(
    db: Session,
    state: FilterState,
    at: datetime,
    page: int = 1,
    per_page: int = 50,
) -> Tuple[List[Place], int]:
    """Filtered places, one page. open_now is evaluated in Python at `at`."""
    query = _filtered_query(db, state)

    if not state.open_now:
        total = query.count()
        places = query.offset((page - 1) * per_page).limit(per_page).all()
        return places, total

    places = [p for p in query.all() if is_open_now(p.hours, at)]
    offset = (page - 1) * per_page
    return places[offset:offset + per_page], len(places)


def search_nearby(
    db: Session,
    lat: float,
    lng: float,
    at: datetime,
    radius_km: float = 2.0,
    state: Optional[FilterState] = None,
    limit: int = 20,
) -> List[Tuple[Place, float]]:
    """Nearby search — bounding box in SQL, then exact haversine"""
    state = state or FilterState()
    bbox = bounding_box(lat, lng, radius_km)

    query = _filtered_query(db, state).filter(
        Place.latitude.isnot(None),
        Place.longitude.isnot(None),
        Place.latitude >= bbox.min_lat,
        Place.latitude <= bbox.max_lat,
        Place.longitude >= bbox.min_lng,
        Place.longitude <= bbox.max_lng,
    )

    results = []
    for place in query.all():
        dist = distance_to(place, lat, lng)
        if dist is None or dist > radius_km:
            continue
        if state.open_now and not is_open_now(place.hours, at):
            continue
        results.append((place, dist))

    results.sort(key=lambda x: x[1])
    return results[:limit]


def get_place_detail(db: Session, slug: str) -> Optional[Place]:
    return db.query(Place).filter(Place.slug == slug).first()


def all_places(db: Session) -> List[Place]:
    return db.query(Place).order_by(Place.category, Place.name).all()


def list_categories(db: Session) -> List[dict]:
    grouped = group_places_by_category(all_places(db))
    return [
        {
            "name": name,
            "slug": slugify(name),
            "icon": get_place_icon(name),
            "count": len(places),
        }
        for name, places in sorted(grouped.items())
    ]


def get_stats(db: Session, at: datetime) -> dict:
    total = db.query(func.count(Place.slug)).scalar()

    by_category = dict(
        db.query(Place.category, func.count(Place.slug)).group_by(Place.category).all()
    )
    by_status = dict(
        db.query(Place.status, func.count(Place.slug)).group_by(Place.status).all()
    )
    open_count = sum(1 for (hours,) in db.query(Place.hours).all() if is_open_now(hours, at))

    return {
        "total_places": total,
        "by_category": by_category,
        "by_status": by_status,
        "open_now": open_count,
    }
