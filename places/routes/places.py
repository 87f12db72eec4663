"""Place endpoints"""
import math
import time
from datetime import datetime
from typing import Optional, List
from fastapi import APIRouter, Depends, Query, HTTPException
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import Place
from ..schemas import (
    PlaceListOut, PlaceDetailOut, PlaceListResponse, PaginationOut,
    CategoryOut, StatsOut, OpenStatus, DayHoursOut,
)
from ..services.display import (
    format_website_display, get_place_icon, ordered_week_hours,
    place_tags, status_color, today_label,
)
from ..services.filters import FilterState, decode_filter_hash, encode_filter_hash, filter_places
from ..services.geojson import feature_collection
from ..services.hours import DAY_NAMES, day_index, get_open_status, local_instant
from ..services.search import (
    search_places, search_nearby, get_place_detail, all_places,
    list_categories, get_stats,
)

# Cache: category list (with TTL)
_cache = {}
CACHE_TTL = 300


def _cached(key, fn):
    """Simple TTL cache"""
    now = time.time()
    if key in _cache and now - _cache[key][1] < CACHE_TTL:
        return _cache[key][0]
    result = fn()
    _cache[key] = (result, now)
    return result

router = APIRouter(prefix="/api/v1", tags=["places"])


def _place_to_list(place: Place, at: datetime, distance_km=None) -> PlaceListOut:
    return PlaceListOut(
        slug=place.slug,
        name=place.name,
        category=place.category,
        primary=place.primary,
        neighborhood=place.neighborhood,
        address=place.address,
        status=place.status,
        latitude=place.latitude,
        longitude=place.longitude,
        icon=get_place_icon(place.category, place.primary),
        distance_km=distance_km,
        open_status=get_open_status(place.hours, at),
    )


@router.get("/places", response_model=PlaceListResponse)
def list_places(
    status: str = Query("all", description="haunts / queue / all"),
    category: str = Query("all", description="Category name, e.g. 'Food & Drink'"),
    primary: str = Query("all", description="coffee / bar / restaurant (Food & Drink only)"),
    open_now: bool = Query(False, description="Only places open at `at`"),
    at: Optional[datetime] = Query(None, description="Reference instant (defaults to now)"),
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
):
    at = local_instant(at)
    state = FilterState(status=status, category=category, primary=primary, open_now=open_now)
    places, total = search_places(db, state, at, page=page, per_page=per_page)

    return PlaceListResponse(
        data=[_place_to_list(p, at) for p in places],
        pagination=PaginationOut(
            page=page,
            per_page=per_page,
            total=total,
            pages=math.ceil(total / per_page) if per_page else 0,
        ),
        filter_hash=encode_filter_hash(state),
    )


@router.get("/places/nearby", response_model=List[PlaceListOut])
def nearby_places(
    lat: float = Query(..., description="Latitude"),
    lng: float = Query(..., description="Longitude"),
    radius: float = Query(2.0, ge=0.1, le=50, description="Radius (km)"),
    open_now: bool = Query(False, description="Only places open at `at`"),
    at: Optional[datetime] = Query(None, description="Reference instant (defaults to now)"),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
):
    at = local_instant(at)
    results = search_nearby(
        db, lat=lat, lng=lng, at=at, radius_km=radius,
        state=FilterState(open_now=open_now), limit=limit,
    )
    return [_place_to_list(place, at, dist) for place, dist in results]


@router.get("/places.geojson")
def places_geojson(
    filter_hash: Optional[str] = Query(None, alias="hash", description="Filter hash, e.g. '#open-now/haunts/food-drink'"),
    at: Optional[datetime] = Query(None, description="Reference instant for open-now"),
    db: Session = Depends(get_db),
):
    places = all_places(db)
    if filter_hash:
        places = filter_places(places, decode_filter_hash(filter_hash, places), local_instant(at))
    return feature_collection(places)


@router.get("/places/{slug}", response_model=PlaceDetailOut)
def place_detail(
    slug: str,
    at: Optional[datetime] = Query(None, description="Reference instant (defaults to now)"),
    db: Session = Depends(get_db),
):
    place = get_place_detail(db, slug)
    if not place:
        raise HTTPException(status_code=404, detail="Place not found")

    at = local_instant(at)
    return PlaceDetailOut(
        slug=place.slug,
        name=place.name,
        category=place.category,
        primary=place.primary,
        types=place.types or [],
        neighborhood=place.neighborhood,
        address=place.address,
        status=place.status,
        status_color=status_color(place.status),
        icon=get_place_icon(place.category, place.primary),
        latitude=place.latitude,
        longitude=place.longitude,
        website=place.website,
        website_display=format_website_display(place.website),
        notes=place.notes.strip() if place.notes and place.notes.strip() else None,
        tags=place_tags(place),
        hours=place.hours or [],
        today_name=DAY_NAMES[day_index(at)],
        today_hours=today_label(place.hours, at),
        ordered_hours=[DayHoursOut(**d) for d in ordered_week_hours(place.hours, at)],
        open_status=get_open_status(place.hours, at),
    )


@router.get("/places/{slug}/status", response_model=OpenStatus)
def place_status(
    slug: str,
    at: Optional[datetime] = Query(None, description="Reference instant (defaults to now)"),
    db: Session = Depends(get_db),
):
    place = get_place_detail(db, slug)
    if not place:
        raise HTTPException(status_code=404, detail="Place not found")
    return get_open_status(place.hours, local_instant(at))


@router.get("/categories", response_model=List[CategoryOut])
def categories(db: Session = Depends(get_db)):
    return _cached("categories", lambda: list_categories(db))


@router.get("/stats", response_model=StatsOut)
def stats(
    at: Optional[datetime] = Query(None, description="Reference instant for open_now count"),
    db: Session = Depends(get_db),
):
    return get_stats(db, local_instant(at))


@router.get("/health")
def health():
    return {"status": "ok"}
