#!/usr/bin/env python3
"""Import places from markdown notes into the DB

Each note under PLACES_DIR/<Category>/*.md carries YAML front matter:

    ---
    name: Heart Coffee
    place_id: ChIJ...
    primary: coffee
    status: haunts
    hours:
      - "Monday: 7:00 AM – 5:00 PM"
    ---

Coordinates come from the Google Places details endpoint and are cached
in COORD_CACHE_PATH so repeated imports make no API calls.
"""

import json
import re
import sys
from pathlib import Path

import requests
import yaml

# Add project root to the path
sys.path.insert(0, str(Path(__file__).parent.parent))

from places.config import PLACES_DIR, COORD_CACHE_PATH, GOOGLE_PLACES_API_KEY, HTTP_TIMEOUT_SEC
from places.database import engine, SessionLocal, Base
from places.models import Place
from places.services.display import slugify
from places.services.hours import DAY_NAMES, get_day_hours

PLACES_DETAILS_URL = "https://places.googleapis.com/v1/places/{place_id}"

# Subdirectories to scan
CATEGORIES = [
    "Food & Drink",
    "Record Shops",
    "Bookstores",
    "Provisions",
    "Clothing",
    "Movie Theaters",
    "Music Venues",
    "Arts & Culture",
    "Supplies",
]

FRONTMATTER = re.compile(r"^---\n(.*?)\n---", re.DOTALL)


def load_cache() -> dict:
    if COORD_CACHE_PATH.exists():
        return json.loads(COORD_CACHE_PATH.read_text(encoding="utf-8"))
    return {}


def save_cache(cache: dict):
    COORD_CACHE_PATH.parent.mkdir(parents=True, exist_ok=True)
    COORD_CACHE_PATH.write_text(json.dumps(cache, indent=2), encoding="utf-8")


def parse_frontmatter(content: str) -> dict:
    """YAML front matter → dict ({} when missing or invalid)"""
    m = FRONTMATTER.match(content)
    if not m:
        return {}
    try:
        data = yaml.safe_load(m.group(1))
    except yaml.YAMLError as e:
        print(f"   ⚠️  Bad front matter: {e}")
        return {}
    return data if isinstance(data, dict) else {}


def as_list(value) -> list:
    if value is None or value == "":
        return []
    if isinstance(value, list):
        return [str(v) for v in value if v is not None]
    return [str(value)]


def normalize_hours(value) -> list:
    """Unquoted "Monday: 9:00 AM – 5:00 PM" items load as {"Monday": "..."}; flatten back to strings"""
    lines = []
    for item in value or []:
        if isinstance(item, dict):
            lines.extend(f"{day}: {text}" for day, text in item.items())
        elif item is not None:
            lines.append(str(item))
    return lines


def get_coordinates(place_id: str, cache: dict):
    """(lat, lng) for a place_id, from cache or the Places API. None on failure."""
    if place_id in cache:
        c = cache[place_id]
        return c["lat"], c["lng"]

    if not GOOGLE_PLACES_API_KEY:
        print(f"   ⚠️  GOOGLE_PLACES_API_KEY not set, cannot look up {place_id}")
        return None

    try:
        r = requests.get(
            PLACES_DETAILS_URL.format(place_id=place_id),
            headers={
                "X-Goog-Api-Key": GOOGLE_PLACES_API_KEY,
                "X-Goog-FieldMask": "location",
            },
            timeout=HTTP_TIMEOUT_SEC,
        )
        r.raise_for_status()
        location = r.json().get("location")
    except (requests.RequestException, ValueError) as e:
        print(f"   ⚠️  Failed to get coords for {place_id}: {e}")
        return None

    if not location:
        return None

    cache[place_id] = {"lat": location["latitude"], "lng": location["longitude"]}
    return location["latitude"], location["longitude"]


def read_category(category: str) -> list:
    """All notes in one category directory that have a name and place_id"""
    directory = PLACES_DIR / category
    if not directory.exists():
        return []

    places = []
    for path in sorted(directory.glob("*.md")):
        if path.name.startswith(("_", "-")):
            continue
        data = parse_frontmatter(path.read_text(encoding="utf-8"))
        if data.get("name") and data.get("place_id"):
            places.append({**data, "category": category, "filename": path.name})
    return places


def build_place(data: dict, lat: float, lng: float) -> Place:
    return Place(
        slug=slugify(str(data["name"])),
        name=str(data["name"]),
        category=data["category"],
        primary=data.get("primary") or None,
        types=as_list(data.get("type")),
        neighborhood=data.get("neighborhood") or None,
        address=data.get("address") or None,
        status=data.get("status") or "unknown",
        good_for=as_list(data.get("good-for")),
        cuisine=as_list(data.get("cuisine")),
        hours=normalize_hours(data.get("hours")),
        notes=data.get("notes") or None,
        website=data.get("website") or None,
        place_id=str(data["place_id"]),
        latitude=lat,
        longitude=lng,
    )


def has_readable_hours(hours: list) -> bool:
    return any(day and day.ranges for day in (get_day_hours(hours, name) for name in DAY_NAMES))


def import_all():
    Base.metadata.create_all(bind=engine)
    cache = load_cache()

    print("📂 Reading places...")
    all_places = []
    for category in CATEGORIES:
        places = read_category(category)
        print(f"   {category}: {len(places)}")
        all_places.extend(places)
    print(f"   Total: {len(all_places)}")

    print("📍 Resolving coordinates...")
    session = SessionLocal()
    imported = cached = fetched = 0
    try:
        for data in all_places:
            was_cached = data["place_id"] in cache
            coords = get_coordinates(str(data["place_id"]), cache)
            if not coords:
                print(f"   ⚠️  No coords for: {data['name']}")
                continue
            if was_cached:
                cached += 1
            else:
                fetched += 1

            place = build_place(data, *coords)
            if place.hours and not has_readable_hours(place.hours):
                print(f"   ⚠️  Unreadable hours for: {place.name}")

            session.merge(place)
            imported += 1
        session.commit()
    finally:
        session.close()
        save_cache(cache)

    print(f"   Cached: {cached}, Fetched: {fetched}")
    print(f"\n✅ Imported {imported} places")


if __name__ == "__main__":
    import_all()
