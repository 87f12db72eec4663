"""GeoJSON export — the FeatureCollection the map front end loads"""
from datetime import datetime, timezone
from typing import Iterable


def place_to_feature(place) -> dict:
    return {
        "type": "Feature",
        "geometry": {
            "type": "Point",
            "coordinates": [place.longitude, place.latitude],
        },
        "properties": {
            "name": place.name,
            "category": place.category,
            "primary": place.primary or None,
            "type": list(place.types or []),
            "neighborhood": place.neighborhood or None,
            "address": place.address or None,
            "status": place.status or "unknown",
            "goodFor": list(place.good_for or []),
            "cuisine": list(place.cuisine or []),
            "hours": list(place.hours or []),
            "notes": place.notes or None,
            "website": place.website or None,
        },
    }


def feature_collection(places: Iterable) -> dict:
    """Places without coordinates are left out"""
    return {
        "type": "FeatureCollection",
        "generated": datetime.now(timezone.utc).isoformat(),
        "features": [
            place_to_feature(p) for p in places
            if p.latitude is not None and p.longitude is not None
        ],
    }
