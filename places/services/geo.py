"""Distance helpers — DB-independent haversine"""
import math
from typing import NamedTuple, Optional

EARTH_RADIUS_KM = 6371.0
KM_PER_DEGREE = 111.0


class BoundingBox(NamedTuple):
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float


def haversine(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in km"""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = phi2 - phi1
    dlmb = math.radians(lng2 - lng1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(a))


def bounding_box(lat: float, lng: float, radius_km: float) -> BoundingBox:
    """Rough box around a point, used as the SQL pre-filter"""
    dlat = radius_km / KM_PER_DEGREE
    dlng = radius_km / (KM_PER_DEGREE * math.cos(math.radians(lat)))
    return BoundingBox(lat - dlat, lat + dlat, lng - dlng, lng + dlng)


def distance_to(place, lat: float, lng: float) -> Optional[float]:
    """km from (lat, lng) to the place, None when it has no coordinates"""
    if place.latitude is None or place.longitude is None:
        return None
    return round(haversine(lat, lng, place.latitude, place.longitude), 2)
