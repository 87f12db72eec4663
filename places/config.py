"""Application settings"""
import os
from pathlib import Path
from zoneinfo import ZoneInfo

BASE_DIR = Path(__file__).parent.parent

DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"sqlite:///{BASE_DIR / 'data' / 'places.db'}"
)

API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))

# Hours are authored in the map's local time
PLACES_TZ = os.getenv("PLACES_TZ", "America/Los_Angeles")
LOCAL_TZ = ZoneInfo(PLACES_TZ)

# Import / export
PLACES_DIR = Path(os.getenv("PLACES_DIR", str(Path.home() / "Brain" / "Portland Places")))
GEOJSON_PATH = Path(os.getenv("GEOJSON_PATH", str(BASE_DIR / "data" / "places.geojson")))
COORD_CACHE_PATH = Path(os.getenv("COORD_CACHE_PATH", str(BASE_DIR / "data" / ".coord-cache.json")))
GOOGLE_PLACES_API_KEY = os.getenv("GOOGLE_PLACES_API_KEY", "").strip()
HTTP_TIMEOUT_SEC = int(os.getenv("HTTP_TIMEOUT_SEC", "10"))
