#!/usr/bin/env python3
"""Write the places FeatureCollection for the static map"""

import json
import sys
from pathlib import Path

# Add project root to the path
sys.path.insert(0, str(Path(__file__).parent.parent))

from places.config import GEOJSON_PATH
from places.database import SessionLocal
from places.services.geojson import feature_collection
from places.services.search import all_places


def export(output: Path = GEOJSON_PATH):
    session = SessionLocal()
    try:
        geojson = feature_collection(all_places(session))
    finally:
        session.close()

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(geojson, indent=2, ensure_ascii=False), encoding="utf-8")
    print(f"✅ Wrote {len(geojson['features'])} places to {output}")


if __name__ == "__main__":
    export(Path(sys.argv[1]) if len(sys.argv) > 1 else GEOJSON_PATH)
