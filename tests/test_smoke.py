"""Smoke tests — endpoints against the seeded in-memory DB"""

# Monday 2026-10-19, 4:30 PM local
AT = "2026-10-19T16:30:00"


class TestHealthAndMeta:
    def test_health(self, client):
        r = client.get("/api/v1/health")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"

    def test_stats(self, client):
        r = client.get("/api/v1/stats", params={"at": AT})
        assert r.status_code == 200
        data = r.json()
        assert data["total_places"] == 5
        assert data["by_category"]["Food & Drink"] == 3
        assert data["by_status"]["haunts"] == 3
        assert data["open_now"] == 3

    def test_categories(self, client):
        r = client.get("/api/v1/categories")
        assert r.status_code == 200
        by_slug = {c["slug"]: c for c in r.json()}
        assert by_slug["food-drink"]["count"] == 3
        assert by_slug["food-drink"]["icon"] == "fa-utensils"
        assert by_slug["record-shops"]["name"] == "Record Shops"

    def test_openapi(self, client):
        r = client.get("/openapi.json")
        assert r.status_code == 200


class TestPlaceList:
    def test_basic(self, client):
        r = client.get("/api/v1/places", params={"at": AT})
        assert r.status_code == 200
        data = r.json()
        assert data["pagination"]["total"] == 5
        assert data["filter_hash"] == ""
        statuses = {p["slug"]: p["open_status"]["status"] for p in data["data"]}
        assert statuses == {
            "heart-coffee": "closing-soon",
            "powells-books": "open",
            "pok-pok": "unknown",      # "Monday: Closed"
            "mcmenamins": "open",
            "mystery-records": "unknown",
        }

    def test_primary_filter(self, client):
        r = client.get("/api/v1/places", params={"category": "Food & Drink", "primary": "coffee", "at": AT})
        assert r.status_code == 200
        data = r.json()
        assert [p["slug"] for p in data["data"]] == ["heart-coffee"]
        assert data["data"][0]["icon"] == "fa-mug-hot"
        assert data["filter_hash"] == "#all/food-drink/coffee"

    def test_open_now(self, client):
        r = client.get("/api/v1/places", params={"open_now": "true", "status": "haunts", "at": AT})
        assert r.status_code == 200
        data = r.json()
        assert data["pagination"]["total"] == 3
        assert all(p["open_status"]["is_open"] for p in data["data"])
        assert data["filter_hash"] == "#open-now/haunts"

    def test_open_now_late_night(self, client):
        r = client.get("/api/v1/places", params={"open_now": "true", "at": "2026-10-20T00:30:00"})
        assert [p["slug"] for p in r.json()["data"]] == ["mcmenamins"]

    def test_pagination(self, client):
        r = client.get("/api/v1/places", params={"per_page": 2, "page": 2, "at": AT})
        assert r.status_code == 200
        data = r.json()
        assert data["pagination"]["page"] == 2
        assert data["pagination"]["pages"] == 3
        assert len(data["data"]) == 2

    def test_bad_instant(self, client):
        r = client.get("/api/v1/places", params={"at": "not-a-date"})
        assert r.status_code == 422


class TestNearby:
    def test_nearby(self, client):
        r = client.get("/api/v1/places/nearby", params={"lat": 45.523, "lng": -122.6437, "radius": 5, "at": AT})
        assert r.status_code == 200
        results = r.json()
        assert results[0]["slug"] == "heart-coffee"
        dists = [p["distance_km"] for p in results]
        assert dists == sorted(dists)
        assert "mystery-records" not in {p["slug"] for p in results}

    def test_small_radius(self, client):
        r = client.get("/api/v1/places/nearby", params={"lat": 45.523, "lng": -122.6437, "radius": 1, "at": AT})
        assert [p["slug"] for p in r.json()] == ["heart-coffee"]

    def test_nearby_open_now(self, client):
        r = client.get("/api/v1/places/nearby", params={
            "lat": 45.523, "lng": -122.6437, "radius": 5, "open_now": "true", "at": AT,
        })
        assert r.status_code == 200
        assert "pok-pok" not in {p["slug"] for p in r.json()}


class TestPlaceDetail:
    def test_detail(self, client):
        r = client.get("/api/v1/places/heart-coffee", params={"at": AT})
        assert r.status_code == 200
        data = r.json()
        assert data["name"] == "Heart Coffee"
        assert data["website_display"] == "@heartcoffee"
        assert data["status_color"] == "#4a7c59"
        assert data["today_name"] == "Monday"
        assert data["today_hours"] == "7:00 AM – 5:00 PM"
        assert data["ordered_hours"][0] == {"name": "Monday", "time": "7:00 AM – 5:00 PM", "is_today": True}
        assert len(data["ordered_hours"]) == 7
        assert data["tags"] == ["cafe", "working"]
        status = data["open_status"]
        assert status["status"] == "closing-soon"
        assert status["minutes_until_close"] == 30
        assert status["closes_at"] == "5:00 PM"

    def test_detail_without_hours(self, client):
        r = client.get("/api/v1/places/mystery-records", params={"at": AT})
        assert r.status_code == 200
        data = r.json()
        assert data["today_hours"] == "Hours not listed"
        assert data["ordered_hours"] == []
        assert data["open_status"]["status"] == "unknown"

    def test_detail_not_found(self, client):
        r = client.get("/api/v1/places/no-such-place")
        assert r.status_code == 404

    def test_status_between_shifts(self, client):
        r = client.get("/api/v1/places/pok-pok/status", params={"at": "2026-10-20T16:00:00"})
        assert r.status_code == 200
        data = r.json()
        assert data["status"] == "closed"
        assert data["opens_at"] == "today at 5:00 PM"
        assert data["today_hours"] == "11:00 AM – 3:00 PM, 5:00 – 10:00 PM"

    def test_status_skips_closed_day(self, client):
        # Sunday 11 PM: Monday is closed, next opening is Tuesday
        r = client.get("/api/v1/places/pok-pok/status", params={"at": "2026-10-18T23:00:00"})
        assert r.json()["opens_at"] == "Tuesday at 11:00 AM"

    def test_status_not_found(self, client):
        r = client.get("/api/v1/places/no-such-place/status")
        assert r.status_code == 404


class TestGeoJSON:
    def test_export(self, client):
        r = client.get("/api/v1/places.geojson")
        assert r.status_code == 200
        data = r.json()
        assert data["type"] == "FeatureCollection"
        # mystery-records has no coordinates
        assert len(data["features"]) == 4
        heart = next(f for f in data["features"] if f["properties"]["name"] == "Heart Coffee")
        assert heart["geometry"]["coordinates"] == [-122.6437, 45.523]
        assert heart["properties"]["goodFor"] == ["working"]

    def test_hash_filter(self, client):
        r = client.get("/api/v1/places.geojson", params={"hash": "#haunts/food-drink"})
        names = sorted(f["properties"]["name"] for f in r.json()["features"])
        assert names == ["Heart Coffee", "McMenamins"]

    def test_hash_open_now(self, client):
        r = client.get("/api/v1/places.geojson", params={"hash": "#open-now/food-drink", "at": "2026-10-20T00:30:00"})
        names = [f["properties"]["name"] for f in r.json()["features"]]
        assert names == ["McMenamins"]


class TestHoursEndpoints:
    def test_status(self, client):
        r = client.post("/api/v1/hours/status", json={
            "hours": ["Monday: 9:00 AM – 5:00 PM"],
            "at": AT,
        })
        assert r.status_code == 200
        data = r.json()
        assert data["is_open"] is True
        assert data["status"] == "closing-soon"
        assert data["minutes_until_close"] == 30
        assert data["closes_at"] == "5:00 PM"

    def test_status_aware_instant(self, client):
        # 23:30 UTC → 16:30 in Portland
        r = client.post("/api/v1/hours/status", json={
            "hours": ["Monday: 9:00 AM – 5:00 PM"],
            "at": "2026-10-19T23:30:00Z",
        })
        assert r.json()["minutes_until_close"] == 30

    def test_status_unknown(self, client):
        r = client.post("/api/v1/hours/status", json={"hours": [], "at": AT})
        data = r.json()
        assert data["status"] == "unknown"
        assert data["is_open"] is False

    def test_parse(self, client):
        r = client.post("/api/v1/hours/parse", json={"text": "11:00 AM – 3:00 PM, 5:00 – 10:00 PM"})
        assert r.status_code == 200
        assert r.json() == [
            {"start": 660, "end": 900, "is_24h": False},
            {"start": 1020, "end": 1320, "is_24h": False},
        ]

    def test_parse_closed(self, client):
        r = client.post("/api/v1/hours/parse", json={"text": "Closed"})
        assert r.status_code == 200
        assert r.json() is None

    def test_format(self, client):
        r = client.get("/api/v1/hours/format", params={"minutes": 1260})
        assert r.json() == {"minutes": 1260, "display": "9:00 PM"}

    def test_format_rejects_negative(self, client):
        r = client.get("/api/v1/hours/format", params={"minutes": -5})
        assert r.status_code == 422
