"""Shared fixtures — in-memory SQLite seeded with a handful of places"""
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from places.database import Base, get_db
from places.main import app
from places.models import Place
from places.services.hours import DAY_NAMES

# 2026-10-19 is a Monday
MONDAY = datetime(2026, 10, 19)


def every_day(text):
    return [f"{day}: {text}" for day in DAY_NAMES]


def seed_places():
    return [
        Place(
            slug="heart-coffee", name="Heart Coffee", category="Food & Drink",
            primary="coffee", status="haunts", neighborhood="Kerns",
            types=["cafe"], cuisine=[], good_for=["working"],
            hours=every_day("7:00 AM – 5:00 PM"),
            website="https://instagram.com/heartcoffee",
            latitude=45.5230, longitude=-122.6437,
        ),
        Place(
            slug="powells-books", name="Powell's Books", category="Bookstores",
            status="haunts", neighborhood="Pearl District",
            hours=every_day("9:00 AM – 9:00 PM"),
            website="https://www.powells.com/",
            latitude=45.5231, longitude=-122.6814,
        ),
        Place(
            slug="pok-pok", name="Pok Pok", category="Food & Drink",
            primary="restaurant", status="queue", neighborhood="Division",
            cuisine=["thai"],
            hours=["Monday: Closed"] + [
                f"{day}: 11:00 AM – 3:00 PM, 5:00 – 10:00 PM"
                for day in DAY_NAMES if day != "Monday"
            ],
            latitude=45.5046, longitude=-122.6318,
        ),
        Place(
            slug="mcmenamins", name="McMenamins", category="Food & Drink",
            primary="bar", status="haunts", neighborhood="Hawthorne",
            hours=every_day("11:00 AM – 1:00 AM"),
            latitude=45.5122, longitude=-122.6226,
        ),
        Place(
            slug="mystery-records", name="Mystery Records", category="Record Shops",
            status="unknown", hours=[],
        ),
    ]


@pytest.fixture(scope="session")
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    db = factory()
    db.add_all(seed_places())
    db.commit()
    db.close()

    yield factory
    engine.dispose()


@pytest.fixture(scope="session")
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def mock_places():
    """Unsaved Place objects for DB-free filter tests"""
    return [
        Place(name="Powell's Books", category="Bookstores", status="haunts", neighborhood="Pearl District",
              hours=every_day("9:00 AM – 9:00 PM")),
        Place(name="Heart Coffee", category="Food & Drink", status="haunts", primary="coffee", neighborhood="Kerns",
              hours=every_day("7:00 AM – 5:00 PM")),
        Place(name="Pok Pok", category="Food & Drink", status="queue", primary="restaurant", neighborhood="Division",
              hours=["Monday: Closed"]),
        Place(name="McMenamins", category="Food & Drink", status="haunts", primary="bar", neighborhood="Hawthorne",
              hours=every_day("11:00 AM – 1:00 AM")),
    ]
