"""SQLAlchemy models"""
from datetime import datetime
from sqlalchemy import Column, String, Text, Float, DateTime, JSON, Index

from .database import Base


class Place(Base):
    """A place on the map, imported from its markdown note"""
    __tablename__ = "places"

    slug = Column(String(200), primary_key=True)
    name = Column(Text, nullable=False)
    category = Column(String(50), nullable=False, index=True)
    primary = Column(String(20))          # coffee / bar / restaurant (Food & Drink only)
    types = Column(JSON, default=list)
    neighborhood = Column(Text)
    address = Column(Text)
    status = Column(String(20), nullable=False, default="unknown", index=True)  # haunts / queue / unknown
    good_for = Column(JSON, default=list)
    cuisine = Column(JSON, default=list)
    hours = Column(JSON, default=list)    # ["Monday: 9:00 AM – 5:00 PM", ...]
    notes = Column(Text)
    website = Column(Text)
    place_id = Column(String(255))        # Google place_id
    latitude = Column(Float)
    longitude = Column(Float)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index("idx_places_latlng", "latitude", "longitude"),
    )
