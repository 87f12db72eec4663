"""Pydantic schemas"""
from datetime import datetime
from typing import Optional, List, Dict, Literal
from pydantic import BaseModel, Field


# === Hours ===

class OpenStatus(BaseModel):
    """Open/closed answer for one place at one instant"""
    is_open: bool = False
    is_closing_soon: bool = False
    status: Literal["open", "closing-soon", "closed", "unknown"]
    minutes_until_close: Optional[int] = None
    closes_at: Optional[str] = None    # "5:00 PM"
    opens_at: Optional[str] = None     # "tomorrow at 9:00 AM"
    today_hours: Optional[str] = None  # raw text after "Monday: "


class TimeRangeOut(BaseModel):
    start: int
    end: int
    is_24h: bool = False


class DayHoursOut(BaseModel):
    name: str
    time: str
    is_today: bool = False


class HoursStatusIn(BaseModel):
    hours: Optional[List[str]] = None
    at: Optional[datetime] = Field(None, description="Reference instant (defaults to now, local time)")


class HoursParseIn(BaseModel):
    text: Optional[str] = None


class FormattedTimeOut(BaseModel):
    minutes: int
    display: str


# === Places ===

class PlaceListOut(BaseModel):
    """List item (lightweight)"""
    slug: str
    name: str
    category: str
    primary: Optional[str] = None
    neighborhood: Optional[str] = None
    address: Optional[str] = None
    status: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    icon: str
    distance_km: Optional[float] = None  # nearby search only
    open_status: OpenStatus


class PlaceDetailOut(BaseModel):
    slug: str
    name: str
    category: str
    primary: Optional[str] = None
    types: List[str] = []
    neighborhood: Optional[str] = None
    address: Optional[str] = None
    status: str
    status_color: str
    icon: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    website: Optional[str] = None
    website_display: Optional[str] = None
    notes: Optional[str] = None
    tags: List[str] = []
    hours: List[str] = []
    today_name: str
    today_hours: str
    ordered_hours: List[DayHoursOut] = []
    open_status: OpenStatus


class PaginationOut(BaseModel):
    page: int
    per_page: int
    total: int
    pages: int


class PlaceListResponse(BaseModel):
    data: List[PlaceListOut]
    pagination: PaginationOut
    filter_hash: str = ""


class CategoryOut(BaseModel):
    name: str
    slug: str
    icon: str
    count: int


class StatsOut(BaseModel):
    total_places: int
    by_category: Dict[str, int]
    by_status: Dict[str, int]
    open_now: int
