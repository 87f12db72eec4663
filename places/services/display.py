"""Display helpers — slugs, icons, website labels, weekly hours layout"""
import re
from datetime import datetime
from typing import List, Optional

from .hours import DAY_NAMES, day_index, get_day_hours

STATUS_COLORS = {
    "haunts": "#4a7c59",
    "queue": "#6b8cae",
    "unknown": "#9ca3a3",
}

CATEGORY_ICONS = {
    "Food & Drink": "fa-utensils",
    "Record Shop": "fa-record-vinyl",
    "Record Shops": "fa-record-vinyl",
    "Bookstore": "fa-book",
    "Bookstores": "fa-book",
    "Movie Theaters": "fa-film",
    "Movie Theater": "fa-film",
    "Provisions": "fa-cheese",
    "Supplies": "fa-screwdriver-wrench",
    "Arts & Culture": "fa-palette",
    "Music Venues": "fa-music",
    "Clothing": "fa-shirt",
}

PRIMARY_ICONS = {
    "coffee": "fa-mug-hot",
    "bar": "fa-martini-glass",
    "restaurant": "fa-utensils",
}

DEFAULT_ICON = "fa-location-dot"
HOURS_NOT_LISTED = "Hours not listed"


def slugify(name: str) -> str:
    """Place or category name → URL-safe slug"""
    slug = name.lower()
    slug = re.sub(r"['’‘]", "", slug)
    slug = re.sub(r"[^a-z0-9]+", "-", slug)
    return slug.strip("-")


def get_place_icon(category: Optional[str], primary: Optional[str] = None) -> str:
    if category == "Food & Drink" and primary and primary in PRIMARY_ICONS:
        return PRIMARY_ICONS[primary]
    return CATEGORY_ICONS.get(category, DEFAULT_ICON)


def status_color(status: Optional[str]) -> str:
    return STATUS_COLORS.get(status or "unknown", STATUS_COLORS["unknown"])


def format_website_display(url: Optional[str]) -> Optional[str]:
    """Social links → '@handle', anything else → bare host"""
    if not url:
        return None

    ig = re.search(r"instagram\.com/([^/?]+)", url)
    if ig and ig.group(1) not in ("p", "explore"):
        return "@" + ig.group(1)

    fb = re.search(r"facebook\.com/([^/?]+)", url)
    if fb:
        return "@" + fb.group(1)

    if re.search(r"twitter\.com|^https?://(www\.)?x\.com", url):
        tw = re.search(r"(?:twitter|x)\.com/([^/?]+)", url)
        if tw:
            return "@" + tw.group(1)

    host = re.sub(r"^https?://", "", url)
    host = re.sub(r"/$", "", host)
    return host.split("/")[0]


def ordered_week_hours(weekly_hours: Optional[list], at: datetime) -> List[dict]:
    """Seven days starting from today; days with no entry are left out"""
    start = day_index(at)
    result = []
    for offset in range(7):
        name = DAY_NAMES[(start + offset) % 7]
        day = get_day_hours(weekly_hours, name)
        if day and day.raw_text:
            result.append({"name": name, "time": day.raw_text, "is_today": offset == 0})
    return result


def today_label(weekly_hours: Optional[list], at: datetime) -> str:
    day = get_day_hours(weekly_hours, DAY_NAMES[day_index(at)])
    return day.raw_text if day else HOURS_NOT_LISTED


def place_tags(place) -> List[str]:
    """types + cuisine + good_for, empties dropped"""
    return [t for t in [*(place.types or []), *(place.cuisine or []), *(place.good_for or [])] if t]
