"""Opening hours — parse weekly hours text and decide open/closed

DB-independent logic. Weekly hours are a list of strings such as
["Monday: 9:00 AM – 5:00 PM", "Tuesday: 11:00 AM – 3:00 PM, 5:00 – 10:00 PM", ...].
Times are minutes since midnight. The reference instant is taken as-is
(already in the map's local time); nothing here reads the clock when an
instant is given.
"""
import re
from datetime import datetime
from typing import List, NamedTuple, Optional

from ..config import LOCAL_TZ
from ..schemas import OpenStatus

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
CLOSING_SOON_MINUTES = 45
MINUTES_PER_DAY = 1440

TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})\s*(AM|PM)?$", re.IGNORECASE)
RANGE_SEPARATOR = re.compile(r"\s*[–—-]\s*")

# Un-markered hours that get +12h, first match wins.
# (is_end_time, needs_start, test(hour, minute, start_minutes))
PM_INFERENCE_RULES = (
    # openings at 1-6 are afternoon/evening, not early morning
    (False, False, lambda h, m, start: 1 <= h <= 6),
    # start was PM, so an end before noon is PM too
    (True, True, lambda h, m, start: h < 12 and start // 60 >= 12),
    # end must not land before the start
    (True, True, lambda h, m, start: h < 12 and h * 60 + m < start),
)


class TimeRange(NamedTuple):
    start: int
    end: int            # end < start means the shift closes after midnight
    is_24h: bool = False


class DayHours(NamedTuple):
    day_name: str
    raw_text: str
    ranges: Optional[List[TimeRange]]


def _infer_hour(hours: int, minutes: int, is_end_time: bool, start_minutes: Optional[int]) -> int:
    """Resolve an hour written without AM/PM"""
    has_start = start_minutes is not None
    for rule_end, needs_start, test in PM_INFERENCE_RULES:
        if rule_end != is_end_time or (needs_start and not has_start):
            continue
        if test(hours, minutes, start_minutes):
            return hours + 12
    return hours


def parse_time(text: Optional[str], is_end_time: bool = False, start_minutes: Optional[int] = None) -> Optional[int]:
    """'9:00 AM' / '9:00 PM' / '9:00' → minutes since midnight, None if unparseable"""
    if not text:
        return None

    m = TIME_PATTERN.match(text.strip())
    if not m:
        return None

    hours = int(m.group(1))
    minutes = int(m.group(2))
    meridiem = m.group(3).upper() if m.group(3) else None

    if meridiem == "PM" and hours != 12:
        hours += 12
    elif meridiem == "AM" and hours == 12:
        hours = 0
    elif meridiem is None:
        hours = _infer_hour(hours, minutes, is_end_time, start_minutes)

    return hours * 60 + minutes


def parse_time_range(text: Optional[str]) -> Optional[List[TimeRange]]:
    """One day's hours text → list of shifts, None when there is nothing usable.

    "11:00 AM – 3:00 PM, 5:00 – 10:00 PM" → [TimeRange(660, 900), TimeRange(1020, 1320)]
    Malformed shifts are dropped; the rest of the day is kept.
    """
    if not text or text == "Closed":
        return None
    if "Open 24 hours" in text:
        return [TimeRange(0, MINUTES_PER_DAY, True)]

    ranges = []
    for period in (p.strip() for p in text.split(",")):
        parts = RANGE_SEPARATOR.split(period)
        if len(parts) != 2:
            continue

        start = parse_time(parts[0], False, None)
        end = parse_time(parts[1], True, start)
        if start is None or end is None:
            continue

        ranges.append(TimeRange(start, end))

    return ranges or None


def get_day_hours(weekly_hours: Optional[list], day_name: str) -> Optional[DayHours]:
    """Entry for one weekday, None if the week has no line for it"""
    if not isinstance(weekly_hours, (list, tuple)) or not weekly_hours:
        return None

    prefix = f"{day_name}:"
    entry = next((h for h in weekly_hours if isinstance(h, str) and h.startswith(prefix)), None)
    if entry is None:
        return None

    raw_text = entry[len(prefix):].strip()
    return DayHours(day_name, raw_text, parse_time_range(raw_text))


def day_index(at: datetime) -> int:
    """Sunday = 0 … Saturday = 6"""
    return (at.weekday() + 1) % 7


def get_today_hours(weekly_hours: Optional[list], at: datetime) -> Optional[DayHours]:
    return get_day_hours(weekly_hours, DAY_NAMES[day_index(at)])


def local_instant(at: Optional[datetime] = None) -> datetime:
    """Reference instant in map-local time. Naive datetimes are taken as local already."""
    if at is None:
        return datetime.now(LOCAL_TZ)
    if at.tzinfo is not None:
        return at.astimezone(LOCAL_TZ)
    return at


def _minutes_of_day(at: datetime) -> int:
    return at.hour * 60 + at.minute


def _check_range(time_range: TimeRange, current: int, today_hours: str) -> Optional[OpenStatus]:
    """Open status if `current` falls inside the shift, else None"""
    start, end = time_range.start, time_range.end

    if end < start:
        # closes after midnight
        in_range = current >= start or current < end
        minutes_until_close = (MINUTES_PER_DAY - current) + end if current >= start else end - current
    else:
        in_range = start <= current < end
        minutes_until_close = end - current

    if not in_range:
        return None

    closing_soon = 0 < minutes_until_close <= CLOSING_SOON_MINUTES
    return OpenStatus(
        is_open=True,
        is_closing_soon=closing_soon,
        status="closing-soon" if closing_soon else "open",
        minutes_until_close=minutes_until_close,
        closes_at=format_minutes_as_time(end % MINUTES_PER_DAY),
        today_hours=today_hours,
    )


def get_open_status(weekly_hours: Optional[list], at: Optional[datetime] = None) -> OpenStatus:
    """Is the place open at `at`? Defaults to the current local time."""
    if at is None:
        at = local_instant()

    today = get_today_hours(weekly_hours, at)
    if not today or not today.ranges:
        return OpenStatus(status="unknown")

    current = _minutes_of_day(at)

    # first listed shift wins
    for time_range in today.ranges:
        if time_range.is_24h:
            return OpenStatus(is_open=True, status="open", today_hours=today.raw_text)

        result = _check_range(time_range, current, today.raw_text)
        if result:
            return result

    return OpenStatus(
        status="closed",
        opens_at=find_next_open_time(weekly_hours, at),
        today_hours=today.raw_text,
    )


def find_next_open_time(weekly_hours: Optional[list], at: datetime) -> Optional[str]:
    """'today at 5:00 PM' / 'tomorrow at 9:00 AM' / 'Friday at 11:00 AM', None if nothing within a week"""
    if not isinstance(weekly_hours, (list, tuple)) or not weekly_hours:
        return None

    current = _minutes_of_day(at)
    today_idx = day_index(at)

    today = get_day_hours(weekly_hours, DAY_NAMES[today_idx])
    if today and today.ranges:
        later = [r.start for r in today.ranges if r.start > current]
        if later:
            return f"today at {format_minutes_as_time(min(later))}"

    for offset in range(1, 8):
        day_name = DAY_NAMES[(today_idx + offset) % 7]
        day = get_day_hours(weekly_hours, day_name)
        if day and day.ranges:
            label = "tomorrow" if offset == 1 else day_name
            return f"{label} at {format_minutes_as_time(day.ranges[0].start)}"

    return None


def format_minutes_as_time(minutes: int) -> str:
    """540 → '9:00 AM', 0 → '12:00 AM', 720 → '12:00 PM'"""
    hours = (minutes // 60) % 24
    mins = minutes % 60
    period = "PM" if hours >= 12 else "AM"
    display_hours = 12 if hours == 0 else hours - 12 if hours > 12 else hours
    return f"{display_hours}:{mins:02d} {period}"


def is_open_now(weekly_hours: Optional[list], at: Optional[datetime] = None) -> bool:
    """Open or closing-soon"""
    return get_open_status(weekly_hours, at).is_open
