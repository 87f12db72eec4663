"""Stateless hours endpoints — evaluate hours that are not stored as a place"""
from typing import List, Optional
from fastapi import APIRouter, Query

from ..schemas import HoursStatusIn, HoursParseIn, OpenStatus, TimeRangeOut, FormattedTimeOut
from ..services.hours import get_open_status, parse_time_range, format_minutes_as_time, local_instant

router = APIRouter(prefix="/api/v1/hours", tags=["hours"])


@router.post("/status", response_model=OpenStatus)
def hours_status(body: HoursStatusIn):
    return get_open_status(body.hours, local_instant(body.at))


@router.post("/parse", response_model=Optional[List[TimeRangeOut]])
def hours_parse(body: HoursParseIn):
    """One day's hours text → shifts, null when nothing parses"""
    ranges = parse_time_range(body.text)
    if ranges is None:
        return None
    return [TimeRangeOut(start=r.start, end=r.end, is_24h=r.is_24h) for r in ranges]


@router.get("/format", response_model=FormattedTimeOut)
def hours_format(minutes: int = Query(..., ge=0, description="Minutes since midnight")):
    return FormattedTimeOut(minutes=minutes, display=format_minutes_as_time(minutes))
