"""Calendar router - occupancy bands and relative-day labels."""

from datetime import date

from fastapi import APIRouter, HTTPException, Query

from clinic_api.core.config import settings
from clinic_api.core.errors import SchedulingError
from clinic_api.schemas.appointment import (
    DayOccupancyRead,
    OccupancyBandResponse,
    OccupancyRequest,
    OccupancyResponse,
    RelativeDayResponse,
)
from clinic_api.services import calendar_service
from clinic_api.utils.dates import get_relative_day

router = APIRouter()


@router.get("/occupancy-band", response_model=OccupancyBandResponse)
def get_occupancy_band(count: int = Query(..., description="Non-canceled appointments that day")):
    try:
        band = calendar_service.classify_day_occupancy(count)
    except SchedulingError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return OccupancyBandResponse(count=count, band=band)


@router.post("/occupancy", response_model=OccupancyResponse)
def get_occupancy(
    data: OccupancyRequest,
    today: date = Query(..., description="Reference day for labels (YYYY-MM-DD)"),
):
    """
    Occupancy band for each day in a range.

    Range is limited to MAX_CALENDAR_RANGE_DAYS.
    """
    if (data.end_date - data.start_date).days + 1 > settings.MAX_CALENDAR_RANGE_DAYS:
        raise HTTPException(
            status_code=422,
            detail=f"Date range exceeds {settings.MAX_CALENDAR_RANGE_DAYS} days",
        )

    thresholds = calendar_service.get_default_thresholds()
    try:
        days = calendar_service.build_occupancy_calendar(
            data.appointments,
            data.start_date,
            data.end_date,
            room_id=data.room_id,
            thresholds=thresholds,
        )
    except SchedulingError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return OccupancyResponse(
        low_watermark=thresholds.low_watermark,
        high_watermark=thresholds.high_watermark,
        days=[
            DayOccupancyRead(
                date=day.date,
                count=day.count,
                band=day.band,
                label=get_relative_day(day.date, today),
            )
            for day in days
        ],
    )


@router.get("/relative-day", response_model=RelativeDayResponse)
def relative_day(
    value: date = Query(..., alias="date", description="Date to label (YYYY-MM-DD)"),
    today: date = Query(..., description="Reference day (YYYY-MM-DD)"),
):
    return RelativeDayResponse(date=value, today=today, label=get_relative_day(value, today))
