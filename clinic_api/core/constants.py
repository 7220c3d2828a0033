"""Application constants."""

from decimal import Decimal

# Business day used by the slot generator (24-hour clock, inclusive bounds)
BUSINESS_HOURS_START = 8  # 8:00 AM
BUSINESS_HOURS_END = 17  # 5:00 PM (17:00)
DEFAULT_SLOT_INTERVAL_MINUTES = 30

# Day occupancy bands for the calendar view
OCCUPANCY_LOW_WATERMARK = 5  # count >= 5 -> limited
OCCUPANCY_HIGH_WATERMARK = 8  # count >= 8 -> booked

DEFAULT_TAX_RATE = Decimal("0.08")

# Longest date range the occupancy calendar will compute in one request
MAX_CALENDAR_RANGE_DAYS = 62

MINUTES_PER_DAY = 24 * 60
