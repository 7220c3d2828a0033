"""Utility modules."""

from clinic_api.utils.dates import (
    calculate_end_time,
    format_date_time,
    format_long_date,
    format_time_12h,
    get_relative_day,
    parse_time,
)
from clinic_api.utils.tax import (
    TaxBreakdown,
    calculate_tax,
    calculate_total_with_tax,
    format_currency,
    get_tax_breakdown,
)

__all__ = [
    # Dates
    "calculate_end_time",
    "format_date_time",
    "format_long_date",
    "format_time_12h",
    "get_relative_day",
    "parse_time",
    # Tax
    "TaxBreakdown",
    "calculate_tax",
    "calculate_total_with_tax",
    "format_currency",
    "get_tax_breakdown",
]
