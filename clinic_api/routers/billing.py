"""Billing router - tax breakdown for checkout and receipts."""

from decimal import Decimal

from fastapi import APIRouter, HTTPException, Query

from clinic_api.core.config import settings
from clinic_api.core.errors import SchedulingError
from clinic_api.schemas.appointment import TaxBreakdownRead
from clinic_api.utils.tax import get_tax_breakdown

router = APIRouter()


@router.get("/tax-breakdown", response_model=TaxBreakdownRead)
def tax_breakdown(
    subtotal: Decimal = Query(..., description="Amount before tax"),
    tax_rate: Decimal = Query(None, description="Rate as a fraction (0.08 = 8%)"),
):
    rate = tax_rate if tax_rate is not None else settings.DEFAULT_TAX_RATE
    try:
        breakdown = get_tax_breakdown(subtotal, rate)
    except SchedulingError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return TaxBreakdownRead(
        subtotal=breakdown.subtotal,
        tax_rate=breakdown.tax_rate,
        tax_amount=breakdown.tax_amount,
        total=breakdown.total,
        formatted_subtotal=breakdown.formatted_subtotal,
        formatted_tax_amount=breakdown.formatted_tax_amount,
        formatted_total=breakdown.formatted_total,
    )
