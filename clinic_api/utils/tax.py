"""Tax calculation helpers for checkout and receipts."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import NamedTuple

from clinic_api.core.constants import DEFAULT_TAX_RATE
from clinic_api.core.errors import InvariantViolation

_CENTS = Decimal("0.01")


class TaxBreakdown(NamedTuple):
    """Receipt lines for a subtotal."""
    subtotal: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    total: Decimal

    @property
    def formatted_subtotal(self) -> str:
        return format_currency(self.subtotal)

    @property
    def formatted_tax_amount(self) -> str:
        return format_currency(self.tax_amount)

    @property
    def formatted_total(self) -> str:
        return format_currency(self.total)


def _to_decimal(value: Decimal | int | float | str, name: str) -> Decimal:
    # str() first so 0.1 becomes Decimal("0.1"), not its binary expansion
    amount = value if isinstance(value, Decimal) else Decimal(str(value))
    if amount < 0:
        raise InvariantViolation(f"{name} must be >= 0, got {amount}")
    return amount


def calculate_tax(
    subtotal: Decimal | int | float | str,
    tax_rate: Decimal | int | float | str = DEFAULT_TAX_RATE,
) -> Decimal:
    """Tax owed on a subtotal (unrounded)."""
    return _to_decimal(subtotal, "subtotal") * _to_decimal(tax_rate, "tax_rate")


def calculate_total_with_tax(
    subtotal: Decimal | int | float | str,
    tax_rate: Decimal | int | float | str = DEFAULT_TAX_RATE,
) -> Decimal:
    return _to_decimal(subtotal, "subtotal") + calculate_tax(subtotal, tax_rate)


def format_currency(amount: Decimal | int | float | str) -> str:
    """Format to two decimal places, rounding half up."""
    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    return str(value.quantize(_CENTS, rounding=ROUND_HALF_UP))


def get_tax_breakdown(
    subtotal: Decimal | int | float | str,
    tax_rate: Decimal | int | float | str = DEFAULT_TAX_RATE,
) -> TaxBreakdown:
    """Subtotal, rate, tax and total for a receipt or invoice."""
    base = _to_decimal(subtotal, "subtotal")
    rate = _to_decimal(tax_rate, "tax_rate")
    tax_amount = calculate_tax(base, rate)
    return TaxBreakdown(
        subtotal=base,
        tax_rate=rate,
        tax_amount=tax_amount,
        total=base + tax_amount,
    )
