"""Price computation for stays.

All amounts are integer cents. Rounding is half-up, which for the
positive amounts used here gives the same results as JavaScript's
``Math.round`` used by the web client to preview prices.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from shared.domain.base import ValueObject

SERVICE_FEE_RATE = Decimal("0.12")
DAYS_PER_MONTH = 30


def round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class PriceBreakdown(ValueObject):
    nightly_rate_cents: int
    nights: int
    subtotal_cents: int
    service_fee_cents: int
    cleaning_fee_cents: int
    security_deposit_cents: int

    @property
    def total_cents(self) -> int:
        # The security deposit is held separately and never part of the total
        return self.subtotal_cents + self.service_fee_cents + self.cleaning_fee_cents


def daily_rate_cents(monthly_price_cents: int) -> int:
    return round_half_up(Decimal(monthly_price_cents) / DAYS_PER_MONTH)


def calculate_price(
    monthly_price_cents: int,
    nights: int,
    *,
    cleaning_fee_cents: int = 0,
    security_deposit_cents: int = 0,
) -> PriceBreakdown:
    """Price a stay of ``nights`` nights at a monthly rate.

    >>> calculate_price(100000, 4, cleaning_fee_cents=5000).total_cents
    19932
    """
    if nights < 1:
        raise ValueError("A stay must be at least one night")

    rate = daily_rate_cents(monthly_price_cents)
    subtotal = rate * nights
    return PriceBreakdown(
        nightly_rate_cents=rate,
        nights=nights,
        subtotal_cents=subtotal,
        service_fee_cents=round_half_up(subtotal * SERVICE_FEE_RATE),
        cleaning_fee_cents=cleaning_fee_cents,
        security_deposit_cents=security_deposit_cents,
    )


def price_for_property(property_obj, nights: int) -> PriceBreakdown:
    return calculate_price(
        property_obj.monthly_price_cents,
        nights,
        cleaning_fee_cents=property_obj.cleaning_fee_cents,
        security_deposit_cents=property_obj.security_deposit_cents,
    )
