"""
Price breakdown of a rental contract.

total = days x daily rate + fuel fee + damage fee
"""

import math
from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from django.conf import settings

from apps.cars.records import Car
from .records import Contract

CENT = Decimal('0.01')
SECONDS_PER_DAY = 24 * 60 * 60
FULL_TANK_PCT = 100


@dataclass(frozen=True)
class PriceBreakdown:
    days: int
    base_price: Decimal
    fuel_fee: Decimal
    damage_fee: Decimal
    total: Decimal

    @classmethod
    def empty(cls):
        zero = Decimal('0.00')
        return cls(days=0, base_price=zero, fuel_fee=zero, damage_fee=zero, total=zero)


def money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def rental_days(start: datetime, end: datetime) -> int:
    """Started days between ``start`` and ``end``; never negative."""
    seconds = (end - start).total_seconds()
    if seconds <= 0:
        return 0
    return math.ceil(seconds / SECONDS_PER_DAY)


def fuel_fee(fuel_level_end_pct: Optional[int]) -> Decimal:
    """Refuelling charge for the share of the tank returned empty."""
    if fuel_level_end_pct is None:
        return money(0)
    missing_pct = FULL_TANK_PCT - int(fuel_level_end_pct)
    if missing_pct <= 0:
        return money(0)
    litres = Decimal(missing_pct) / Decimal(FULL_TANK_PCT) * Decimal(settings.FUEL_TANK_LITERS)
    return money(litres * Decimal(str(settings.FUEL_PRICE_PER_LITER)))


def base_price(car: Car, days: int) -> Decimal:
    return money(Decimal(days) * Decimal(str(car.price_per_day)))


def price_breakdown(
    contract: Contract,
    car: Optional[Car],
    fuel_level_end_pct: Optional[int] = None,
    damage_fee=None,
) -> PriceBreakdown:
    """
    Breakdown for ``contract`` rented at ``car``'s daily rate.

    ``fuel_level_end_pct`` and ``damage_fee`` override the values recorded on
    the contract, which is how the completion form previews its result.
    """
    if car is None:
        return PriceBreakdown.empty()

    days = rental_days(contract.start_date, contract.end_date)
    base = base_price(car, days)

    if fuel_level_end_pct is None:
        fuel_level_end_pct = contract.fuel_level_end_pct
    if fuel_level_end_pct is None:
        fuel_level_end_pct = FULL_TANK_PCT
    fuel = fuel_fee(fuel_level_end_pct)

    damage = money(contract.extra_fees if damage_fee is None else damage_fee)

    return PriceBreakdown(
        days=days,
        base_price=base,
        fuel_fee=fuel,
        damage_fee=damage,
        total=base + fuel + damage,
    )


def quote(car: Car, start: datetime, end: datetime) -> PriceBreakdown:
    """Estimate for a prospective booking, before any fees are known."""
    days = rental_days(start, end)
    base = base_price(car, days)
    zero = money(0)
    return PriceBreakdown(days=days, base_price=base, fuel_fee=zero, damage_fee=zero, total=base)
