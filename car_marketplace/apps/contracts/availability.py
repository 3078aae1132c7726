"""
Calendar blocking for car bookings.

A car is unavailable on every calendar day touched by one of its
non-cancelled contracts. Days are evaluated in the site timezone.
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Optional, Sequence, Set

from django.utils import timezone

from .records import Contract, ContractState

HOURS = tuple(f"{hour:02d}" for hour in range(24))
MAX_CALENDAR_YEAR = date.max.year - 1


@dataclass(frozen=True)
class DayCell:
    day: date
    in_month: bool
    blocked: bool
    disabled: bool

    @property
    def iso(self):
        return self.day.isoformat()


def blocking_contracts(
    contracts: Iterable[Contract],
    car_id: int,
    exclude_id: Optional[int] = None,
) -> List[Contract]:
    """Contracts that occupy ``car_id``, ignoring ``exclude_id`` and cancelled ones."""
    return [
        contract for contract in contracts
        if contract.car_id == car_id
        and contract.id != exclude_id
        and contract.state != ContractState.CANCELLED
    ]


def local_day(value: datetime) -> date:
    if timezone.is_aware(value):
        value = timezone.localtime(value)
    return value.date()


def contract_days(contract: Contract) -> List[date]:
    """Every calendar day from the start day to the end day, inclusive."""
    first = local_day(contract.start_date)
    last = local_day(contract.end_date)
    days = []
    current = first
    while current <= last:
        days.append(current)
        current += timedelta(days=1)
    return days


def blocked_dates(contracts: Iterable[Contract]) -> List[date]:
    blocked: Set[date] = set()
    for contract in contracts:
        blocked.update(contract_days(contract))
    return sorted(blocked)


def is_date_blocked(day: date, blocked: Iterable[date]) -> bool:
    return day in set(blocked)


def overlapping(
    start: datetime,
    end: datetime,
    contracts: Iterable[Contract],
) -> List[Contract]:
    """Contracts whose ``[start_date, end_date)`` intersects ``[start, end)``."""
    return [
        contract for contract in contracts
        if contract.start_date < end and start < contract.end_date
    ]


def combine_date_hour(day: date, hour) -> datetime:
    """Aware datetime at ``hour``:00 local time on ``day``."""
    naive = datetime.combine(day, time(hour=int(hour)))
    return timezone.make_aware(naive, timezone.get_current_timezone())


def split_date_hour(value: datetime):
    """Inverse of ``combine_date_hour``: (``date``, ``'HH'``) in local time."""
    local = timezone.localtime(value) if timezone.is_aware(value) else value
    return local.date(), f"{local.hour:02d}"


def month_grid(
    year: int,
    month: int,
    blocked: Iterable[date] = (),
    min_date: Optional[date] = None,
) -> List[List[DayCell]]:
    """Weeks (Monday first) of day cells for rendering a booking calendar."""
    blocked_set = set(blocked)
    weeks = []
    for week in calendar.Calendar(firstweekday=0).monthdatescalendar(year, month):
        cells = []
        for day in week:
            is_blocked = day in blocked_set
            too_early = min_date is not None and day < min_date
            cells.append(DayCell(
                day=day,
                in_month=day.month == month,
                blocked=is_blocked,
                disabled=is_blocked or too_early,
            ))
        weeks.append(cells)
    return weeks


def shift_month(year: int, month: int, delta: int):
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def parse_month(value, default: date):
    """(year, month) from ``YYYY-MM``; the month of ``default`` otherwise."""
    try:
        year, month = (int(part) for part in (value or '').split('-'))
    except ValueError:
        return default.year, default.month
    # The grid of December 9999 would spill into year 10000.
    if not 1 <= month <= 12 or not 1 <= year <= MAX_CALENDAR_YEAR:
        return default.year, default.month
    return year, month


def calendar_context(blocked: Sequence[date], month_value=None, min_date: Optional[date] = None) -> dict:
    """Template context for one month of the availability calendar."""
    year, month = parse_month(month_value, min_date or timezone.localdate())
    prev_year, prev_month = shift_month(year, month, -1)
    next_year, next_month = shift_month(year, month, 1)
    return {
        'weeks': month_grid(year, month, blocked, min_date=min_date),
        'month_start': date(year, month, 1),
        'prev_month': f"{prev_year:04d}-{prev_month:02d}",
        'next_month': f"{next_year:04d}-{next_month:02d}",
        'blocked_dates': [day.isoformat() for day in blocked],
    }
