"""
Filtering, sorting and paging of already fetched car lists.
"""

from dataclasses import dataclass, fields
from decimal import Decimal
from typing import Callable, Dict, List, Optional, Sequence

from .records import Car, CarImage, CarState

CARS_PER_ROW = 3
SHOW_ALL = -1

ROWS_PER_PAGE_CHOICES = (3, 7, 17, SHOW_ALL)
ITEMS_PER_PAGE_CHOICES = (10, 20, 50, SHOW_ALL)

# Engine capacity buckets in litres
ENGINE_CAPACITY_BUCKETS: Dict[str, Callable[[Decimal], bool]] = {
    '<1.5': lambda litres: litres < Decimal('1.5'),
    '1.5-2.0': lambda litres: Decimal('1.5') <= litres <= Decimal('2.0'),
    '2.0-3.0': lambda litres: Decimal('2.0') < litres <= Decimal('3.0'),
    '>3.0': lambda litres: litres > Decimal('3.0'),
}

SEAT_COUNT_CHOICES = (2, 4, 5, 7, 9)


@dataclass
class CarFilters:
    """Criteria applied to a car list; empty values match everything."""
    search: str = ''
    fuel_type: str = ''
    body_type: str = ''
    gearbox: str = ''
    engine_capacity: str = ''
    seat_count: Optional[int] = None
    available_only: bool = False

    def is_active(self) -> bool:
        return any(
            getattr(self, f.name)
            for f in fields(self)
            if f.name != 'available_only'
        )


def matches_search(car: Car, term: str) -> bool:
    term = term.strip().lower()
    if not term:
        return True
    return term in car.make.lower() or term in car.model.lower()


def matches_engine_capacity(car: Car, bucket: str) -> bool:
    # Cars without a recorded capacity (None or 0, e.g. electric) are never filtered out.
    if not bucket or not car.engine_capacity_l:
        return True
    check = ENGINE_CAPACITY_BUCKETS.get(bucket)
    if check is None:
        return True
    return check(Decimal(car.engine_capacity_l))


def car_matches(car: Car, filters: CarFilters) -> bool:
    if not matches_search(car, filters.search):
        return False
    if filters.fuel_type and car.fuel_type != filters.fuel_type:
        return False
    if filters.body_type and car.body_type != filters.body_type:
        return False
    if filters.gearbox and car.gearbox != filters.gearbox:
        return False
    if not matches_engine_capacity(car, filters.engine_capacity):
        return False
    if filters.seat_count and car.seat_count != filters.seat_count:
        return False
    if filters.available_only and car.state != CarState.AVAILABLE:
        return False
    return True


def filter_cars(cars: Sequence[Car], filters: CarFilters) -> List[Car]:
    """Return the cars matching every criterion, preserving input order."""
    return [car for car in cars if car_matches(car, filters)]


def _sale_price(car: Car) -> Decimal:
    return car.sale_price or Decimal('0')


SORT_OPTIONS = {
    'sale_price_asc': (_sale_price, False),
    'sale_price_desc': (_sale_price, True),
    'price_low': (lambda car: car.price_per_day, False),
    'price_high': (lambda car: car.price_per_day, True),
    'newest': (lambda car: car.year, True),
}


def sort_cars(cars: Sequence[Car], sort_by: str = '') -> List[Car]:
    """Stable sort by one of ``SORT_OPTIONS``; unknown keys keep input order."""
    option = SORT_OPTIONS.get(sort_by or '')
    if option is None:
        return list(cars)
    key, reverse = option
    return sorted(cars, key=key, reverse=reverse)


def limit_items(items: Sequence, per_page: int) -> list:
    """First ``per_page`` items, or all of them for ``SHOW_ALL``."""
    if per_page == SHOW_ALL or per_page is None:
        return list(items)
    return list(items[:max(per_page, 0)])


def paginate_rows(items: Sequence, rows: int, per_row: int = CARS_PER_ROW) -> list:
    """Cards shown for ``rows`` grid rows of ``per_row`` cards each."""
    if rows == SHOW_ALL:
        return list(items)
    return limit_items(items, rows * per_row)


def main_image(car: Car) -> Optional[CarImage]:
    if not car.images:
        return None
    for image in car.images:
        if image.is_main:
            return image
    return min(car.images, key=lambda image: image.order)


def has_active_filters(filters: CarFilters, sort_by: str = '', city_id: Optional[int] = None) -> bool:
    return bool(filters.is_active() or sort_by or city_id)


def parse_choice(value, choices, default):
    """Coerce a query string value to one of ``choices`` (ints)."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number in choices else default
