from decimal import Decimal

import pytest

from apps.cars.records import Car, CarImage, CarState
from apps.cars.services import (
    SHOW_ALL,
    CarFilters,
    filter_cars,
    has_active_filters,
    limit_items,
    main_image,
    paginate_rows,
    parse_choice,
    sort_cars,
)


def make_car(id, **overrides):
    values = dict(
        id=id,
        vin=f'VIN{id}',
        number_plate=f'ABC{id:03d}',
        make='Toyota',
        model='Corolla',
        year=2020,
        price_per_day=Decimal('40'),
        city_id=1,
        fuel_type='PETROL',
        body_type='SEDAN',
        gearbox='MANUAL',
    )
    values.update(overrides)
    return Car(**values)


@pytest.fixture
def cars():
    return [
        make_car(1, make='Toyota', model='Yaris', engine_capacity_l=Decimal('1.0'), seat_count=5),
        make_car(2, make='BMW', model='X5', fuel_type='DIESEL', body_type='SUV',
                 gearbox='AUTOMATIC', engine_capacity_l=Decimal('3.0'), seat_count=7,
                 state=CarState.LEASED),
        make_car(3, make='Tesla', model='Model 3', fuel_type='ELECTRIC', gearbox='AUTOMATIC',
                 engine_capacity_l=None),
        make_car(4, make='Skoda', model='Octavia', body_type='WAGON', engine_capacity_l=Decimal('2.0')),
    ]


def ids(cars):
    return [car.id for car in cars]


def test_empty_filters_keep_everything_in_order(cars):
    assert ids(filter_cars(cars, CarFilters())) == [1, 2, 3, 4]
    assert not CarFilters().is_active()


def test_search_matches_make_or_model_case_insensitively(cars):
    assert ids(filter_cars(cars, CarFilters(search='toy'))) == [1]
    assert ids(filter_cars(cars, CarFilters(search='  OCTAVIA '))) == [4]
    assert ids(filter_cars(cars, CarFilters(search='x5'))) == [2]


def test_enum_filters_combine(cars):
    filters = CarFilters(gearbox='AUTOMATIC', fuel_type='DIESEL')
    assert ids(filter_cars(cars, filters)) == [2]


@pytest.mark.parametrize('bucket, expected', [
    ('<1.5', [1, 3]),
    ('1.5-2.0', [3, 4]),
    ('2.0-3.0', [2, 3]),
    ('>3.0', [3]),
])
def test_engine_capacity_buckets_always_include_cars_without_capacity(cars, bucket, expected):
    assert ids(filter_cars(cars, CarFilters(engine_capacity=bucket))) == expected


def test_zero_engine_capacity_counts_as_unknown():
    car = make_car(9, make='Nissan', model='Leaf', fuel_type='ELECTRIC', engine_capacity_l=Decimal('0'))
    for bucket in ('<1.5', '1.5-2.0', '2.0-3.0', '>3.0'):
        assert ids(filter_cars([car], CarFilters(engine_capacity=bucket))) == [9]


def test_seat_count_and_availability(cars):
    assert ids(filter_cars(cars, CarFilters(seat_count=7))) == [2]
    assert ids(filter_cars(cars, CarFilters(available_only=True))) == [1, 3, 4]


def test_sort_by_sale_price_treats_missing_price_as_zero():
    cars = [
        make_car(1, sale_price=Decimal('15000')),
        make_car(2, sale_price=None),
        make_car(3, sale_price=Decimal('9000')),
    ]
    assert ids(sort_cars(cars, 'sale_price_asc')) == [2, 3, 1]
    assert ids(sort_cars(cars, 'sale_price_desc')) == [1, 3, 2]


def test_sort_by_daily_price_and_unknown_key(cars):
    cars[0].price_per_day = Decimal('30')
    cars[1].price_per_day = Decimal('90')
    cars[2].price_per_day = Decimal('70')
    assert ids(sort_cars(cars, 'price_low')) == [1, 4, 3, 2]
    assert ids(sort_cars(cars, 'price_high')) == [2, 3, 4, 1]
    assert ids(sort_cars(cars, 'bogus')) == [1, 2, 3, 4]


def test_paginate_rows_shows_three_cards_per_row():
    items = list(range(25))
    assert paginate_rows(items, 3) == list(range(9))
    assert paginate_rows(items, 7) == list(range(21))
    assert paginate_rows(items, SHOW_ALL) == items


def test_limit_items():
    items = list(range(60))
    assert len(limit_items(items, 10)) == 10
    assert len(limit_items(items, 50)) == 50
    assert limit_items(items, SHOW_ALL) == items


def test_main_image_prefers_flag_then_order():
    assert main_image(make_car(1)) is None

    flagged = make_car(1, images=[
        CarImage(id=1, url='a.jpg', order=0),
        CarImage(id=2, url='b.jpg', order=1, is_main=True),
    ])
    assert main_image(flagged).id == 2

    unflagged = make_car(1, images=[
        CarImage(id=1, url='a.jpg', order=2),
        CarImage(id=2, url='b.jpg', order=1),
    ])
    assert main_image(unflagged).id == 2


def test_has_active_filters():
    assert not has_active_filters(CarFilters())
    assert has_active_filters(CarFilters(), sort_by='price_low')
    assert has_active_filters(CarFilters(), city_id=2)
    assert has_active_filters(CarFilters(gearbox='MANUAL'))


def test_parse_choice_falls_back_to_default():
    assert parse_choice('20', (10, 20, 50, -1), 10) == 20
    assert parse_choice('-1', (10, 20, 50, -1), 10) == -1
    assert parse_choice('30', (10, 20, 50, -1), 10) == 10
    assert parse_choice(None, (10, 20, 50, -1), 10) == 10
