from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal

from django.utils import translation

from apps.cars.records import Car, CarState
from apps.contracts.records import Contract, ContractState
from apps.dashboard.stats import (
    cars_by_state,
    contracts_by_state,
    recent_contracts,
    revenue,
    state_chart,
)

START = datetime(2030, 5, 1, 7, tzinfo=dt_timezone.utc)


def make_car(id, state):
    return Car(
        id=id, vin=f'VIN{id}', number_plate=f'ABC{id:03d}', make='Skoda', model='Octavia',
        year=2019, price_per_day=Decimal('35'), city_id=1,
        fuel_type='DIESEL', body_type='WAGON', gearbox='MANUAL', state=state,
    )


def make_contract(id, state, total='100', days_later=0):
    start = START + timedelta(days=days_later)
    return Contract(
        id=id, user_id=7, car_id=1,
        start_date=start, end_date=start + timedelta(days=2),
        total_price=Decimal(total), state=state,
    )


def test_car_counts_include_unused_states():
    cars = [make_car(1, CarState.AVAILABLE), make_car(2, CarState.AVAILABLE), make_car(3, CarState.LEASED)]
    assert cars_by_state(cars) == {
        CarState.AVAILABLE: 2,
        CarState.LEASED: 1,
        CarState.MAINTENANCE: 0,
    }


def test_contract_counts_on_empty_list_are_zero():
    assert set(contracts_by_state([]).values()) == {0}
    assert len(contracts_by_state([])) == len(ContractState.choices)


def test_revenue_counts_active_and_completed_only():
    contracts = [
        make_contract(1, ContractState.ACTIVE, '100'),
        make_contract(2, ContractState.COMPLETED, '250.50'),
        make_contract(3, ContractState.DRAFT, '80'),
        make_contract(4, ContractState.CANCELLED, '60'),
    ]
    assert revenue(contracts) == Decimal('350.50')
    assert revenue([]) == Decimal('0')


def test_recent_contracts_newest_first_and_limited():
    contracts = [make_contract(id, ContractState.DRAFT, days_later=id) for id in range(1, 6)]
    assert [c.id for c in recent_contracts(contracts, limit=3)] == [5, 4, 3]


def test_state_chart_uses_labels():
    with translation.override('en'):
        chart = state_chart(
            {CarState.AVAILABLE: 4, CarState.LEASED: 1, CarState.MAINTENANCE: 0},
            CarState.choices
        )
    assert chart == {'labels': ['Available', 'Leased', 'Under Maintenance'], 'data': [4, 1, 0]}
