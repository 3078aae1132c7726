"""
Aggregations for the admin dashboard.
"""

from collections import Counter
from decimal import Decimal
from typing import Dict, List, Sequence

from apps.cars.records import Car, CarState
from apps.contracts.records import Contract, ContractState

RECENT_CONTRACTS = 10

# Contracts whose price counts as earned
REVENUE_STATES = (ContractState.ACTIVE, ContractState.COMPLETED)


def count_by_state(items, choices) -> Dict[str, int]:
    """Count of ``items`` per state, every known state present (zero if unused)."""
    counts = Counter(item.state for item in items)
    return {value: counts.get(value, 0) for value, _label in choices}


def cars_by_state(cars: Sequence[Car]) -> Dict[str, int]:
    return count_by_state(cars, CarState.choices)


def contracts_by_state(contracts: Sequence[Contract]) -> Dict[str, int]:
    return count_by_state(contracts, ContractState.choices)


def revenue(contracts: Sequence[Contract]) -> Decimal:
    return sum(
        (contract.total_price for contract in contracts if contract.state in REVENUE_STATES),
        Decimal('0')
    )


def recent_contracts(contracts: Sequence[Contract], limit: int = RECENT_CONTRACTS) -> List[Contract]:
    """Most recently started contracts first."""
    return sorted(contracts, key=lambda contract: contract.start_date, reverse=True)[:limit]


def state_chart(counts: Dict[str, int], choices) -> dict:
    """Chart.js data for a per-state count."""
    labels = dict(choices)
    return {
        'labels': [str(labels.get(state, state)) for state in counts],
        'data': list(counts.values()),
    }
