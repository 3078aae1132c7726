"""
Wrapper for the ``/contracts`` endpoints.
"""

import logging
from typing import List

from apps.cars.api import CarsApi
from apps.core.exceptions import ApiError
from apps.core.resources import ApiResource
from apps.core.serializers import dump, parse
from .availability import blocking_contracts
from .records import Contract
from .serializers import (
    ContractCompleteSerializer,
    ContractCreateSerializer,
    ContractSerializer,
    ContractUpdateSerializer,
)

logger = logging.getLogger(__name__)

# Every cached view of contract data; mutations invalidate all of them.
CONTRACT_QUERY_PREFIXES = ('admin-contracts', 'my-contracts', 'contract', 'car-contracts')


class ContractsApi(ApiResource):
    """Bookings of the current user and the admin back-office."""

    def list(self) -> List[Contract]:
        """All contracts (ADMIN only)."""
        return self.query(
            ('admin-contracts', self.client.identity),
            lambda: parse(ContractSerializer, self.client.get('/contracts'), many=True),
        )

    def mine(self) -> List[Contract]:
        """Contracts of the logged in user."""
        return self.query(
            ('my-contracts', self.client.identity),
            lambda: parse(ContractSerializer, self.client.get('/contracts/my'), many=True),
        )

    def get(self, contract_id: int) -> Contract:
        return self.query(
            ('contract', contract_id, self.client.identity),
            lambda: parse(ContractSerializer, self.client.get(f'/contracts/{contract_id}')),
        )

    def for_car(self, car_id: int) -> List[Contract]:
        """Contracts of one car, taken from the full admin list."""
        return [contract for contract in self.list() if contract.car_id == car_id]

    def create(self, data: dict) -> Contract:
        payload = dump(ContractCreateSerializer, data)
        contract = parse(ContractSerializer, self.client.post('/contracts', json=payload))
        self._changed()
        logger.info(f"Contract created: {contract.id} for car {contract.car_id}")
        return contract

    def update(self, contract_id: int, data: dict) -> Contract:
        payload = dump(ContractUpdateSerializer, data, partial=True)
        contract = parse(
            ContractSerializer,
            self.client.put(f'/contracts/{contract_id}', json=payload),
        )
        self._changed()
        logger.info(f"Contract updated: {contract_id}")
        return contract

    def delete(self, contract_id: int) -> None:
        self.client.delete(f'/contracts/{contract_id}')
        self._changed()
        logger.info(f"Contract deleted: {contract_id}")

    def complete(self, contract_id: int, data: dict) -> Contract:
        payload = dump(ContractCompleteSerializer, data, partial=True)
        contract = parse(
            ContractSerializer,
            self.client.post(f'/contracts/{contract_id}/complete', json=payload),
        )
        self._changed()
        logger.info(f"Contract completed: {contract_id}")
        return contract

    def cancel(self, contract_id: int) -> Contract:
        contract = parse(ContractSerializer, self.client.post(f'/contracts/{contract_id}/cancel'))
        self._changed()
        logger.info(f"Contract cancelled: {contract_id}")
        return contract

    def activate(self, contract_id: int) -> Contract:
        contract = parse(ContractSerializer, self.client.post(f'/contracts/{contract_id}/activate'))
        self._changed()
        logger.info(f"Contract activated: {contract_id}")
        return contract

    def _changed(self):
        # Car state follows contract state on the server side.
        self.invalidate(*CONTRACT_QUERY_PREFIXES, 'car', 'cars')


def car_blocking_contracts(client, car_id: int, exclude_id=None) -> List[Contract]:
    """Contracts occupying ``car_id`` as published by the car endpoint.

    Returns an empty list when the API refuses to share them; the API still
    rejects overlapping bookings on its own.
    """
    try:
        contracts = CarsApi(client).contracts(car_id)
    except ApiError as e:
        logger.warning(f"Contracts of car {car_id} unavailable: {e}")
        return []
    return blocking_contracts(contracts, car_id, exclude_id=exclude_id)
