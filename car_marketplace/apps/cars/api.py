"""
Wrapper for the ``/cars`` endpoints.
"""

import logging
from typing import List, Optional

from apps.core.exceptions import ApiNotFound
from apps.core.resources import ApiResource
from apps.core.serializers import dump, parse
from .records import Car, CarImage
from .serializers import CarImageSerializer, CarSerializer, CarWriteSerializer

logger = logging.getLogger(__name__)


class CarsApi(ApiResource):
    """Catalog reads plus the admin mutations exposed by the API."""

    def list(self, city_id: Optional[int] = None) -> List[Car]:
        return self.query(
            ('cars', city_id),
            lambda: parse(
                CarSerializer,
                self.client.get('/cars', params={'cityId': city_id}),
                many=True,
            ),
        )

    def list_for_sale(self, city_id: Optional[int] = None) -> List[Car]:
        return self.query(
            ('cars-for-sale', city_id),
            lambda: parse(
                CarSerializer,
                self.client.get('/cars/for-sale', params={'cityId': city_id}),
                many=True,
            ),
        )

    def get(self, car_id: int) -> Car:
        return self.query(
            ('car', car_id),
            lambda: parse(CarSerializer, self.client.get(f'/cars/{car_id}')),
        )

    def get_many(self, car_ids) -> dict:
        """Fetch each distinct car once; unknown ids are skipped."""
        cars = {}
        for car_id in sorted(set(car_ids)):
            try:
                cars[car_id] = self.get(car_id)
            except ApiNotFound:
                logger.warning(f"Car {car_id} referenced by a contract no longer exists")
        return cars

    def create(self, data: dict) -> Car:
        car = parse(CarSerializer, self.client.post('/cars', json=dump(CarWriteSerializer, data)))
        self.invalidate('cars', 'cars-for-sale', 'city-cars')
        logger.info(f"Car created: {car.id}")
        return car

    def update(self, car_id: int, data: dict) -> Car:
        car = parse(
            CarSerializer,
            self.client.put(f'/cars/{car_id}', json=dump(CarWriteSerializer, data)),
        )
        self.invalidate('cars', 'cars-for-sale', 'city-cars', 'car')
        logger.info(f"Car updated: {car_id}")
        return car

    def delete(self, car_id: int) -> None:
        self.client.delete(f'/cars/{car_id}')
        self.invalidate('cars', 'cars-for-sale', 'city-cars', 'car')
        logger.info(f"Car deleted: {car_id}")

    def contracts(self, car_id: int):
        from apps.contracts.serializers import ContractSerializer

        return self.query(
            ('car-contracts', car_id, self.client.identity),
            lambda: parse(
                ContractSerializer,
                self.client.get(f'/cars/{car_id}/contracts'),
                many=True,
            ),
        )

    def images(self, car_id: int) -> List[CarImage]:
        return self.query(
            ('car-images', car_id),
            lambda: parse(
                CarImageSerializer,
                self.client.get(f'/cars/{car_id}/images'),
                many=True,
            ),
        )
