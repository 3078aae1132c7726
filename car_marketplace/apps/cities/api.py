"""
Wrapper for the ``/cities`` endpoints.
"""

import logging
from typing import List

from apps.core.resources import ApiResource
from apps.core.serializers import dump, parse
from .records import City
from .serializers import CitySerializer, CityWriteSerializer

logger = logging.getLogger(__name__)


class CitiesApi(ApiResource):
    """City lookups used by the catalog filters and the home page."""

    def list(self) -> List[City]:
        return self.query(
            ('cities',),
            lambda: parse(CitySerializer, self.client.get('/cities'), many=True),
        )

    def get(self, city_id: int) -> City:
        return self.query(
            ('city', city_id),
            lambda: parse(CitySerializer, self.client.get(f'/cities/{city_id}')),
        )

    def create(self, data: dict) -> City:
        city = parse(CitySerializer, self.client.post('/cities', json=dump(CityWriteSerializer, data)))
        self.invalidate('cities')
        logger.info(f"City created: {city.id}")
        return city

    def update(self, city_id: int, data: dict) -> City:
        city = parse(
            CitySerializer,
            self.client.put(f'/cities/{city_id}', json=dump(CityWriteSerializer, data)),
        )
        self.invalidate('cities', 'city')
        return city

    def delete(self, city_id: int) -> None:
        self.client.delete(f'/cities/{city_id}')
        self.invalidate('cities', 'city', 'cars')
        logger.info(f"City deleted: {city_id}")

    def cars(self, city_id: int):
        from apps.cars.serializers import CarSerializer

        return self.query(
            ('city-cars', city_id),
            lambda: parse(CarSerializer, self.client.get(f'/cities/{city_id}/cars'), many=True),
        )

