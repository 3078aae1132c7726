"""Pytest fixtures: a fake remote API and logged in browser sessions."""

from types import SimpleNamespace
from unittest import mock

import httpx
import pytest
from django.conf import settings
from django.core.cache import cache

from apps.core.client import (
    SESSION_EMAIL_KEY,
    SESSION_REFRESH_KEY,
    SESSION_ROLE_KEY,
    SESSION_TOKEN_KEY,
    ApiClient,
)

API_BASE_URL = 'http://api.test/api'


class FakeApi:
    """Canned JSON responses keyed by (method, path); records every request."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, method, path, json=None, status=200):
        self.routes[(method, path)] = (status, json)

    def handler(self, request):
        path = request.url.path[len('/api'):]
        self.requests.append(request)
        if (request.method, path) not in self.routes:
            return httpx.Response(404, json={'error': f'No route for {request.method} {path}'})
        status, body = self.routes[(request.method, path)]
        if callable(body):
            body = body(request)
        return httpx.Response(status, json=body)

    def calls(self, method, path):
        return [
            request for request in self.requests
            if request.method == method and request.url.path == f'/api{path}'
        ]

    def client(self, token=None, retries=0):
        return ApiClient(
            base_url=API_BASE_URL,
            token=token,
            retries=retries,
            transport=httpx.MockTransport(self.handler),
        )


@pytest.fixture(autouse=True)
def clear_query_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def fake_api():
    """Route every view's ApiClient to a FakeApi."""
    api = FakeApi()

    def build(request):
        return api.client(token=request.session.get(SESSION_TOKEN_KEY))

    with mock.patch.object(ApiClient, 'for_request', side_effect=build):
        yield api


def log_in(client, role, token='test-token', email='someone@example.com'):
    session = client.session
    session[SESSION_TOKEN_KEY] = token
    session[SESSION_REFRESH_KEY] = 'refresh-token'
    session[SESSION_ROLE_KEY] = role
    session[SESSION_EMAIL_KEY] = email
    session.save()
    client.cookies[settings.SESSION_COOKIE_NAME] = session.session_key
    return client


@pytest.fixture
def customer_client(client):
    return log_in(client, 'USER', token='customer-token', email='customer@example.com')


@pytest.fixture
def back_office_client(client):
    return log_in(client, 'ADMIN', token='admin-token', email='admin@example.com')


def city_json(id=1, name='Vilnius', country='Lithuania'):
    return {'id': id, 'name': name, 'country': country}


def car_json(id=1, **overrides):
    data = {
        'id': id,
        'vin': f'VIN{id:014d}',
        'numberPlate': f'ABC{id:03d}',
        'make': 'Toyota',
        'model': 'Corolla',
        'year': 2020,
        'pricePerDay': 40.0,
        'cityId': 1,
        'seatCount': 5,
        'fuelType': 'PETROL',
        'powerKW': 90,
        'engineCapacityL': 1.6,
        'bodyType': 'SEDAN',
        'gearbox': 'MANUAL',
        'state': 'AVAILABLE',
        'odometerKm': 42000,
        'availableForLease': True,
        'availableForSale': False,
        'images': [],
    }
    data.update(overrides)
    return data


def contract_json(id=1, **overrides):
    data = {
        'id': id,
        'userId': 7,
        'carId': 1,
        'startDate': '2030-05-01T07:00:00Z',
        'endDate': '2030-05-03T07:00:00Z',
        'totalPrice': 80.0,
        'state': 'DRAFT',
        'mileageStartKm': 42000,
        'fuelLevelStartPct': 100,
        'extraFees': 0,
        'notes': None,
    }
    data.update(overrides)
    return data


def user_json(id=7, **overrides):
    data = {
        'id': id,
        'email': 'customer@example.com',
        'role': 'USER',
        'firstName': 'Rasa',
        'lastName': 'Kazlauskaite',
        'phone': '+37060000000',
    }
    data.update(overrides)
    return data


@pytest.fixture
def payloads():
    """JSON builders shaped like the API's responses."""
    return SimpleNamespace(city=city_json, car=car_json, contract=contract_json, user=user_json)
