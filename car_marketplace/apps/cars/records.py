"""
Car records and enumerations mirrored from the API.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from django.db import models
from django.utils.translation import gettext_lazy as _


class FuelType(models.TextChoices):
    PETROL = 'PETROL', _('Petrol')
    DIESEL = 'DIESEL', _('Diesel')
    ELECTRIC = 'ELECTRIC', _('Electric')
    HYBRID_HEV = 'HYBRID_HEV', _('Hybrid (HEV)')
    HYBRID_PHEV = 'HYBRID_PHEV', _('Hybrid (PHEV)')


class Gearbox(models.TextChoices):
    MANUAL = 'MANUAL', _('Manual')
    AUTOMATIC = 'AUTOMATIC', _('Automatic')


class BodyType(models.TextChoices):
    SEDAN = 'SEDAN', _('Sedan')
    HATCHBACK = 'HATCHBACK', _('Hatchback')
    SUV = 'SUV', _('SUV')
    WAGON = 'WAGON', _('Wagon')
    COUPE = 'COUPE', _('Coupe')
    CONVERTIBLE = 'CONVERTIBLE', _('Convertible')
    VAN = 'VAN', _('Van')
    PICKUP = 'PICKUP', _('Pickup')


class CarState(models.TextChoices):
    AVAILABLE = 'AVAILABLE', _('Available')
    LEASED = 'LEASED', _('Leased')
    MAINTENANCE = 'MAINTENANCE', _('Under Maintenance')


@dataclass
class CarImage:
    id: int
    url: str
    car_id: Optional[int] = None
    is_main: bool = False
    order: int = 0


@dataclass
class Car:
    id: int
    vin: str
    number_plate: str
    make: str
    model: str
    year: int
    price_per_day: Decimal
    city_id: int
    fuel_type: str
    body_type: str
    gearbox: str
    state: str = CarState.AVAILABLE
    seat_count: int = 5
    power_kw: int = 0
    engine_capacity_l: Optional[Decimal] = None
    odometer_km: int = 0
    colour: str = ''
    available_for_lease: bool = True
    available_for_sale: bool = False
    sale_price: Optional[Decimal] = None
    sale_description: str = ''
    images: List[CarImage] = field(default_factory=list)

    def __str__(self):
        return f"{self.make} {self.model} ({self.number_plate})"

    @property
    def full_name(self):
        return f"{self.make} {self.model} {self.year}"

    @property
    def is_available(self):
        return self.state == CarState.AVAILABLE

    def get_fuel_type_display(self):
        return _label(FuelType, self.fuel_type)

    def get_body_type_display(self):
        return _label(BodyType, self.body_type)

    def get_gearbox_display(self):
        return _label(Gearbox, self.gearbox)

    def get_state_display(self):
        return _label(CarState, self.state)


def _label(choices, value):
    try:
        return choices(value).label
    except ValueError:
        return value
