"""
Contract records mirrored from the API.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from django.db import models
from django.utils.translation import gettext_lazy as _


class ContractState(models.TextChoices):
    DRAFT = 'DRAFT', _('Draft')
    ACTIVE = 'ACTIVE', _('Active')
    COMPLETED = 'COMPLETED', _('Completed')
    CANCELLED = 'CANCELLED', _('Cancelled')


# States a customer may still cancel from.
CANCELLABLE_STATES = (ContractState.DRAFT, ContractState.ACTIVE)


@dataclass
class Contract:
    id: int
    user_id: int
    car_id: int
    start_date: datetime
    end_date: datetime
    total_price: Decimal
    state: str = ContractState.DRAFT
    mileage_start_km: int = 0
    mileage_end_km: Optional[int] = None
    fuel_level_start_pct: int = 100
    fuel_level_end_pct: Optional[int] = None
    extra_fees: Decimal = Decimal('0')
    notes: Optional[str] = None

    def __str__(self):
        return f"Contract #{self.id} ({self.state})"

    @property
    def is_cancellable(self):
        return self.state in CANCELLABLE_STATES

    @property
    def can_activate(self):
        return self.state == ContractState.DRAFT

    @property
    def can_complete(self):
        return self.state == ContractState.ACTIVE

    @property
    def is_cancelled(self):
        return self.state == ContractState.CANCELLED

    def get_state_display(self):
        try:
            return ContractState(self.state).label
        except ValueError:
            return self.state
