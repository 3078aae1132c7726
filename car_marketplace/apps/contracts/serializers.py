"""
Serializers for Contract payloads.
"""

from datetime import timezone
from decimal import Decimal

from rest_framework import serializers

from apps.core.serializers import MoneyField, RecordSerializer
from .records import Contract, ContractState


class UtcDateTimeField(serializers.DateTimeField):
    """ISO 8601 timestamps rendered in UTC with a ``Z`` suffix."""

    def __init__(self, **kwargs):
        kwargs.setdefault('default_timezone', timezone.utc)
        super().__init__(**kwargs)


class ContractSerializer(RecordSerializer):
    record_class = Contract

    id = serializers.IntegerField()
    userId = serializers.IntegerField(source='user_id')
    carId = serializers.IntegerField(source='car_id')
    startDate = serializers.DateTimeField(source='start_date')
    endDate = serializers.DateTimeField(source='end_date')
    totalPrice = MoneyField(source='total_price')
    state = serializers.ChoiceField(choices=ContractState.choices)
    mileageStartKm = serializers.IntegerField(source='mileage_start_km', default=0)
    mileageEndKm = serializers.IntegerField(source='mileage_end_km', required=False, allow_null=True)
    fuelLevelStartPct = serializers.IntegerField(source='fuel_level_start_pct', default=100)
    fuelLevelEndPct = serializers.IntegerField(
        source='fuel_level_end_pct', required=False, allow_null=True
    )
    extraFees = MoneyField(source='extra_fees', default=Decimal('0'))
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class ContractCreateSerializer(serializers.Serializer):
    carId = serializers.IntegerField(source='car_id')
    startDate = UtcDateTimeField(source='start_date')
    endDate = UtcDateTimeField(source='end_date')
    mileageStartKm = serializers.IntegerField(source='mileage_start_km')
    fuelLevelStartPct = serializers.IntegerField(source='fuel_level_start_pct')
    notes = serializers.CharField(required=False, allow_null=True)


class ContractUpdateSerializer(serializers.Serializer):
    carId = serializers.IntegerField(source='car_id', required=False)
    startDate = UtcDateTimeField(source='start_date', required=False)
    endDate = UtcDateTimeField(source='end_date', required=False)
    state = serializers.CharField(required=False)
    mileageEndKm = serializers.IntegerField(source='mileage_end_km', required=False)
    fuelLevelEndPct = serializers.IntegerField(source='fuel_level_end_pct', required=False)
    notes = serializers.CharField(required=False, allow_null=True)


class ContractCompleteSerializer(serializers.Serializer):
    mileageEndKm = serializers.IntegerField(source='mileage_end_km')
    fuelLevelEndPct = serializers.IntegerField(source='fuel_level_end_pct')
    damageFee = MoneyField(source='damage_fee', required=False)
    notes = serializers.CharField(required=False, allow_null=True)
