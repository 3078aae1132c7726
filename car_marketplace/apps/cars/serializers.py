"""
Serializers for Car payloads.
"""

from rest_framework import serializers

from apps.core.serializers import MoneyField, RecordSerializer
from .records import BodyType, Car, CarImage, CarState, FuelType, Gearbox


class CarImageSerializer(RecordSerializer):
    record_class = CarImage

    id = serializers.IntegerField()
    url = serializers.CharField()
    carId = serializers.IntegerField(source='car_id', required=False, allow_null=True)
    isMain = serializers.BooleanField(source='is_main', default=False)
    order = serializers.IntegerField(default=0)


class CarSerializer(RecordSerializer):
    record_class = Car

    id = serializers.IntegerField()
    vin = serializers.CharField(allow_blank=True)
    numberPlate = serializers.CharField(source='number_plate', allow_blank=True)
    make = serializers.CharField()
    model = serializers.CharField()
    year = serializers.IntegerField()
    pricePerDay = MoneyField(source='price_per_day')
    cityId = serializers.IntegerField(source='city_id')
    seatCount = serializers.IntegerField(source='seat_count', default=5)
    fuelType = serializers.ChoiceField(source='fuel_type', choices=FuelType.choices)
    powerKW = serializers.IntegerField(source='power_kw', default=0)
    engineCapacityL = MoneyField(source='engine_capacity_l', required=False, allow_null=True)
    bodyType = serializers.ChoiceField(source='body_type', choices=BodyType.choices)
    gearbox = serializers.ChoiceField(choices=Gearbox.choices)
    state = serializers.ChoiceField(choices=CarState.choices, default=CarState.AVAILABLE)
    odometerKm = serializers.IntegerField(source='odometer_km', default=0)
    colour = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    availableForLease = serializers.BooleanField(source='available_for_lease', default=True)
    availableForSale = serializers.BooleanField(source='available_for_sale', default=False)
    salePrice = MoneyField(source='sale_price', required=False, allow_null=True)
    saleDescription = serializers.CharField(
        source='sale_description', required=False, allow_blank=True, allow_null=True
    )
    images = CarImageSerializer(many=True, required=False)

    def create(self, validated_data):
        images = [CarImage(**image) for image in validated_data.pop('images', [])]
        validated_data['colour'] = validated_data.get('colour') or ''
        validated_data['sale_description'] = validated_data.get('sale_description') or ''
        return Car(images=images, **validated_data)


class CarWriteSerializer(serializers.Serializer):
    """Outgoing car payload; missing keys are left out of the body."""

    vin = serializers.CharField(required=False)
    numberPlate = serializers.CharField(source='number_plate', required=False)
    make = serializers.CharField(required=False)
    model = serializers.CharField(required=False)
    year = serializers.IntegerField(required=False)
    pricePerDay = MoneyField(source='price_per_day', required=False)
    cityId = serializers.IntegerField(source='city_id', required=False)
    seatCount = serializers.IntegerField(source='seat_count', required=False)
    fuelType = serializers.CharField(source='fuel_type', required=False)
    powerKW = serializers.IntegerField(source='power_kw', required=False)
    engineCapacityL = MoneyField(source='engine_capacity_l', required=False, allow_null=True)
    bodyType = serializers.CharField(source='body_type', required=False)
    gearbox = serializers.CharField(required=False)
    state = serializers.CharField(required=False)
    odometerKm = serializers.IntegerField(source='odometer_km', required=False)
