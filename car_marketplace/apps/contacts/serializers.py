"""
Serializers for Contact payloads.
"""

from rest_framework import serializers

from apps.core.serializers import RecordSerializer
from .records import Contact, OperationArea


class OperationAreaSerializer(RecordSerializer):
    record_class = OperationArea

    cityId = serializers.IntegerField(source='city_id')
    cityName = serializers.CharField(source='city_name', default='', allow_blank=True)
    address = serializers.CharField(default='', allow_blank=True, allow_null=True)

    def create(self, validated_data):
        validated_data['address'] = validated_data.get('address') or ''
        return OperationArea(**validated_data)


class ContactSerializer(RecordSerializer):
    record_class = Contact

    id = serializers.IntegerField(required=False, allow_null=True)
    email = serializers.CharField(allow_blank=True)
    phone = serializers.CharField(allow_blank=True)
    operationAreas = serializers.CharField(source='operation_areas', default='', allow_blank=True)
    operationAreasDetails = OperationAreaSerializer(
        source='operation_areas_details', many=True, required=False
    )
    updatedAt = serializers.DateTimeField(source='updated_at', required=False, allow_null=True)

    def create(self, validated_data):
        details = [
            OperationArea(**area)
            for area in validated_data.pop('operation_areas_details', [])
        ]
        return Contact(operation_areas_details=details, **validated_data)


class OperationAreaWriteSerializer(serializers.Serializer):
    cityId = serializers.IntegerField(source='city_id')
    address = serializers.CharField(required=False, allow_blank=True)


class ContactWriteSerializer(serializers.Serializer):
    email = serializers.CharField()
    phone = serializers.CharField()
    operationAreas = OperationAreaWriteSerializer(source='operation_areas', many=True, required=False)
