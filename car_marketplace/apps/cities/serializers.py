"""
Serializers for City payloads.
"""

from rest_framework import serializers

from apps.core.serializers import RecordSerializer
from .records import City


class CitySerializer(RecordSerializer):
    record_class = City

    id = serializers.IntegerField()
    name = serializers.CharField()
    country = serializers.CharField(allow_blank=True, default='')


class CityWriteSerializer(serializers.Serializer):
    name = serializers.CharField()
    country = serializers.CharField()
