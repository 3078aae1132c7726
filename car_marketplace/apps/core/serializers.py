"""
Shared serializer helpers for API payloads.

The API speaks camelCase JSON; serializer fields are named after the wire
keys and use ``source`` to map onto snake_case record attributes.
"""

from rest_framework import serializers

from .exceptions import ApiError


class MoneyField(serializers.DecimalField):
    """Decimal amount without a fixed precision, sent back to the API as a number."""

    def __init__(self, **kwargs):
        super().__init__(max_digits=None, decimal_places=None, **kwargs)

    def to_representation(self, value):
        value = super().to_representation(value)
        return float(value)


class RecordSerializer(serializers.Serializer):
    """Serializer whose ``save()`` builds ``record_class`` from validated data."""

    record_class = None

    def create(self, validated_data):
        return self.record_class(**validated_data)


def parse(serializer_class, data, many=False):
    """Validate an API response body and turn it into record(s)."""
    if data is None:
        return [] if many else None

    serializer = serializer_class(data=data, many=many)
    if not serializer.is_valid():
        raise ApiError(
            message='The car rental service returned an unexpected response.',
            details={'errors': serializer.errors},
        )
    return serializer.save()


def dump(serializer_class, payload, partial=False):
    """Render a dict or record as camelCase JSON ready for the API."""
    data = serializer_class(payload).data
    if partial:
        return {key: value for key, value in data.items() if value is not None}
    return dict(data)
