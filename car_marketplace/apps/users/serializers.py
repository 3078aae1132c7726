"""
Serializers for authentication and user payloads.
"""

from rest_framework import serializers

from apps.core.serializers import RecordSerializer
from .records import LoginResult, User, UserRole


class UserSerializer(RecordSerializer):
    record_class = User

    id = serializers.IntegerField()
    email = serializers.CharField()
    role = serializers.ChoiceField(choices=UserRole.choices, default=UserRole.USER)
    firstName = serializers.CharField(source='first_name', required=False, allow_blank=True, allow_null=True)
    lastName = serializers.CharField(source='last_name', required=False, allow_blank=True, allow_null=True)
    phone = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    phoneNumber = serializers.CharField(
        source='phone_number', required=False, allow_blank=True, allow_null=True
    )
    createdAt = serializers.DateTimeField(source='created_at', required=False, allow_null=True)

    def create(self, validated_data):
        # Older API builds call the field ``phoneNumber``.
        phone_number = validated_data.pop('phone_number', None)
        validated_data['phone'] = validated_data.get('phone') or phone_number or ''
        validated_data['first_name'] = validated_data.get('first_name') or ''
        validated_data['last_name'] = validated_data.get('last_name') or ''
        return User(**validated_data)


class LoginResultSerializer(RecordSerializer):
    record_class = LoginResult

    accessToken = serializers.CharField(source='access_token')
    refreshToken = serializers.CharField(source='refresh_token', default='', allow_blank=True)
    refreshExpiresAt = serializers.DateTimeField(
        source='refresh_expires_at', required=False, allow_null=True
    )
    role = serializers.ChoiceField(choices=UserRole.choices)


class CredentialsSerializer(serializers.Serializer):
    email = serializers.CharField()
    password = serializers.CharField()
    role = serializers.CharField(required=False)


class ProfileUpdateSerializer(serializers.Serializer):
    email = serializers.CharField()
    firstName = serializers.CharField(source='first_name', required=False, allow_null=True)
    lastName = serializers.CharField(source='last_name', required=False, allow_null=True)
    phoneNumber = serializers.CharField(source='phone', required=False, allow_null=True)
    password = serializers.CharField(required=False)
