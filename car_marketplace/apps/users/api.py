"""
Wrappers for the ``/auth`` and ``/users`` endpoints.
"""

import logging
from typing import List

from apps.core.resources import ApiResource
from apps.core.serializers import dump, parse
from .records import LoginResult, User, UserRole
from .serializers import (
    CredentialsSerializer,
    LoginResultSerializer,
    ProfileUpdateSerializer,
    UserSerializer,
)

logger = logging.getLogger(__name__)


class AuthApi(ApiResource):
    """Registration, login and logout. Token refresh is not used."""

    def register(self, email: str, password: str, role: str = UserRole.USER) -> None:
        payload = dump(CredentialsSerializer, {'email': email, 'password': password, 'role': role})
        self.client.post('/auth/register', json=payload)
        logger.info(f"Account registered: {email}")

    def login(self, email: str, password: str) -> LoginResult:
        payload = dump(CredentialsSerializer, {'email': email, 'password': password})
        result = parse(LoginResultSerializer, self.client.post('/auth/login', json=payload))
        logger.info(f"Login succeeded for {email} as {result.role}")
        return result

    def logout(self, refresh_token: str) -> None:
        self.client.post('/auth/logout', json={'refreshToken': refresh_token})


class UsersApi(ApiResource):

    def me(self) -> User:
        return self.query(
            ('me', self.client.identity),
            lambda: parse(UserSerializer, self.client.get('/users/me')),
        )

    def update_me(self, data: dict) -> User:
        payload = dump(ProfileUpdateSerializer, data, partial=True)
        user = parse(UserSerializer, self.client.put('/users/me', json=payload))
        self.invalidate('me', 'users', 'user')
        logger.info(f"Profile updated for user {user.id}")
        return user

    def list(self) -> List[User]:
        """Every account (ADMIN only)."""
        return self.query(
            ('users', self.client.identity),
            lambda: parse(UserSerializer, self.client.get('/users'), many=True),
        )

    def get(self, user_id: int) -> User:
        return self.query(
            ('user', user_id, self.client.identity),
            lambda: parse(UserSerializer, self.client.get(f'/users/{user_id}')),
        )
