"""
User account records mirrored from the API.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from django.db import models
from django.utils.translation import gettext_lazy as _


class UserRole(models.TextChoices):
    USER = 'USER', _('User')
    ADMIN = 'ADMIN', _('Admin')


@dataclass
class User:
    id: int
    email: str
    role: str = UserRole.USER
    first_name: str = ''
    last_name: str = ''
    phone: str = ''
    created_at: Optional[datetime] = None

    def __str__(self):
        return self.display_name

    @property
    def display_name(self):
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name}"
        return self.email

    @property
    def is_admin(self):
        return self.role == UserRole.ADMIN


@dataclass
class LoginResult:
    access_token: str
    role: str
    refresh_token: str = ''
    refresh_expires_at: Optional[datetime] = None
