"""
Session based authentication state and role protection for views.

The API issues the tokens; this site only keeps them in the session.
"""

from dataclasses import dataclass
from functools import wraps
from typing import Optional

from django.conf import settings
from django.contrib import messages
from django.shortcuts import redirect, resolve_url
from django.utils.http import urlencode
from django.utils.translation import gettext_lazy as _

from .client import (
    SESSION_EMAIL_KEY,
    SESSION_REFRESH_KEY,
    SESSION_ROLE_KEY,
    SESSION_TOKEN_KEY,
)

ROLE_USER = 'USER'
ROLE_ADMIN = 'ADMIN'


@dataclass(frozen=True)
class SessionAuth:
    token: Optional[str]
    role: Optional[str]
    email: Optional[str] = None

    @property
    def is_authenticated(self):
        return bool(self.token and self.role)

    @property
    def is_admin(self):
        return self.is_authenticated and self.role == ROLE_ADMIN

    @property
    def is_customer(self):
        return self.is_authenticated and self.role == ROLE_USER

    def has_role(self, role):
        return self.is_authenticated and (role is None or self.role == role)


def session_auth(request) -> SessionAuth:
    return SessionAuth(
        token=request.session.get(SESSION_TOKEN_KEY),
        role=request.session.get(SESSION_ROLE_KEY),
        email=request.session.get(SESSION_EMAIL_KEY),
    )


def start_session(request, login_result, email):
    """Store the tokens of a successful login."""
    request.session.cycle_key()
    request.session[SESSION_TOKEN_KEY] = login_result.access_token
    request.session[SESSION_REFRESH_KEY] = login_result.refresh_token
    request.session[SESSION_ROLE_KEY] = login_result.role
    request.session[SESSION_EMAIL_KEY] = email


def end_session(request):
    request.session.flush()


def login_url(next_path=None):
    url = resolve_url(settings.LOGIN_URL)
    if next_path:
        url = f"{url}?{urlencode({'next': next_path})}"
    return url


def _deny(request, required_role):
    auth = session_auth(request)
    if not auth.is_authenticated:
        return redirect(login_url(request.get_full_path()))
    if not auth.has_role(required_role):
        messages.error(request, _('You do not have access to that page.'))
        return redirect('home')
    return None


def role_required(required_role=None):
    """Decorator for function views; ``None`` only requires a login."""
    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            denied = _deny(request, required_role)
            if denied is not None:
                return denied
            return view_func(request, *args, **kwargs)
        return wrapper
    return decorator


class LoginRequiredMixin:
    """Redirect anonymous visitors to the login page."""
    required_role = None

    def dispatch(self, request, *args, **kwargs):
        denied = _deny(request, self.required_role)
        if denied is not None:
            return denied
        return super().dispatch(request, *args, **kwargs)


class UserRequiredMixin(LoginRequiredMixin):
    required_role = ROLE_USER


class AdminRequiredMixin(LoginRequiredMixin):
    required_role = ROLE_ADMIN
