"""
HTTP client for the remote car rental REST API.
"""

import hashlib
import logging
from typing import Any, Dict, Optional

import httpx
from django.conf import settings

from .exceptions import ApiServerError, ApiUnavailable, raise_for_response

logger = logging.getLogger(__name__)

SESSION_TOKEN_KEY = 'access_token'
SESSION_REFRESH_KEY = 'refresh_token'
SESSION_ROLE_KEY = 'role'
SESSION_EMAIL_KEY = 'email'

RETRYABLE_METHODS = ('GET',)


class ApiClient:
    """
    Thin synchronous wrapper around ``httpx.Client``.

    Read requests are retried ``retries`` times on transport errors and
    5xx responses. Mutations are sent exactly once.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        retries: Optional[int] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip('/')
        self.token = token
        self.retries = settings.API_RETRIES if retries is None else retries
        timeout = settings.API_TIMEOUT_SECONDS if timeout is None else timeout

        headers = {'Accept': 'application/json'}
        if token:
            headers['Authorization'] = f"Bearer {token}"

        self._http = httpx.Client(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def for_request(cls, request):
        """Build a client authenticated with the token held in the session."""
        return cls(token=request.session.get(SESSION_TOKEN_KEY))

    @property
    def identity(self) -> str:
        """Stable, non-reversible tag of the caller used to scope cached data."""
        if not self.token:
            return 'anonymous'
        return hashlib.sha256(self.token.encode('utf-8')).hexdigest()[:16]

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
    ) -> Any:
        method = method.upper()
        if params:
            params = {key: value for key, value in params.items() if value not in (None, '')}

        attempts = 1 + max(self.retries, 0) if method in RETRYABLE_METHODS else 1

        for attempt in range(1, attempts + 1):
            logger.debug(f"API {method} {path} params={params} attempt={attempt}")
            try:
                response = self._http.request(method, path, params=params or None, json=json)
            except httpx.TransportError as e:
                if attempt < attempts:
                    logger.warning(f"API {method} {path} failed ({e}); retrying")
                    continue
                logger.error(f"API {method} {path} unreachable: {e}")
                raise ApiUnavailable(status_code=None, details={'reason': str(e)}) from e

            if response.status_code >= 500 and attempt < attempts:
                logger.warning(
                    f"API {method} {path} returned {response.status_code}; retrying"
                )
                continue

            try:
                raise_for_response(response)
            except ApiServerError:
                logger.error(f"API {method} {path} returned {response.status_code}")
                raise

            if not response.content:
                return None
            return response.json()

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request('GET', path, params=params)

    def post(self, path: str, json: Any = None) -> Any:
        return self.request('POST', path, json=json)

    def put(self, path: str, json: Any = None) -> Any:
        return self.request('PUT', path, json=json)

    def delete(self, path: str) -> Any:
        return self.request('DELETE', path)

    def close(self):
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
