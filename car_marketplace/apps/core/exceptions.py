"""
Exceptions raised by the remote API client.
"""

from typing import Any, Dict, Optional

import httpx


class ApiError(Exception):
    """Base class for every failure talking to the remote API."""

    default_message = 'The car rental service returned an error.'

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message or self.default_message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self):
        if self.status_code:
            return f"{self.message} (HTTP {self.status_code})"
        return self.message


class ApiBadRequest(ApiError):
    default_message = 'The request was rejected by the service.'


class ApiUnauthorized(ApiError):
    default_message = 'Your session has expired. Please log in again.'


class ApiForbidden(ApiError):
    default_message = 'You do not have permission to perform this action.'


class ApiNotFound(ApiError):
    default_message = 'The requested resource was not found.'


class ApiConflict(ApiError):
    default_message = 'The request conflicts with existing data.'


class ApiServerError(ApiError):
    default_message = 'The car rental service is experiencing problems.'


class ApiUnavailable(ApiError):
    """Raised when the API could not be reached at all."""

    default_message = 'The car rental service is unavailable. Please try again later.'


STATUS_EXCEPTIONS = {
    400: ApiBadRequest,
    401: ApiUnauthorized,
    403: ApiForbidden,
    404: ApiNotFound,
    409: ApiConflict,
    422: ApiBadRequest,
}


def error_message_from_body(body: Any) -> Optional[str]:
    """Pull a human readable message out of an API error body."""
    if isinstance(body, dict):
        for key in ('error', 'message', 'detail'):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    if isinstance(body, str) and body.strip():
        return body.strip()
    return None


def raise_for_response(response: httpx.Response) -> None:
    """Raise the matching ApiError subclass for a non-2xx response."""
    if response.is_success:
        return

    try:
        body = response.json()
    except ValueError:
        body = response.text

    details = body.get('details') if isinstance(body, dict) else None
    status = response.status_code
    if status >= 500:
        exc_class = ApiServerError
    else:
        exc_class = STATUS_EXCEPTIONS.get(status, ApiError)

    raise exc_class(
        message=error_message_from_body(body),
        status_code=status,
        details=details if isinstance(details, dict) else None,
    )
