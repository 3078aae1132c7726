"""
Translate API failures that views do not handle into responses.
"""

import logging

from django.contrib import messages
from django.http import Http404
from django.shortcuts import redirect, render

from .exceptions import ApiError, ApiForbidden, ApiNotFound, ApiUnauthorized, ApiUnavailable
from .permissions import end_session, login_url

logger = logging.getLogger(__name__)


class ApiErrorMiddleware:

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        if not isinstance(exception, ApiError):
            return None

        if isinstance(exception, ApiNotFound):
            raise Http404(exception.message)

        if isinstance(exception, ApiUnauthorized):
            logger.info(f"API rejected the session token on {request.path}; logging out")
            end_session(request)
            messages.error(request, exception.message)
            return redirect(login_url(request.get_full_path()))

        if isinstance(exception, ApiForbidden):
            messages.error(request, exception.message)
            return redirect('home')

        logger.error(f"Unhandled API error on {request.path}: {exception}")
        status = 503 if isinstance(exception, ApiUnavailable) else 502
        return render(
            request,
            'service_unavailable.html',
            {'error': exception},
            status=status,
        )
