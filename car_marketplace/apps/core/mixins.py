"""
View mixins shared by the apps.
"""

from .client import ApiClient


class ApiClientMixin:
    """Open one API client per request as ``self.client``."""

    def dispatch(self, request, *args, **kwargs):
        with ApiClient.for_request(request) as client:
            self.client = client
            return super().dispatch(request, *args, **kwargs)
