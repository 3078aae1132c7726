"""
Template context processors.
"""

from .permissions import session_auth


def auth_state(request):
    """Expose the session login state as ``auth`` in every template."""
    return {'auth': session_auth(request)}
