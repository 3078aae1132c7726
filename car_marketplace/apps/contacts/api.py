"""
Wrapper for the ``/contacts`` endpoint.
"""

import logging
from typing import Optional

from apps.core.exceptions import ApiError
from apps.core.resources import ApiResource
from apps.core.serializers import dump, parse
from .records import Contact
from .serializers import ContactSerializer, ContactWriteSerializer

logger = logging.getLogger(__name__)


class ContactsApi(ApiResource):

    def get(self) -> Optional[Contact]:
        """Public contact details, or ``None`` while none are configured."""
        try:
            return self.query(
                ('contacts',),
                lambda: parse(ContactSerializer, self.client.get('/contacts')),
            )
        except ApiError as e:
            logger.warning(f"Contacts endpoint not available: {e}")
            return None

    def update(self, data: dict) -> Contact:
        contact = parse(ContactSerializer, self.client.put('/contacts', json=dump(ContactWriteSerializer, data)))
        self.invalidate('contacts')
        return contact

    def create(self, data: dict) -> Contact:
        contact = parse(ContactSerializer, self.client.post('/contacts', json=dump(ContactWriteSerializer, data)))
        self.invalidate('contacts')
        return contact
