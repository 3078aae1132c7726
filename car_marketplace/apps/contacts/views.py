"""
Views for the public contact page.
"""

from django.utils.translation import gettext_lazy as _
from django.views.generic import TemplateView

from apps.core.mixins import ApiClientMixin
from .api import ContactsApi

BUSINESS_HOURS = (
    (_('Monday - Friday'), '08:00 - 18:00'),
    (_('Saturday'), '09:00 - 15:00'),
    (_('Sunday'), _('Closed')),
)


class ContactView(ApiClientMixin, TemplateView):
    """Contact details and operating areas, when configured."""
    template_name = 'contacts/contacts.html'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['contact'] = ContactsApi(self.client).get()
        context['business_hours'] = BUSINESS_HOURS
        return context
