"""
URL configuration for car_marketplace project.
"""

from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

from apps.cars.views import HomeView

urlpatterns = [
    # Home page
    path('', HomeView.as_view(), name='home'),

    # Language switcher
    path('i18n/', include('django.conf.urls.i18n')),

    # User authentication
    path('users/', include('apps.users.urls')),

    # Catalog and rentals
    path('cars/', include('apps.cars.urls')),
    path('contracts/', include('apps.contracts.urls')),
    path('contacts/', include('apps.contacts.urls')),

    # Dashboard
    path('dashboard/', include('apps.dashboard.urls')),
]

# Serve static and media files in development
if settings.DEBUG:
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)

    # Debug toolbar
    if 'debug_toolbar' in settings.INSTALLED_APPS:
        import debug_toolbar
        urlpatterns = [
            path('__debug__/', include(debug_toolbar.urls)),
        ] + urlpatterns
