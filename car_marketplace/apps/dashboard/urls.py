"""
URL configuration for dashboard app.
"""

from django.urls import path
from . import views

app_name = 'dashboard'

urlpatterns = [
    # Admin dashboard
    path('admin/', views.AdminDashboardView.as_view(), name='admin_dashboard'),
]
