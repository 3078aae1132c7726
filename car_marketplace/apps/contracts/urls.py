"""
URL configuration for contracts app.
"""

from django.urls import path
from . import views

app_name = 'contracts'

urlpatterns = [
    # Customer views
    path('', views.MyContractsView.as_view(), name='my_contracts'),
    path('<int:pk>/cancel/', views.cancel_contract, name='cancel_contract'),

    # Admin views
    path('admin/', views.AdminContractListView.as_view(), name='admin_contract_list'),
    path('admin/<int:pk>/', views.AdminContractDetailView.as_view(), name='admin_contract_detail'),

    # API endpoints
    path('api/quote/', views.quote_api, name='quote_api'),
    path('api/blocked-dates/', views.blocked_dates_api, name='blocked_dates_api'),
]
