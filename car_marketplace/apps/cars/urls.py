"""
URL configuration for cars app.
"""

from django.urls import path
from . import views

app_name = 'cars'

urlpatterns = [
    # Rental catalog
    path('', views.CarListView.as_view(), name='car_list'),
    path('<int:pk>/', views.CarDetailView.as_view(), name='car_detail'),
    path('<int:pk>/book/', views.CarBookingView.as_view(), name='car_booking'),

    # Sale catalog
    path('sale/', views.CarSaleListView.as_view(), name='sale_list'),
    path('sale/<int:pk>/', views.CarSaleDetailView.as_view(), name='sale_detail'),
]
