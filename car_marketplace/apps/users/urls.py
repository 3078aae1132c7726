"""
URL configuration for users app.
"""

from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    # Authentication
    path('login/', views.login_view, name='login'),
    path('register/', views.register_view, name='register'),
    path('logout/', views.logout_view, name='logout'),

    # Profile
    path('profile/', views.ProfileView.as_view(), name='profile'),

    # Admin only
    path('admin/', views.AdminUserListView.as_view(), name='admin_user_list'),
]
