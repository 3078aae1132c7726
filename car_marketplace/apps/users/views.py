"""
Views for User authentication and management.
"""

import logging

from django.contrib import messages
from django.shortcuts import redirect, render
from django.urls import reverse_lazy
from django.utils.http import url_has_allowed_host_and_scheme
from django.utils.translation import gettext_lazy as _
from django.views.decorators.http import require_http_methods
from django.views.generic import FormView, ListView

from apps.core.client import SESSION_EMAIL_KEY, SESSION_REFRESH_KEY, ApiClient
from apps.core.exceptions import ApiBadRequest, ApiConflict, ApiError, ApiNotFound, ApiUnauthorized
from apps.core.mixins import ApiClientMixin
from apps.core.permissions import (
    AdminRequiredMixin,
    LoginRequiredMixin,
    end_session,
    session_auth,
    start_session,
)
from .api import AuthApi, UsersApi
from .forms import LoginForm, ProfileUpdateForm, RegistrationForm, UserFilterForm
from .records import UserRole
from .services import filter_users

logger = logging.getLogger(__name__)


def landing_url(request, role):
    """Where to go after login: a safe ``next`` or the role's start page."""
    next_url = request.POST.get('next') or request.GET.get('next')
    if next_url and url_has_allowed_host_and_scheme(
        next_url,
        allowed_hosts={request.get_host()},
        require_https=request.is_secure()
    ):
        return next_url
    if role == UserRole.ADMIN:
        return 'dashboard:admin_dashboard'
    return 'home'


@require_http_methods(["GET", "POST"])
def login_view(request):
    """Handle user login."""
    if session_auth(request).is_authenticated:
        return redirect('home')

    if request.method == 'POST':
        form = LoginForm(request.POST)
        if form.is_valid():
            email = form.cleaned_data['email']
            try:
                with ApiClient.for_request(request) as client:
                    result = AuthApi(client).login(email, form.cleaned_data['password'])
            except (ApiBadRequest, ApiUnauthorized, ApiNotFound):
                logger.info(f"Failed login for {email}")
                messages.error(request, _('Invalid email or password.'))
            else:
                start_session(request, result, email)
                messages.success(request, _('Logged in successfully!'))
                return redirect(landing_url(request, result.role))
    else:
        form = LoginForm()

    return render(request, 'users/login.html', {
        'form': form,
        'next': request.POST.get('next') or request.GET.get('next', ''),
    })


@require_http_methods(["GET", "POST"])
def register_view(request):
    """Create a customer account, then send the visitor to the login page."""
    if session_auth(request).is_authenticated:
        return redirect('home')

    if request.method == 'POST':
        form = RegistrationForm(request.POST)
        if form.is_valid():
            try:
                with ApiClient.for_request(request) as client:
                    AuthApi(client).register(
                        form.cleaned_data['email'],
                        form.cleaned_data['password'],
                        role=UserRole.USER
                    )
            except (ApiBadRequest, ApiConflict) as e:
                messages.error(request, e.message)
            else:
                messages.success(
                    request,
                    _('Account created successfully! You can now log in.')
                )
                return redirect('users:login')
    else:
        form = RegistrationForm()

    return render(request, 'users/register.html', {'form': form})


@require_http_methods(["POST"])
def logout_view(request):
    """Handle user logout."""
    refresh_token = request.session.get(SESSION_REFRESH_KEY)
    if refresh_token:
        try:
            with ApiClient.for_request(request) as client:
                AuthApi(client).logout(refresh_token)
        except ApiError as e:
            logger.warning(f"Logout call failed, dropping the session anyway: {e}")

    end_session(request)
    messages.success(request, _('Logged out successfully!'))
    return redirect('home')


class ProfileView(LoginRequiredMixin, ApiClientMixin, FormView):
    """View and update the current user's profile."""
    form_class = ProfileUpdateForm
    template_name = 'users/profile.html'
    success_url = reverse_lazy('users:profile')

    def get_profile(self):
        if not hasattr(self, 'profile'):
            self.profile = UsersApi(self.client).me()
        return self.profile

    def get_initial(self):
        profile = self.get_profile()
        return {
            'email': profile.email,
            'first_name': profile.first_name,
            'last_name': profile.last_name,
            'phone': profile.phone,
        }

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['profile'] = self.get_profile()
        return context

    def form_valid(self, form):
        try:
            profile = UsersApi(self.client).update_me(form.to_payload())
        except (ApiBadRequest, ApiConflict) as e:
            form.add_error(None, e.message)
            return self.form_invalid(form)

        self.request.session[SESSION_EMAIL_KEY] = profile.email
        messages.success(self.request, _('Profile updated successfully!'))
        return super().form_valid(form)


class AdminUserListView(AdminRequiredMixin, ApiClientMixin, ListView):
    """List all users (admin only)."""
    template_name = 'users/admin_user_list.html'
    context_object_name = 'users'
    paginate_by = 20

    def get_filter_form(self):
        if not hasattr(self, 'filter_form'):
            self.filter_form = UserFilterForm(self.request.GET or None)
            self.filter_form.is_valid()
        return self.filter_form

    def get_queryset(self):
        form = self.get_filter_form()
        cleaned = getattr(form, 'cleaned_data', {})
        users = filter_users(
            UsersApi(self.client).list(),
            search=cleaned.get('search', ''),
            role=cleaned.get('role', '')
        )
        return sorted(users, key=lambda user: user.email)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['filter_form'] = self.get_filter_form()
        return context
