"""
Forms for User authentication and management.
"""

from django import forms
from django.utils.translation import gettext_lazy as _

from .records import UserRole


class RegistrationForm(forms.Form):
    """Form for creating new customer accounts."""

    email = forms.EmailField(
        widget=forms.EmailInput(attrs={
            'class': 'form-control',
            'placeholder': _('Enter your email')
        })
    )
    password = forms.CharField(
        min_length=6,
        widget=forms.PasswordInput(attrs={
            'class': 'form-control',
            'placeholder': _('Enter password')
        })
    )
    confirm_password = forms.CharField(
        widget=forms.PasswordInput(attrs={
            'class': 'form-control',
            'placeholder': _('Confirm password')
        })
    )

    def clean_email(self):
        return self.cleaned_data.get('email').lower()

    def clean(self):
        cleaned_data = super().clean()
        password = cleaned_data.get('password')
        confirm_password = cleaned_data.get('confirm_password')

        if password and confirm_password and password != confirm_password:
            raise forms.ValidationError(_("Passwords do not match."))

        return cleaned_data


class LoginForm(forms.Form):
    """Form for user login."""

    email = forms.EmailField(
        widget=forms.EmailInput(attrs={
            'class': 'form-control',
            'placeholder': _('Email')
        })
    )
    password = forms.CharField(
        widget=forms.PasswordInput(attrs={
            'class': 'form-control',
            'placeholder': _('Password')
        })
    )


class ProfileUpdateForm(forms.Form):
    """Form for updating user profile."""

    email = forms.EmailField(
        widget=forms.EmailInput(attrs={'class': 'form-control'})
    )
    first_name = forms.CharField(
        label=_('First name'),
        required=False,
        max_length=100,
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    last_name = forms.CharField(
        label=_('Last name'),
        required=False,
        max_length=100,
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    phone = forms.CharField(
        label=_('Phone'),
        required=False,
        max_length=30,
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    new_password = forms.CharField(
        label=_('New password'),
        required=False,
        min_length=6,
        widget=forms.PasswordInput(attrs={
            'class': 'form-control',
            'placeholder': _('Leave empty to keep the current password')
        })
    )
    confirm_password = forms.CharField(
        label=_('Confirm new password'),
        required=False,
        widget=forms.PasswordInput(attrs={'class': 'form-control'})
    )

    def clean(self):
        cleaned_data = super().clean()
        new_password = cleaned_data.get('new_password')
        confirm_password = cleaned_data.get('confirm_password')

        if (new_password or confirm_password) and new_password != confirm_password:
            raise forms.ValidationError(_("New passwords do not match."))

        return cleaned_data

    def to_payload(self):
        data = {
            'email': self.cleaned_data['email'],
            'first_name': self.cleaned_data['first_name'],
            'last_name': self.cleaned_data['last_name'],
            'phone': self.cleaned_data['phone'],
        }
        if self.cleaned_data.get('new_password'):
            data['password'] = self.cleaned_data['new_password']
        return data


class UserFilterForm(forms.Form):
    """Search and role filter of the admin user directory."""

    search = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': _('Email or name')
        })
    )
    role = forms.ChoiceField(
        required=False,
        choices=[('', _('All roles'))] + UserRole.choices,
        widget=forms.Select(attrs={'class': 'form-control'})
    )
