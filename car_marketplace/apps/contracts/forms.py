"""
Forms for booking and administering rental contracts.
"""

from decimal import Decimal

from django import forms
from django.utils.translation import gettext_lazy as _

from .availability import HOURS, combine_date_hour
from .records import ContractState

HOUR_CHOICES = [(hour, f"{hour}:00") for hour in HOURS]


class RentalPeriodForm(forms.Form):
    """Pick-up and return, each as a date and a full hour."""
    start_date = forms.DateField(
        label=_('Pick-up date'),
        widget=forms.DateInput(attrs={'type': 'date', 'class': 'form-control'})
    )
    start_hour = forms.ChoiceField(
        label=_('Pick-up hour'),
        choices=HOUR_CHOICES,
        initial='10',
        widget=forms.Select(attrs={'class': 'form-control'})
    )
    end_date = forms.DateField(
        label=_('Return date'),
        widget=forms.DateInput(attrs={'type': 'date', 'class': 'form-control'})
    )
    end_hour = forms.ChoiceField(
        label=_('Return hour'),
        choices=HOUR_CHOICES,
        initial='10',
        widget=forms.Select(attrs={'class': 'form-control'})
    )

    def clean(self):
        cleaned_data = super().clean()
        start_date = cleaned_data.get('start_date')
        start_hour = cleaned_data.get('start_hour')
        end_date = cleaned_data.get('end_date')
        end_hour = cleaned_data.get('end_hour')

        if start_date and start_hour and end_date and end_hour:
            cleaned_data['start'] = combine_date_hour(start_date, start_hour)
            cleaned_data['end'] = combine_date_hour(end_date, end_hour)
            if cleaned_data['end'] <= cleaned_data['start']:
                raise forms.ValidationError(_('Return must be after pick-up.'))

        return cleaned_data


class ContractEditForm(RentalPeriodForm):
    """Admin edit of the period, state and notes of a contract."""
    state = forms.ChoiceField(
        label=_('State'),
        choices=ContractState.choices,
        widget=forms.Select(attrs={'class': 'form-control'})
    )
    notes = forms.CharField(
        label=_('Notes'),
        required=False,
        widget=forms.Textarea(attrs={'rows': 3, 'class': 'form-control'})
    )


class ContractCompleteForm(forms.Form):
    """Return of the car: closing mileage, fuel level and damage."""
    mileage_end_km = forms.IntegerField(
        label=_('Mileage at return (km)'),
        min_value=0,
        widget=forms.NumberInput(attrs={'class': 'form-control'})
    )
    fuel_level_end_pct = forms.IntegerField(
        label=_('Fuel level at return (%)'),
        min_value=0,
        max_value=100,
        initial=100,
        widget=forms.NumberInput(attrs={'class': 'form-control'})
    )
    damage_fee = forms.DecimalField(
        label=_('Damage fee (EUR)'),
        required=False,
        min_value=Decimal('0'),
        decimal_places=2,
        initial=Decimal('0.00'),
        widget=forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'})
    )
    notes = forms.CharField(
        label=_('Notes'),
        required=False,
        widget=forms.Textarea(attrs={'rows': 3, 'class': 'form-control'})
    )

    def __init__(self, *args, contract=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.contract = contract

    def clean_mileage_end_km(self):
        mileage_end_km = self.cleaned_data['mileage_end_km']
        if self.contract is not None and mileage_end_km < self.contract.mileage_start_km:
            raise forms.ValidationError(
                _('Mileage at return cannot be lower than at pick-up (%(km)s km).'),
                params={'km': self.contract.mileage_start_km},
            )
        return mileage_end_km

    def clean_damage_fee(self):
        return self.cleaned_data['damage_fee'] or Decimal('0')
