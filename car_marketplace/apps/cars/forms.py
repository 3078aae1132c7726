"""
Forms for the car catalogs and booking.

Both catalogs are driven by GET parameters; invalid filter values are
dropped instead of reported.
"""

from django import forms
from django.utils.translation import gettext_lazy as _

from apps.contracts.forms import RentalPeriodForm
from .records import BodyType, FuelType, Gearbox
from .services import (
    ENGINE_CAPACITY_BUCKETS,
    ROWS_PER_PAGE_CHOICES,
    SEAT_COUNT_CHOICES,
    SHOW_ALL,
    CarFilters,
)


def with_blank(label, choices):
    return [('', label)] + list(choices)


class CarSearchForm(forms.Form):
    """Filters shared by the rental and the sale catalogs."""
    search = forms.CharField(
        label=_('Search'),
        required=False,
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': _('Make or model')
        })
    )
    city = forms.TypedChoiceField(
        label=_('City'),
        required=False,
        coerce=int,
        empty_value=None,
        widget=forms.Select(attrs={'class': 'form-control'})
    )
    fuel_type = forms.ChoiceField(
        label=_('Fuel'),
        required=False,
        choices=with_blank(_('All fuel types'), FuelType.choices),
        widget=forms.Select(attrs={'class': 'form-control'})
    )
    body_type = forms.ChoiceField(
        label=_('Body'),
        required=False,
        choices=with_blank(_('All body types'), BodyType.choices),
        widget=forms.Select(attrs={'class': 'form-control'})
    )
    gearbox = forms.ChoiceField(
        label=_('Gearbox'),
        required=False,
        choices=with_blank(_('All gearboxes'), Gearbox.choices),
        widget=forms.Select(attrs={'class': 'form-control'})
    )
    sort_by = forms.ChoiceField(
        label=_('Sort by'),
        required=False,
        choices=[
            ('', _('Default order')),
            ('price_low', _('Price per day: low to high')),
            ('price_high', _('Price per day: high to low')),
            ('newest', _('Newest first')),
        ],
        widget=forms.Select(attrs={'class': 'form-control'})
    )

    def __init__(self, *args, cities=(), **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['city'].choices = with_blank(
            _('All cities'),
            [(city.id, city.name) for city in cities]
        )

    def value(self, name, default=None):
        """Cleaned value of ``name`` or ``default`` when missing or invalid."""
        # Fields that failed validation are simply missing here.
        self.is_valid()
        cleaned = getattr(self, 'cleaned_data', {})
        value = cleaned.get(name)
        return default if value in (None, '') else value

    def to_filters(self, available_only=False) -> CarFilters:
        return CarFilters(
            search=self.value('search', ''),
            fuel_type=self.value('fuel_type', ''),
            body_type=self.value('body_type', ''),
            gearbox=self.value('gearbox', ''),
            engine_capacity=self.value('engine_capacity', ''),
            seat_count=self.value('seat_count'),
            available_only=available_only,
        )


class CarSaleSearchForm(CarSearchForm):
    """Sale catalog filters with the advanced options and grid size."""
    engine_capacity = forms.ChoiceField(
        label=_('Engine capacity'),
        required=False,
        choices=with_blank(
            _('All engine capacities'),
            [(bucket, f"{bucket} l") for bucket in ENGINE_CAPACITY_BUCKETS]
        ),
        widget=forms.Select(attrs={'class': 'form-control'})
    )
    seat_count = forms.TypedChoiceField(
        label=_('Seats'),
        required=False,
        coerce=int,
        empty_value=None,
        choices=with_blank(_('All seat counts'), [(count, count) for count in SEAT_COUNT_CHOICES]),
        widget=forms.Select(attrs={'class': 'form-control'})
    )
    rows = forms.TypedChoiceField(
        label=_('Rows per page'),
        required=False,
        coerce=int,
        empty_value=ROWS_PER_PAGE_CHOICES[0],
        choices=[
            (rows, _('All') if rows == SHOW_ALL else rows)
            for rows in ROWS_PER_PAGE_CHOICES
        ],
        widget=forms.Select(attrs={'class': 'form-control'})
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['sort_by'].choices = [
            ('', _('Sort by')),
            ('sale_price_asc', _('Sale price: low to high')),
            ('sale_price_desc', _('Sale price: high to low')),
        ]

    @property
    def advanced_open(self):
        return any(
            self.value(name)
            for name in ('fuel_type', 'body_type', 'gearbox', 'engine_capacity', 'seat_count')
        )


class CarBookingForm(RentalPeriodForm):
    """Rental request for a single car."""
    mileage_start_km = forms.IntegerField(
        label=_('Starting mileage (km)'),
        min_value=0,
        widget=forms.NumberInput(attrs={'class': 'form-control'})
    )
    fuel_level_start_pct = forms.IntegerField(
        label=_('Starting fuel level (%)'),
        min_value=0,
        max_value=100,
        initial=100,
        widget=forms.NumberInput(attrs={'class': 'form-control'})
    )
    notes = forms.CharField(
        label=_('Notes'),
        required=False,
        widget=forms.Textarea(attrs={'rows': 3, 'class': 'form-control'})
    )

