"""
Views for Car operations.
"""

import logging

from django.contrib import messages
from django.http import Http404
from django.shortcuts import redirect
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from django.views.generic import DetailView, FormView, ListView, TemplateView

from apps.cities.api import CitiesApi
from apps.contracts.api import ContractsApi, car_blocking_contracts
from apps.contracts.availability import blocked_dates, calendar_context, overlapping
from apps.contracts.pricing import quote
from apps.core.exceptions import ApiBadRequest, ApiConflict, ApiNotFound
from apps.core.mixins import ApiClientMixin
from apps.core.permissions import UserRequiredMixin
from .api import CarsApi
from .forms import CarBookingForm, CarSaleSearchForm, CarSearchForm
from .services import filter_cars, has_active_filters, main_image, paginate_rows, sort_cars

logger = logging.getLogger(__name__)

FEATURED_CARS = 3


def search_data(request):
    """GET data with the ``cityId`` parameter of the home page links mapped onto ``city``."""
    data = request.GET.copy()
    if data.get('cityId') and not data.get('city'):
        data['city'] = data['cityId']
    return data


def car_cards(cars, cities):
    """Rows for the catalog templates: car, main image and city."""
    return [
        {'car': car, 'image': main_image(car), 'city': cities.get(car.city_id)}
        for car in cars
    ]


class HomeView(ApiClientMixin, TemplateView):
    """Landing page with the cities and a few featured cars."""
    template_name = 'home.html'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        cities = CitiesApi(self.client).list()
        cars = CarsApi(self.client).list()
        context['cities'] = cities
        context['featured_cars'] = car_cards(
            cars[:FEATURED_CARS],
            {city.id: city for city in cities}
        )
        return context


class CarListView(ApiClientMixin, ListView):
    """List cars for rent with filters."""
    template_name = 'cars/car_list.html'
    context_object_name = 'cars'
    form_class = CarSearchForm
    available_only = True

    def get_search_form(self):
        if not hasattr(self, 'search_form'):
            self.cities = CitiesApi(self.client).list()
            self.search_form = self.form_class(search_data(self.request), cities=self.cities)
        return self.search_form

    def get_cars(self, city_id):
        return CarsApi(self.client).list(city_id)

    def get_queryset(self):
        form = self.get_search_form()
        cars = self.get_cars(form.value('city'))
        cars = filter_cars(cars, form.to_filters(available_only=self.available_only))
        return sort_cars(cars, form.value('sort_by', ''))

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        form = self.get_search_form()
        cities = {city.id: city for city in self.cities}

        context['search_form'] = form
        context['car_cards'] = car_cards(self.object_list, cities)
        context['total_count'] = len(self.object_list)
        context['selected_city'] = cities.get(form.value('city'))
        context['has_filters'] = has_active_filters(
            form.to_filters(),
            form.value('sort_by', ''),
            form.value('city')
        )
        return context


class CarSaleListView(CarListView):
    """Cars offered for sale, shown in a grid of rows."""
    template_name = 'cars/sale_list.html'
    form_class = CarSaleSearchForm
    available_only = False

    def get_cars(self, city_id):
        return CarsApi(self.client).list_for_sale(city_id)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        rows = self.get_search_form().value('rows', 3)
        context['rows'] = rows
        context['car_cards'] = paginate_rows(context['car_cards'], rows)
        context['shown_count'] = len(context['car_cards'])
        return context


class CarContextMixin:
    """Context shared by the car page and the booking form posted from it."""

    def get_car(self):
        if not hasattr(self, 'car'):
            self.car = CarsApi(self.client).get(self.kwargs['pk'])
        return self.car

    def get_blocking_contracts(self, car):
        return car_blocking_contracts(self.client, car.id)

    def get_city(self, car):
        try:
            return CitiesApi(self.client).get(car.city_id)
        except ApiNotFound:
            return None

    def get_car_context(self, car, booking_form=None):
        blocked = blocked_dates(self.get_blocking_contracts(car))
        return {
            'car': car,
            'city': self.get_city(car),
            'main_image': main_image(car),
            'images': sorted(car.images, key=lambda image: image.order),
            'booking_form': booking_form or CarBookingForm(initial={
                'mileage_start_km': car.odometer_km,
                'fuel_level_start_pct': 100,
            }),
            'calendar': calendar_context(
                blocked,
                self.request.GET.get('month'),
                min_date=timezone.localdate()
            ),
        }


class CarDetailView(ApiClientMixin, CarContextMixin, DetailView):
    """Car details page with the booking calendar."""
    template_name = 'cars/car_detail.html'
    context_object_name = 'car'

    def get_object(self, queryset=None):
        return self.get_car()

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context.update(self.get_car_context(self.object))
        return context


class CarBookingView(UserRequiredMixin, ApiClientMixin, CarContextMixin, FormView):
    """Handle car booking."""
    form_class = CarBookingForm
    template_name = 'cars/car_detail.html'

    def get(self, request, *args, **kwargs):
        return redirect('cars:car_detail', pk=self.kwargs['pk'])

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context.update(self.get_car_context(self.get_car(), booking_form=context['form']))
        return context

    def form_valid(self, form):
        car = self.get_car()
        start = form.cleaned_data['start']
        end = form.cleaned_data['end']

        if not car.available_for_lease:
            form.add_error(None, _('This car is not offered for rent.'))
            return self.form_invalid(form)

        if overlapping(start, end, self.get_blocking_contracts(car)):
            form.add_error(None, _('The car is already booked for the selected dates.'))
            return self.form_invalid(form)

        try:
            contract = ContractsApi(self.client).create({
                'car_id': car.id,
                'start_date': start,
                'end_date': end,
                'mileage_start_km': form.cleaned_data['mileage_start_km'],
                'fuel_level_start_pct': form.cleaned_data['fuel_level_start_pct'],
                'notes': form.cleaned_data['notes'] or None,
            })
        except (ApiBadRequest, ApiConflict) as e:
            form.add_error(None, e.message)
            return self.form_invalid(form)

        estimate = quote(car, start, end)
        logger.info(f"Booking {contract.id} created for car {car.id} ({estimate.days} days)")
        messages.success(
            self.request,
            _('Booking created for %(car)s. Estimated price: %(total)s EUR.') % {
                'car': car.full_name,
                'total': estimate.total,
            }
        )
        return redirect('contracts:my_contracts')

    def form_invalid(self, form):
        messages.error(self.request, _('Please correct the errors below.'))
        return super().form_invalid(form)


class CarSaleDetailView(ApiClientMixin, DetailView):
    """Details of a car offered for sale."""
    template_name = 'cars/sale_detail.html'
    context_object_name = 'car'

    def get_object(self, queryset=None):
        car = CarsApi(self.client).get(self.kwargs['pk'])
        if not car.available_for_sale:
            raise Http404(_('This car is not for sale.'))
        return car

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        car = self.object
        try:
            context['city'] = CitiesApi(self.client).get(car.city_id)
        except ApiNotFound:
            context['city'] = None
        context['main_image'] = main_image(car)
        context['images'] = sorted(car.images, key=lambda image: image.order)
        return context
