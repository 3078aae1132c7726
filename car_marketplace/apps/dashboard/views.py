"""
Views for Admin Dashboard.
"""

from django.views.generic import TemplateView

from apps.cars.api import CarsApi
from apps.cars.records import CarState
from apps.cities.api import CitiesApi
from apps.contracts.api import ContractsApi
from apps.contracts.records import ContractState
from apps.contracts.views import contract_rows
from apps.core.mixins import ApiClientMixin
from apps.core.permissions import AdminRequiredMixin
from .stats import (
    cars_by_state,
    contracts_by_state,
    recent_contracts,
    revenue,
    state_chart,
)


class AdminDashboardView(AdminRequiredMixin, ApiClientMixin, TemplateView):
    """Admin dashboard view."""
    template_name = 'dashboard/admin_dashboard.html'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context.update(self.get_dashboard_data())
        return context

    def get_dashboard_data(self):
        """Get all dashboard data from the API."""
        cars = CarsApi(self.client).list()
        contracts = ContractsApi(self.client).list()
        cities = CitiesApi(self.client).list()

        car_counts = cars_by_state(cars)
        contract_counts = contracts_by_state(contracts)
        recent = recent_contracts(contracts)
        cars_lookup = {car.id: car for car in cars}

        return {
            'total_cars': len(cars),
            'total_contracts': len(contracts),
            'total_cities': len(cities),
            'total_revenue': revenue(contracts),
            'car_counts': [
                (label, car_counts[value]) for value, label in CarState.choices
            ],
            'contract_counts': [
                (label, contract_counts[value]) for value, label in ContractState.choices
            ],
            'car_chart': state_chart(car_counts, CarState.choices),
            'contract_chart': state_chart(contract_counts, ContractState.choices),
            'recent_rows': contract_rows(recent, cars_lookup),
        }
