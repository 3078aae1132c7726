"""
Views for Contract operations.
"""

import logging

from django.contrib import messages
from django.http import Http404, JsonResponse
from django.shortcuts import redirect
from django.utils import timezone
from django.utils.dateparse import parse_datetime
from django.utils.translation import gettext_lazy as _
from django.views.decorators.http import require_http_methods
from django.views.generic import ListView, TemplateView

from apps.cars.api import CarsApi
from apps.cars.services import ITEMS_PER_PAGE_CHOICES, limit_items, parse_choice
from apps.core.client import ApiClient
from apps.core.exceptions import ApiBadRequest, ApiConflict, ApiError, ApiNotFound
from apps.core.mixins import ApiClientMixin
from apps.core.permissions import ROLE_USER, AdminRequiredMixin, UserRequiredMixin, role_required
from apps.users.api import UsersApi
from .api import ContractsApi, car_blocking_contracts
from .availability import (
    blocked_dates,
    blocking_contracts,
    calendar_context,
    overlapping,
    split_date_hour,
)
from .forms import ContractCompleteForm, ContractEditForm
from .pricing import price_breakdown, quote
from .records import ContractState

logger = logging.getLogger(__name__)

DEFAULT_ITEMS_PER_PAGE = ITEMS_PER_PAGE_CHOICES[0]


def contract_rows(contracts, cars):
    return [{'contract': contract, 'car': cars.get(contract.car_id)} for contract in contracts]


class ContractListMixin:
    """State filter and items-per-page shared by both contract lists."""
    context_object_name = 'contracts'

    def get_contracts(self):
        raise NotImplementedError

    def get_queryset(self):
        contracts = self.get_contracts()

        # Filter by state
        state = self.request.GET.get('state', 'all')
        if state != 'all':
            contracts = [contract for contract in contracts if contract.state == state]

        return sorted(contracts, key=lambda contract: contract.start_date, reverse=True)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        per_page = parse_choice(
            self.request.GET.get('per_page'),
            ITEMS_PER_PAGE_CHOICES,
            DEFAULT_ITEMS_PER_PAGE
        )
        shown = limit_items(self.object_list, per_page)
        cars = CarsApi(self.client).get_many(contract.car_id for contract in shown)

        context['rows'] = contract_rows(shown, cars)
        context['per_page'] = per_page
        context['per_page_choices'] = ITEMS_PER_PAGE_CHOICES
        context['state_filter'] = self.request.GET.get('state', 'all')
        context['states'] = ContractState.choices
        context['total_count'] = len(self.object_list)
        return context


class MyContractsView(UserRequiredMixin, ApiClientMixin, ContractListMixin, ListView):
    """The customer's own rental contracts."""
    template_name = 'contracts/my_contracts.html'

    def get_contracts(self):
        return ContractsApi(self.client).mine()

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        contracts = self.object_list
        now = timezone.now()
        context['stats'] = {
            'total': len(contracts),
            'active': sum(1 for c in contracts if c.state == ContractState.ACTIVE),
            'upcoming': sum(
                1 for c in contracts
                if c.state == ContractState.DRAFT and c.start_date > now
            ),
            'completed': sum(1 for c in contracts if c.state == ContractState.COMPLETED),
        }
        return context


@role_required(ROLE_USER)
@require_http_methods(["POST"])
def cancel_contract(request, pk):
    """Cancel one of the customer's contracts."""
    with ApiClient.for_request(request) as client:
        contracts_api = ContractsApi(client)
        contract = next((c for c in contracts_api.mine() if c.id == pk), None)
        if contract is None:
            raise Http404(_('Contract not found.'))

        if not contract.is_cancellable:
            messages.error(request, _('This contract can no longer be cancelled.'))
            return redirect('contracts:my_contracts')

        try:
            contracts_api.cancel(pk)
        except (ApiBadRequest, ApiConflict) as e:
            messages.error(request, e.message)
        else:
            logger.info(f"Contract {pk} cancelled by its customer")
            messages.success(request, _('Your booking has been cancelled.'))

    return redirect('contracts:my_contracts')


class AdminContractListView(AdminRequiredMixin, ApiClientMixin, ContractListMixin, ListView):
    """All contracts for the back-office."""
    template_name = 'contracts/admin_contract_list.html'

    def get_contracts(self):
        return ContractsApi(self.client).list()


class AdminContractDetailView(AdminRequiredMixin, ApiClientMixin, TemplateView):
    """Contract details with the edit, completion and state actions."""
    template_name = 'contracts/admin_contract_detail.html'

    def get_contract(self):
        if not hasattr(self, 'contract'):
            self.contract = ContractsApi(self.client).get(self.kwargs['pk'])
        return self.contract

    def get_car(self, contract):
        return CarsApi(self.client).get_many([contract.car_id]).get(contract.car_id)

    def get_user(self, contract):
        try:
            return UsersApi(self.client).get(contract.user_id)
        except ApiError as e:
            logger.warning(f"User {contract.user_id} of contract {contract.id} unavailable: {e}")
            return None

    def get_blocking_contracts(self, contract):
        return blocking_contracts(
            ContractsApi(self.client).for_car(contract.car_id),
            contract.car_id,
            exclude_id=contract.id
        )

    def get_edit_form(self, contract):
        start_date, start_hour = split_date_hour(contract.start_date)
        end_date, end_hour = split_date_hour(contract.end_date)
        return ContractEditForm(initial={
            'start_date': start_date,
            'start_hour': start_hour,
            'end_date': end_date,
            'end_hour': end_hour,
            'state': contract.state,
            'notes': contract.notes,
        })

    def get_context_data(self, edit_form=None, complete_form=None, preview=None, **kwargs):
        context = super().get_context_data(**kwargs)
        contract = self.get_contract()
        car = self.get_car(contract)
        blocked = blocked_dates(self.get_blocking_contracts(contract))

        context['contract'] = contract
        context['car'] = car
        context['customer'] = self.get_user(contract)
        context['breakdown'] = price_breakdown(contract, car)
        context['preview'] = preview
        context['edit_form'] = edit_form or self.get_edit_form(contract)
        context['complete_form'] = complete_form or ContractCompleteForm(
            contract=contract,
            initial={'mileage_end_km': contract.mileage_start_km}
        )
        context['calendar'] = calendar_context(
            blocked,
            self.request.GET.get('month') or timezone.localtime(contract.start_date).strftime('%Y-%m')
        )
        return context

    def post(self, request, *args, **kwargs):
        action = request.POST.get('action')
        handler = {
            'update': self.update_contract,
            'preview': self.complete_contract,
            'complete': self.complete_contract,
            'activate': self.activate_contract,
            'cancel': self.cancel_contract,
            'delete': self.delete_contract,
        }.get(action)
        if handler is None:
            messages.error(request, _('Unknown action.'))
            return redirect('contracts:admin_contract_detail', pk=self.kwargs['pk'])

        try:
            return handler()
        except (ApiBadRequest, ApiConflict) as e:
            messages.error(request, e.message)
            return redirect('contracts:admin_contract_detail', pk=self.kwargs['pk'])

    def update_contract(self):
        contract = self.get_contract()
        form = ContractEditForm(self.request.POST)
        if not form.is_valid():
            messages.error(self.request, _('Please correct the errors below.'))
            return self.render_to_response(self.get_context_data(edit_form=form))

        start = form.cleaned_data['start']
        end = form.cleaned_data['end']
        state = form.cleaned_data['state']
        if state != ContractState.CANCELLED and overlapping(start, end, self.get_blocking_contracts(contract)):
            form.add_error(None, _('The car is already booked for the selected dates.'))
            messages.error(self.request, _('Please correct the errors below.'))
            return self.render_to_response(self.get_context_data(edit_form=form))

        ContractsApi(self.client).update(contract.id, {
            'start_date': start,
            'end_date': end,
            'state': state,
            'notes': form.cleaned_data['notes'] or None,
        })
        messages.success(self.request, _('Contract updated.'))
        return redirect('contracts:admin_contract_detail', pk=contract.id)

    def complete_contract(self):
        contract = self.get_contract()
        if not contract.can_complete:
            messages.error(self.request, _('Only active contracts can be completed.'))
            return redirect('contracts:admin_contract_detail', pk=contract.id)

        form = ContractCompleteForm(self.request.POST, contract=contract)
        if not form.is_valid():
            messages.error(self.request, _('Please correct the errors below.'))
            return self.render_to_response(self.get_context_data(complete_form=form))

        if self.request.POST.get('action') == 'preview':
            preview = price_breakdown(
                contract,
                self.get_car(contract),
                fuel_level_end_pct=form.cleaned_data['fuel_level_end_pct'],
                damage_fee=form.cleaned_data['damage_fee']
            )
            return self.render_to_response(self.get_context_data(complete_form=form, preview=preview))

        ContractsApi(self.client).complete(contract.id, {
            'mileage_end_km': form.cleaned_data['mileage_end_km'],
            'fuel_level_end_pct': form.cleaned_data['fuel_level_end_pct'],
            'damage_fee': form.cleaned_data['damage_fee'],
            'notes': form.cleaned_data['notes'] or None,
        })
        messages.success(self.request, _('Contract completed.'))
        return redirect('contracts:admin_contract_detail', pk=contract.id)

    def activate_contract(self):
        contract = self.get_contract()
        if not contract.can_activate:
            messages.error(self.request, _('Only draft contracts can be activated.'))
        else:
            ContractsApi(self.client).activate(contract.id)
            messages.success(self.request, _('Contract activated.'))
        return redirect('contracts:admin_contract_detail', pk=contract.id)

    def cancel_contract(self):
        contract = self.get_contract()
        if contract.is_cancelled:
            messages.error(self.request, _('This contract is already cancelled.'))
        else:
            ContractsApi(self.client).cancel(contract.id)
            messages.success(self.request, _('Contract cancelled.'))
        return redirect('contracts:admin_contract_detail', pk=contract.id)

    def delete_contract(self):
        ContractsApi(self.client).delete(self.kwargs['pk'])
        messages.success(self.request, _('Contract deleted.'))
        return redirect('contracts:admin_contract_list')


def parse_local_datetime(value):
    """Parse an ISO datetime; naive values are taken as site local time."""
    parsed = parse_datetime(value or '')
    if parsed is not None and timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed, timezone.get_current_timezone())
    return parsed


def parse_id(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@require_http_methods(["GET"])
def quote_api(request):
    """API endpoint to check availability and price of a rental period."""
    car_id = parse_id(request.GET.get('car_id'))
    start_value = request.GET.get('start')
    end_value = request.GET.get('end')

    if not all([car_id, start_value, end_value]):
        return JsonResponse({
            'success': False,
            'error': 'Missing required parameters'
        }, status=400)

    try:
        start = parse_local_datetime(start_value)
        end = parse_local_datetime(end_value)
    except ValueError:
        start = end = None
    if start is None or end is None:
        return JsonResponse({'success': False, 'error': 'Invalid date format'}, status=400)

    with ApiClient.for_request(request) as client:
        try:
            car = CarsApi(client).get(car_id)
        except ApiNotFound:
            return JsonResponse({'success': False, 'error': 'Car not found'}, status=404)
        conflicts = overlapping(start, end, car_blocking_contracts(client, car_id))

    estimate = quote(car, start, end)
    return JsonResponse({
        'success': True,
        'available': estimate.days > 0 and not conflicts,
        'car_name': car.full_name,
        'rental_days': estimate.days,
        'daily_rate': float(car.price_per_day),
        'total_price': float(estimate.total),
    })


@require_http_methods(["GET"])
def blocked_dates_api(request):
    """API endpoint listing the days a car is already booked."""
    car_id = parse_id(request.GET.get('car_id'))
    if car_id is None:
        return JsonResponse({'success': False, 'error': 'Missing required parameters'}, status=400)

    exclude_id = parse_id(request.GET.get('exclude'))
    with ApiClient.for_request(request) as client:
        contracts = car_blocking_contracts(client, car_id, exclude_id=exclude_id)

    return JsonResponse({
        'success': True,
        'car_id': car_id,
        'blocked_dates': [day.isoformat() for day in blocked_dates(contracts)],
    })
