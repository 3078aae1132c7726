import json
from decimal import Decimal

from django.urls import reverse

from apps.core.client import SESSION_ROLE_KEY, SESSION_TOKEN_KEY


def login_response(role='USER', token='fresh-token'):
    return {'accessToken': token, 'refreshToken': 'fresh-refresh', 'role': role}


def test_login_stores_tokens_in_session(client, fake_api):
    fake_api.add('POST', '/auth/login', login_response())

    response = client.post(reverse('users:login'), {
        'email': 'customer@example.com',
        'password': 'secret1',
    })

    assert response.status_code == 302
    assert response.url == reverse('home')
    assert client.session[SESSION_TOKEN_KEY] == 'fresh-token'
    assert client.session[SESSION_ROLE_KEY] == 'USER'
    [request] = fake_api.calls('POST', '/auth/login')
    assert json.loads(request.content) == {'email': 'customer@example.com', 'password': 'secret1'}


def test_admin_login_lands_on_dashboard(client, fake_api):
    fake_api.add('POST', '/auth/login', login_response(role='ADMIN'))

    response = client.post(reverse('users:login'), {'email': 'admin@example.com', 'password': 'secret1'})

    assert response.url == reverse('dashboard:admin_dashboard')


def test_login_follows_safe_next_only(client, fake_api):
    fake_api.add('POST', '/auth/login', login_response())
    credentials = {'email': 'customer@example.com', 'password': 'secret1'}

    response = client.post(reverse('users:login'), dict(credentials, next='/contracts/'))
    assert response.url == '/contracts/'

    client.cookies.clear()
    response = client.post(reverse('users:login'), dict(credentials, next='https://evil.example/'))
    assert response.url == reverse('home')


def test_failed_login_shows_error(client, fake_api):
    fake_api.add('POST', '/auth/login', {'error': 'Bad credentials'}, status=401)

    response = client.post(reverse('users:login'), {
        'email': 'customer@example.com',
        'password': 'wrong-password',
    })

    assert response.status_code == 200
    assert b'Invalid email or password.' in response.content
    assert SESSION_TOKEN_KEY not in client.session


def test_register_creates_customer_account(client, fake_api):
    fake_api.add('POST', '/auth/register', None, status=201)

    response = client.post(reverse('users:register'), {
        'email': 'New.Customer@Example.com',
        'password': 'secret1',
        'confirm_password': 'secret1',
    })

    assert response.status_code == 302
    assert response.url == reverse('users:login')
    [request] = fake_api.calls('POST', '/auth/register')
    assert json.loads(request.content) == {
        'email': 'new.customer@example.com',
        'password': 'secret1',
        'role': 'USER',
    }


def test_register_rejects_mismatched_passwords(client, fake_api):
    response = client.post(reverse('users:register'), {
        'email': 'someone@example.com',
        'password': 'secret1',
        'confirm_password': 'secret2',
    })

    assert response.status_code == 200
    assert b'Passwords do not match.' in response.content
    assert not fake_api.calls('POST', '/auth/register')


def test_logout_ends_session_even_when_api_fails(customer_client, fake_api):
    fake_api.add('POST', '/auth/logout', {'error': 'boom'}, status=500)

    response = customer_client.post(reverse('users:logout'))

    assert response.status_code == 302
    assert response.url == reverse('home')
    assert SESSION_TOKEN_KEY not in customer_client.session
    [request] = fake_api.calls('POST', '/auth/logout')
    assert json.loads(request.content) == {'refreshToken': 'refresh-token'}


def test_logout_requires_post(customer_client, fake_api):
    response = customer_client.get(reverse('users:logout'))
    assert response.status_code == 405


def test_profile_updates_email_in_session(customer_client, fake_api, payloads):
    fake_api.add('GET', '/users/me', payloads.user())
    fake_api.add('PUT', '/users/me', payloads.user(email='renamed@example.com'))

    response = customer_client.post(reverse('users:profile'), {
        'email': 'renamed@example.com',
        'first_name': 'Rasa',
        'last_name': 'Kazlauskaite',
        'phone': '+37060000000',
        'new_password': '',
        'confirm_password': '',
    })

    assert response.status_code == 302
    assert customer_client.session['email'] == 'renamed@example.com'
    [request] = fake_api.calls('PUT', '/users/me')
    body = json.loads(request.content)
    assert body['email'] == 'renamed@example.com'
    assert 'password' not in body


def test_profile_requires_login(client, fake_api):
    response = client.get(reverse('users:profile'))

    assert response.status_code == 302
    assert response.url.startswith(reverse('users:login'))


def test_admin_user_list_filters(back_office_client, fake_api, payloads):
    fake_api.add('GET', '/users', [
        payloads.user(7),
        payloads.user(8, email='admin@example.com', role='ADMIN', firstName='Ieva'),
    ])

    response = back_office_client.get(reverse('users:admin_user_list'), {'search': 'ieva'})

    assert response.status_code == 200
    assert [user.id for user in response.context['users']] == [8]


def test_admin_pages_are_closed_to_customers(customer_client, fake_api):
    for name in ('users:admin_user_list', 'dashboard:admin_dashboard', 'contracts:admin_contract_list'):
        response = customer_client.get(reverse(name))
        assert response.status_code == 302
        assert response.url == reverse('home')
    assert not fake_api.requests


def test_admin_pages_send_visitors_to_login(client, fake_api):
    response = client.get(reverse('dashboard:admin_dashboard'))

    assert response.status_code == 302
    assert response.url == f"{reverse('users:login')}?next=%2Fdashboard%2Fadmin%2F"


def test_dashboard_summarises_fleet_and_contracts(back_office_client, fake_api, payloads):
    fake_api.add('GET', '/cars', [payloads.car(1), payloads.car(2, state='LEASED')])
    fake_api.add('GET', '/cities', [payloads.city(1)])
    fake_api.add('GET', '/contracts', [
        payloads.contract(1, state='ACTIVE', totalPrice=80.0),
        payloads.contract(2, state='COMPLETED', totalPrice=120.5),
        payloads.contract(3, state='CANCELLED', totalPrice=60.0),
    ])

    response = back_office_client.get(reverse('dashboard:admin_dashboard'))

    assert response.status_code == 200
    assert response.context['total_cars'] == 2
    assert response.context['total_contracts'] == 3
    assert response.context['total_cities'] == 1
    assert response.context['total_revenue'] == Decimal('200.5')
    assert response.context['car_chart']['data'] == [1, 1, 0]
