from datetime import timedelta

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from clinic.models import User
from clinic.services.credentials import issue_token

pytestmark = pytest.mark.django_db

PASSWORD = 'P@ssw0rd1'

REGISTER_BODY = {
    'email': 'new@example.com',
    'password': 'secret123',
    'firstName': 'New',
    'lastName': 'Person',
}


def test_register_creates_plain_user_and_session(anon_client):
    r = anon_client.post('/api/register', REGISTER_BODY, format='json')
    assert r.status_code == 201
    body = r.json()
    assert body['email'] == 'new@example.com'
    assert body['firstName'] == 'New'
    assert body['role'] == 'user'
    assert 'password' not in body
    assert r.cookies['token']['httponly']

    me = anon_client.get('/api/auth/user')
    assert me.status_code == 200
    assert me.json()['id'] == body['id']


def test_register_ignores_requested_role(anon_client):
    r = anon_client.post('/api/register', {**REGISTER_BODY, 'role': 'admin'}, format='json')
    assert r.status_code == 201
    assert r.json()['role'] == 'user'
    assert User.objects.get(email='new@example.com').role == User.ROLE_USER


def test_register_duplicate_email(anon_client, patient):
    r = anon_client.post('/api/register', {**REGISTER_BODY, 'email': 'PATIENT@example.com'}, format='json')
    assert r.status_code == 400
    assert r.json()['error']['code'] == 'conflict'
    assert User.objects.filter(email__iexact='patient@example.com').count() == 1


@pytest.mark.parametrize('override', [
    {'password': '123'},
    {'email': 'not-an-email'},
    {'firstName': ''},
    {'lastName': '<b></b>'},
    {'password': '12345678'},
])
def test_register_rejects_invalid_input(anon_client, override):
    r = anon_client.post('/api/register', {**REGISTER_BODY, **override}, format='json')
    assert r.status_code == 400
    err = r.json()['error']
    assert err['code'] == 'invalid'
    assert err['fields']
    assert not User.objects.filter(email='new@example.com').exists()


def test_password_is_stored_hashed(anon_client):
    anon_client.post('/api/register', REGISTER_BODY, format='json')
    user = User.objects.get(email='new@example.com')
    assert user.password != 'secret123'
    assert user.check_password('secret123')


def test_login_sets_http_only_cookie(anon_client, patient, settings):
    r = anon_client.post('/api/login', {'email': patient.email, 'password': PASSWORD}, format='json')
    assert r.status_code == 200
    assert r.json()['id'] == patient.id
    assert 'password' not in r.json()
    cookie = r.cookies['token']
    assert cookie['httponly']
    assert cookie['samesite'] == 'Lax'
    assert int(cookie['max-age']) == int(settings.SESSION_TOKEN_TTL.total_seconds())


def test_login_is_case_insensitive_on_email(anon_client, patient):
    r = anon_client.post('/api/login', {'email': 'Patient@Example.com', 'password': PASSWORD}, format='json')
    assert r.status_code == 200


@pytest.mark.parametrize('email,password', [
    ('patient@example.com', 'wrong-password'),
    ('nobody@example.com', PASSWORD),
])
def test_login_rejects_bad_credentials(anon_client, patient, email, password):
    r = anon_client.post('/api/login', {'email': email, 'password': password}, format='json')
    assert r.status_code == 401
    assert r.json()['error']['message'] == 'Invalid credentials'
    assert 'token' not in r.cookies


def test_login_rejects_inactive_account(anon_client, patient):
    patient.is_active = False
    patient.save()
    r = anon_client.post('/api/login', {'email': patient.email, 'password': PASSWORD}, format='json')
    assert r.status_code == 401


def test_current_user_requires_session(anon_client):
    r = anon_client.get('/api/auth/user')
    assert r.status_code == 401
    assert r.json()['ok'] is False


def test_bearer_header_is_accepted(patient):
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {issue_token(patient.pk)}')
    r = client.get('/api/auth/user')
    assert r.status_code == 200
    assert r.json()['email'] == patient.email


def test_cookie_takes_precedence_over_header(patient, other_patient):
    client = APIClient()
    client.cookies['token'] = issue_token(patient.pk)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {issue_token(other_patient.pk)}')
    r = client.get('/api/auth/user')
    assert r.status_code == 200
    assert r.json()['id'] == patient.id


def test_invalid_cookie_is_not_rescued_by_header(patient):
    client = APIClient()
    client.cookies['token'] = 'garbage'
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {issue_token(patient.pk)}')
    r = client.get('/api/auth/user')
    assert r.status_code == 401
    assert r.json()['error']['code'] == 'token_not_valid'


def test_expired_token_is_rejected(patient):
    token = AccessToken()
    token['userId'] = str(patient.pk)
    token.set_exp(lifetime=-timedelta(seconds=1))
    client = APIClient()
    client.cookies['token'] = str(token)
    assert client.get('/api/auth/user').status_code == 401


def test_token_of_deleted_user_is_rejected(client_for, make_user):
    ghost = make_user('ghost@example.com')
    client = client_for(ghost)
    ghost.delete()
    assert client.get('/api/auth/user').status_code == 401


def test_token_of_deactivated_user_is_rejected(client_for, patient):
    client = client_for(patient)
    User.objects.filter(pk=patient.pk).update(is_active=False)
    assert client.get('/api/auth/user').status_code == 401


def test_role_is_read_fresh_on_every_request(client_for, admin):
    client = client_for(admin)
    assert client.get('/api/dashboard/stats').status_code == 200

    User.objects.filter(pk=admin.pk).update(role=User.ROLE_USER)
    r = client.get('/api/dashboard/stats')
    assert r.status_code == 403
    assert r.json()['error']['message'] == 'Admin access required'


def test_promotion_takes_effect_without_new_token(client_for, patient):
    client = client_for(patient)
    assert client.get('/api/dashboard/stats').status_code == 403
    User.objects.filter(pk=patient.pk).update(role=User.ROLE_ADMIN)
    assert client.get('/api/dashboard/stats').status_code == 200


def test_logout_clears_cookie(anon_client, patient):
    anon_client.post('/api/login', {'email': patient.email, 'password': PASSWORD}, format='json')
    r = anon_client.post('/api/logout')
    assert r.status_code == 200
    assert r.json() == {'ok': True, 'message': 'Logged out successfully'}
    assert r.cookies['token'].value == ''
    assert anon_client.get('/api/auth/user').status_code == 401


def test_logout_without_session_succeeds(anon_client):
    assert anon_client.post('/api/logout').status_code == 200


def test_login_works_with_stale_cookie(patient):
    client = APIClient()
    client.cookies['token'] = 'stale'
    r = client.post('/api/login', {'email': patient.email, 'password': PASSWORD}, format='json')
    assert r.status_code == 200


def test_admin_creates_admin(client_for, admin):
    r = client_for(admin).post('/api/admin/create', {**REGISTER_BODY, 'email': 'boss@example.com'}, format='json')
    assert r.status_code == 201
    assert r.json()['role'] == 'admin'
    created = User.objects.get(email='boss@example.com')
    assert created.is_staff
    assert created.check_password('secret123')


def test_non_admin_cannot_create_admin(client_for, patient, anon_client):
    assert client_for(patient).post('/api/admin/create', REGISTER_BODY, format='json').status_code == 403
    assert anon_client.post('/api/admin/create', REGISTER_BODY, format='json').status_code == 401
    assert not User.objects.filter(email='new@example.com').exists()


def test_register_applies_password_validators(anon_client):
    r = anon_client.post('/api/register', {**REGISTER_BODY, 'password': '20250110'}, format='json')
    assert r.status_code == 400
    assert 'password' in r.json()['error']['fields']


def test_admin_create_applies_password_validators(client_for, admin):
    body = {**REGISTER_BODY, 'email': 'boss@example.com', 'password': '987654321'}
    assert client_for(admin).post('/api/admin/create', body, format='json').status_code == 400
    assert not User.objects.filter(email='boss@example.com').exists()
