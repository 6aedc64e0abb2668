import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from clinic.models import Doctor, User
from clinic.services.credentials import issue_token

PASSWORD = 'P@ssw0rd1'


@pytest.fixture(autouse=True)
def _test_environment(settings):
    settings.PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']
    # throttle counters live in the cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def make_user(db):
    def _make(email, role=User.ROLE_USER, password=PASSWORD, **extra):
        extra.setdefault('first_name', 'Test')
        extra.setdefault('last_name', 'User')
        return User.objects.create_user(email=email, password=password, role=role, **extra)
    return _make


@pytest.fixture
def patient(make_user):
    return make_user('patient@example.com', first_name='Pat', last_name='Ient')


@pytest.fixture
def other_patient(make_user):
    return make_user('other@example.com', first_name='Otto', last_name='Other')


@pytest.fixture
def admin(make_user):
    return make_user('admin@example.com', role=User.ROLE_ADMIN, first_name='Ada', last_name='Min')


@pytest.fixture
def doctor(db):
    return Doctor.objects.create(
        first_name='Alice', last_name='Smith', email='alice.smith@example.com', specialty='cardiology',
    )


@pytest.fixture
def anon_client():
    return APIClient()


@pytest.fixture
def client_for():
    """Return an APIClient carrying a session cookie for ``user``."""
    def _client(user):
        client = APIClient()
        client.cookies['token'] = issue_token(user.pk)
        return client
    return _client
