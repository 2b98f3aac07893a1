from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from accounts.models import Role, User
from services.identity_service import issue_development_token


@pytest.fixture(autouse=True)
def jwt_identity_oracle(settings):
    # Tokens in tests are signed locally instead of going to Firebase
    settings.IDENTITY_ORACLE = 'services.identity_service.JWTIdentityOracle'


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def client_for(db):
    def _client(email):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f'Bearer {issue_development_token(email)}')
        return client
    return _client


@pytest.fixture
def make_user(db):
    def _make(email, role=Role.DONOR, **fields):
        return User.objects.create(email=email, role=role, **fields)
    return _make


@pytest.fixture
def backdate():
    """Spread created_at values so newest-first ordering is deterministic."""
    def _backdate(instance, minutes_ago):
        type(instance).objects.filter(pk=instance.pk).update(
            created_at=timezone.now() - timedelta(minutes=minutes_ago)
        )
    return _backdate
