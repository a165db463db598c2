import pytest
from datetime import date
from decimal import Decimal
from django.apps import apps as django_apps
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.core.backend import BackendClient
from apps.ledger.models import Ledger, Transaction, TransactionCategory


def authenticate(client, user):
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def owner(db):
    return User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def other_user(db):
    return User.objects.create_user(
        email='other@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def owner_client(owner):
    return authenticate(APIClient(), owner)


@pytest.fixture
def other_client(other_user):
    return authenticate(APIClient(), other_user)


@pytest.fixture
def shop_ledger(owner):
    """The "Shop" ledger: 500 debit, 1200 credit."""
    ledger = Ledger.objects.create(
        name='Shop',
        description='Boutique accounts',
        created_by=owner,
    )
    Transaction.objects.create(
        ledger=ledger,
        date=date(2024, 1, 5),
        particulars='Fabric purchase',
        debit=Decimal('500'),
        category=TransactionCategory.EXPENSE,
        created_by=owner,
    )
    Transaction.objects.create(
        ledger=ledger,
        date=date(2024, 1, 10),
        particulars='Saree sale',
        credit=Decimal('1200'),
        category=TransactionCategory.INCOME,
        created_by=owner,
    )
    return ledger


@pytest.fixture
def shop_transaction(shop_ledger):
    return shop_ledger.transactions.get(particulars='Saree sale')


class SpyBackend(BackendClient):
    """Real client that records every call made through it."""

    def __init__(self):
        super().__init__()
        self.calls = []

    def __getattribute__(self, name):
        attr = super().__getattribute__(name)
        if callable(attr) and not name.startswith('_'):
            object.__getattribute__(self, 'calls').append(name)
        return attr


@pytest.fixture
def spy_backend(monkeypatch):
    """Swap the process-wide client for a recording one."""
    spy = SpyBackend()
    monkeypatch.setattr(django_apps.get_app_config('core'), 'backend', spy)
    return spy
