import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserProfile, Role
from apps.factories.models import Factory, ProductionRecord, ProductionStatus


def authenticate(client, user):
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def manager(db):
    """Manager with a profile."""
    user = User.objects.create_user(
        email='manager@example.com',
        password='TestPass123!',
    )
    UserProfile.objects.create(
        user=user,
        email=user.email,
        first_name='Meera',
        last_name='Parlad',
        role=Role.MANAGER,
    )
    return user


@pytest.fixture
def worker(db):
    """Worker without a profile."""
    return User.objects.create_user(
        email='worker@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def manager_client(manager):
    return authenticate(APIClient(), manager)


@pytest.fixture
def worker_client(worker):
    return authenticate(APIClient(), worker)


@pytest.fixture
def factory(manager):
    return Factory.objects.create(
        name='Parlad Boutique Main',
        location='Jaipur',
        capacity=1200,
        manager=manager,
    )


@pytest.fixture
def production_record(factory, worker):
    return ProductionRecord.objects.create(
        factory=factory,
        product_name='Silk Saree',
        quantity=Decimal('40'),
        date=date(2024, 1, 10),
        status=ProductionStatus.COMPLETED,
        created_by=worker,
    )
