import pytest
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User, UserProfile, Role

PASSWORD = 'TestPass123!'


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_user(db):
    """Build an identity, optionally with its business profile."""

    def _make(email, password=PASSWORD, profile=None, **extra):
        identity = User.objects.create_user(email=email, password=password, **extra)
        if profile is not None:
            UserProfile.objects.create(user=identity, email=identity.email, **profile)
        return identity

    return _make


@pytest.fixture
def user(make_user):
    """Manager with a complete profile."""
    return make_user(
        'testuser@example.com',
        profile={
            'first_name': 'Test',
            'last_name': 'User',
            'role': Role.MANAGER,
            'department': 'Tailoring',
            'phone': '+919876543210',
        },
    )


@pytest.fixture
def user_without_profile(make_user):
    return make_user('noprofile@example.com')


@pytest.fixture
def user_inactive(make_user):
    return make_user('inactive@example.com', is_active=False)


@pytest.fixture
def authenticated_client(api_client, user):
    access = RefreshToken.for_user(user).access_token
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {access}')
    return api_client


@pytest.fixture
def user_with_reset_token(make_user):
    """Identity that asked for a reset link a moment ago."""
    identity = make_user('resetuser@example.com', password='OldPass123!')
    identity.password_reset_token = 'valid-reset-token-12345'
    identity.password_reset_requested_at = timezone.now()
    identity.save(update_fields=['password_reset_token', 'password_reset_requested_at'])
    return identity
