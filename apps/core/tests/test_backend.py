import logging
import uuid
from datetime import date, datetime, timedelta, timezone as dt_timezone
from decimal import Decimal

import pytest

from apps.accounts.models import User, UserProfile
from apps.core.backend import BackendClient, ListResult, Result, get_backend
from apps.ledger.models import Ledger, Transaction


class FakeClock:
    """Clock that moves forward one minute per call."""

    def __init__(self, start=datetime(2024, 1, 1, 9, 0, tzinfo=dt_timezone.utc)):
        self.now = start

    def __call__(self):
        current = self.now
        self.now += timedelta(minutes=1)
        return current


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def backend(clock):
    return BackendClient(clock=clock)


@pytest.fixture
def owner(db):
    return User.objects.create_user(email='owner@example.com', password='TestPass123!')


@pytest.fixture
def ledger(backend, owner):
    return backend.create_ledger(name='Shop', description='Boutique', created_by=owner).result


def test_process_wide_client_is_built_at_startup():
    assert isinstance(get_backend(), BackendClient)
    assert get_backend() is get_backend()


@pytest.mark.django_db
class TestEnvelopes:
    """Every call returns an envelope and never raises."""

    def test_success_has_no_error(self, backend, owner):
        created = backend.create_ledger(name='Shop', created_by=owner)

        assert isinstance(created, Result)
        assert created.ok
        assert created.error is None
        assert created.result.name == 'Shop'

    def test_missing_record_is_an_error_string(self, backend):
        loaded = backend.get_ledger(uuid.uuid4())

        assert loaded.result is None
        assert loaded.error == 'Ledger not found'
        assert not loaded.ok

    def test_malformed_id_is_not_found(self, backend):
        loaded = backend.get_transaction('not-a-uuid')
        assert loaded.error == 'Transaction not found'

    def test_missing_profile_message(self, backend, owner):
        assert backend.get_user_profile(owner.id).error == 'User profile not found'

    def test_list_failure_returns_empty_results(self, backend):
        loaded = backend.get_production_records(factory_id='not-a-uuid')

        assert isinstance(loaded, ListResult)
        assert loaded.results == []
        assert loaded.error == '\u201cnot-a-uuid\u201d is not a valid UUID.'

    def test_failure_is_logged(self, backend, caplog):
        with caplog.at_level(logging.ERROR, logger='apps.core.backend'):
            backend.delete_factory(uuid.uuid4())

        assert 'Error deleting factory: Factory not found' in caplog.text

    def test_store_error_is_captured(self, backend, owner):
        # Missing required foreign key
        created = backend.add_transaction(
            date=date(2024, 1, 1),
            particulars='Orphan',
            created_by=owner,
        )

        assert created.result is None
        assert created.error

    def test_auth_errors_are_enveloped(self, backend, owner):
        signin = backend.sign_in('owner@example.com', 'wrong')
        assert signin.error == 'Invalid email or password'

        signup = backend.sign_up('owner@example.com', 'TestPass123!')
        assert signup.error == 'Email address is already in use'


@pytest.mark.django_db
class TestTimestamps:

    def test_create_stamps_both(self, backend, owner, clock):
        expected = clock.now
        ledger = backend.create_ledger(name='Shop', created_by=owner).result

        assert ledger.created_at == expected
        assert ledger.updated_at == expected

    def test_update_merges_and_refreshes_updated_at(self, backend, ledger):
        before = Ledger.objects.get(pk=ledger.pk)

        updated = backend.update_ledger(ledger.id, description='Renamed book').result

        stored = Ledger.objects.get(pk=ledger.pk)
        assert stored.description == 'Renamed book'
        assert stored.name == 'Shop'
        assert stored.created_at == before.created_at
        assert stored.updated_at > before.updated_at
        assert updated.updated_at == stored.updated_at

    def test_profile_email_defaults_to_identity(self, backend, owner):
        profile = backend.create_user_profile(owner, first_name='Meera', last_name='P').result

        assert profile.email == 'owner@example.com'
        assert UserProfile.objects.get(pk=owner.pk).first_name == 'Meera'


@pytest.mark.django_db
class TestOrdering:

    def test_ledgers_newest_first_and_owner_only(self, backend, owner):
        other = User.objects.create_user(email='other@example.com', password='TestPass123!')
        first = backend.create_ledger(name='First', created_by=owner).result
        second = backend.create_ledger(name='Second', created_by=owner).result
        backend.create_ledger(name='Not mine', created_by=other)

        loaded = backend.get_ledgers(owner.id)

        assert [l.id for l in loaded.results] == [second.id, first.id]

    def test_transactions_by_date_desc_with_stable_ties(self, backend, ledger, owner):
        def add(day, particulars):
            return backend.add_transaction(
                ledger=ledger,
                date=day,
                particulars=particulars,
                debit=Decimal('10'),
                created_by=owner,
            ).result

        add(date(2024, 1, 1), 'Oldest')
        add(date(2024, 1, 3), 'Same day A')
        add(date(2024, 1, 3), 'Same day B')
        add(date(2024, 1, 2), 'Middle')

        loaded = backend.get_transactions(ledger.id)

        assert [t.particulars for t in loaded.results] == [
            'Same day A', 'Same day B', 'Middle', 'Oldest',
        ]

    def test_transactions_filtered_by_ledger(self, backend, ledger, owner):
        other = backend.create_ledger(name='Home', created_by=owner).result
        backend.add_transaction(
            ledger=other, date=date(2024, 1, 1), particulars='Rent',
            debit=Decimal('100'), created_by=owner,
        )

        assert backend.get_transactions(ledger.id).results == []

    def test_delete_ledger_cascades(self, backend, ledger, owner):
        backend.add_transaction(
            ledger=ledger, date=date(2024, 1, 1), particulars='Sale',
            credit=Decimal('100'), created_by=owner,
        )

        assert backend.delete_ledger(ledger.id).ok
        assert backend.get_ledger(ledger.id).error == 'Ledger not found'
        assert not Transaction.objects.filter(ledger_id=ledger.id).exists()
