"""
Backend client.

``BackendClient`` is the only code that talks to the data store and the
identity services. Every public method performs one operation and returns an
envelope instead of raising:

    result = backend.get_ledger(ledger_id)
    if result.error:
        ...  # show or log the message, keep previous state
    ledger = result.result

List operations return ``ListResult`` whose ``results`` is an empty list on
failure. Create calls stamp ``created_at``/``updated_at``; update calls merge
the given fields and refresh ``updated_at``.

The process-wide client is built in ``CoreConfig.ready()`` and read through
``get_backend()``.
"""

import functools
import logging
from dataclasses import dataclass, field
from operator import attrgetter
from typing import Any, Callable, Generic, List, Optional, TypeVar
from uuid import UUID

from django.apps import apps
from django.core.exceptions import ValidationError
from django.db import DEFAULT_DB_ALIAS, transaction
from django.utils import timezone

from apps.accounts.models import User, UserProfile
from apps.accounts.services import (
    register_user,
    authenticate_user,
    sign_out_user,
    request_password_reset,
    confirm_password_reset,
)
from apps.factories.models import Factory, ProductionRecord
from apps.ledger.models import Ledger, Transaction
from apps.ledger.services.filtering import sort_by_date_desc

from .exceptions import RecordNotFoundError

logger = logging.getLogger(__name__)

T = TypeVar('T')


@dataclass(frozen=True)
class Result(Generic[T]):
    """Envelope for single-record and command operations."""

    result: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ListResult(Generic[T]):
    """Envelope for list operations."""

    results: List[T] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _error_message(exc: Exception) -> str:
    # Django ValidationError's str() is the repr of its message list
    if isinstance(exc, ValidationError):
        return '; '.join(exc.messages)
    return str(exc) or exc.__class__.__name__


def _enveloped(operation: str, many: bool = False):
    """Catch every failure of the wrapped call and return it as an envelope."""

    def decorator(func):
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            try:
                value = func(self, *args, **kwargs)
                if many:
                    # Querysets are lazy; evaluate while errors are still caught
                    value = list(value)
            except Exception as exc:
                message = _error_message(exc)
                logger.error("Error %s: %s", operation, message)
                return ListResult(error=message) if many else Result(error=message)
            if many:
                return ListResult(results=value)
            return Result(result=value)
        return wrapper
    return decorator


class BackendClient:
    """
    Store and identity operations returning ``Result``/``ListResult``.

    Args:
        using: Database alias every query runs against
        clock: Callable returning the current aware datetime, used for stamps
    """

    def __init__(self, *, using: str = DEFAULT_DB_ALIAS, clock: Callable = timezone.now):
        self._using = using
        self._clock = clock

    # ------------------------------------------------------------------
    # Shared record helpers
    # ------------------------------------------------------------------

    def _create(self, model, fields: dict):
        now = self._clock()
        with transaction.atomic(using=self._using):
            return model.objects.using(self._using).create(
                **fields,
                created_at=now,
                updated_at=now,
            )

    def _get(self, model, label: str, pk):
        try:
            return model.objects.using(self._using).get(pk=pk)
        except (model.DoesNotExist, ValidationError, ValueError):
            raise RecordNotFoundError(f"{label} not found")

    def _update(self, model, label: str, pk, updates: dict):
        record = self._get(model, label, pk)
        for name, value in updates.items():
            setattr(record, name, value)
        record.updated_at = self._clock()
        with transaction.atomic(using=self._using):
            record.save(using=self._using, update_fields=[*updates, 'updated_at'])
        return record

    def _delete(self, model, label: str, pk) -> None:
        record = self._get(model, label, pk)
        with transaction.atomic(using=self._using):
            record.delete(using=self._using)

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    @_enveloped('signing up')
    def sign_up(self, email: str, password: str) -> User:
        return register_user(email=email, password=password)

    @_enveloped('signing in')
    def sign_in(self, email: str, password: str) -> User:
        return authenticate_user(email=email, password=password)

    @_enveloped('signing out')
    def sign_out(self, refresh_token: str) -> None:
        sign_out_user(refresh_token=refresh_token)

    @_enveloped('sending password reset')
    def reset_password(self, email: str) -> None:
        request_password_reset(email=email)

    @_enveloped('confirming password reset')
    def confirm_password_reset(self, token: str, new_password: str) -> User:
        return confirm_password_reset(token=token, new_password=new_password)

    # ------------------------------------------------------------------
    # User profiles
    # ------------------------------------------------------------------

    @_enveloped('creating user profile')
    def create_user_profile(self, user: User, **fields: Any) -> UserProfile:
        fields.setdefault('email', user.email)
        return self._create(UserProfile, {'user': user, **fields})

    @_enveloped('loading user profile')
    def get_user_profile(self, user_id: UUID) -> UserProfile:
        return self._get(UserProfile, 'User profile', user_id)

    @_enveloped('updating user profile')
    def update_user_profile(self, user_id: UUID, **updates: Any) -> UserProfile:
        return self._update(UserProfile, 'User profile', user_id, updates)

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @_enveloped('adding factory')
    def add_factory(self, **fields: Any) -> Factory:
        return self._create(Factory, fields)

    @_enveloped('loading factories', many=True)
    def get_factories(self) -> List[Factory]:
        return (
            Factory.objects.using(self._using)
            .select_related('manager')
            .order_by('-created_at')
        )

    @_enveloped('loading factory')
    def get_factory(self, factory_id: UUID) -> Factory:
        return self._get(Factory, 'Factory', factory_id)

    @_enveloped('updating factory')
    def update_factory(self, factory_id: UUID, **updates: Any) -> Factory:
        return self._update(Factory, 'Factory', factory_id, updates)

    @_enveloped('deleting factory')
    def delete_factory(self, factory_id: UUID) -> None:
        self._delete(Factory, 'Factory', factory_id)

    # ------------------------------------------------------------------
    # Production records
    # ------------------------------------------------------------------

    @_enveloped('adding production record')
    def add_production_record(self, **fields: Any) -> ProductionRecord:
        return self._create(ProductionRecord, fields)

    @_enveloped('loading production records', many=True)
    def get_production_records(self, factory_id: Optional[UUID] = None) -> List[ProductionRecord]:
        queryset = ProductionRecord.objects.using(self._using).select_related('factory')
        if factory_id:
            queryset = queryset.filter(factory_id=factory_id)
        return queryset.order_by('-date', '-created_at')

    @_enveloped('loading production record')
    def get_production_record(self, record_id: UUID) -> ProductionRecord:
        return self._get(ProductionRecord, 'Production record', record_id)

    @_enveloped('updating production record')
    def update_production_record(self, record_id: UUID, **updates: Any) -> ProductionRecord:
        return self._update(ProductionRecord, 'Production record', record_id, updates)

    @_enveloped('deleting production record')
    def delete_production_record(self, record_id: UUID) -> None:
        self._delete(ProductionRecord, 'Production record', record_id)

    # ------------------------------------------------------------------
    # Ledgers
    # ------------------------------------------------------------------

    @_enveloped('creating ledger')
    def create_ledger(self, **fields: Any) -> Ledger:
        return self._create(Ledger, fields)

    @_enveloped('loading ledgers', many=True)
    def get_ledgers(self, user_id: UUID) -> List[Ledger]:
        # Equality filter only; newest-first ordering is applied here
        ledgers = list(
            Ledger.objects.using(self._using)
            .filter(created_by_id=user_id)
            .order_by('created_at')
        )
        return sorted(ledgers, key=attrgetter('created_at'), reverse=True)

    @_enveloped('loading ledger')
    def get_ledger(self, ledger_id: UUID) -> Ledger:
        return self._get(Ledger, 'Ledger', ledger_id)

    @_enveloped('updating ledger')
    def update_ledger(self, ledger_id: UUID, **updates: Any) -> Ledger:
        return self._update(Ledger, 'Ledger', ledger_id, updates)

    @_enveloped('deleting ledger')
    def delete_ledger(self, ledger_id: UUID) -> None:
        # Transactions go with it through the foreign key cascade
        self._delete(Ledger, 'Ledger', ledger_id)

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    @_enveloped('adding transaction')
    def add_transaction(self, **fields: Any) -> Transaction:
        return self._create(Transaction, fields)

    @_enveloped('loading transactions', many=True)
    def get_transactions(self, ledger_id: UUID) -> List[Transaction]:
        transactions = list(
            Transaction.objects.using(self._using)
            .filter(ledger_id=ledger_id)
            .order_by('created_at')
        )
        return sort_by_date_desc(transactions)

    @_enveloped('loading transaction')
    def get_transaction(self, transaction_id: UUID) -> Transaction:
        return self._get(Transaction, 'Transaction', transaction_id)

    @_enveloped('updating transaction')
    def update_transaction(self, transaction_id: UUID, **updates: Any) -> Transaction:
        return self._update(Transaction, 'Transaction', transaction_id, updates)

    @_enveloped('deleting transaction')
    def delete_transaction(self, transaction_id: UUID) -> None:
        self._delete(Transaction, 'Transaction', transaction_id)


def get_backend() -> BackendClient:
    """Return the client built at startup."""
    return apps.get_app_config('core').backend
