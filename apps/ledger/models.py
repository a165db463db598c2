from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from decimal import Decimal
import uuid


class TransactionCategory(models.TextChoices):
    PERSONAL = 'Personal', 'Personal'
    BUSINESS = 'Business', 'Business'
    EXPENSE = 'Expense', 'Expense'
    INCOME = 'Income', 'Income'


class Ledger(models.Model):
    """A named book of transactions owned by one user."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, default='')

    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='ledgers'
    )

    # Stamped by the backend client
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'ledgers'

    def __str__(self):
        return self.name


class Transaction(models.Model):
    """A single debit and/or credit line in a ledger."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    ledger = models.ForeignKey(
        Ledger,
        on_delete=models.CASCADE,
        related_name='transactions'
    )

    date = models.DateField()
    particulars = models.CharField(max_length=500)
    debit = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0'))]
    )
    credit = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0'))]
    )
    category = models.CharField(
        max_length=20,
        choices=TransactionCategory.choices,
        default=TransactionCategory.PERSONAL
    )

    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='ledger_transactions'
    )

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'transactions'

    def __str__(self):
        return f"{self.date} {self.particulars}"
