from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from decimal import Decimal
import uuid


class FactoryStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    INACTIVE = 'inactive', 'Inactive'
    MAINTENANCE = 'maintenance', 'Maintenance'


class ProductionStatus(models.TextChoices):
    COMPLETED = 'completed', 'Completed'
    IN_PROGRESS = 'in_progress', 'In progress'
    PLANNED = 'planned', 'Planned'


class Factory(models.Model):
    """A boutique or production site run by a manager."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=200)
    location = models.CharField(max_length=200)
    capacity = models.PositiveIntegerField(default=0)
    status = models.CharField(
        max_length=20,
        choices=FactoryStatus.choices,
        default=FactoryStatus.ACTIVE
    )

    manager = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='managed_factories'
    )

    # Stamped by the backend client
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'factories'
        verbose_name_plural = 'factories'
        indexes = [
            models.Index(fields=['created_at'], name='factories_created_idx'),
            models.Index(fields=['manager', 'status'], name='factories_manager_status_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.location})"


class ProductionRecord(models.Model):
    """Output or sales entry recorded against a factory."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Kept when the factory goes away so history survives
    factory = models.ForeignKey(
        Factory,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='production_records'
    )

    product_name = models.CharField(max_length=200)
    quantity = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0'))]
    )
    unit = models.CharField(max_length=30, default='pieces')
    date = models.DateField()
    status = models.CharField(
        max_length=20,
        choices=ProductionStatus.choices,
        default=ProductionStatus.PLANNED
    )
    notes = models.TextField(blank=True, default='')

    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='production_records'
    )

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'production'
        indexes = [
            models.Index(fields=['factory', 'date'], name='production_factory_date_idx'),
            models.Index(fields=['date'], name='production_date_idx'),
        ]

    def __str__(self):
        return f"{self.product_name}: {self.quantity} {self.unit}"
