"""
Management command to create sample data for trying out the API.

Usage:
    python manage.py create_sample_data [--clear]

This creates:
- 3 users with profiles (admin, manager, worker)
- 2 factories with production records
- A "Shop" ledger with a handful of transactions

Running it again without --clear keeps existing users and skips the
factories and ledger the sample manager already owns.
"""

from datetime import date, timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from apps.accounts.models import User, Role
from apps.core.backend import get_backend
from apps.factories.models import Factory, FactoryStatus, ProductionStatus
from apps.ledger.models import Ledger, TransactionCategory

SAMPLE_PASSWORD = 'password123'
SAMPLE_LEDGER = 'Shop'

SAMPLE_USERS = [
    ('admin@example.com', 'Admin', 'User', Role.ADMIN, 'Management'),
    ('meera@example.com', 'Meera', 'Parlad', Role.MANAGER, 'Operations'),
    ('ravi@example.com', 'Ravi', 'Kumar', Role.WORKER, 'Tailoring'),
]


class Command(BaseCommand):
    help = 'Create sample users, factories and ledgers'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new sample data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        self.backend = get_backend()

        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        users = self.create_users()
        factories = self.create_factories(users['meera@example.com'])
        if factories:
            self.create_production(factories, users['ravi@example.com'])
        self.create_ledger(users['meera@example.com'])

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        for email, *_ in SAMPLE_USERS:
            self.stdout.write(f'  {email} / {SAMPLE_PASSWORD}')

    def clear_data(self):
        # Ledgers take their transactions with them
        Ledger.objects.all().delete()
        Factory.objects.all().delete()
        User.objects.filter(email__in=[email for email, *_ in SAMPLE_USERS]).delete()

    def _unwrap(self, envelope):
        if envelope.error:
            raise CommandError(envelope.error)
        return envelope.result

    def _unwrap_list(self, envelope):
        if envelope.error:
            raise CommandError(envelope.error)
        return envelope.results

    def create_users(self):
        self.stdout.write('  Creating users...')

        users = {}
        for email, first_name, last_name, role, department in SAMPLE_USERS:
            user = User.objects.filter(email=email).first()
            if user is None:
                user = self._unwrap(self.backend.sign_up(email, SAMPLE_PASSWORD))
                self._unwrap(self.backend.create_user_profile(
                    user,
                    first_name=first_name,
                    last_name=last_name,
                    role=role,
                    department=department,
                ))
            if role == Role.ADMIN and not user.is_staff:
                user.is_staff = True
                user.is_superuser = True
                user.save(update_fields=['is_staff', 'is_superuser'])
            users[email] = user
        return users

    def create_factories(self, manager):
        self.stdout.write('  Creating factories...')

        factories = self._unwrap_list(self.backend.get_factories())
        if any(f.manager_id == manager.id for f in factories):
            self.stdout.write('  Sample factories already exist, skipping')
            return []

        factory_data = [
            ('Parlad Boutique Main', 'Jaipur', 1200, FactoryStatus.ACTIVE),
            ('Parlad Boutique Annexe', 'Udaipur', 400, FactoryStatus.MAINTENANCE),
        ]
        return [
            self._unwrap(self.backend.add_factory(
                name=name,
                location=location,
                capacity=capacity,
                status=status,
                manager=manager,
            ))
            for name, location, capacity, status in factory_data
        ]

    def create_production(self, factories, worker):
        self.stdout.write('  Creating production records...')

        today = date.today()
        records = [
            (factories[0], 'Silk Saree', Decimal('40'), ProductionStatus.COMPLETED, 3),
            (factories[0], 'Cotton Kurta', Decimal('120'), ProductionStatus.COMPLETED, 1),
            (factories[0], 'Lehenga', Decimal('15'), ProductionStatus.IN_PROGRESS, 0),
            (factories[1], 'Dupatta', Decimal('60'), ProductionStatus.PLANNED, 0),
        ]
        for factory, product, quantity, status, days_ago in records:
            self._unwrap(self.backend.add_production_record(
                factory=factory,
                product_name=product,
                quantity=quantity,
                date=today - timedelta(days=days_ago),
                status=status,
                created_by=worker,
            ))

    def create_ledger(self, owner):
        self.stdout.write('  Creating ledger...')

        ledgers = self._unwrap_list(self.backend.get_ledgers(owner.id))
        if any(ledger.name == SAMPLE_LEDGER for ledger in ledgers):
            self.stdout.write(f'  "{SAMPLE_LEDGER}" ledger already exists, skipping')
            return

        ledger = self._unwrap(self.backend.create_ledger(
            name=SAMPLE_LEDGER,
            description='Day-to-day boutique accounts',
            created_by=owner,
        ))

        entries = [
            ('2024-01-05', 'Fabric purchase', Decimal('500'), Decimal('0'), TransactionCategory.EXPENSE),
            ('2024-01-10', 'Saree sale', Decimal('0'), Decimal('1200'), TransactionCategory.INCOME),
            ('2024-01-12', 'Tailor wages', Decimal('300'), Decimal('0'), TransactionCategory.BUSINESS),
            ('2024-01-15', 'Kurta sale', Decimal('0'), Decimal('450'), TransactionCategory.INCOME),
        ]
        for day, particulars, debit, credit, category in entries:
            self._unwrap(self.backend.add_transaction(
                ledger=ledger,
                date=date.fromisoformat(day),
                particulars=particulars,
                debit=debit,
                credit=credit,
                category=category,
                created_by=owner,
            ))
