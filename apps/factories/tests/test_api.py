import uuid
import pytest
from datetime import date
from decimal import Decimal
from django.urls import reverse
from rest_framework import status
from apps.factories.models import Factory, ProductionRecord


# =============================================================================
# Factory Tests
# =============================================================================

@pytest.mark.django_db
class TestFactoryCRUD:
    """Tests for /api/factories/"""

    def test_list_requires_authentication(self, api_client):
        response = api_client.get(reverse('factories:factory-list'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_create_factory(self, manager_client, manager):
        url = reverse('factories:factory-list')
        response = manager_client.post(url, {
            'name': 'Parlad Boutique Annexe',
            'location': 'Udaipur',
            'capacity': 400,
        })

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == 'active'
        assert response.data['manager_email'] == manager.email
        factory = Factory.objects.get(name='Parlad Boutique Annexe')
        assert factory.manager == manager
        assert factory.created_at == factory.updated_at

    def test_create_factory_negative_capacity(self, manager_client):
        url = reverse('factories:factory-list')
        response = manager_client.post(url, {
            'name': 'Broken',
            'location': 'Nowhere',
            'capacity': -5,
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'capacity' in response.data

    def test_list_newest_first(self, manager_client, factory):
        manager_client.post(reverse('factories:factory-list'), {
            'name': 'Second',
            'location': 'Delhi',
        })

        response = manager_client.get(reverse('factories:factory-list'))

        assert response.status_code == status.HTTP_200_OK
        assert [f['name'] for f in response.data] == ['Second', 'Parlad Boutique Main']

    def test_retrieve_missing(self, manager_client):
        url = reverse('factories:factory-detail', kwargs={'pk': uuid.uuid4()})
        response = manager_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error'] == 'Factory not found'

    def test_any_user_can_read(self, worker_client, factory):
        url = reverse('factories:factory-detail', kwargs={'pk': factory.id})
        response = worker_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['name'] == 'Parlad Boutique Main'

    def test_manager_updates(self, manager_client, factory):
        url = reverse('factories:factory-detail', kwargs={'pk': factory.id})
        response = manager_client.patch(url, {'status': 'maintenance'})

        assert response.status_code == status.HTTP_200_OK
        factory.refresh_from_db()
        assert factory.status == 'maintenance'
        assert factory.location == 'Jaipur'

    def test_non_manager_cannot_update(self, worker_client, factory):
        url = reverse('factories:factory-detail', kwargs={'pk': factory.id})
        response = worker_client.patch(url, {'status': 'inactive'})

        assert response.status_code == status.HTTP_403_FORBIDDEN
        factory.refresh_from_db()
        assert factory.status == 'active'

    def test_delete_keeps_production_history(self, manager_client, factory, production_record):
        url = reverse('factories:factory-detail', kwargs={'pk': factory.id})
        response = manager_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Factory.objects.filter(pk=factory.id).exists()
        production_record.refresh_from_db()
        assert production_record.factory is None

    def test_non_manager_cannot_delete(self, worker_client, factory):
        url = reverse('factories:factory-detail', kwargs={'pk': factory.id})
        response = worker_client.delete(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert Factory.objects.filter(pk=factory.id).exists()


# =============================================================================
# Production Record Tests
# =============================================================================

@pytest.mark.django_db
class TestProductionRecords:
    """Tests for /api/production/"""

    def test_create_record(self, worker_client, worker, factory):
        url = reverse('factories:production-list')
        response = worker_client.post(url, {
            'factory': str(factory.id),
            'product_name': 'Cotton Kurta',
            'quantity': '120',
            'date': '2024-01-12',
            'status': 'in_progress',
        })

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['unit'] == 'pieces'
        assert response.data['factory_name'] == 'Parlad Boutique Main'
        record = ProductionRecord.objects.get(product_name='Cotton Kurta')
        assert record.created_by == worker

    def test_create_negative_quantity(self, worker_client, factory):
        url = reverse('factories:production-list')
        response = worker_client.post(url, {
            'factory': str(factory.id),
            'product_name': 'Broken',
            'quantity': '-1',
            'date': '2024-01-12',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'quantity' in response.data

    def test_create_unknown_factory(self, worker_client):
        url = reverse('factories:production-list')
        response = worker_client.post(url, {
            'factory': str(uuid.uuid4()),
            'product_name': 'Lost',
            'quantity': '1',
            'date': '2024-01-12',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'factory' in response.data

    def test_list_with_malformed_factory_id(self, worker_client):
        url = reverse('factories:production-list')
        response = worker_client.get(url, {'factory': 'nope'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {'error': '“nope” is not a valid UUID.'}

    def test_list_by_date_desc(self, worker_client, worker, factory, production_record):
        ProductionRecord.objects.create(
            factory=factory,
            product_name='Lehenga',
            quantity=Decimal('5'),
            date=date(2024, 2, 1),
            created_by=worker,
        )

        response = worker_client.get(reverse('factories:production-list'))

        assert [r['product_name'] for r in response.data] == ['Lehenga', 'Silk Saree']

    def test_list_filtered_by_factory(self, manager_client, manager, worker, factory, production_record):
        other = Factory.objects.create(name='Annexe', location='Udaipur', manager=manager)
        ProductionRecord.objects.create(
            factory=other,
            product_name='Dupatta',
            quantity=Decimal('60'),
            date=date(2024, 1, 1),
            created_by=worker,
        )

        url = reverse('factories:production-list')
        response = manager_client.get(url, {'factory': str(other.id)})

        assert response.status_code == status.HTTP_200_OK
        assert [r['product_name'] for r in response.data] == ['Dupatta']

    def test_creator_updates(self, worker_client, production_record):
        url = reverse('factories:production-detail', kwargs={'pk': production_record.id})
        response = worker_client.patch(url, {'notes': 'Checked'})

        assert response.status_code == status.HTTP_200_OK
        production_record.refresh_from_db()
        assert production_record.notes == 'Checked'

    def test_non_creator_cannot_delete(self, manager_client, production_record):
        url = reverse('factories:production-detail', kwargs={'pk': production_record.id})
        response = manager_client.delete(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_creator_deletes(self, worker_client, production_record):
        url = reverse('factories:production-detail', kwargs={'pk': production_record.id})
        response = worker_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not ProductionRecord.objects.filter(pk=production_record.id).exists()


# =============================================================================
# Dashboard Tests
# =============================================================================

@pytest.mark.django_db
class TestDashboard:
    """Tests for /api/dashboard/"""

    def test_dashboard_loads_everything(self, manager_client, factory, production_record):
        response = manager_client.get(reverse('factories:dashboard'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['profile']['full_name'] == 'Meera Parlad'
        assert len(response.data['factories']) == 1
        assert len(response.data['production_records']) == 1
        assert response.data['stats'] == {
            'factory_count': 1,
            'active_factory_count': 1,
            'production_count': 1,
            'total_quantity': '40.00',
        }

    def test_dashboard_without_profile(self, worker_client):
        response = worker_client.get(reverse('factories:dashboard'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['profile'] is None
        assert response.data['factories'] == []

    def test_add_sample_factory_numbers_by_count(self, manager_client, manager, factory):
        response = manager_client.post(reverse('factories:sample-factory'))

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['name'] == 'Parlad Boutique 2'
        assert response.data['location'] == 'Sample Location'
        assert response.data['capacity'] == 1000
        assert response.data['status'] == 'active'
        assert Factory.objects.get(name='Parlad Boutique 2').manager == manager

    def test_add_sample_production_requires_factory(self, worker_client):
        response = worker_client.post(reverse('factories:sample-production'))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not ProductionRecord.objects.exists()

    def test_add_sample_production(self, worker_client, worker, factory, production_record):
        response = worker_client.post(reverse('factories:sample-production'))

        assert response.status_code == status.HTTP_201_CREATED
        record = ProductionRecord.objects.get(product_name='Fashion Item 2')
        assert record.factory == factory
        assert record.created_by == worker
        assert record.status == 'completed'
        assert record.notes == 'Sample sales record'
        assert 50 <= record.quantity <= 149
