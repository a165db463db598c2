import random
from decimal import Decimal

from django.utils import timezone
from rest_framework import viewsets, status
from rest_framework.views import APIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.core.views import BackendMixin, envelope_error_response
from .models import FactoryStatus, ProductionStatus
from .permissions import IsFactoryManager, IsRecordCreator
from .serializers import (
    FactorySerializer,
    FactoryInputSerializer,
    ProductionRecordSerializer,
    ProductionRecordInputSerializer,
    DashboardSerializer,
)


class FactoryViewSet(BackendMixin, viewsets.ViewSet):
    """
    Factories (boutiques).

    list: All factories, newest first
    create: Add a factory managed by the requesting user
    retrieve: Get a factory
    partial_update: Change a factory (manager only)
    destroy: Delete a factory (manager only)
    """

    permission_classes = [IsAuthenticated, IsFactoryManager]

    def _load(self, request, pk):
        loaded = self.get_backend().get_factory(pk)
        if loaded.ok:
            self.check_object_permissions(request, loaded.result)
        return loaded

    @extend_schema(responses={200: FactorySerializer(many=True)}, tags=['factories'])
    def list(self, request):
        loaded = self.get_backend().get_factories()
        if loaded.error:
            return envelope_error_response(loaded.error)
        return Response(FactorySerializer(loaded.results, many=True).data)

    @extend_schema(request=FactoryInputSerializer, responses={201: FactorySerializer}, tags=['factories'])
    def create(self, request):
        serializer = FactoryInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        created = self.get_backend().add_factory(
            manager=request.user,
            **serializer.validated_data
        )
        if created.error:
            return envelope_error_response(created.error)
        return Response(FactorySerializer(created.result).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: FactorySerializer}, tags=['factories'])
    def retrieve(self, request, pk=None):
        loaded = self._load(request, pk)
        if loaded.error:
            return envelope_error_response(loaded.error)
        return Response(FactorySerializer(loaded.result).data)

    @extend_schema(request=FactoryInputSerializer, responses={200: FactorySerializer}, tags=['factories'])
    def partial_update(self, request, pk=None):
        loaded = self._load(request, pk)
        if loaded.error:
            return envelope_error_response(loaded.error)

        serializer = FactoryInputSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        updated = self.get_backend().update_factory(pk, **serializer.validated_data)
        if updated.error:
            return envelope_error_response(updated.error)
        return Response(FactorySerializer(updated.result).data)

    @extend_schema(tags=['factories'])
    def destroy(self, request, pk=None):
        loaded = self._load(request, pk)
        if loaded.error:
            return envelope_error_response(loaded.error)

        deleted = self.get_backend().delete_factory(pk)
        if deleted.error:
            return envelope_error_response(deleted.error)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ProductionRecordViewSet(BackendMixin, viewsets.ViewSet):
    """
    Production (sales) records.

    list: Records by date, newest first; ``?factory=<id>`` narrows to one factory
    create: Add a record created by the requesting user
    retrieve: Get a record
    partial_update: Change a record (creator only)
    destroy: Delete a record (creator only)
    """

    permission_classes = [IsAuthenticated, IsRecordCreator]

    def _load(self, request, pk):
        loaded = self.get_backend().get_production_record(pk)
        if loaded.ok:
            self.check_object_permissions(request, loaded.result)
        return loaded

    @extend_schema(
        parameters=[OpenApiParameter('factory', str, description='Factory id')],
        responses={200: ProductionRecordSerializer(many=True)},
        tags=['production'],
    )
    def list(self, request):
        factory_id = request.query_params.get('factory') or None
        loaded = self.get_backend().get_production_records(factory_id=factory_id)
        if loaded.error:
            return envelope_error_response(loaded.error)
        return Response(ProductionRecordSerializer(loaded.results, many=True).data)

    @extend_schema(
        request=ProductionRecordInputSerializer,
        responses={201: ProductionRecordSerializer},
        tags=['production'],
    )
    def create(self, request):
        serializer = ProductionRecordInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        created = self.get_backend().add_production_record(
            created_by=request.user,
            **serializer.validated_data
        )
        if created.error:
            return envelope_error_response(created.error)
        return Response(ProductionRecordSerializer(created.result).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: ProductionRecordSerializer}, tags=['production'])
    def retrieve(self, request, pk=None):
        loaded = self._load(request, pk)
        if loaded.error:
            return envelope_error_response(loaded.error)
        return Response(ProductionRecordSerializer(loaded.result).data)

    @extend_schema(
        request=ProductionRecordInputSerializer,
        responses={200: ProductionRecordSerializer},
        tags=['production'],
    )
    def partial_update(self, request, pk=None):
        loaded = self._load(request, pk)
        if loaded.error:
            return envelope_error_response(loaded.error)

        serializer = ProductionRecordInputSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        updated = self.get_backend().update_production_record(pk, **serializer.validated_data)
        if updated.error:
            return envelope_error_response(updated.error)
        return Response(ProductionRecordSerializer(updated.result).data)

    @extend_schema(tags=['production'])
    def destroy(self, request, pk=None):
        loaded = self._load(request, pk)
        if loaded.error:
            return envelope_error_response(loaded.error)

        deleted = self.get_backend().delete_production_record(pk)
        if deleted.error:
            return envelope_error_response(deleted.error)
        return Response(status=status.HTTP_204_NO_CONTENT)


# =============================================================================
# Dashboard
# =============================================================================

def _load_dashboard(backend, user):
    """
    Load profile, factories and production records as three separate calls.

    A failed call is logged by the client and shows up as an empty section.
    """
    profile = backend.get_user_profile(user.id)
    factories = backend.get_factories()
    records = backend.get_production_records()

    return {
        'profile': profile.result,
        'factories': factories.results,
        'production_records': records.results,
        'stats': {
            'factory_count': len(factories.results),
            'active_factory_count': sum(
                1 for f in factories.results if f.status == FactoryStatus.ACTIVE
            ),
            'production_count': len(records.results),
            'total_quantity': sum((r.quantity for r in records.results), Decimal('0')),
        },
    }


class DashboardView(BackendMixin, APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        responses={200: DashboardSerializer},
        description="Profile, factories, production records and summary counts.",
        tags=['dashboard'],
    )
    def get(self, request):
        data = _load_dashboard(self.get_backend(), request.user)
        return Response(DashboardSerializer(data).data)


class SampleFactoryView(BackendMixin, APIView):
    """Add a numbered sample factory managed by the current user."""

    permission_classes = [IsAuthenticated]

    @extend_schema(request=None, responses={201: FactorySerializer}, tags=['dashboard'])
    def post(self, request):
        backend = self.get_backend()
        existing = backend.get_factories()
        if existing.error:
            return envelope_error_response(existing.error)

        created = backend.add_factory(
            name=f"Parlad Boutique {len(existing.results) + 1}",
            location='Sample Location',
            capacity=1000,
            status=FactoryStatus.ACTIVE,
            manager=request.user,
        )
        if created.error:
            return envelope_error_response(created.error)
        return Response(FactorySerializer(created.result).data, status=status.HTTP_201_CREATED)


class SampleProductionRecordView(BackendMixin, APIView):
    """Add a numbered sample sales record to the most recent factory."""

    permission_classes = [IsAuthenticated]

    @extend_schema(request=None, responses={201: ProductionRecordSerializer}, tags=['dashboard'])
    def post(self, request):
        backend = self.get_backend()
        factories = backend.get_factories()
        if not factories.results:
            return Response(
                {'error': factories.error or 'Add a factory first'},
                status=status.HTTP_400_BAD_REQUEST
            )

        records = backend.get_production_records()
        if records.error:
            return envelope_error_response(records.error)

        created = backend.add_production_record(
            factory=factories.results[0],
            product_name=f"Fashion Item {len(records.results) + 1}",
            quantity=Decimal(random.randint(50, 149)),
            unit='pieces',
            date=timezone.localdate(),
            status=ProductionStatus.COMPLETED,
            notes='Sample sales record',
            created_by=request.user,
        )
        if created.error:
            return envelope_error_response(created.error)
        return Response(ProductionRecordSerializer(created.result).data, status=status.HTTP_201_CREATED)
