from rest_framework import serializers

from apps.accounts.serializers import UserProfileSerializer
from .models import Factory, ProductionRecord


class FactorySerializer(serializers.ModelSerializer):
    """Factory as returned by the API."""

    manager_email = serializers.EmailField(source='manager.email', read_only=True)

    class Meta:
        model = Factory
        fields = [
            'id',
            'name',
            'location',
            'capacity',
            'status',
            'manager',
            'manager_email',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class FactoryInputSerializer(serializers.ModelSerializer):
    """Create/update form. The manager is always the requesting user."""

    class Meta:
        model = Factory
        fields = ['name', 'location', 'capacity', 'status']


class ProductionRecordSerializer(serializers.ModelSerializer):
    factory_name = serializers.CharField(source='factory.name', read_only=True, default=None)

    class Meta:
        model = ProductionRecord
        fields = [
            'id',
            'factory',
            'factory_name',
            'product_name',
            'quantity',
            'unit',
            'date',
            'status',
            'notes',
            'created_by',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ProductionRecordInputSerializer(serializers.ModelSerializer):
    """Create/update form for a production (sales) record."""

    class Meta:
        model = ProductionRecord
        fields = ['factory', 'product_name', 'quantity', 'unit', 'date', 'status', 'notes']


class DashboardStatsSerializer(serializers.Serializer):
    factory_count = serializers.IntegerField()
    active_factory_count = serializers.IntegerField()
    production_count = serializers.IntegerField()
    total_quantity = serializers.DecimalField(max_digits=None, decimal_places=2)


class DashboardSerializer(serializers.Serializer):
    """Everything the dashboard screen shows, loaded in one request."""

    profile = UserProfileSerializer(allow_null=True)
    factories = FactorySerializer(many=True)
    production_records = ProductionRecordSerializer(many=True)
    stats = DashboardStatsSerializer()
