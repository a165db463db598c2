from datetime import date
from decimal import Decimal

from rest_framework import serializers

from .models import Ledger, Transaction, TransactionCategory
from .services import ALL_CATEGORIES, TransactionFilters


class LedgerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Ledger
        fields = ['id', 'name', 'description', 'created_by', 'created_at', 'updated_at']
        read_only_fields = fields


class LedgerInputSerializer(serializers.ModelSerializer):
    """Create/rename form. The owner is always the requesting user."""

    class Meta:
        model = Ledger
        fields = ['name', 'description']
        extra_kwargs = {
            'name': {
                'error_messages': {
                    'blank': 'Ledger name is required',
                    'required': 'Ledger name is required',
                },
            },
        }


class TransactionSerializer(serializers.ModelSerializer):
    class Meta:
        model = Transaction
        fields = [
            'id',
            'ledger',
            'date',
            'particulars',
            'debit',
            'credit',
            'category',
            'created_by',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class TransactionInputSerializer(serializers.ModelSerializer):
    """
    Add/edit form for a transaction.

    Amounts may not be negative and at least one of debit or credit must be
    positive. On partial updates the missing amount is taken from the
    existing transaction.
    """

    class Meta:
        model = Transaction
        fields = ['date', 'particulars', 'debit', 'credit', 'category']
        extra_kwargs = {
            'particulars': {
                'error_messages': {
                    'blank': 'Particulars are required',
                    'required': 'Particulars are required',
                },
            },
        }

    def validate(self, attrs):
        debit = attrs.get('debit', getattr(self.instance, 'debit', Decimal('0')))
        credit = attrs.get('credit', getattr(self.instance, 'credit', Decimal('0')))
        if debit <= 0 and credit <= 0:
            raise serializers.ValidationError(
                'Enter a debit or a credit amount greater than zero'
            )
        return attrs


class TransactionFilterSerializer(serializers.Serializer):
    """Query parameters for the transaction list and the export."""

    search = serializers.CharField(allow_blank=True, default='', trim_whitespace=False)
    category = serializers.ChoiceField(
        choices=[ALL_CATEGORIES, *TransactionCategory.values],
        default=ALL_CATEGORIES
    )
    # Empty means unbounded, so these stay ISO strings rather than DateFields
    start_date = serializers.CharField(allow_blank=True, default='')
    end_date = serializers.CharField(allow_blank=True, default='')

    def _validate_iso_date(self, value):
        if not value:
            return ''
        try:
            return date.fromisoformat(value).isoformat()
        except ValueError:
            raise serializers.ValidationError('Enter a date as YYYY-MM-DD')

    def validate_start_date(self, value):
        return self._validate_iso_date(value)

    def validate_end_date(self, value):
        return self._validate_iso_date(value)

    def to_filters(self) -> TransactionFilters:
        return TransactionFilters(**self.validated_data)


class LedgerSummarySerializer(serializers.Serializer):
    total_debit = serializers.DecimalField(max_digits=None, decimal_places=2)
    total_credit = serializers.DecimalField(max_digits=None, decimal_places=2)
    balance = serializers.DecimalField(max_digits=None, decimal_places=2)


class TransactionListResponseSerializer(serializers.Serializer):
    ledger = LedgerSerializer()
    transactions = TransactionSerializer(many=True)
    count = serializers.IntegerField()
    summary = LedgerSummarySerializer()


class DeleteConfirmationSerializer(serializers.Serializer):
    confirmation = serializers.CharField(
        allow_blank=True,
        default='',
        trim_whitespace=False,
        help_text="Type 'confirm' to delete"
    )
