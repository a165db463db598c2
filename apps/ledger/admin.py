from django.contrib import admin
from .models import Ledger, Transaction


class TransactionInline(admin.TabularInline):
    model = Transaction
    extra = 0
    fields = ['date', 'particulars', 'debit', 'credit', 'category']


@admin.register(Ledger)
class LedgerAdmin(admin.ModelAdmin):
    list_display = ['name', 'created_by', 'transaction_count', 'created_at']
    search_fields = ['name', 'description', 'created_by__email']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [TransactionInline]

    def transaction_count(self, obj):
        return obj.transactions.count()
    transaction_count.short_description = 'Transactions'


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    list_display = ['date', 'particulars', 'debit', 'credit', 'category', 'ledger']
    list_filter = ['category', 'date']
    search_fields = ['particulars', 'ledger__name']
    date_hierarchy = 'date'
    readonly_fields = ['created_at', 'updated_at']
