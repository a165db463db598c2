from django.contrib import admin
from .models import Factory, ProductionRecord


class ProductionRecordInline(admin.TabularInline):
    model = ProductionRecord
    extra = 0
    fields = ['product_name', 'quantity', 'unit', 'date', 'status']
    show_change_link = True


@admin.register(Factory)
class FactoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'location', 'capacity', 'status', 'manager', 'created_at']
    list_filter = ['status', 'created_at']
    search_fields = ['name', 'location', 'manager__email']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [ProductionRecordInline]


@admin.register(ProductionRecord)
class ProductionRecordAdmin(admin.ModelAdmin):
    list_display = ['product_name', 'factory', 'quantity', 'unit', 'date', 'status', 'created_by']
    list_filter = ['status', 'date']
    search_fields = ['product_name', 'notes']
    date_hierarchy = 'date'
    readonly_fields = ['created_at', 'updated_at']
