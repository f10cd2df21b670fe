"""
Storekeeper Admin.

- Category, Product: editable catalog; stock is read-only (changes go through the ledger)
- StockMovement: read-only audit trail
- StockAlert: configurable low-stock thresholds
- LowStockAlert: read-only with "resolve" action
- RestockRequest: status editable for the restock workflow
- Order: read-only lines and tracking; status changes go through update_order_status
- Notification: read-only delivery log
"""

import logging

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from storekeeper.models import (
    Category,
    LowStockAlert,
    Notification,
    Order,
    Product,
    RestockRequest,
    StockAlert,
    StockMovement,
)

logger = logging.getLogger(__name__)


class ReadOnlyAdmin(admin.ModelAdmin):
    """Audit records are never added, changed or deleted from the admin."""

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# =========================================================================
# CATALOG
# =========================================================================

@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'slug', 'is_active', 'product_count']
    list_filter = ['is_active']
    search_fields = ['name', 'slug']
    prepopulated_fields = {'slug': ('name',)}


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Product admin — stock is shown but only the ledger changes it."""

    list_display = ['name', 'category', 'brand', 'stock', 'sale_price', 'is_active']
    list_filter = ['is_active', 'category']
    search_fields = ['name', 'slug', 'brand']
    readonly_fields = ['stock', 'created_at', 'updated_at']


# =========================================================================
# STOCK
# =========================================================================

@admin.register(StockMovement)
class StockMovementAdmin(ReadOnlyAdmin):
    """Immutable audit trail."""

    list_display = ['timestamp', 'product', 'operation', 'quantity',
                    'previous_stock', 'new_stock', 'reason', 'actor', 'order']
    list_filter = ['operation', 'timestamp']
    search_fields = ['reason', 'product__name', 'idempotency_key']
    date_hierarchy = 'timestamp'


@admin.register(StockAlert)
class StockAlertAdmin(admin.ModelAdmin):
    list_display = ['product', 'threshold', 'is_active', 'last_triggered_at', 'updated_by']
    list_filter = ['is_active']
    search_fields = ['product__name']
    readonly_fields = ['updated_by', 'last_triggered_at', 'created_at', 'updated_at']

    def save_model(self, request, obj, form, change):
        obj.updated_by = request.user
        super().save_model(request, obj, form, change)


@admin.register(LowStockAlert)
class LowStockAlertAdmin(ReadOnlyAdmin):
    list_display = ['created_at', 'product', 'current_stock', 'threshold', 'priority', 'is_resolved']
    list_filter = ['priority', 'is_resolved']
    search_fields = ['product__name']
    actions = ['resolve_alerts']

    @admin.action(description=_('Mark selected alerts as resolved'))
    def resolve_alerts(self, request, queryset):
        count = queryset.filter(is_resolved=False).update(is_resolved=True)
        logger.info("resolve_alerts: %s alert(s) resolved by %s", count, request.user)
        self.message_user(request, _('{count} alert(s) resolved.').format(count=count))


@admin.register(RestockRequest)
class RestockRequestAdmin(admin.ModelAdmin):
    list_display = ['created_at', 'product_name', 'current_stock', 'requested_quantity',
                    'priority', 'status', 'requested_by']
    list_filter = ['status', 'priority']
    search_fields = ['product_name', 'notes']
    readonly_fields = ['product', 'product_name', 'current_stock', 'requested_quantity',
                       'requested_by', 'created_at', 'updated_at']


# =========================================================================
# ORDERS & NOTIFICATIONS
# =========================================================================

@admin.register(Order)
class OrderAdmin(ReadOnlyAdmin):
    list_display = ['order_number', 'customer_name', 'customer_email', 'total',
                    'status', 'payment_status', 'created_at']
    list_filter = ['status', 'payment_status']
    search_fields = ['order_number', 'customer_name', 'customer_email']
    date_hierarchy = 'created_at'


@admin.register(Notification)
class NotificationAdmin(ReadOnlyAdmin):
    list_display = ['created_at', 'type', 'recipient', 'subject', 'status', 'sent_at']
    list_filter = ['type', 'status']
    search_fields = ['recipient', 'subject']
