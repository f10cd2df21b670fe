"""
Payload serializers for callable operations.

Input keys are camelCase; validated_data uses the service argument names.
"""

from decimal import Decimal

from rest_framework import serializers

from storekeeper.models import Notification, Order
from storekeeper.models.enums import (
    NotificationType,
    OrderStatus,
    RestockPriority,
    StockOperation,
)


# ══════════════════════════════════════════════════════════════
# STOCK
# ══════════════════════════════════════════════════════════════


class StockUpdateSerializer(serializers.Serializer):
    productId = serializers.IntegerField(source='product_id')
    quantity = serializers.IntegerField(min_value=0)
    operation = serializers.ChoiceField(choices=StockOperation.choices)
    reason = serializers.CharField(max_length=255, required=False)


class BulkStockUpdateSerializer(serializers.Serializer):
    # Items are checked one by one by the ledger so one bad item fails alone
    updates = serializers.ListField(child=serializers.DictField(), allow_empty=True)
    reason = serializers.CharField(max_length=255, required=False)


class ProductSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    categoryId = serializers.IntegerField(source='category_id', required=False, allow_null=True)
    brand = serializers.CharField(max_length=100, required=False, allow_blank=True)
    originalPrice = serializers.DecimalField(
        source='original_price', max_digits=12, decimal_places=2, min_value=Decimal('0'), required=False,
    )
    salePrice = serializers.DecimalField(
        source='sale_price', max_digits=12, decimal_places=2, min_value=Decimal('0'), required=False,
    )
    stock = serializers.IntegerField(min_value=0, required=False)
    isActive = serializers.BooleanField(source='is_active', required=False)


class ProductUpdateSerializer(ProductSerializer):
    productId = serializers.IntegerField(source='product_id')
    name = serializers.CharField(max_length=200, required=False)


class ProductLookupSerializer(serializers.Serializer):
    productId = serializers.IntegerField(source='product_id')


class InventoryAdjustmentSerializer(serializers.Serializer):
    productId = serializers.IntegerField(source='product_id')
    stockChange = serializers.IntegerField(source='stock_change')


class StockAlertSerializer(serializers.Serializer):
    productId = serializers.IntegerField(source='product_id')
    threshold = serializers.IntegerField(min_value=0)
    isActive = serializers.BooleanField(source='is_active', default=True)


class RestockRequestSerializer(serializers.Serializer):
    productId = serializers.IntegerField(source='product_id')
    requestedQuantity = serializers.IntegerField(source='requested_quantity', min_value=1)
    priority = serializers.ChoiceField(choices=RestockPriority.choices, default=RestockPriority.MEDIUM)
    notes = serializers.CharField(required=False, allow_blank=True)


# ══════════════════════════════════════════════════════════════
# NOTIFICATIONS
# ══════════════════════════════════════════════════════════════


class _NotificationContentSerializer(serializers.Serializer):
    type = serializers.ChoiceField(source='notification_type', choices=NotificationType.choices)
    subject = serializers.CharField(max_length=255, required=False, allow_blank=True)
    message = serializers.CharField()
    templateId = serializers.CharField(source='template_id', max_length=100, required=False, allow_blank=True)
    data = serializers.DictField(required=False)


class SendNotificationSerializer(_NotificationContentSerializer):
    recipient = serializers.CharField(max_length=255)


class BulkNotificationSerializer(_NotificationContentSerializer):
    recipients = serializers.ListField(
        child=serializers.CharField(max_length=255),
        allow_empty=False,
    )


class NotificationHistorySerializer(serializers.Serializer):
    recipient = serializers.CharField(required=False)
    type = serializers.ChoiceField(source='notification_type', choices=NotificationType.choices, required=False)
    limit = serializers.IntegerField(min_value=1, max_value=200, required=False)


class NotificationSerializer(serializers.ModelSerializer):
    templateId = serializers.CharField(source='template_id')
    sentAt = serializers.DateTimeField(source='sent_at')
    createdAt = serializers.DateTimeField(source='created_at')

    class Meta:
        model = Notification
        fields = [
            'id', 'type', 'recipient', 'subject', 'message', 'templateId',
            'data', 'status', 'error', 'sentAt', 'createdAt',
        ]


# ══════════════════════════════════════════════════════════════
# ORDERS
# ══════════════════════════════════════════════════════════════


class TrackingInfoSerializer(serializers.Serializer):
    description = serializers.CharField()
    location = serializers.CharField(required=False, allow_blank=True)


class OrderStatusSerializer(serializers.Serializer):
    orderId = serializers.IntegerField(source='order_id')
    status = serializers.ChoiceField(choices=OrderStatus.choices)
    trackingInfo = TrackingInfoSerializer(source='tracking_info', required=False)


class OrderLookupSerializer(serializers.Serializer):
    orderId = serializers.IntegerField(source='order_id')


class UserOrdersSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.choices, required=False)
    limit = serializers.IntegerField(min_value=1, max_value=100, default=50)


class OrderSerializer(serializers.ModelSerializer):
    orderNumber = serializers.CharField(source='order_number')
    customerName = serializers.CharField(source='customer_name')
    customerEmail = serializers.CharField(source='customer_email')
    paymentStatus = serializers.CharField(source='payment_status')
    trackingHistory = serializers.JSONField(source='tracking_history')
    createdAt = serializers.DateTimeField(source='created_at')
    updatedAt = serializers.DateTimeField(source='updated_at')

    class Meta:
        model = Order
        fields = [
            'id', 'orderNumber', 'customerName', 'customerEmail', 'items', 'total',
            'status', 'paymentStatus', 'trackingHistory', 'createdAt', 'updatedAt',
        ]
        read_only_fields = fields
