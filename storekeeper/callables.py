"""
Callable operations — request/response entry points keyed by name.

Each callable takes (caller, data): the calling user (or None) and a
camelCase payload dict. It returns a plain dict or raises StoreError.

Usage:
    from storekeeper.callables import call

    call('updateStock', request.user, {'productId': 1, 'quantity': 5, 'operation': 'decrement'})

Error policy:
    - payload validation errors become INVALID_ARGUMENT with field errors
    - StoreError passes through unchanged
    - anything else is logged and collapsed to INTERNAL
"""

import functools
import logging
from typing import Any, Callable

from rest_framework.exceptions import ValidationError

from storekeeper.exceptions import StoreError
from storekeeper.models.enums import NotificationStatus
from storekeeper.permissions import is_admin, require_admin, require_authenticated
from storekeeper.serializers import (
    BulkNotificationSerializer,
    BulkStockUpdateSerializer,
    InventoryAdjustmentSerializer,
    NotificationHistorySerializer,
    NotificationSerializer,
    OrderLookupSerializer,
    OrderSerializer,
    OrderStatusSerializer,
    ProductLookupSerializer,
    ProductSerializer,
    ProductUpdateSerializer,
    RestockRequestSerializer,
    SendNotificationSerializer,
    StockAlertSerializer,
    StockUpdateSerializer,
    UserOrdersSerializer,
)
from storekeeper.services.alerts import set_stock_alert
from storekeeper.services.catalog import create_product, deactivate_product, update_inventory, update_product
from storekeeper.services.ledger import StockLedger
from storekeeper.services.notifications import NotificationDispatcher
from storekeeper.services.orders import get_order, update_order_status, user_orders
from storekeeper.services.reports import inventory_report
from storekeeper.services.restock import create_restock_request

logger = logging.getLogger('storekeeper')

ADMIN = 'admin'
AUTHENTICATED = 'authenticated'

CALLABLES: dict[str, Callable[..., dict[str, Any]]] = {}


def callable_operation(name: str, auth: str = ADMIN, serializer=None):
    """Register func under name with caller checks, payload validation and error mapping."""

    def decorator(func):
        @functools.wraps(func)
        def wrapper(caller, data: dict | None = None) -> dict[str, Any]:
            try:
                if auth == ADMIN:
                    require_admin(caller)
                else:
                    require_authenticated(caller)

                payload = {}
                if serializer is not None:
                    validator = serializer(data=data or {})
                    validator.is_valid(raise_exception=True)
                    payload = validator.validated_data
                return func(caller, payload)
            except ValidationError as exc:
                raise StoreError('INVALID_ARGUMENT', 'Invalid data provided', errors=exc.detail) from exc
            except StoreError:
                raise
            except Exception as exc:
                logger.exception("callable.%s failed", name)
                raise StoreError('INTERNAL', f"Failed to run {name}") from exc

        CALLABLES[name] = wrapper
        return wrapper

    return decorator


def call(name: str, caller, data: dict | None = None) -> dict[str, Any]:
    """
    Raises:
        StoreError('NOT_FOUND'): No callable registered under name
    """
    operation = CALLABLES.get(name)
    if operation is None:
        raise StoreError('NOT_FOUND', f"Unknown operation '{name}'", name=name)
    return operation(caller, data)


# ══════════════════════════════════════════════════════════════
# STOCK
# ══════════════════════════════════════════════════════════════


@callable_operation('updateStock', serializer=StockUpdateSerializer)
def update_stock(caller, payload):
    change = StockLedger.apply_change(
        payload['product_id'],
        payload['quantity'],
        payload['operation'],
        reason=payload.get('reason'),
        actor=caller,
    )
    return {
        'success': True,
        'productId': change.product_id,
        'previousStock': change.previous_stock,
        'newStock': change.new_stock,
    }


@callable_operation('bulkUpdateStock', serializer=BulkStockUpdateSerializer)
def bulk_update_stock(caller, payload):
    result = StockLedger.apply_changes(payload['updates'], reason=payload.get('reason'), actor=caller)
    return result.as_dict()


@callable_operation('setStockAlert', serializer=StockAlertSerializer)
def set_alert(caller, payload):
    alert = set_stock_alert(
        payload['product_id'],
        payload['threshold'],
        is_active=payload['is_active'],
        actor=caller,
    )
    return {
        'success': True,
        'productId': alert.product_id,
        'threshold': alert.threshold,
        'isActive': alert.is_active,
    }


@callable_operation('createRestockRequest', auth=AUTHENTICATED, serializer=RestockRequestSerializer)
def restock_request(caller, payload):
    request = create_restock_request(
        payload['product_id'],
        payload['requested_quantity'],
        priority=payload['priority'],
        notes=payload.get('notes'),
        actor=caller,
    )
    return {'success': True, 'requestId': request.pk}


@callable_operation('getInventoryReport')
def get_inventory_report(caller, payload):
    return inventory_report()


# ══════════════════════════════════════════════════════════════
# PRODUCTS
# ══════════════════════════════════════════════════════════════


@callable_operation('createProduct', serializer=ProductSerializer)
def create(caller, payload):
    product = create_product(actor=caller, **payload)
    return {
        'success': True,
        'productId': product.pk,
        'message': 'Product created successfully',
    }


@callable_operation('updateProduct', serializer=ProductUpdateSerializer)
def update(caller, payload):
    changes = dict(payload)
    product = update_product(changes.pop('product_id'), actor=caller, **changes)
    return {
        'success': True,
        'productId': product.pk,
        'message': 'Product updated successfully',
    }


@callable_operation('deleteProduct', serializer=ProductLookupSerializer)
def delete(caller, payload):
    product = deactivate_product(payload['product_id'], actor=caller)
    return {
        'success': True,
        'productId': product.pk,
        'message': 'Product deleted successfully',
    }


@callable_operation('updateInventory', serializer=InventoryAdjustmentSerializer)
def adjust_inventory(caller, payload):
    change = update_inventory(payload['product_id'], payload['stock_change'], actor=caller)
    return {
        'success': True,
        'newStock': change.new_stock,
        'message': 'Inventory updated successfully',
    }


# ══════════════════════════════════════════════════════════════
# NOTIFICATIONS
# ══════════════════════════════════════════════════════════════


@callable_operation('sendNotification', auth=AUTHENTICATED, serializer=SendNotificationSerializer)
def send_notification(caller, payload):
    notification = NotificationDispatcher().send(
        payload['notification_type'],
        payload['recipient'],
        payload['message'],
        subject=payload.get('subject'),
        template_id=payload.get('template_id'),
        data=payload.get('data'),
    )
    sent = notification.status == NotificationStatus.SENT
    return {
        'success': sent,
        'notificationId': notification.pk,
        'message': 'Notification sent successfully' if sent else 'Failed to send notification',
        'error': notification.error or None,
    }


@callable_operation('sendBulkNotification', serializer=BulkNotificationSerializer)
def send_bulk_notification(caller, payload):
    return NotificationDispatcher().send_bulk(
        payload['notification_type'],
        payload['recipients'],
        payload['message'],
        subject=payload.get('subject'),
        template_id=payload.get('template_id'),
        data=payload.get('data'),
    )


@callable_operation('getNotificationHistory', serializer=NotificationHistorySerializer)
def get_notification_history(caller, payload):
    notifications = NotificationDispatcher().history(
        recipient=payload.get('recipient'),
        notification_type=payload.get('notification_type'),
        limit=payload.get('limit'),
    )
    return {
        'success': True,
        'notifications': NotificationSerializer(notifications, many=True).data,
    }


# ══════════════════════════════════════════════════════════════
# ORDERS
# ══════════════════════════════════════════════════════════════


@callable_operation('updateOrderStatus', serializer=OrderStatusSerializer)
def update_status(caller, payload):
    order = update_order_status(
        payload['order_id'],
        payload['status'],
        tracking_info=payload.get('tracking_info'),
        actor=caller,
    )
    return {'success': True, 'orderId': order.pk, 'status': order.status}


@callable_operation('getOrderDetails', auth=AUTHENTICATED, serializer=OrderLookupSerializer)
def get_order_details(caller, payload):
    order = get_order(payload['order_id'])
    if order.user_id != caller.pk and not is_admin(caller):
        raise StoreError('PERMISSION_DENIED', 'Access denied', order_id=order.pk)
    return OrderSerializer(order).data


@callable_operation('getUserOrders', auth=AUTHENTICATED, serializer=UserOrdersSerializer)
def get_user_orders(caller, payload):
    orders = user_orders(caller, status=payload.get('status'), limit=payload['limit'])
    return {'orders': OrderSerializer(orders, many=True).data}
