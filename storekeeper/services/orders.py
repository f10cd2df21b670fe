"""
Order lifecycle — stock bookkeeping driven by order saves, plus order queries.

Usage:
    from storekeeper.services.orders import OrderHooks, update_order_status

    update_order_status(order.pk, 'shipped', {'description': 'Left the warehouse'})

The hooks are wired to Order saves in storekeeper.signals; they can also be
called directly (e.g. to replay an order event).
"""

import logging
from typing import Any

from storekeeper.exceptions import StoreError
from storekeeper.models.enums import TERMINAL_ORDER_STATUSES, OrderStatus, StockOperation
from storekeeper.models.order import Order, tracking_entry
from storekeeper.services.ledger import StockChange, StockLedger

logger = logging.getLogger('storekeeper')

DEFAULT_LOCATION = 'Processing Center'


def idempotency_key(order: Order, index: int, event: str) -> str:
    """Key identifying one line item's stock change for one order event."""
    return f"order:{order.pk}:{index}:{event}"


def _parse_item(item: Any) -> tuple[Any, int]:
    """(product_id, quantity) of a line item, or INVALID_ARGUMENT."""
    if not isinstance(item, dict):
        raise StoreError('INVALID_ARGUMENT', 'Order item must be an object', item=item)
    product_id = item.get('productId', item.get('product_id'))
    quantity = item.get('quantity')
    if product_id in (None, ''):
        raise StoreError('INVALID_ARGUMENT', 'Order item has no product', item=item)
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 0:
        raise StoreError('INVALID_ARGUMENT', 'Order item quantity must be a non-negative integer', item=item)
    return product_id, quantity


class OrderHooks:
    """Stock reactions to order events. Items are applied one by one."""

    @classmethod
    def on_order_created(cls, order: Order) -> list[StockChange]:
        """
        Decrement stock for every line item of a new order.

        A failing item is logged and skipped; items already applied stay
        applied. Replaying the event is a no-op per item.
        """
        return cls._apply_items(order, StockOperation.DECREMENT, 'Order placed', 'placed')

    @classmethod
    def on_order_status_changed(cls, order: Order, previous_status: str | None) -> list[StockChange]:
        """
        Restore stock when an order first moves into CANCELLED.

        Any other transition, including CANCELLED → CANCELLED, does nothing.
        """
        if previous_status == OrderStatus.CANCELLED or order.status != OrderStatus.CANCELLED:
            return []
        return cls._apply_items(order, StockOperation.INCREMENT, 'Order cancelled', 'cancelled')

    @classmethod
    def _apply_items(cls, order: Order, operation: str, reason: str, event: str) -> list[StockChange]:
        changes = []
        for index, item in enumerate(order.items or []):
            try:
                product_id, quantity = _parse_item(item)
                changes.append(StockLedger.apply_change(
                    product_id,
                    quantity,
                    operation,
                    reason=reason,
                    order=order,
                    idempotency_key=idempotency_key(order, index, event),
                ))
            except Exception:
                logger.exception(
                    "order.item_failed: order %s item %s (%s)", order.pk, index, event,
                )

        logger.info(
            "order.stock_%s" % event,
            extra={
                "order_id": order.pk,
                "items": len(order.items or []),
                "applied": sum(1 for c in changes if not c.duplicate),
            },
        )
        return changes


# ══════════════════════════════════════════════════════════════
# STATUS UPDATES & QUERIES
# ══════════════════════════════════════════════════════════════


def get_order(order_id) -> Order:
    """
    Raises:
        StoreError('NOT_FOUND'): Order doesn't exist
    """
    order = Order.objects.filter(pk=order_id).first()
    if order is None:
        raise StoreError('NOT_FOUND', 'Order not found', order_id=order_id)
    return order


def update_order_status(order_id, status: str, tracking_info: dict | None = None, actor=None) -> Order:
    """
    Move an order to a new status and append a tracking entry.

    Saving fires the order hooks, so moving into CANCELLED restores stock.
    Re-applying the current status is accepted and only adds a tracking entry.

    Raises:
        StoreError('INVALID_ARGUMENT'): Unknown status, or leaving DELIVERED/CANCELLED
        StoreError('NOT_FOUND'): Order doesn't exist
    """
    if status not in OrderStatus.values:
        raise StoreError('INVALID_ARGUMENT', f"Unknown order status '{status}'", status=status)

    order = get_order(order_id)
    previous = order.status
    if previous in TERMINAL_ORDER_STATUSES and status != previous:
        raise StoreError(
            'INVALID_ARGUMENT',
            f"Order is {previous} and can no longer change status",
            order_id=order.pk,
            status=status,
        )

    tracking_info = tracking_info or {}
    order.tracking_history = list(order.tracking_history or []) + [tracking_entry(
        status.capitalize(),
        tracking_info.get('description') or f"Order {status}",
        tracking_info.get('location') or DEFAULT_LOCATION,
    )]
    order.status = status
    order.save(update_fields=['status', 'tracking_history', 'updated_at'])

    logger.info(
        "order.status_changed",
        extra={
            "order_id": order.pk,
            "from_status": previous,
            "to_status": status,
            "actor_id": getattr(actor, 'pk', None),
        },
    )
    return order


def user_orders(user, status: str | None = None, limit: int = 50) -> list[Order]:
    """A user's orders, newest first."""
    qs = Order.objects.filter(user=user)
    if status:
        qs = qs.filter(status=status)
    return list(qs[:limit])
