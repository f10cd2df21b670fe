"""
Inventory Service — the public interface for storefront bookkeeping.

Usage:
    from storekeeper import inventory, StoreError

    inventory.apply_change(product.pk, 5, 'decrement', reason='Damaged')
    inventory.set_alert(product.pk, threshold=10)
    inventory.report()['summary']
"""

from storekeeper.services import alerts, catalog, orders, reports, restock
from storekeeper.services.ledger import StockLedger
from storekeeper.services.notifications import NotificationDispatcher


class Inventory(StockLedger):
    """
    Single interface for stock, order and notification operations.

    Stock changes come from StockLedger; the rest delegates to the
    service modules. Caller permission checks live in callables.py.
    """

    # ══════════════════════════════════════════════════════════════
    # CATALOG
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def create_product(cls, name: str, **kwargs):
        return catalog.create_product(name, **kwargs)

    @classmethod
    def update_product(cls, product_id, actor=None, **changes):
        return catalog.update_product(product_id, actor=actor, **changes)

    @classmethod
    def deactivate_product(cls, product_id, actor=None):
        return catalog.deactivate_product(product_id, actor=actor)

    @classmethod
    def update_inventory(cls, product_id, stock_change: int, actor=None):
        return catalog.update_inventory(product_id, stock_change, actor=actor)

    # ══════════════════════════════════════════════════════════════
    # ALERTS & RESTOCK
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def set_alert(cls, product_id, threshold: int, is_active: bool = True, actor=None):
        return alerts.set_stock_alert(product_id, threshold, is_active=is_active, actor=actor)

    @classmethod
    def request_restock(cls, product_id, requested_quantity: int, priority: str = 'medium',
                        notes: str | None = None, actor=None):
        return restock.create_restock_request(
            product_id, requested_quantity, priority=priority, notes=notes, actor=actor,
        )

    @classmethod
    def report(cls) -> dict:
        return reports.inventory_report()

    # ══════════════════════════════════════════════════════════════
    # ORDERS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def update_order_status(cls, order_id, status: str, tracking_info: dict | None = None, actor=None):
        return orders.update_order_status(order_id, status, tracking_info=tracking_info, actor=actor)

    @classmethod
    def order(cls, order_id):
        return orders.get_order(order_id)

    @classmethod
    def user_orders(cls, user, status: str | None = None, limit: int = 50):
        return orders.user_orders(user, status=status, limit=limit)

    # ══════════════════════════════════════════════════════════════
    # NOTIFICATIONS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def notify(cls, notification_type: str, recipient: str, message: str, **kwargs):
        return NotificationDispatcher().send(notification_type, recipient, message, **kwargs)

    @classmethod
    def notify_many(cls, notification_type: str, recipients, message: str, **kwargs):
        return NotificationDispatcher().send_bulk(notification_type, recipients, message, **kwargs)
