"""
Django Storekeeper — storefront inventory bookkeeping.

Stock ledger, low-stock alerts, order stock hooks, restock requests,
inventory report and notification dispatch.

Usage:
    from storekeeper import inventory, StoreError

    inventory.apply_change(product.pk, 3, 'increment', reason='Supplier delivery')
    inventory.report()
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'inventory':
        from storekeeper.service import Inventory
        return Inventory
    elif name == 'StoreError':
        from storekeeper.exceptions import StoreError
        return StoreError
    elif name == 'Product':
        from storekeeper.models.catalog import Product
        return Product
    elif name == 'StockMovement':
        from storekeeper.models.movement import StockMovement
        return StockMovement
    elif name == 'StockAlert':
        from storekeeper.models.alert import StockAlert
        return StockAlert
    elif name == 'Order':
        from storekeeper.models.order import Order
        return Order
    elif name == 'Notification':
        from storekeeper.models.notification import Notification
        return Notification
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'inventory',
    'StoreError',
    'Product',
    'StockMovement',
    'StockAlert',
    'Order',
    'Notification',
]

__version__ = '0.1.0'
