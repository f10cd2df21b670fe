"""
Inventory services — modular organization of storefront bookkeeping.

    from storekeeper.services import StockLedger, OrderHooks, NotificationDispatcher
"""

from storekeeper.services.ledger import StockLedger
from storekeeper.services.notifications import NotificationDispatcher
from storekeeper.services.orders import OrderHooks

__all__ = [
    'StockLedger',
    'OrderHooks',
    'NotificationDispatcher',
]
