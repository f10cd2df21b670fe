"""
Storekeeper Models.

Core models for storefront inventory bookkeeping:
- Category, Product: catalog; Product.stock is the quantity cache
- StockMovement: immutable audit log of stock changes
- StockAlert: per-product low-stock threshold
- LowStockAlert: alert record emitted at or below the threshold
- RestockRequest: restock ticket
- Order: customer order whose lifecycle drives stock hooks
- Notification: outbound email/SMS/push with delivery status
"""

from storekeeper.models.alert import LowStockAlert, StockAlert
from storekeeper.models.catalog import Category, Product
from storekeeper.models.enums import (
    AlertPriority,
    NotificationStatus,
    NotificationType,
    OrderStatus,
    PaymentStatus,
    RestockPriority,
    RestockStatus,
    StockOperation,
)
from storekeeper.models.movement import StockMovement
from storekeeper.models.notification import Notification
from storekeeper.models.order import Order
from storekeeper.models.restock import RestockRequest

__all__ = [
    'AlertPriority',
    'NotificationStatus',
    'NotificationType',
    'OrderStatus',
    'PaymentStatus',
    'RestockPriority',
    'RestockStatus',
    'StockOperation',
    'Category',
    'Product',
    'StockMovement',
    'StockAlert',
    'LowStockAlert',
    'RestockRequest',
    'Order',
    'Notification',
]
