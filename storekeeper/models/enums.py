"""
Enums for Storekeeper models.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class StockOperation(models.TextChoices):
    """
    How a quantity is applied to a product's stock.

    SET:       stock becomes exactly the quantity
    INCREMENT: stock + quantity
    DECREMENT: stock - quantity, clamped at zero
    """
    SET = 'set', _('Set')
    INCREMENT = 'increment', _('Increment')
    DECREMENT = 'decrement', _('Decrement')


class AlertPriority(models.TextChoices):
    """Low-stock alert priority."""
    MEDIUM = 'medium', _('Medium')   # At or below threshold
    HIGH = 'high', _('High')         # Out of stock


class RestockPriority(models.TextChoices):
    LOW = 'low', _('Low')
    MEDIUM = 'medium', _('Medium')
    HIGH = 'high', _('High')
    URGENT = 'urgent', _('Urgent')


class RestockStatus(models.TextChoices):
    """Restock request status. Only PENDING is assigned by the app."""
    PENDING = 'pending', _('Pending')
    APPROVED = 'approved', _('Approved')
    REJECTED = 'rejected', _('Rejected')
    COMPLETED = 'completed', _('Completed')


class OrderStatus(models.TextChoices):
    """
    Order lifecycle.

    PENDING → CONFIRMED → PROCESSING → SHIPPED → DELIVERED
    Any non-terminal status → CANCELLED
    """
    PENDING = 'pending', _('Pending')
    CONFIRMED = 'confirmed', _('Confirmed')
    PROCESSING = 'processing', _('Processing')
    SHIPPED = 'shipped', _('Shipped')
    DELIVERED = 'delivered', _('Delivered')
    CANCELLED = 'cancelled', _('Cancelled')


class PaymentStatus(models.TextChoices):
    PENDING = 'pending', _('Pending')
    COMPLETED = 'completed', _('Completed')
    FAILED = 'failed', _('Failed')
    REFUNDED = 'refunded', _('Refunded')


class NotificationType(models.TextChoices):
    EMAIL = 'email', _('Email')
    SMS = 'sms', _('SMS')
    PUSH = 'push', _('Push')


class NotificationStatus(models.TextChoices):
    """Notification delivery status: PENDING → SENT | FAILED."""
    PENDING = 'pending', _('Pending')
    SENT = 'sent', _('Sent')
    FAILED = 'failed', _('Failed')


TERMINAL_ORDER_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})
