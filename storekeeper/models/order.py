"""
Order model — the document whose lifecycle drives stock decrements and restores.
"""

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from storekeeper.models.enums import OrderStatus, PaymentStatus


def generate_order_number() -> str:
    return f"ORD-{timezone.now():%Y%m%d}-{uuid.uuid4().hex[:6].upper()}"


def tracking_entry(status: str, description: str, location: str) -> dict:
    """One tracking_history entry."""
    return {
        "status": status,
        "timestamp": timezone.now().isoformat(),
        "description": description,
        "location": location,
    }


class Order(models.Model):
    """
    Customer order.

    items is a list of line items, each at least {"productId": <pk>, "quantity": <int>}.
    tracking_history is an append-only log of
    {"status", "timestamp", "description", "location"} entries.

    LIFECYCLE:
        PENDING → CONFIRMED → PROCESSING → SHIPPED → DELIVERED
        (any non-terminal) → CANCELLED

    Saving a new order decrements stock for its items; the first save that
    moves status into CANCELLED restores it (see storekeeper.signals).
    """

    order_number = models.CharField(
        max_length=40,
        unique=True,
        default=generate_order_number,
        verbose_name=_('Order number'),
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='storekeeper_orders',
        verbose_name=_('Customer'),
    )
    customer_name = models.CharField(max_length=200, blank=True, verbose_name=_('Customer name'))
    customer_email = models.EmailField(blank=True, verbose_name=_('Customer email'))
    customer_phone = models.CharField(max_length=30, blank=True, verbose_name=_('Customer phone'))

    items = models.JSONField(default=list, verbose_name=_('Items'))
    total = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0'),
        verbose_name=_('Total'),
    )

    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
        db_index=True,
        verbose_name=_('Status'),
    )
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
        verbose_name=_('Payment status'),
    )
    tracking_history = models.JSONField(default=list, blank=True, verbose_name=_('Tracking history'))

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Order')
        verbose_name_plural = _('Orders')
        ordering = ['-created_at', '-pk']

    def save(self, *args, **kwargs):
        if self._state.adding and not self.tracking_history:
            self.tracking_history = [tracking_entry(
                "Order Placed", "Your order has been placed successfully", "Online",
            )]
        super().save(*args, **kwargs)

    @property
    def is_cancelled(self) -> bool:
        return self.status == OrderStatus.CANCELLED

    def __str__(self) -> str:
        return f"{self.order_number} ({self.status})"
