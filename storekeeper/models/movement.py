"""
StockMovement model — Immutable audit log of stock changes.
"""

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from storekeeper.models.enums import StockOperation


class StockMovement(models.Model):
    """
    Immutable record of one stock change.

    Rules:
    - NEVER update() or delete()
    - quantity is the signed delta actually applied (new_stock - previous_stock)
    - idempotency_key, when present, is unique: a keyed change is applied once
    """

    product = models.ForeignKey(
        'storekeeper.Product',
        on_delete=models.PROTECT,
        related_name='movements',
        verbose_name=_('Product'),
    )
    previous_stock = models.PositiveIntegerField(verbose_name=_('Previous stock'))
    new_stock = models.PositiveIntegerField(verbose_name=_('New stock'))
    quantity = models.IntegerField(
        verbose_name=_('Quantity'),
        help_text=_('Positive = in, negative = out'),
    )
    operation = models.CharField(
        max_length=20,
        choices=StockOperation.choices,
        verbose_name=_('Operation'),
    )
    reason = models.CharField(max_length=255, verbose_name=_('Reason'))

    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('Actor'),
    )
    order = models.ForeignKey(
        'storekeeper.Order',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='movements',
        verbose_name=_('Order'),
    )
    idempotency_key = models.CharField(
        max_length=120,
        unique=True,
        null=True,
        blank=True,
        verbose_name=_('Idempotency key'),
    )

    timestamp = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_('Timestamp'))

    class Meta:
        verbose_name = _('Stock movement')
        verbose_name_plural = _('Stock movements')
        ordering = ['timestamp', 'pk']
        indexes = [
            models.Index(fields=['product', 'timestamp'], name='storekeeper_mov_prod_ts_idx'),
        ]

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValueError(
                "Stock movements are immutable. "
                "To correct one, record a new movement."
            )
        if not self.reason:
            raise ValueError("Reason is required")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError("Stock movements are immutable and cannot be deleted.")

    def __str__(self) -> str:
        sign = '+' if self.quantity > 0 else ''
        return f"{sign}{self.quantity} | {self.reason}"
