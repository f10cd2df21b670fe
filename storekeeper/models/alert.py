"""
Stock alert models.

StockAlert is the per-product threshold configured by an admin.
LowStockAlert is the record emitted when a stock write lands at or below it.

Usage:
    StockAlert.objects.create(product=product, threshold=10)

    # Checked automatically after every ledger write
    from storekeeper.services.alerts import check_low_stock_alert
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from storekeeper.models.enums import AlertPriority


class StockAlert(models.Model):
    """
    Low-stock threshold for one product.

    Alerts only fire when a row exists and is_active is set; no default
    threshold is assumed by the alerter.
    """

    product = models.OneToOneField(
        'storekeeper.Product',
        on_delete=models.CASCADE,
        related_name='stock_alert',
        verbose_name=_('Product'),
    )
    threshold = models.PositiveIntegerField(
        verbose_name=_('Threshold'),
        help_text=_('Alert fires when stock <= this value'),
    )
    is_active = models.BooleanField(default=True, db_index=True, verbose_name=_('Active'))

    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('Updated by'),
    )
    last_triggered_at = models.DateTimeField(null=True, blank=True, verbose_name=_('Last triggered'))
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Stock alert threshold')
        verbose_name_plural = _('Stock alert thresholds')

    def __str__(self) -> str:
        return f"Alert: {self.product} <= {self.threshold}"


class LowStockAlert(models.Model):
    """Alert emitted when a product's stock reaches its threshold."""

    product = models.ForeignKey(
        'storekeeper.Product',
        on_delete=models.CASCADE,
        related_name='low_stock_alerts',
        verbose_name=_('Product'),
    )
    current_stock = models.PositiveIntegerField(verbose_name=_('Current stock'))
    threshold = models.PositiveIntegerField(verbose_name=_('Threshold'))
    priority = models.CharField(
        max_length=10,
        choices=AlertPriority.choices,
        verbose_name=_('Priority'),
    )
    is_resolved = models.BooleanField(default=False, verbose_name=_('Resolved'))
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        verbose_name = _('Low stock alert')
        verbose_name_plural = _('Low stock alerts')
        ordering = ['-created_at', '-pk']

    def __str__(self) -> str:
        return f"[{self.priority}] {self.product}: {self.current_stock} (<= {self.threshold})"
