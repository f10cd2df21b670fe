"""
RestockRequest model — ticket asking for more stock of a product.
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from storekeeper.models.enums import RestockPriority, RestockStatus


class RestockRequest(models.Model):
    """
    Restock ticket.

    product_name and current_stock are snapshots taken at request time.
    Status starts PENDING; no transitions are implemented.
    """

    product = models.ForeignKey(
        'storekeeper.Product',
        on_delete=models.CASCADE,
        related_name='restock_requests',
        verbose_name=_('Product'),
    )
    product_name = models.CharField(max_length=200, verbose_name=_('Product name'))
    current_stock = models.PositiveIntegerField(verbose_name=_('Stock at request time'))
    requested_quantity = models.PositiveIntegerField(verbose_name=_('Requested quantity'))
    priority = models.CharField(
        max_length=10,
        choices=RestockPriority.choices,
        default=RestockPriority.MEDIUM,
        verbose_name=_('Priority'),
    )
    status = models.CharField(
        max_length=20,
        choices=RestockStatus.choices,
        default=RestockStatus.PENDING,
        db_index=True,
        verbose_name=_('Status'),
    )
    notes = models.TextField(blank=True, verbose_name=_('Notes'))

    requested_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('Requested by'),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Restock request')
        verbose_name_plural = _('Restock requests')
        ordering = ['-created_at', '-pk']

    def __str__(self) -> str:
        return f"{self.requested_quantity}x {self.product_name} ({self.status})"
