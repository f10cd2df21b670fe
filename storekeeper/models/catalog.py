"""
Catalog models — Category and Product.

Product.stock is the quantity cache mutated by the stock ledger.
Never write it directly outside services.ledger.
"""

from decimal import Decimal

from django.db import models
from django.utils.translation import gettext_lazy as _


class Category(models.Model):
    """Product category."""

    name = models.CharField(max_length=100, verbose_name=_('Name'))
    slug = models.SlugField(unique=True, max_length=120, verbose_name=_('Slug'))
    is_active = models.BooleanField(default=True, verbose_name=_('Active'))
    # Active products, kept by services.catalog.refresh_product_counts
    product_count = models.PositiveIntegerField(default=0, verbose_name=_('Product count'))
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('Category')
        verbose_name_plural = _('Categories')
        ordering = ['name']

    def __str__(self) -> str:
        return self.name


class Product(models.Model):
    """
    Sellable product.

    Rules:
    - stock is never negative (decrements clamp at 0)
    - every stock change goes through the ledger, which records a StockMovement
    """

    name = models.CharField(max_length=200, verbose_name=_('Name'))
    slug = models.SlugField(max_length=220, blank=True, verbose_name=_('Slug'))
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='products',
        verbose_name=_('Category'),
    )
    brand = models.CharField(max_length=100, blank=True, verbose_name=_('Brand'))

    stock = models.PositiveIntegerField(default=0, verbose_name=_('Stock'))
    original_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0'),
        verbose_name=_('Original price'),
    )
    sale_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0'),
        verbose_name=_('Sale price'),
    )
    is_active = models.BooleanField(default=True, db_index=True, verbose_name=_('Active'))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Product')
        verbose_name_plural = _('Products')
        ordering = ['name']

    def __str__(self) -> str:
        return self.name
