"""
Catalog maintenance — product create/update/deactivate and inventory adjustments.

Stock never changes here directly: opening stock, stock edits and
adjustments all go through StockLedger so each one leaves a movement.

Usage:
    from storekeeper.services.catalog import create_product, update_inventory

    product = create_product('Desk Lamp', category_id=cat.pk, sale_price=Decimal('39.90'), stock=25)
    update_inventory(product.pk, -3, actor=admin)
"""

import logging
from decimal import Decimal

from django.db import transaction
from django.utils.text import slugify

from storekeeper.exceptions import StoreError
from storekeeper.models.catalog import Category, Product
from storekeeper.models.enums import StockOperation
from storekeeper.services.ledger import StockChange, StockLedger, get_product

logger = logging.getLogger('storekeeper')

# Plain attributes update_product may set; stock goes through the ledger
EDITABLE_FIELDS = ('name', 'brand', 'original_price', 'sale_price', 'is_active')


def _get_category(category_id) -> Category | None:
    if category_id is None:
        return None
    category = Category.objects.filter(pk=category_id).first()
    if category is None:
        raise StoreError('NOT_FOUND', 'Category not found', category_id=category_id)
    return category


def refresh_product_counts(*category_ids) -> None:
    """Recount active products for the given categories."""
    for category_id in {c for c in category_ids if c is not None}:
        Category.objects.filter(pk=category_id).update(
            product_count=Product.objects.filter(category_id=category_id, is_active=True).count(),
        )


def create_product(name: str, category_id=None, brand: str = '',
                   original_price: Decimal = Decimal('0'), sale_price: Decimal = Decimal('0'),
                   stock: int = 0, is_active: bool = True, actor=None) -> Product:
    """
    Create a product. Opening stock is recorded as a 'set' movement.

    Raises:
        StoreError('INVALID_ARGUMENT'): stock is not a non-negative integer
        StoreError('NOT_FOUND'): Category doesn't exist
    """
    if isinstance(stock, bool) or not isinstance(stock, int) or stock < 0:
        raise StoreError('INVALID_ARGUMENT', 'Stock must be a non-negative integer', stock=stock)

    with transaction.atomic():
        product = Product.objects.create(
            name=name,
            slug=slugify(name),
            category=_get_category(category_id),
            brand=brand,
            original_price=original_price,
            sale_price=sale_price,
            stock=0,
            is_active=is_active,
        )
        refresh_product_counts(product.category_id)
        if stock:
            StockLedger.apply_change(product.pk, stock, StockOperation.SET, reason='Initial stock', actor=actor)

    product.refresh_from_db()
    logger.info(
        "product.created",
        extra={"product_id": product.pk, "category_id": product.category_id, "stock": product.stock},
    )
    return product


def update_product(product_id, actor=None, **changes) -> Product:
    """
    Update product attributes.

    Accepts the EDITABLE_FIELDS plus category_id and stock. A stock value is
    applied as a 'set' through the ledger; renaming regenerates the slug.

    Raises:
        StoreError('INVALID_ARGUMENT'): Unknown field or bad stock value
        StoreError('NOT_FOUND'): Product or category doesn't exist
    """
    unknown = set(changes) - set(EDITABLE_FIELDS) - {'category_id', 'stock'}
    if unknown:
        raise StoreError('INVALID_ARGUMENT', 'Unknown product fields', fields=sorted(unknown))

    stock = changes.pop('stock', None)
    with transaction.atomic():
        product = get_product(product_id)
        previous_category_id = product.category_id

        fields = []
        for name, value in changes.items():
            if name == 'category_id':
                product.category = _get_category(value)
                fields.append('category')
            else:
                setattr(product, name, value)
                fields.append(name)
        if 'name' in changes:
            product.slug = slugify(product.name)
            fields.append('slug')
        if fields:
            product.save(update_fields=fields + ['updated_at'])
        refresh_product_counts(previous_category_id, product.category_id)

        if stock is not None:
            StockLedger.apply_change(product.pk, stock, StockOperation.SET, reason='Product update', actor=actor)

    product.refresh_from_db()
    logger.info("product.updated", extra={"product_id": product.pk, "fields": sorted(changes)})
    return product


def deactivate_product(product_id, actor=None) -> Product:
    """
    Remove a product from sale.

    Products are deactivated rather than deleted: their movements keep
    referencing them.
    """
    product = get_product(product_id)
    if product.is_active:
        product.is_active = False
        product.save(update_fields=['is_active', 'updated_at'])
        refresh_product_counts(product.category_id)
    logger.info(
        "product.deactivated",
        extra={"product_id": product.pk, "actor_id": getattr(actor, 'pk', None)},
    )
    return product


def update_inventory(product_id, stock_change: int, actor=None) -> StockChange:
    """
    Adjust stock by a signed delta (clamped at zero).

    Raises:
        StoreError('INVALID_ARGUMENT'): stock_change is not an integer
        StoreError('NOT_FOUND'): Product doesn't exist
    """
    if isinstance(stock_change, bool) or not isinstance(stock_change, int):
        raise StoreError('INVALID_ARGUMENT', 'Stock change must be an integer', stock_change=stock_change)

    operation = StockOperation.INCREMENT if stock_change >= 0 else StockOperation.DECREMENT
    return StockLedger.apply_change(
        product_id, abs(stock_change), operation, reason='Inventory adjustment', actor=actor,
    )
