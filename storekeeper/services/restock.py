"""
Restock requests — ticketing for products that need more stock.
"""

import logging

from storekeeper.exceptions import StoreError
from storekeeper.models.catalog import Product
from storekeeper.models.enums import RestockPriority, RestockStatus
from storekeeper.models.restock import RestockRequest

logger = logging.getLogger('storekeeper')


def create_restock_request(product_id, requested_quantity: int,
                           priority: str = RestockPriority.MEDIUM,
                           notes: str | None = None, actor=None) -> RestockRequest:
    """
    Open a restock request, snapshotting the product's name and current stock.

    Raises:
        StoreError('INVALID_ARGUMENT'): quantity not a positive integer, or unknown priority
        StoreError('NOT_FOUND'): Product doesn't exist
    """
    if isinstance(requested_quantity, bool) or not isinstance(requested_quantity, int) \
            or requested_quantity <= 0:
        raise StoreError(
            'INVALID_ARGUMENT',
            'Requested quantity must be a positive integer',
            requested_quantity=requested_quantity,
        )
    if priority not in RestockPriority.values:
        raise StoreError('INVALID_ARGUMENT', f"Unknown priority '{priority}'", priority=priority)

    product = Product.objects.filter(pk=product_id).first()
    if product is None:
        raise StoreError('NOT_FOUND', 'Product not found', product_id=product_id)

    request = RestockRequest.objects.create(
        product=product,
        product_name=product.name,
        current_stock=product.stock,
        requested_quantity=requested_quantity,
        priority=priority,
        status=RestockStatus.PENDING,
        notes=notes or '',
        requested_by=actor,
    )
    logger.info(
        "restock.requested",
        extra={
            "request_id": request.pk,
            "product_id": product.pk,
            "requested_quantity": requested_quantity,
            "priority": priority,
        },
    )
    return request
