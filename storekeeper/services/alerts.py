"""
Stock alerts — threshold configuration and low-stock checks.

Usage:
    from storekeeper.services.alerts import set_stock_alert, notify_low_stock

    set_stock_alert(product.pk, threshold=10, actor=admin)

    # Called by the ledger after every stock write
    notify_low_stock(product.pk, new_stock)
"""

import logging
from dataclasses import dataclass

from django.db import transaction
from django.utils import timezone

from storekeeper.exceptions import StoreError
from storekeeper.models.alert import LowStockAlert, StockAlert
from storekeeper.models.catalog import Product
from storekeeper.models.enums import AlertPriority

logger = logging.getLogger('storekeeper')


@dataclass(frozen=True)
class AlertCheck:
    """
    Result of a low-stock check.

    Exactly one of the outcomes holds:
    - error is set: the check itself failed
    - triggered with alert: an alert record was created
    - neither: no active threshold, or stock above it
    """

    triggered: bool = False
    alert: LowStockAlert | None = None
    error: Exception | None = None


def check_low_stock_alert(product_id, current_stock: int) -> AlertCheck:
    """
    Compare a product's stock with its active threshold.

    Fires iff an active StockAlert exists and current_stock <= threshold.
    Priority is HIGH at zero stock, MEDIUM otherwise.

    Never raises: failures come back in AlertCheck.error.
    """
    try:
        with transaction.atomic():
            config = StockAlert.objects.filter(product_id=product_id, is_active=True).first()
            if config is None or current_stock > config.threshold:
                return AlertCheck()

            priority = AlertPriority.HIGH if current_stock == 0 else AlertPriority.MEDIUM
            alert = LowStockAlert.objects.create(
                product_id=product_id,
                current_stock=current_stock,
                threshold=config.threshold,
                priority=priority,
            )
            StockAlert.objects.filter(pk=config.pk).update(last_triggered_at=timezone.now())
    except Exception as exc:
        return AlertCheck(error=exc)

    logger.warning(
        "stock.alert.triggered",
        extra={
            "alert_id": alert.pk,
            "product_id": product_id,
            "threshold": alert.threshold,
            "current_stock": current_stock,
            "priority": alert.priority,
        },
    )
    return AlertCheck(triggered=True, alert=alert)


def notify_low_stock(product_id, current_stock: int) -> LowStockAlert | None:
    """
    Run the low-stock check after a stock write.

    A failed check is logged and discarded: it must never fail the stock
    change that triggered it.
    """
    result = check_low_stock_alert(product_id, current_stock)
    if result.error is not None:
        logger.error(
            "stock.alert.failed",
            extra={"product_id": product_id, "current_stock": current_stock},
            exc_info=result.error,
        )
    return result.alert


def set_stock_alert(product_id, threshold: int, is_active: bool = True, actor=None) -> StockAlert:
    """
    Create or update the low-stock threshold of a product.

    Raises:
        StoreError('INVALID_ARGUMENT'): threshold is not a non-negative integer
        StoreError('NOT_FOUND'): Product doesn't exist
    """
    if isinstance(threshold, bool) or not isinstance(threshold, int) or threshold < 0:
        raise StoreError('INVALID_ARGUMENT', 'Threshold must be a non-negative integer', threshold=threshold)

    if not Product.objects.filter(pk=product_id).exists():
        raise StoreError('NOT_FOUND', 'Product not found', product_id=product_id)

    alert, created = StockAlert.objects.update_or_create(
        product_id=product_id,
        defaults={
            'threshold': threshold,
            'is_active': is_active,
            'updated_by': actor,
        },
    )
    logger.info(
        "stock.alert.configured",
        extra={
            "product_id": product_id,
            "threshold": threshold,
            "is_active": is_active,
            "was_created": created,
        },
    )
    return alert
