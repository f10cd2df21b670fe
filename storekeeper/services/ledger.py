"""
Stock ledger — the only code path that changes Product.stock.

Every change writes the new stock and appends one StockMovement inside a
single transaction.atomic() batch, then runs the low-stock check.

Concurrency:
    The current stock is read without select_for_update(). Two concurrent
    changes to the same product can compute from the same stale read and
    the last write wins. Keyed changes (idempotency_key) are still applied
    at most once thanks to the unique constraint on StockMovement.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from django.db import IntegrityError, transaction
from django.utils import timezone

from storekeeper.exceptions import StoreError
from storekeeper.models.catalog import Product
from storekeeper.models.enums import StockOperation
from storekeeper.models.movement import StockMovement
from storekeeper.services.alerts import notify_low_stock

logger = logging.getLogger('storekeeper')

DEFAULT_REASONS = {
    StockOperation.SET: 'Stock set',
    StockOperation.INCREMENT: 'Stock increment',
    StockOperation.DECREMENT: 'Stock decrement',
}


@dataclass(frozen=True)
class StockChange:
    """Outcome of one applied (or already-applied) stock change."""

    product_id: int
    previous_stock: int
    new_stock: int
    quantity: int  # Signed delta actually applied
    operation: str
    movement_id: int | None = None
    duplicate: bool = False

    @classmethod
    def from_movement(cls, movement: StockMovement, duplicate: bool = False) -> 'StockChange':
        return cls(
            product_id=movement.product_id,
            previous_stock=movement.previous_stock,
            new_stock=movement.new_stock,
            quantity=movement.quantity,
            operation=movement.operation,
            movement_id=movement.pk,
            duplicate=duplicate,
        )


@dataclass
class BulkStockResult:
    """Per-item report of a bulk stock update."""

    results: list[dict[str, Any]] = field(default_factory=list)

    @property
    def total_updated(self) -> int:
        return sum(1 for r in self.results if r['success'])

    def as_dict(self) -> dict[str, Any]:
        return {
            'success': True,
            'results': self.results,
            'totalUpdated': self.total_updated,
        }


def compute_new_stock(current: int, quantity: int, operation: str) -> int:
    """
    New stock for an operation.

    set → quantity, increment → current + quantity,
    decrement → max(0, current - quantity).
    """
    if operation == StockOperation.SET:
        return quantity
    if operation == StockOperation.INCREMENT:
        return current + quantity
    if operation == StockOperation.DECREMENT:
        return max(0, current - quantity)
    raise StoreError('INVALID_ARGUMENT', f"Unknown stock operation '{operation}'", operation=operation)


def validate_change(quantity, operation) -> None:
    """Raise INVALID_ARGUMENT unless quantity is a non-negative int and operation is known."""
    if operation not in StockOperation.values:
        raise StoreError('INVALID_ARGUMENT', f"Unknown stock operation '{operation}'", operation=operation)
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 0:
        raise StoreError('INVALID_ARGUMENT', 'Quantity must be a non-negative integer', quantity=quantity)


def get_product(product_id) -> Product:
    """
    Raises:
        StoreError('INVALID_ARGUMENT'): product_id is not a valid key
        StoreError('NOT_FOUND'): Product doesn't exist
    """
    if product_id in (None, '') or isinstance(product_id, bool):
        raise StoreError('INVALID_ARGUMENT', 'Product ID is required', product_id=product_id)
    try:
        product = Product.objects.filter(pk=product_id).first()
    except (ValueError, TypeError) as exc:
        raise StoreError('INVALID_ARGUMENT', 'Invalid product ID', product_id=str(product_id)) from exc
    if product is None:
        raise StoreError('NOT_FOUND', 'Product not found', product_id=product_id)
    return product


class StockLedger:
    """State-changing stock methods."""

    @classmethod
    def apply_change(cls, product_id, quantity: int, operation: str, reason: str | None = None,
                     actor=None, order=None, idempotency_key: str | None = None) -> StockChange:
        """
        Apply one stock change to a product.

        Not idempotent unless idempotency_key is given: with a key, a second
        call returns the first call's movement with duplicate=True and writes
        nothing.

        Raises:
            StoreError('INVALID_ARGUMENT'): Bad operation or quantity
            StoreError('NOT_FOUND'): Product doesn't exist
        """
        validate_change(quantity, operation)

        if idempotency_key:
            existing = StockMovement.objects.filter(idempotency_key=idempotency_key).first()
            if existing is not None:
                return cls._duplicate(existing)

        try:
            with transaction.atomic():
                product = get_product(product_id)
                movement = cls._write(product, quantity, operation, reason, actor, order, idempotency_key)
        except IntegrityError:
            # Lost the race against a concurrent delivery of the same keyed change
            existing = StockMovement.objects.filter(idempotency_key=idempotency_key).first() \
                if idempotency_key else None
            if existing is None:
                raise
            return cls._duplicate(existing)

        notify_low_stock(movement.product_id, movement.new_stock)
        return StockChange.from_movement(movement)

    @classmethod
    def apply_changes(cls, updates: Iterable[Mapping[str, Any]], reason: str | None = None,
                      actor=None) -> BulkStockResult:
        """
        Apply many stock changes as one batch.

        Each update is {"productId" (or "product_id"), "quantity", "operation"}
        and is checked on its own: a malformed item or missing product is
        reported as a failed entry and the rest continue. Successful writes
        commit together.
        """
        result = BulkStockResult()
        applied: list[StockMovement] = []

        with transaction.atomic():
            for update in updates:
                product_id = None
                try:
                    if not isinstance(update, Mapping):
                        raise StoreError('INVALID_ARGUMENT', 'Update must be an object')
                    product_id = update.get('productId', update.get('product_id'))
                    validate_change(update.get('quantity'), update.get('operation'))
                    product = get_product(product_id)
                    movement = cls._write(
                        product, update['quantity'], update['operation'], reason, actor,
                    )
                except StoreError as exc:
                    result.results.append({
                        'productId': product_id,
                        'success': False,
                        'error': exc.message,
                    })
                    continue

                applied.append(movement)
                result.results.append({
                    'productId': product_id,
                    'success': True,
                    'previousStock': movement.previous_stock,
                    'newStock': movement.new_stock,
                })

        for movement in applied:
            notify_low_stock(movement.product_id, movement.new_stock)

        logger.info(
            "stock.bulk_change",
            extra={
                "requested": len(result.results),
                "updated": result.total_updated,
                "reason": reason,
            },
        )
        return result

    # ══════════════════════════════════════════════════════════════
    # INTERNALS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def _write(cls, product: Product, quantity: int, operation: str, reason: str | None,
               actor=None, order=None, idempotency_key: str | None = None) -> StockMovement:
        """Write new stock and its movement. Caller owns the transaction."""
        previous = product.stock
        new = compute_new_stock(previous, quantity, operation)

        Product.objects.filter(pk=product.pk).update(stock=new, updated_at=timezone.now())
        product.stock = new

        movement = StockMovement.objects.create(
            product=product,
            previous_stock=previous,
            new_stock=new,
            quantity=new - previous,
            operation=operation,
            reason=reason or DEFAULT_REASONS[operation],
            actor=actor,
            order=order,
            idempotency_key=idempotency_key or None,
        )
        logger.info(
            "stock.change",
            extra={
                "product_id": product.pk,
                "operation": operation,
                "previous": previous,
                "new": new,
                "reason": movement.reason,
                "order_id": getattr(order, 'pk', None),
            },
        )
        return movement

    @classmethod
    def _duplicate(cls, movement: StockMovement) -> StockChange:
        logger.info(
            "stock.change.duplicate",
            extra={
                "product_id": movement.product_id,
                "idempotency_key": movement.idempotency_key,
                "movement_id": movement.pk,
            },
        )
        return StockChange.from_movement(movement, duplicate=True)
