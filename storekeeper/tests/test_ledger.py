"""
Tests for the stock ledger.
"""

import pytest

from storekeeper import inventory, StoreError
from storekeeper.models import LowStockAlert, Product, StockMovement
from storekeeper.services.ledger import compute_new_stock


pytestmark = pytest.mark.django_db


class TestComputeNewStock:
    """Tests for compute_new_stock()."""

    @pytest.mark.parametrize('quantity', [5, 6, 8, 100])
    def test_decrement_clamps_at_zero(self, quantity):
        """Decrementing past zero yields zero, never negative."""
        assert compute_new_stock(5, quantity, 'decrement') == 0

    @pytest.mark.parametrize('current', [0, 3, 7, 500])
    def test_set_ignores_current(self, current):
        """Set yields exactly the quantity."""
        assert compute_new_stock(current, 7, 'set') == 7

    def test_increment_adds(self):
        assert compute_new_stock(5, 3, 'increment') == 8

    def test_unknown_operation(self):
        with pytest.raises(StoreError) as exc:
            compute_new_stock(5, 3, 'multiply')
        assert exc.value.code == 'INVALID_ARGUMENT'


class TestApplyChange:
    """Tests for inventory.apply_change()."""

    def test_decrement_writes_stock_and_movement(self, product, admin_user):
        """Decrement updates stock and records one movement."""
        change = inventory.apply_change(product.pk, 5, 'decrement', reason='Damaged', actor=admin_user)

        product.refresh_from_db()
        assert product.stock == 7
        assert change.previous_stock == 12
        assert change.new_stock == 7

        movement = StockMovement.objects.get(product=product)
        assert movement.previous_stock == 12
        assert movement.new_stock == 7
        assert movement.quantity == -5
        assert movement.operation == 'decrement'
        assert movement.reason == 'Damaged'
        assert movement.actor == admin_user

    def test_decrement_below_zero_clamps(self, make_product):
        """Stock 5 decremented by 8 ends at 0; movement records the applied delta."""
        product = make_product(stock=5)

        change = inventory.apply_change(product.pk, 8, 'decrement')

        product.refresh_from_db()
        assert product.stock == 0
        assert change.quantity == -5

    def test_set(self, product):
        inventory.apply_change(product.pk, 7, 'set')

        product.refresh_from_db()
        assert product.stock == 7
        assert StockMovement.objects.get(product=product).quantity == -5

    def test_increment(self, make_product):
        product = make_product(stock=5)

        inventory.apply_change(product.pk, 3, 'increment')

        product.refresh_from_db()
        assert product.stock == 8

    def test_default_reason(self, product):
        """Missing reason falls back to a per-operation default."""
        inventory.apply_change(product.pk, 2, 'increment')

        assert StockMovement.objects.get(product=product).reason == 'Stock increment'

    def test_not_idempotent_without_key(self, product):
        """Same call twice applies the delta twice."""
        inventory.apply_change(product.pk, 2, 'decrement')
        inventory.apply_change(product.pk, 2, 'decrement')

        product.refresh_from_db()
        assert product.stock == 8
        assert StockMovement.objects.filter(product=product).count() == 2

    def test_idempotency_key_applies_once(self, product):
        """A keyed change replayed returns the first movement and writes nothing."""
        first = inventory.apply_change(product.pk, 2, 'decrement', idempotency_key='evt-1')
        second = inventory.apply_change(product.pk, 2, 'decrement', idempotency_key='evt-1')

        product.refresh_from_db()
        assert product.stock == 10
        assert StockMovement.objects.filter(product=product).count() == 1
        assert second.duplicate is True
        assert second.movement_id == first.movement_id
        assert second.new_stock == 10

    def test_missing_product(self):
        with pytest.raises(StoreError) as exc:
            inventory.apply_change(999999, 1, 'increment')
        assert exc.value.code == 'NOT_FOUND'
        assert StockMovement.objects.count() == 0

    @pytest.mark.parametrize('product_id', ['not-a-pk', None, ''])
    def test_invalid_product_id(self, product_id):
        with pytest.raises(StoreError) as exc:
            inventory.apply_change(product_id, 1, 'increment')
        assert exc.value.code == 'INVALID_ARGUMENT'

    @pytest.mark.parametrize('quantity', [-1, 1.5, '3', True, None])
    def test_invalid_quantity(self, product, quantity):
        with pytest.raises(StoreError) as exc:
            inventory.apply_change(product.pk, quantity, 'increment')
        assert exc.value.code == 'INVALID_ARGUMENT'

    def test_invalid_operation(self, product):
        with pytest.raises(StoreError) as exc:
            inventory.apply_change(product.pk, 1, 'remove')
        assert exc.value.code == 'INVALID_ARGUMENT'

        product.refresh_from_db()
        assert product.stock == 12

    def test_every_change_has_one_matching_movement(self, product):
        """Each mutation's movement matches the stock before and after it."""
        for quantity, operation in [(3, 'increment'), (20, 'decrement'), (4, 'set'), (1, 'decrement')]:
            before = Product.objects.get(pk=product.pk).stock
            inventory.apply_change(product.pk, quantity, operation)
            after = Product.objects.get(pk=product.pk).stock

            movement = StockMovement.objects.filter(product=product).last()
            assert (movement.previous_stock, movement.new_stock) == (before, after)

        assert StockMovement.objects.filter(product=product).count() == 4

    def test_alert_failure_does_not_fail_change(self, product, product_alert, monkeypatch):
        """An exploding low-stock check is swallowed after the write."""
        def boom(*args, **kwargs):
            raise RuntimeError('alert store down')

        monkeypatch.setattr(LowStockAlert.objects, 'create', boom)

        change = inventory.apply_change(product.pk, 5, 'decrement')

        product.refresh_from_db()
        assert product.stock == 7
        assert change.new_stock == 7
        assert LowStockAlert.objects.count() == 0


class TestStockMovementImmutability:
    """Stock movements are never updated or deleted."""

    def test_cannot_update(self, product):
        inventory.apply_change(product.pk, 1, 'increment')
        movement = StockMovement.objects.get(product=product)
        movement.reason = 'Edited'

        with pytest.raises(ValueError):
            movement.save()

    def test_cannot_delete(self, product):
        inventory.apply_change(product.pk, 1, 'increment')

        with pytest.raises(ValueError):
            StockMovement.objects.get(product=product).delete()
