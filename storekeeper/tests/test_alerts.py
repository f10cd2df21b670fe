"""
Tests for low-stock alerts.
"""

import pytest

from storekeeper import inventory, StoreError
from storekeeper.models import LowStockAlert, StockAlert
from storekeeper.services.alerts import check_low_stock_alert


pytestmark = pytest.mark.django_db


class TestLowStockScenarios:
    """End-to-end alerting through the ledger."""

    def test_medium_alert_below_threshold(self, product, product_alert):
        """Stock 12, threshold 10, decrement 5: stock 7, one movement of -5, one medium alert."""
        inventory.apply_change(product.pk, 5, 'decrement')

        product.refresh_from_db()
        assert product.stock == 7
        assert list(product.movements.values_list('quantity', flat=True)) == [-5]

        alert = LowStockAlert.objects.get(product=product)
        assert alert.priority == 'medium'
        assert alert.current_stock == 7
        assert alert.threshold == 10

        product_alert.refresh_from_db()
        assert product_alert.last_triggered_at is not None

    def test_high_alert_at_zero(self, make_product):
        """Stock 3, decrement 3: stock 0, high priority alert."""
        product = make_product(stock=3)
        StockAlert.objects.create(product=product, threshold=10)

        inventory.apply_change(product.pk, 3, 'decrement')

        product.refresh_from_db()
        assert product.stock == 0
        assert LowStockAlert.objects.get(product=product).priority == 'high'

    def test_no_alert_above_threshold(self, product, product_alert):
        inventory.apply_change(product.pk, 1, 'decrement')

        assert LowStockAlert.objects.count() == 0

    def test_alert_at_exact_threshold(self, product, product_alert):
        inventory.apply_change(product.pk, 10, 'set')

        assert LowStockAlert.objects.get(product=product).priority == 'medium'

    def test_no_alert_without_threshold(self, product):
        """No default threshold is assumed by the alerter."""
        inventory.apply_change(product.pk, 12, 'decrement')

        assert LowStockAlert.objects.count() == 0

    def test_no_alert_when_inactive(self, product, product_alert):
        product_alert.is_active = False
        product_alert.save()

        inventory.apply_change(product.pk, 12, 'decrement')

        assert LowStockAlert.objects.count() == 0


class TestCheckLowStockAlert:
    """Tests for check_low_stock_alert()."""

    def test_triggered_result(self, product, product_alert):
        result = check_low_stock_alert(product.pk, 4)

        assert result.triggered is True
        assert result.error is None
        assert result.alert.current_stock == 4

    def test_not_triggered_result(self, product, product_alert):
        result = check_low_stock_alert(product.pk, 11)

        assert result.triggered is False
        assert result.alert is None
        assert result.error is None

    def test_error_is_returned_not_raised(self, product, product_alert, monkeypatch):
        def boom(*args, **kwargs):
            raise RuntimeError('write failed')

        monkeypatch.setattr(LowStockAlert.objects, 'create', boom)

        result = check_low_stock_alert(product.pk, 0)

        assert result.triggered is False
        assert isinstance(result.error, RuntimeError)


class TestSetStockAlert:
    """Tests for inventory.set_alert()."""

    def test_creates_threshold(self, product, admin_user):
        alert = inventory.set_alert(product.pk, 5, actor=admin_user)

        assert alert.threshold == 5
        assert alert.is_active is True
        assert alert.updated_by == admin_user

    def test_updates_existing(self, product, product_alert):
        inventory.set_alert(product.pk, 3, is_active=False)

        product_alert.refresh_from_db()
        assert product_alert.threshold == 3
        assert product_alert.is_active is False
        assert StockAlert.objects.count() == 1

    def test_missing_product(self):
        with pytest.raises(StoreError) as exc:
            inventory.set_alert(999999, 5)
        assert exc.value.code == 'NOT_FOUND'

    def test_negative_threshold(self, product):
        with pytest.raises(StoreError) as exc:
            inventory.set_alert(product.pk, -1)
        assert exc.value.code == 'INVALID_ARGUMENT'
