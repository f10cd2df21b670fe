"""
Tests for catalog maintenance: product create/update/deactivate and inventory adjustments.
"""

from decimal import Decimal

import pytest

from storekeeper import inventory, StoreError
from storekeeper.callables import call
from storekeeper.models import Category, Product, StockMovement


pytestmark = pytest.mark.django_db


@pytest.fixture
def books(db):
    return Category.objects.create(name='Books', slug='books')


def product_count(category):
    return Category.objects.get(pk=category.pk).product_count


class TestCreateProduct:
    """Tests for inventory.create_product()."""

    def test_opening_stock_is_a_set_movement(self, category, admin_user):
        product = inventory.create_product(
            'Desk Lamp', category_id=category.pk, sale_price=Decimal('39.90'), stock=25, actor=admin_user,
        )

        assert product.stock == 25
        assert product.slug == 'desk-lamp'
        movement = product.movements.get()
        assert movement.operation == 'set'
        assert movement.reason == 'Initial stock'
        assert (movement.previous_stock, movement.new_stock) == (0, 25)
        assert movement.actor == admin_user

    def test_no_stock_no_movement(self, category):
        product = inventory.create_product('Bookmark', category_id=category.pk)

        assert product.stock == 0
        assert StockMovement.objects.count() == 0

    def test_counts_category_products(self, category):
        inventory.create_product('Desk Lamp', category_id=category.pk)
        inventory.create_product('Floor Lamp', category_id=category.pk)

        assert product_count(category) == 2

    def test_missing_category(self):
        with pytest.raises(StoreError) as exc:
            inventory.create_product('Ghost', category_id=424242, stock=3)

        assert exc.value.code == 'NOT_FOUND'
        assert not Product.objects.filter(name='Ghost').exists()

    @pytest.mark.parametrize('stock', [-1, '5', True])
    def test_invalid_stock(self, stock):
        with pytest.raises(StoreError) as exc:
            inventory.create_product('Desk Lamp', stock=stock)
        assert exc.value.code == 'INVALID_ARGUMENT'


class TestUpdateProduct:
    """Tests for inventory.update_product()."""

    def test_stock_goes_through_ledger(self, product, admin_user):
        updated = inventory.update_product(product.pk, stock=30, actor=admin_user)

        assert updated.stock == 30
        movement = product.movements.get()
        assert movement.reason == 'Product update'
        assert (movement.previous_stock, movement.new_stock) == (12, 30)

    def test_plain_fields(self, product):
        updated = inventory.update_product(product.pk, name='Studio Headphones', sale_price=Decimal('79.90'))

        assert updated.slug == 'studio-headphones'
        assert updated.sale_price == Decimal('79.90')
        assert StockMovement.objects.count() == 0

    def test_category_change_moves_count(self, category, books):
        product = inventory.create_product('Atlas', category_id=category.pk)

        inventory.update_product(product.pk, category_id=books.pk)

        assert (product_count(category), product_count(books)) == (0, 1)

    def test_unknown_field(self, product):
        with pytest.raises(StoreError) as exc:
            inventory.update_product(product.pk, stock_level=3)

        assert exc.value.code == 'INVALID_ARGUMENT'
        assert exc.value.data['fields'] == ['stock_level']

    def test_missing_product(self):
        with pytest.raises(StoreError) as exc:
            inventory.update_product(424242, name='Nobody')
        assert exc.value.code == 'NOT_FOUND'


class TestDeactivateProduct:
    """Tests for inventory.deactivate_product()."""

    def test_keeps_row_and_movements(self, category):
        product = inventory.create_product('Desk Lamp', category_id=category.pk, stock=4)

        inventory.deactivate_product(product.pk)

        product.refresh_from_db()
        assert product.is_active is False
        assert product.movements.count() == 1
        assert product_count(category) == 0


class TestUpdateInventory:
    """Tests for inventory.update_inventory()."""

    def test_positive_change_increments(self, product):
        change = inventory.update_inventory(product.pk, 5)

        assert change.new_stock == 17
        assert product.movements.get().reason == 'Inventory adjustment'

    def test_negative_change_clamps(self, product):
        change = inventory.update_inventory(product.pk, -20)

        assert change.new_stock == 0
        assert change.quantity == -12
        assert product.movements.get().operation == 'decrement'

    @pytest.mark.parametrize('stock_change', ['3', 1.5, None])
    def test_invalid_change(self, product, stock_change):
        with pytest.raises(StoreError) as exc:
            inventory.update_inventory(product.pk, stock_change)
        assert exc.value.code == 'INVALID_ARGUMENT'


class TestProductCallables:
    """createProduct, updateProduct, deleteProduct, updateInventory."""

    def test_create_product(self, admin_user, category):
        result = call('createProduct', admin_user, {
            'name': 'Desk Lamp', 'categoryId': category.pk, 'salePrice': '39.90', 'stock': 25,
        })

        product = Product.objects.get(pk=result['productId'])
        assert result['success'] is True
        assert product.stock == 25
        assert product.sale_price == Decimal('39.90')
        assert product.movements.get().reason == 'Initial stock'

    def test_create_product_invalid_payload(self, admin_user):
        with pytest.raises(StoreError) as exc:
            call('createProduct', admin_user, {'stock': -1})

        assert exc.value.code == 'INVALID_ARGUMENT'
        assert set(exc.value.data['errors']) == {'name', 'stock'}

    def test_update_product(self, admin_user, product):
        result = call('updateProduct', admin_user, {'productId': product.pk, 'brand': 'Acme', 'stock': 3})

        assert result['message'] == 'Product updated successfully'
        product.refresh_from_db()
        assert (product.brand, product.stock) == ('Acme', 3)
        assert product.movements.get().actor == admin_user

    def test_delete_product(self, admin_user, product):
        call('deleteProduct', admin_user, {'productId': product.pk})

        product.refresh_from_db()
        assert product.is_active is False

    def test_update_inventory(self, admin_user, product):
        result = call('updateInventory', admin_user, {'productId': product.pk, 'stockChange': -5})

        assert result == {'success': True, 'newStock': 7, 'message': 'Inventory updated successfully'}
