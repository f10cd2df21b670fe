"""
Pytest fixtures for Storekeeper tests.
"""

from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model

from storekeeper.adapters import reset_channels
from storekeeper.models import Category, Product, StockAlert
from storekeeper.tests.fakes import RecordingChannel


User = get_user_model()


@pytest.fixture(autouse=True)
def fresh_channels():
    """Drop cached channels and recorded messages between tests."""
    reset_channels()
    RecordingChannel.sent.clear()
    yield
    reset_channels()
    RecordingChannel.sent.clear()


@pytest.fixture
def admin_user(db):
    """Create a staff user (admin role)."""
    return User.objects.create_user(
        username='admin',
        password='testpass123',
        is_staff=True,
    )


@pytest.fixture
def customer(db):
    """Create a regular authenticated user."""
    return User.objects.create_user(
        username='customer',
        email='customer@example.com',
        password='testpass123',
    )


@pytest.fixture
def category(db):
    """Create a test category."""
    return Category.objects.create(
        name='Electronics',
        slug='electronics',
        is_active=True
    )


@pytest.fixture
def make_product(db, category):
    """Factory for products with a given stock and price."""

    def _make(name='Widget', stock=0, sale_price='10.00', is_active=True):
        return Product.objects.create(
            name=name,
            category=category,
            stock=stock,
            original_price=Decimal(sale_price),
            sale_price=Decimal(sale_price),
            is_active=is_active,
        )

    return _make


@pytest.fixture
def product(make_product):
    """Create a product with 12 units in stock."""
    return make_product(name='Wireless Headphones', stock=12, sale_price='99.90')


@pytest.fixture
def product_alert(product):
    """Active threshold of 10 on the default product."""
    return StockAlert.objects.create(product=product, threshold=10)
