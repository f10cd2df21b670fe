"""
Inventory report — read-only aggregate over active products.

All functions are plain reads; nothing here writes.
"""

from decimal import Decimal
from typing import Any

from storekeeper.conf import storekeeper_settings
from storekeeper.models.alert import StockAlert
from storekeeper.models.catalog import Product

OUT_OF_STOCK = 'out-of-stock'
LOW_STOCK = 'low-stock'
IN_STOCK = 'in-stock'

# Report ordering: most urgent first
STATUS_PRIORITY = {
    OUT_OF_STOCK: 0,
    LOW_STOCK: 1,
    IN_STOCK: 2,
}


def classify_stock(stock: int, threshold: int) -> str:
    """out-of-stock at 0, low-stock at or below threshold, in-stock otherwise."""
    if stock == 0:
        return OUT_OF_STOCK
    if stock <= threshold:
        return LOW_STOCK
    return IN_STOCK


def inventory_report() -> dict[str, Any]:
    """
    Classify every active product and aggregate totals.

    Products without an active StockAlert use DEFAULT_LOW_STOCK_THRESHOLD.

    Returns:
        {"success", "summary": {...}, "products": [...]} with products
        ordered out-of-stock, low-stock, in-stock (by name within a group)
    """
    default_threshold = storekeeper_settings.DEFAULT_LOW_STOCK_THRESHOLD
    thresholds = dict(
        StockAlert.objects.filter(is_active=True).values_list('product_id', 'threshold')
    )

    rows = []
    total_value = Decimal('0')
    for product in Product.objects.filter(is_active=True).select_related('category').order_by('name', 'pk'):
        threshold = thresholds.get(product.pk, default_threshold)
        value = product.sale_price * product.stock
        total_value += value
        rows.append({
            'id': product.pk,
            'name': product.name,
            'category': product.category.name if product.category else None,
            'stock': product.stock,
            'salePrice': product.sale_price,
            'threshold': threshold,
            'status': classify_stock(product.stock, threshold),
            'value': value,
        })

    rows.sort(key=lambda row: STATUS_PRIORITY[row['status']])

    counts = {status: 0 for status in STATUS_PRIORITY}
    for row in rows:
        counts[row['status']] += 1

    return {
        'success': True,
        'summary': {
            'totalProducts': len(rows),
            'outOfStockProducts': counts[OUT_OF_STOCK],
            'lowStockProducts': counts[LOW_STOCK],
            'inStockProducts': counts[IN_STOCK],
            'totalValue': total_value,
        },
        'products': rows,
    }
