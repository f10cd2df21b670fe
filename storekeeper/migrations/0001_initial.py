"""
Initial migration for Storekeeper models.
"""

from decimal import Decimal
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models

import storekeeper.models.order


class Migration(migrations.Migration):
    """Create Storekeeper models: catalog, stock ledger, alerts, restock, orders, notifications."""

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Category',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, verbose_name='Name')),
                ('slug', models.SlugField(max_length=120, unique=True, verbose_name='Slug')),
                ('is_active', models.BooleanField(default=True, verbose_name='Active')),
                ('product_count', models.PositiveIntegerField(default=0, verbose_name='Product count')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'Category',
                'verbose_name_plural': 'Categories',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200, verbose_name='Name')),
                ('slug', models.SlugField(blank=True, max_length=220, verbose_name='Slug')),
                ('brand', models.CharField(blank=True, max_length=100, verbose_name='Brand')),
                ('stock', models.PositiveIntegerField(default=0, verbose_name='Stock')),
                ('original_price', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12, verbose_name='Original price')),
                ('sale_price', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12, verbose_name='Sale price')),
                ('is_active', models.BooleanField(db_index=True, default=True, verbose_name='Active')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('category', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='products', to='storekeeper.category', verbose_name='Category')),
            ],
            options={
                'verbose_name': 'Product',
                'verbose_name_plural': 'Products',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Order',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('order_number', models.CharField(default=storekeeper.models.order.generate_order_number, max_length=40, unique=True, verbose_name='Order number')),
                ('customer_name', models.CharField(blank=True, max_length=200, verbose_name='Customer name')),
                ('customer_email', models.EmailField(blank=True, max_length=254, verbose_name='Customer email')),
                ('customer_phone', models.CharField(blank=True, max_length=30, verbose_name='Customer phone')),
                ('items', models.JSONField(default=list, verbose_name='Items')),
                ('total', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12, verbose_name='Total')),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('confirmed', 'Confirmed'), ('processing', 'Processing'), ('shipped', 'Shipped'), ('delivered', 'Delivered'), ('cancelled', 'Cancelled')], db_index=True, default='pending', max_length=20, verbose_name='Status')),
                ('payment_status', models.CharField(choices=[('pending', 'Pending'), ('completed', 'Completed'), ('failed', 'Failed'), ('refunded', 'Refunded')], default='pending', max_length=20, verbose_name='Payment status')),
                ('tracking_history', models.JSONField(blank=True, default=list, verbose_name='Tracking history')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='storekeeper_orders', to=settings.AUTH_USER_MODEL, verbose_name='Customer')),
            ],
            options={
                'verbose_name': 'Order',
                'verbose_name_plural': 'Orders',
                'ordering': ['-created_at', '-pk'],
            },
        ),
        migrations.CreateModel(
            name='Notification',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('type', models.CharField(choices=[('email', 'Email'), ('sms', 'SMS'), ('push', 'Push')], max_length=10, verbose_name='Type')),
                ('recipient', models.CharField(db_index=True, max_length=255, verbose_name='Recipient')),
                ('subject', models.CharField(blank=True, max_length=255, verbose_name='Subject')),
                ('message', models.TextField(verbose_name='Message')),
                ('template_id', models.CharField(blank=True, max_length=100, verbose_name='Template')),
                ('data', models.JSONField(blank=True, default=dict, verbose_name='Data')),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('sent', 'Sent'), ('failed', 'Failed')], db_index=True, default='pending', max_length=10, verbose_name='Status')),
                ('error', models.TextField(blank=True, verbose_name='Error')),
                ('sent_at', models.DateTimeField(blank=True, null=True, verbose_name='Sent at')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
            ],
            options={
                'verbose_name': 'Notification',
                'verbose_name_plural': 'Notifications',
                'ordering': ['-created_at', '-pk'],
            },
        ),
        migrations.CreateModel(
            name='StockAlert',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('threshold', models.PositiveIntegerField(help_text='Alert fires when stock <= this value', verbose_name='Threshold')),
                ('is_active', models.BooleanField(db_index=True, default=True, verbose_name='Active')),
                ('last_triggered_at', models.DateTimeField(blank=True, null=True, verbose_name='Last triggered')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('product', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='stock_alert', to='storekeeper.product', verbose_name='Product')),
                ('updated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='Updated by')),
            ],
            options={
                'verbose_name': 'Stock alert threshold',
                'verbose_name_plural': 'Stock alert thresholds',
            },
        ),
        migrations.CreateModel(
            name='LowStockAlert',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('current_stock', models.PositiveIntegerField(verbose_name='Current stock')),
                ('threshold', models.PositiveIntegerField(verbose_name='Threshold')),
                ('priority', models.CharField(choices=[('medium', 'Medium'), ('high', 'High')], max_length=10, verbose_name='Priority')),
                ('is_resolved', models.BooleanField(default=False, verbose_name='Resolved')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='low_stock_alerts', to='storekeeper.product', verbose_name='Product')),
            ],
            options={
                'verbose_name': 'Low stock alert',
                'verbose_name_plural': 'Low stock alerts',
                'ordering': ['-created_at', '-pk'],
            },
        ),
        migrations.CreateModel(
            name='RestockRequest',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('product_name', models.CharField(max_length=200, verbose_name='Product name')),
                ('current_stock', models.PositiveIntegerField(verbose_name='Stock at request time')),
                ('requested_quantity', models.PositiveIntegerField(verbose_name='Requested quantity')),
                ('priority', models.CharField(choices=[('low', 'Low'), ('medium', 'Medium'), ('high', 'High'), ('urgent', 'Urgent')], default='medium', max_length=10, verbose_name='Priority')),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('approved', 'Approved'), ('rejected', 'Rejected'), ('completed', 'Completed')], db_index=True, default='pending', max_length=20, verbose_name='Status')),
                ('notes', models.TextField(blank=True, verbose_name='Notes')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='restock_requests', to='storekeeper.product', verbose_name='Product')),
                ('requested_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='Requested by')),
            ],
            options={
                'verbose_name': 'Restock request',
                'verbose_name_plural': 'Restock requests',
                'ordering': ['-created_at', '-pk'],
            },
        ),
        migrations.CreateModel(
            name='StockMovement',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('previous_stock', models.PositiveIntegerField(verbose_name='Previous stock')),
                ('new_stock', models.PositiveIntegerField(verbose_name='New stock')),
                ('quantity', models.IntegerField(help_text='Positive = in, negative = out', verbose_name='Quantity')),
                ('operation', models.CharField(choices=[('set', 'Set'), ('increment', 'Increment'), ('decrement', 'Decrement')], max_length=20, verbose_name='Operation')),
                ('reason', models.CharField(max_length=255, verbose_name='Reason')),
                ('idempotency_key', models.CharField(blank=True, max_length=120, null=True, unique=True, verbose_name='Idempotency key')),
                ('timestamp', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Timestamp')),
                ('actor', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='Actor')),
                ('order', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='movements', to='storekeeper.order', verbose_name='Order')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='movements', to='storekeeper.product', verbose_name='Product')),
            ],
            options={
                'verbose_name': 'Stock movement',
                'verbose_name_plural': 'Stock movements',
                'ordering': ['timestamp', 'pk'],
                'indexes': [models.Index(fields=['product', 'timestamp'], name='storekeeper_mov_prod_ts_idx')],
            },
        ),
    ]
