"""
Order event triggers.

pre_save remembers the stored status so post_save can tell a real
transition from a re-save. Receivers never let stock bookkeeping or
notification failures break the order save.
"""

import logging

from django.db.models.signals import post_save, pre_save
from django.dispatch import receiver

from storekeeper.conf import storekeeper_settings
from storekeeper.models.order import Order
from storekeeper.services.notifications import send_order_confirmation, send_order_status_update
from storekeeper.services.orders import OrderHooks

logger = logging.getLogger('storekeeper')


@receiver(pre_save, sender=Order)
def remember_previous_status(sender, instance, raw=False, **kwargs):
    instance._previous_status = None
    if raw or instance.pk is None:
        return
    instance._previous_status = (
        Order.objects.filter(pk=instance.pk).values_list('status', flat=True).first()
    )


@receiver(post_save, sender=Order)
def update_stock_on_order(sender, instance, created, raw=False, **kwargs):
    """Decrement stock for the items of a new order."""
    if raw or not created:
        return
    try:
        OrderHooks.on_order_created(instance)
    except Exception:
        logger.exception("Stock update failed for new order %s", instance.pk)


@receiver(post_save, sender=Order)
def restore_stock_on_order_cancel(sender, instance, created, raw=False, **kwargs):
    """Restore stock the first time an order is saved as cancelled."""
    if raw or created:
        return
    try:
        OrderHooks.on_order_status_changed(instance, getattr(instance, '_previous_status', None))
    except Exception:
        logger.exception("Stock restore failed for order %s", instance.pk)


@receiver(post_save, sender=Order)
def notify_order_customer(sender, instance, created, raw=False, **kwargs):
    """Confirmation on create, status update on status change."""
    if raw or not storekeeper_settings.ORDER_NOTIFICATIONS:
        return
    try:
        if created:
            send_order_confirmation(instance)
        else:
            previous = getattr(instance, '_previous_status', None)
            if previous is not None and previous != instance.status:
                send_order_status_update(instance, previous)
    except Exception:
        logger.exception("Order notification failed for order %s", instance.pk)
