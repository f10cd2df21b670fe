"""
Notification dispatch — pending → sent | failed bookkeeping over pluggable channels.

Usage:
    from storekeeper.services.notifications import NotificationDispatcher

    dispatcher = NotificationDispatcher()
    notification = dispatcher.send('email', 'ana@example.com', 'Hello', subject='Hi')

Channels come from STOREKEEPER['NOTIFICATION_CHANNELS'] unless passed in:

    NotificationDispatcher(channels={'sms': MySmsChannel()})
"""

import logging
from typing import Any, Iterable, Mapping

from django.db import transaction
from django.utils import timezone

from storekeeper.adapters.loader import get_channel
from storekeeper.conf import storekeeper_settings
from storekeeper.exceptions import StoreError
from storekeeper.models.enums import NotificationStatus, NotificationType, OrderStatus
from storekeeper.models.notification import Notification
from storekeeper.protocols.channel import Channel, DeliveryResult, OutboundMessage

logger = logging.getLogger('storekeeper')


class NotificationDispatcher:
    """Persists notifications and delivers them through a Channel per type."""

    def __init__(self, channels: Mapping[str, Channel] | None = None):
        self._channels = dict(channels or {})

    def channel_for(self, notification_type: str) -> Channel:
        return self._channels.get(notification_type) or get_channel(notification_type)

    def send(self, notification_type: str, recipient: str, message: str,
             subject: str | None = None, template_id: str | None = None,
             data: dict[str, Any] | None = None) -> Notification:
        """
        Send one notification.

        The record is created PENDING, then updated to SENT or FAILED.
        A delivery failure is recorded, not raised.

        Raises:
            StoreError('INVALID_ARGUMENT'): Unknown notification type
        """
        _validate_type(notification_type)
        notification = self._create(notification_type, recipient, message, subject, template_id, data)
        self._deliver(notification)
        return notification

    def send_bulk(self, notification_type: str, recipients: Iterable[str], message: str,
                  subject: str | None = None, template_id: str | None = None,
                  data: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        Send the same notification to many recipients in one batch.

        Recipients are processed in order; a failure for one is reported in
        its result entry and does not stop the others.
        """
        _validate_type(notification_type)
        results = []

        with transaction.atomic():
            for recipient in recipients:
                notification = self._create(notification_type, recipient, message, subject, template_id, data)
                result = self._deliver(notification)
                results.append({
                    'recipient': recipient,
                    'success': result.success,
                    'error': result.error,
                })

        sent = sum(1 for r in results if r['success'])
        logger.info(
            "notification.bulk",
            extra={
                "type": notification_type,
                "sent": sent,
                "failed": len(results) - sent,
            },
        )
        return {
            'success': True,
            'totalSent': sent,
            'totalFailed': len(results) - sent,
            'results': results,
        }

    def history(self, recipient: str | None = None, notification_type: str | None = None,
                limit: int | None = None) -> list[Notification]:
        """Most recent notifications first, optionally filtered."""
        qs = Notification.objects.all()
        if recipient:
            qs = qs.filter(recipient=recipient)
        if notification_type:
            qs = qs.filter(type=notification_type)
        return list(qs[:limit or storekeeper_settings.NOTIFICATION_HISTORY_LIMIT])

    # ══════════════════════════════════════════════════════════════
    # INTERNALS
    # ══════════════════════════════════════════════════════════════

    def _create(self, notification_type, recipient, message, subject, template_id, data) -> Notification:
        return Notification.objects.create(
            type=notification_type,
            recipient=recipient,
            subject=subject or '',
            message=message,
            template_id=template_id or '',
            data=data or {},
            status=NotificationStatus.PENDING,
        )

    def _deliver(self, notification: Notification) -> DeliveryResult:
        outbound = OutboundMessage(
            type=notification.type,
            recipient=notification.recipient,
            message=notification.message,
            subject=notification.subject,
            template_id=notification.template_id,
            data=notification.data,
        )
        try:
            result = self.channel_for(notification.type).send(outbound)
        except Exception as exc:
            logger.exception("notification.channel_error: %s to %s", notification.type, notification.recipient)
            result = DeliveryResult.failed(str(exc) or exc.__class__.__name__)

        if result.success:
            notification.status = NotificationStatus.SENT
            notification.sent_at = timezone.now()
            notification.error = ''
        else:
            notification.status = NotificationStatus.FAILED
            notification.error = result.error or 'Delivery failed'
        notification.save(update_fields=['status', 'sent_at', 'error'])

        logger.info(
            "notification.%s" % notification.status,
            extra={
                "notification_id": notification.pk,
                "type": notification.type,
                "recipient": notification.recipient,
                "error": notification.error,
            },
        )
        return result


def _validate_type(notification_type: str) -> None:
    if notification_type not in NotificationType.values:
        raise StoreError(
            'INVALID_ARGUMENT',
            f"Unknown notification type '{notification_type}'",
            type=notification_type,
        )


# ══════════════════════════════════════════════════════════════
# ORDER NOTIFICATIONS
# ══════════════════════════════════════════════════════════════

STATUS_MESSAGES = {
    OrderStatus.CONFIRMED: (
        'Order Confirmed - {number}',
        'Your order {number} has been confirmed and is being prepared for shipment.',
        'Order {number} confirmed! Preparing for shipment.',
    ),
    OrderStatus.SHIPPED: (
        'Order Shipped - {number}',
        'Great news! Your order {number} has been shipped and is on its way to you.',
        'Order {number} shipped! Track your package.',
    ),
    OrderStatus.DELIVERED: (
        'Order Delivered - {number}',
        'Your order {number} has been delivered successfully. We hope you love your purchase!',
        'Order {number} delivered! Thank you for shopping with us.',
    ),
    OrderStatus.CANCELLED: (
        'Order Cancelled - {number}',
        "Your order {number} has been cancelled. If you didn't request this cancellation, "
        "please contact support.",
        'Order {number} cancelled. Contact support if you need assistance.',
    ),
}


def send_order_confirmation(order, dispatcher: NotificationDispatcher | None = None) -> list[Notification]:
    """Email (and SMS when a phone is known) confirming a new order."""
    if not order.customer_email:
        logger.info("No customer email for order %s, skipping confirmation", order.pk)
        return []

    dispatcher = dispatcher or NotificationDispatcher()
    data = {'orderId': order.pk, 'orderNumber': order.order_number}
    sent = [dispatcher.send(
        NotificationType.EMAIL,
        order.customer_email,
        (
            f"Dear {order.customer_name or 'customer'},\n\n"
            f"Thank you for your order! Your order {order.order_number} has been confirmed.\n\n"
            f"Total amount: {order.total}\n"
            f"Items: {len(order.items or [])} item(s)\n\n"
            "We'll send you updates as your order progresses."
        ),
        subject=f"Order Confirmation - {order.order_number}",
        template_id='order_confirmation',
        data=data,
    )]
    if order.customer_phone:
        sent.append(dispatcher.send(
            NotificationType.SMS,
            order.customer_phone,
            f"Order {order.order_number} confirmed! Total: {order.total}.",
            data=data,
        ))
    return sent


def send_order_status_update(order, previous_status: str,
                             dispatcher: NotificationDispatcher | None = None) -> list[Notification]:
    """Email (and SMS) for status changes customers care about; others are ignored."""
    templates = STATUS_MESSAGES.get(order.status)
    if templates is None or previous_status == order.status:
        return []
    if not order.customer_email:
        logger.info("No customer email for order %s, skipping status update", order.pk)
        return []

    subject, email_body, sms_body = (t.format(number=order.order_number) for t in templates)
    dispatcher = dispatcher or NotificationDispatcher()
    data = {
        'orderId': order.pk,
        'orderNumber': order.order_number,
        'statusChange': {'from': previous_status, 'to': order.status},
    }
    sent = [dispatcher.send(
        NotificationType.EMAIL,
        order.customer_email,
        email_body,
        subject=subject,
        template_id='order_status_update',
        data=data,
    )]
    if order.customer_phone:
        sent.append(dispatcher.send(NotificationType.SMS, order.customer_phone, sms_body, data=data))
    return sent
