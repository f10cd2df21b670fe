"""
Email Channel — delivers through Django's configured email backend.

Settings:
    DEFAULT_FROM_EMAIL = "store@example.com"
    EMAIL_BACKEND = "django.core.mail.backends.smtp.EmailBackend"
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.core.mail import send_mail

from storekeeper.protocols.channel import DeliveryResult, OutboundMessage

logger = logging.getLogger('storekeeper')


class EmailChannel:
    """Channel implementation backed by django.core.mail.send_mail."""

    def __init__(self, from_email: str | None = None):
        self.from_email = from_email or getattr(settings, "DEFAULT_FROM_EMAIL", None)

    def send(self, message: OutboundMessage) -> DeliveryResult:
        try:
            sent = send_mail(
                subject=message.subject,
                message=message.message,
                from_email=self.from_email,
                recipient_list=[message.recipient],
                fail_silently=False,
            )
        except Exception as exc:
            logger.warning("Email delivery to %s failed: %s", message.recipient, exc)
            return DeliveryResult.failed("Email delivery failed")

        if not sent:
            return DeliveryResult.failed("Email delivery failed")
        return DeliveryResult.ok()
