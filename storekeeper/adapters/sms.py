"""
Twilio SMS Channel — delivers SMS through the Twilio REST API.

Requires the ``twilio`` extra: pip install django-storekeeper[twilio]

Settings:
    TWILIO_ACCOUNT_SID = "AC..."
    TWILIO_AUTH_TOKEN = "..."
    TWILIO_SMS_FROM = "+15005550006"
"""

from __future__ import annotations

import logging

from django.conf import settings

from storekeeper.protocols.channel import DeliveryResult, OutboundMessage

logger = logging.getLogger('storekeeper')


def _mask_phone(phone: str) -> str:
    if len(phone) <= 4:
        return "****"
    return f"{'*' * (len(phone) - 4)}{phone[-4:]}"


class TwilioSmsChannel:
    """Channel implementation backed by twilio.rest.Client."""

    def __init__(self, client=None):
        self._client = client

    def _credentials_configured(self) -> bool:
        return all(
            getattr(settings, name, None)
            for name in ("TWILIO_ACCOUNT_SID", "TWILIO_AUTH_TOKEN", "TWILIO_SMS_FROM")
        )

    def _get_client(self):
        if self._client is None:
            from twilio.rest import Client

            self._client = Client(settings.TWILIO_ACCOUNT_SID, settings.TWILIO_AUTH_TOKEN)
        return self._client

    def send(self, message: OutboundMessage) -> DeliveryResult:
        if self._client is None and not self._credentials_configured():
            return DeliveryResult.failed("Twilio credentials missing")

        try:
            sent = self._get_client().messages.create(
                from_=settings.TWILIO_SMS_FROM,
                to=message.recipient,
                body=message.message,
            )
        except Exception as exc:
            logger.warning("SMS delivery to %s failed: %s", _mask_phone(message.recipient), exc)
            return DeliveryResult.failed("SMS delivery failed")

        logger.info("SMS sent to %s: SID=%s", _mask_phone(message.recipient), sent.sid)
        return DeliveryResult.ok(provider_id=sent.sid)
