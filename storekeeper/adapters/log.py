"""
Log Channel — adapter that only logs the message.

This adapter implements the Channel protocol without contacting any
provider. Every delivery succeeds.

Usage in settings.py:
    STOREKEEPER = {
        "NOTIFICATION_CHANNELS": {"push": "storekeeper.adapters.log.LogChannel"},
    }

WARNING: Nothing is actually delivered. Use for development, or for a
channel whose provider is not configured yet.
"""

from __future__ import annotations

import logging

from storekeeper.protocols.channel import DeliveryResult, OutboundMessage

logger = logging.getLogger('storekeeper')


class LogChannel:
    """No-provider channel: logs the outbound message and reports success."""

    def send(self, message: OutboundMessage) -> DeliveryResult:
        logger.info(
            "notification.logged",
            extra={
                "type": message.type,
                "recipient": message.recipient,
                "subject": message.subject,
                "template_id": message.template_id,
            },
        )
        return DeliveryResult.ok()
