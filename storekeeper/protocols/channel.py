"""
Delivery Channel Protocol — interface for email/SMS/push providers.

Storekeeper defines this protocol; provider adapters implement it
(see storekeeper.adapters).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class OutboundMessage:
    """Message handed to a channel for delivery."""

    type: str  # "email", "sms", "push"
    recipient: str  # address, phone number or user id
    message: str
    subject: str = ""
    template_id: str = ""
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome of one delivery attempt."""

    success: bool
    error: str | None = None
    provider_id: str | None = None  # Provider message id, when one is returned

    @classmethod
    def ok(cls, provider_id: str | None = None) -> DeliveryResult:
        return cls(success=True, provider_id=provider_id)

    @classmethod
    def failed(cls, error: str) -> DeliveryResult:
        return cls(success=False, error=error)


@runtime_checkable
class Channel(Protocol):
    """
    Protocol for a delivery channel.

    Implementations should report provider failures through
    DeliveryResult.failed() rather than raising. The dispatcher still
    treats a raised exception as a failed delivery.
    """

    def send(self, message: OutboundMessage) -> DeliveryResult:
        """
        Deliver a message.

        Args:
            message: OutboundMessage to deliver

        Returns:
            DeliveryResult with success flag and error reason
        """
        ...
