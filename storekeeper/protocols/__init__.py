"""
Storekeeper Protocols.

Defines interfaces for external system integration.
"""

from storekeeper.protocols.channel import (
    Channel,
    DeliveryResult,
    OutboundMessage,
)

__all__ = [
    "Channel",
    "DeliveryResult",
    "OutboundMessage",
]
