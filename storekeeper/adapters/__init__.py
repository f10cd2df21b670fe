"""
Storekeeper Adapters.

Implementations of protocols for external systems.
"""

from storekeeper.adapters.loader import get_channel, reset_channels

__all__ = [
    "get_channel",
    "reset_channels",
]
