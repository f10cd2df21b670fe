"""
Channel loader — resolves the configured Channel for a notification type.

Usage:
    from storekeeper.adapters import get_channel

    channel = get_channel("email")
    result = channel.send(OutboundMessage(type="email", recipient="a@b.c", message="hi"))

Settings:
    STOREKEEPER = {
        "NOTIFICATION_CHANNELS": {
            "sms": "storekeeper.adapters.sms.TwilioSmsChannel",
        },
    }

Unknown types or paths that fail to import raise ImproperlyConfigured.
"""

from __future__ import annotations

import logging
import threading

from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from storekeeper.conf import storekeeper_settings
from storekeeper.protocols.channel import Channel

logger = logging.getLogger(__name__)


# Cached channel instances, keyed by notification type
_lock = threading.Lock()
_channels: dict[str, Channel] = {}


def get_channel(notification_type: str) -> Channel:
    """
    Return the configured channel for a notification type.

    Raises:
        ImproperlyConfigured: If the type has no channel or the import fails
    """
    channel = _channels.get(notification_type)
    if channel is not None:
        return channel

    with _lock:
        if notification_type not in _channels:  # double-checked
            path = storekeeper_settings.NOTIFICATION_CHANNELS.get(notification_type)
            if not path:
                raise ImproperlyConfigured(
                    f"STOREKEEPER['NOTIFICATION_CHANNELS'] has no channel for '{notification_type}'"
                )
            try:
                _channels[notification_type] = import_string(path)()
                logger.debug("Loaded %s channel: %s", notification_type, path)
            except ImportError as e:
                raise ImproperlyConfigured(
                    f"Failed to import channel '{path}': {e}"
                ) from e

    return _channels[notification_type]


def reset_channels() -> None:
    """Reset the cached channels. Useful for testing."""
    with _lock:
        _channels.clear()
