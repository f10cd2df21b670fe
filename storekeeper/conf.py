"""
Storekeeper configuration.

Usage in settings.py:
    STOREKEEPER = {
        "DEFAULT_LOW_STOCK_THRESHOLD": 10,
        "NOTIFICATION_CHANNELS": {
            "email": "storekeeper.adapters.email.EmailChannel",
            "sms": "storekeeper.adapters.sms.TwilioSmsChannel",
            "push": "storekeeper.adapters.log.LogChannel",
        },
        "NOTIFICATION_HISTORY_LIMIT": 50,
        "ORDER_NOTIFICATIONS": True,
    }
"""

from dataclasses import dataclass, field
from typing import Any

from django.conf import settings


def _default_channels() -> dict[str, str]:
    return {
        "email": "storekeeper.adapters.email.EmailChannel",
        "sms": "storekeeper.adapters.log.LogChannel",
        "push": "storekeeper.adapters.log.LogChannel",
    }


@dataclass
class StorekeeperSettings:
    """Storekeeper configuration settings."""

    # Threshold used by the inventory report when a product has no alert row
    DEFAULT_LOW_STOCK_THRESHOLD: int = 10

    # Notification type -> dotted path of a Channel implementation
    NOTIFICATION_CHANNELS: dict[str, str] = field(default_factory=_default_channels)

    # Max rows returned by notification history
    NOTIFICATION_HISTORY_LIMIT: int = 50

    # Send confirmation/status emails and SMS on order events
    ORDER_NOTIFICATIONS: bool = True


def get_storekeeper_settings() -> StorekeeperSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "STOREKEEPER", {})
    loaded = StorekeeperSettings(**{
        k: v for k, v in user_settings.items()
        if k in StorekeeperSettings.__dataclass_fields__
    })
    # Partial channel maps only override the types they name
    if "NOTIFICATION_CHANNELS" in user_settings:
        loaded.NOTIFICATION_CHANNELS = {
            **_default_channels(),
            **user_settings["NOTIFICATION_CHANNELS"],
        }
    return loaded


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_storekeeper_settings(), name)


storekeeper_settings = _LazySettings()
