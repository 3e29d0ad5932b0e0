"""Event helper utilities.

Helpers for publishing live price events, either on the global bus or on
a bus handed in by the caller (tests, isolated feeds).

Quick import:
    from grocer.events.event_helpers import (
        publish_prices_refreshed, publish_refresh_failed,
        PRICES_REFRESHED, PRICES_REFRESH_FAILED
    )
"""
from __future__ import annotations
from typing import Any, Optional
from .Event_Bus import (
    EventBus, PRICES_REFRESHED, PRICES_REFRESH_FAILED, resolve_bus
)

__all__ = [
    'publish_prices_refreshed', 'publish_refresh_failed',
    'PRICES_REFRESHED', 'PRICES_REFRESH_FAILED'
]


def publish_prices_refreshed(snapshot: Any, bus: Optional[EventBus] = None):
    """Publish a prices.refreshed event carrying the new snapshot."""
    return resolve_bus(bus).publish(PRICES_REFRESHED, {'snapshot': snapshot})


def publish_refresh_failed(error: Exception, stale_since: Optional[str] = None,
                           bus: Optional[EventBus] = None):
    """Publish a prices.refresh_failed event.

    Payload structure:
        {
          'error': <str>,
          'stale_since': <lastUpdated of the snapshot still in use, or None>
        }
    """
    return resolve_bus(bus).publish(PRICES_REFRESH_FAILED, {
        'error': str(error),
        'stale_since': stale_since
    })
