"""In-process event bus for cart and live price notifications.

Event names and payloads:
  cart.changed -> {"lines": tuple[CartLine, ...]}
  prices.refreshed -> {"snapshot": PriceSnapshot}
  prices.refresh_failed -> {"error": str, "stale_since": str | None}

Subscribers are callables taking (event_name, payload). Publishers that
accept an optional bus (Cart, LivePriceFeed, the helpers in event_helpers)
go through resolve_bus(), so None always means the global bus.
"""
from __future__ import annotations
from collections import defaultdict
from typing import Callable, Any, Dict, Iterable, List, Optional, Union
import logging

logger = logging.getLogger(__name__)

CART_CHANGED = "cart.changed"
PRICES_REFRESHED = "prices.refreshed"
PRICES_REFRESH_FAILED = "prices.refresh_failed"

KNOWN_EVENTS = frozenset({CART_CHANGED, PRICES_REFRESHED, PRICES_REFRESH_FAILED})

Subscriber = Callable[[str, Any], None]


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Subscriber]] = defaultdict(list)

	def subscribe(self, event_names: Union[str, Iterable[str]], callback: Subscriber) -> Callable[[], None]:
		"""Register callback for one or several events.

		Returns a function that removes every registration made by this call.
		"""
		names = (event_names,) if isinstance(event_names, str) else tuple(event_names)
		for name in names:
			if name not in KNOWN_EVENTS:
				logger.debug("Subscribing to unlisted event %s", name)
			if callback not in self._subscribers[name]:
				self._subscribers[name].append(callback)

		def cancel():
			for name in names:
				self.unsubscribe(name, callback)
		return cancel

	def unsubscribe(self, event_name: str, callback: Subscriber):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def subscriber_count(self, event_name: str) -> int:
		return len(self._subscribers.get(event_name, ()))

	def publish(self, event_name: str, payload: Any) -> int:
		"""Deliver to every subscriber; returns how many took it without raising."""
		delivered = 0
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception("Error delivering %s to %r", event_name, cb)
			else:
				delivered += 1
		return delivered


GLOBAL_EVENT_BUS = EventBus()


def resolve_bus(bus: Optional[EventBus] = None) -> EventBus:
	return GLOBAL_EVENT_BUS if bus is None else bus


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS', 'KNOWN_EVENTS', 'resolve_bus',
	'CART_CHANGED', 'PRICES_REFRESHED', 'PRICES_REFRESH_FAILED'
]
