"""Live price feed: polls the live price endpoint and keeps the latest snapshot.

Design:
  * A background thread refreshes right away and then every `interval`
    seconds until stop() is called. stop() wakes the thread immediately.
  * At most one request is in flight. A refresh() issued while another is
    running returns False without touching the network.
  * Each successful fetch builds a new immutable PriceSnapshot and swaps it
    in under a lock, so readers see either the old or the new snapshot,
    never a mix. A failed fetch keeps the previous snapshot.
"""
from __future__ import annotations
import logging
from threading import Event, Lock, Thread
from typing import Any, Dict, Optional, Tuple

import httpx

from grocer.domain.Product import Product
from grocer.domain.Store import Store
from grocer.events.Event_Bus import EventBus
from grocer.events.event_helpers import publish_prices_refreshed, publish_refresh_failed
from grocer.utilities.config import PRICE_REFRESH_INTERVAL

logger = logging.getLogger(__name__)

LIVE_PRICES_PATH = "/api/live-prices"


class PriceSnapshot:
    """One complete live price response, parsed into domain objects."""

    __slots__ = ("products", "stores", "last_updated")

    def __init__(self, products: Tuple[Product, ...], stores: Tuple[Store, ...], last_updated: Optional[str]):
        self.products = products
        self.stores = stores
        self.last_updated = last_updated

    @staticmethod
    def from_payload(payload: Dict[str, Any]) -> "PriceSnapshot":
        """Parse a decoded response body. Any shape problem surfaces as ValueError."""
        if not isinstance(payload, dict):
            raise ValueError("Live price payload must be a JSON object")
        try:
            meta = payload.get("meta") or {}
            return PriceSnapshot(
                products=tuple(Product.from_snapshot_dict(p) for p in payload.get("products") or []),
                stores=tuple(Store.from_dict(s) for s in payload.get("stores") or []),
                last_updated=meta.get("lastUpdated"),
            )
        except (TypeError, AttributeError) as e:
            raise ValueError(f"Malformed live price payload: {e}") from e

    def product(self, product_id: str) -> Optional[Product]:
        for p in self.products:
            if p.id == product_id:
                return p
        return None

    def __repr__(self) -> str:
        return f"PriceSnapshot({len(self.products)} products, {len(self.stores)} stores @ {self.last_updated})"


class LivePriceFeed:
    def __init__(self, base_url: str, token: str, *, interval: float = PRICE_REFRESH_INTERVAL,
                 category: Optional[str] = None, store_id: Optional[str] = None,
                 product_id: Optional[str] = None, client: Optional[httpx.Client] = None,
                 bus: Optional[EventBus] = None):
        self.interval = interval
        self.params: Dict[str, str] = {}
        if category and category != "All":
            self.params["category"] = category
        if store_id:
            self.params["storeId"] = store_id
        if product_id:
            self.params["productId"] = product_id
        self._client = client or httpx.Client(base_url=base_url, timeout=10.0)
        self._owns_client = client is None
        self._headers = {"Authorization": f"Bearer {token}"}
        self._bus = bus
        self._snapshot: Optional[PriceSnapshot] = None
        self._snapshot_lock = Lock()
        self._inflight = Lock()
        self._stop = Event()
        self._thread: Optional[Thread] = None

    @property
    def snapshot(self) -> Optional[PriceSnapshot]:
        with self._snapshot_lock:
            return self._snapshot

    def _fetch(self) -> PriceSnapshot:
        response = self._client.get(LIVE_PRICES_PATH, params=self.params, headers=self._headers)
        response.raise_for_status()
        return PriceSnapshot.from_payload(response.json())

    def refresh(self) -> bool:
        """Fetch once. Returns True when a new snapshot was installed."""
        if not self._inflight.acquire(blocking=False):
            logger.debug("Live price refresh already in flight; skipping")
            return False
        try:
            try:
                snapshot = self._fetch()
            except (httpx.HTTPError, ValueError) as e:
                current = self.snapshot
                logger.warning("Live price refresh failed: %s", e)
                publish_refresh_failed(e, current.last_updated if current else None, bus=self._bus)
                return False
            with self._snapshot_lock:
                self._snapshot = snapshot
            logger.info("Live prices refreshed: %r", snapshot)
            publish_prices_refreshed(snapshot, bus=self._bus)
            return True
        finally:
            self._inflight.release()

    def _run(self):
        self.refresh()
        while not self._stop.wait(self.interval):
            self.refresh()

    def start(self):
        """Idempotent start of the polling thread."""
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = Thread(target=self._run, name="live-price-feed", daemon=True)
        self._thread.start()

    def stop(self, timeout: Optional[float] = None):
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def close(self):
        self.stop()
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "LivePriceFeed":
        self.start()
        return self

    def __exit__(self, *exc):
        self.close()


__all__ = ['LivePriceFeed', 'PriceSnapshot', 'LIVE_PRICES_PATH']
