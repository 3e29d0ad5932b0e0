import threading
import time

import httpx
import pytest

from grocer.events.Event_Bus import EventBus, PRICES_REFRESHED, PRICES_REFRESH_FAILED
from grocer.infra.Price_Feed import LIVE_PRICES_PATH, LivePriceFeed

STORE_ID = "5b1f6a52-0c3e-4c1a-9a57-1d1b8e6f0a01"


def _payload(price, last_updated):
    return {
        "products": [{
            "id": "p1", "name": "Milk", "category": "Dairy", "unit": "1 L",
            "storePrices": [{"storeId": STORE_ID, "price": price, "originalPrice": 68,
                             "discount": 5, "available": True}],
        }],
        "stores": [{"id": STORE_ID, "name": "D-Mart", "logo": "🏪", "rating": 4.3,
                    "deliveryFee": 0, "minOrder": 200}],
        "meta": {"totalProducts": 1, "totalStores": 1, "lastUpdated": last_updated},
    }


class FakeServer:
    """Serves queued responses and records the requests it saw."""

    def __init__(self):
        self.responses = []
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        return httpx.Response(status, json=body)


@pytest.fixture
def server():
    return FakeServer()


@pytest.fixture
def bus():
    bus = EventBus()
    bus.events = []
    bus.subscribe(PRICES_REFRESHED, lambda name, payload: bus.events.append((name, payload)))
    bus.subscribe(PRICES_REFRESH_FAILED, lambda name, payload: bus.events.append((name, payload)))
    return bus


def _feed(server, bus, **kwargs):
    client = httpx.Client(transport=httpx.MockTransport(server), base_url="http://grocer.test")
    return LivePriceFeed("http://grocer.test", "secret", client=client, bus=bus, **kwargs)


def test_refresh_installs_snapshot(server, bus):
    server.responses.append((200, _payload(64, "t1")))
    feed = _feed(server, bus, category="All", store_id=STORE_ID)
    assert feed.snapshot is None
    assert feed.refresh() is True

    snapshot = feed.snapshot
    assert snapshot.last_updated == "t1"
    assert snapshot.product("p1").best_quote.price == 64
    assert snapshot.stores[0].name == "D-Mart"
    assert bus.events == [(PRICES_REFRESHED, {"snapshot": snapshot})]

    request = server.requests[0]
    assert request.url.path == LIVE_PRICES_PATH
    assert request.headers["Authorization"] == "Bearer secret"
    assert dict(request.url.params) == {"storeId": STORE_ID}


def test_failed_refresh_keeps_previous_snapshot(server, bus):
    server.responses.extend([(200, _payload(64, "t1")), (500, {"error": "An error occurred"})])
    feed = _feed(server, bus)
    feed.refresh()
    first = feed.snapshot

    assert feed.refresh() is False
    assert feed.snapshot is first
    name, payload = bus.events[-1]
    assert name == PRICES_REFRESH_FAILED
    assert payload["stale_since"] == "t1"


@pytest.mark.parametrize("body", [
    {"products": [{"id": "p1", "storePrices": ["oops"]}], "stores": [], "meta": {}},
    {"products": [], "stores": [], "meta": "yesterday"},
    {"products": [{"id": "p1", "storePrices": [{"storeId": STORE_ID, "price": "free"}]}]},
    {"products": 5},
    ["not", "an", "object"],
])
def test_wrong_shape_is_a_failed_refresh(server, bus, body):
    server.responses.extend([(200, _payload(64, "t1")), (200, body)])
    feed = _feed(server, bus)
    feed.refresh()
    first = feed.snapshot

    assert feed.refresh() is False
    assert feed.snapshot is first
    name, payload = bus.events[-1]
    assert name == PRICES_REFRESH_FAILED
    assert payload["stale_since"] == "t1"


def test_polling_survives_malformed_response(server, bus):
    server.responses.extend([
        (200, {"products": [{"id": "p1", "storePrices": ["oops"]}]}),
        (200, _payload(60, "t2")),
    ])
    recovered = threading.Event()
    bus.subscribe(PRICES_REFRESHED, lambda name, payload: recovered.set())
    feed = _feed(server, bus, interval=0.01)
    feed.start()
    try:
        assert recovered.wait(timeout=5)
    finally:
        feed.stop(timeout=5)
    assert bus.events[0][0] == PRICES_REFRESH_FAILED
    assert feed.snapshot.last_updated == "t2"


def test_refresh_skipped_while_in_flight(server, bus):
    server.responses.append((200, _payload(64, "t1")))
    feed = _feed(server, bus)
    feed._inflight.acquire()
    try:
        assert feed.refresh() is False
    finally:
        feed._inflight.release()
    assert server.requests == []
    assert feed.snapshot is None


def test_background_polling_can_be_cancelled(server, bus):
    server.responses.extend([(200, _payload(64, "t1")), (200, _payload(60, "t2"))])
    second = threading.Event()
    bus.subscribe(PRICES_REFRESHED,
                  lambda name, payload: payload["snapshot"].last_updated == "t2" and second.set())
    feed = _feed(server, bus, interval=0.01)
    feed.start()
    try:
        assert second.wait(timeout=5)
    finally:
        feed.stop(timeout=5)
    assert feed._thread is None
    seen = len(server.requests)
    time.sleep(0.05)
    assert feed.snapshot.last_updated == "t2"
    assert len(server.requests) == seen
