"""Live price snapshot builder.

Shapes products, stores and their price rows into the payload served to
the storefront: { products: [...], stores: [...], meta: {...} }.
"""
from __future__ import annotations
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from grocer.domain.Product import Product
from grocer.domain.Store import Store
from grocer.domain.StoreQuote import StoreQuote
from grocer.utilities.money import round_to

__all__ = ["build_price_snapshot", "product_entry", "store_summary", "utc_now_iso"]


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')


def _store_price(quote: StoreQuote, store: Store, now: str) -> Dict[str, Any]:
    return {
        'storeId': store.id,
        'storeName': store.name,
        'storeColor': store.color,
        'storeLogo': store.logo,
        'price': quote.price,
        'originalPrice': quote.base_price,
        'discount': quote.discount_percent,
        'available': quote.available,
        'stockLevel': quote.stock_level,
        'deliveryFee': store.delivery_fee,
        'minOrder': store.min_order,
        'rating': store.rating,
        'lastUpdated': quote.last_updated or now,
    }


def product_entry(product: Product, stores: Sequence[Store], now: str) -> Dict[str, Any]:
    """One product with its store prices, listed in store order."""
    store_prices = []
    for store in stores:
        quote = product.quote_for(store.id)
        if quote is not None:
            store_prices.append(_store_price(quote, store, now))

    available = [sp for sp in store_prices if sp['available']]
    best: Optional[Dict[str, Any]] = None
    for sp in available:
        if best is None or sp['price'] < best['price']:
            best = sp
    prices = [sp['price'] for sp in store_prices]

    return {
        'id': product.id,
        'name': product.name,
        'category': product.category,
        'unit': product.unit,
        'image': product.image,
        'description': product.description,
        'storePrices': store_prices,
        'bestPrice': best['price'] if best else None,
        'bestStore': best['storeName'] if best else None,
        'bestStoreId': best['storeId'] if best else None,
        'availableStores': len(available),
        'totalStores': len(store_prices),
        'priceRange': {'min': min(prices), 'max': max(prices)} if prices else None,
        'lastUpdated': now,
    }


def store_summary(store: Store, quotes: Sequence[StoreQuote], now: str) -> Dict[str, Any]:
    """Per-store availability counts and average advertised discount."""
    own = [q for q in quotes if q.store_id == store.id]
    total = len(own)
    avg_discount = sum(q.discount_percent for q in own) / total if total else 0
    return {
        'id': store.id,
        'name': store.name,
        'logo': store.logo,
        'color': store.color,
        'rating': store.rating,
        'deliveryFee': store.delivery_fee,
        'minOrder': store.min_order,
        'availableProducts': sum(1 for q in own if q.available),
        'totalProducts': total,
        'avgDiscount': round_to(avg_discount, 1),
        'lastUpdated': now,
    }


def build_price_snapshot(products: Sequence[Product], stores: Sequence[Store],
                         quotes: Sequence[StoreQuote], now: Optional[str] = None) -> Dict[str, Any]:
    """Assemble the full snapshot payload.

    Args:
        products: Products with their quotes attached.
        stores: Stores in display order (highest rated first).
        quotes: Every price row in scope, used for the store summaries.
        now: ISO timestamp stamped on the snapshot; defaults to the current UTC time.
    """
    now = now or utc_now_iso()
    product_entries: List[Dict[str, Any]] = [product_entry(p, stores, now) for p in products]
    summaries = [store_summary(s, quotes, now) for s in stores]
    return {
        'products': product_entries,
        'stores': summaries,
        'meta': {
            'totalProducts': len(product_entries),
            'totalStores': len(stores),
            'lastUpdated': now,
        },
    }
