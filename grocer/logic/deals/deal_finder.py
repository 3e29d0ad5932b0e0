"""Deal finder: rank discounted, available quotes by percentage saved."""
from __future__ import annotations
from typing import Dict, Iterable, List, Optional

from grocer.domain.Deal import Deal
from grocer.domain.Product import Product
from grocer.domain.Store import Store
from grocer.domain.StoreQuote import StoreQuote
from grocer.utilities.constants import (
    DEFAULT_STORE_LOGO, GOOD_DEAL_PERCENT, HOT_DEAL_PERCENT, MAX_DEALS
)
from grocer.utilities.money import round_half_up, round_to

__all__ = ["classify_deal", "find_deals"]


def classify_deal(savings_percent: int) -> str:
    if savings_percent >= HOT_DEAL_PERCENT:
        return "hot"
    if savings_percent >= GOOD_DEAL_PERCENT:
        return "good"
    return "normal"


def find_deals(products: Iterable[Product], quotes: Iterable[StoreQuote], stores: Iterable[Store],
               *, category: str = "all", max_price: Optional[float] = None,
               limit: int = MAX_DEALS) -> List[Deal]:
    """Return the best deals, highest savings percentage first.

    Only quotes with a positive discount that are marked available are
    considered. Quotes pointing at an unknown product or store are skipped.
    The category filter is a case-insensitive exact match ("all" disables
    it); max_price drops quotes priced above it.
    """
    product_index: Dict[str, Product] = {p.id: p for p in products}
    store_index: Dict[str, Store] = {s.id: s for s in stores}
    wanted = (category or "all").lower()

    deals: List[Deal] = []
    for quote in quotes:
        if quote.discount_percent <= 0 or not quote.available:
            continue
        product = product_index.get(quote.product_id)
        if product is None:
            continue
        if wanted != "all" and product.category.lower() != wanted:
            continue
        store = store_index.get(quote.store_id)
        if store is None:
            continue
        savings = quote.base_price - quote.price
        if savings <= 0:
            continue
        if max_price and quote.price > max_price:
            continue
        savings_percent = round_half_up(savings / quote.base_price * 100)
        deals.append(Deal(
            product_name=product.display_name,
            original_price=quote.base_price,
            deal_price=quote.price,
            savings=round_to(savings, 2),
            savings_percent=savings_percent,
            store=store.name,
            store_logo=store.logo or DEFAULT_STORE_LOGO,
            category=product.category,
            quality=classify_deal(savings_percent),
            product_id=product.id,
            store_id=store.id,
        ))

    deals.sort(key=lambda d: d.savings_percent, reverse=True)
    return deals[:limit]
