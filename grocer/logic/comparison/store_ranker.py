"""Store comparison for a shopping cart.

Provides analyze_stores(cart_lines, stores), best_store(analyses),
mrp_total(cart_lines) and savings_vs_best(cart_lines, analyses).
"""
from typing import Iterable, List, Optional, Sequence

from grocer.domain.Cart import CartLine
from grocer.domain.Store import Store
from grocer.domain.StoreAnalysis import StoreAnalysis
from grocer.utilities.money import round_half_up


def _analyze(store: Store, cart_lines: Sequence[CartLine]) -> StoreAnalysis:
    analysis = StoreAnalysis(store)
    for line in cart_lines:
        quote = line.product.quote_for(store.id)
        if quote is not None and quote.available:
            analysis.total += quote.price * line.quantity
            analysis.available_items += 1
        else:
            analysis.unavailable_items.append(line.product.name)
    return analysis


def analyze_stores(cart_lines: Sequence[CartLine], stores: Iterable[Store]) -> List[StoreAnalysis]:
    """Rank stores for a cart.

    Args:
        cart_lines: Ordered cart lines; may be empty.
        stores: Candidate stores, in display order.

    Returns:
        One StoreAnalysis per store. Stores carrying every line come first,
        then cheaper totals; equal entries keep their input order. Empty
        when the cart or the store list is empty.
    """
    stores = list(stores)
    if not cart_lines or not stores:
        return []
    analyses = [_analyze(store, cart_lines) for store in stores]
    # sorted() is stable, so ties keep the input order
    return sorted(analyses, key=lambda a: (not a.all_available, a.total))


def best_store(analyses: Sequence[StoreAnalysis]) -> Optional[StoreAnalysis]:
    return analyses[0] if analyses else None


def mrp_total(cart_lines: Iterable[CartLine]) -> float:
    """Sum of each line's highest observed price times its quantity."""
    total = 0.0
    for line in cart_lines:
        price_range = line.product.price_range
        if price_range is not None:
            total += price_range[1] * line.quantity
    return total


def savings_vs_best(cart_lines: Sequence[CartLine], analyses: Sequence[StoreAnalysis]) -> int:
    """Savings shown next to the best store.

    Both sides are rounded to whole currency units first and then
    subtracted, so the figure can differ by one from rounding the difference.
    """
    best = best_store(analyses)
    if best is None:
        return 0
    return round_half_up(mrp_total(cart_lines)) - round_half_up(best.total)


__all__ = ['analyze_stores', 'best_store', 'mrp_total', 'savings_vs_best']
