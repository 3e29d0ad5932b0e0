"""Catalog assembly: attach store_prices rows to their products."""
from collections import defaultdict
from typing import Any, Dict, Iterable, List

from grocer.domain.Product import Product
from grocer.domain.StoreQuote import StoreQuote


def assemble_products(product_rows: Iterable[Dict[str, Any]],
                      price_rows: Iterable[Dict[str, Any]]) -> List[Product]:
    """Build Product objects carrying their quotes, in product row order.

    Price rows for products not in product_rows are ignored.
    """
    quotes_by_product: Dict[str, List[StoreQuote]] = defaultdict(list)
    for row in price_rows:
        quote = StoreQuote.from_dict(row)
        quotes_by_product[quote.product_id].append(quote)
    products = []
    for row in product_rows:
        product = Product.from_dict(row)
        products.append(product.with_quotes(quotes_by_product.get(product.id, [])))
    return products


__all__ = ['assemble_products']
