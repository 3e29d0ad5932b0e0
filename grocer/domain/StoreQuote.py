"""StoreQuote value object: one store's price and availability for one product."""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class StoreQuote:
    product_id: str
    store_id: str
    price: float
    base_price: float = 0.0
    discount_percent: float = 0.0
    available: bool = True
    stock_level: int = 0
    last_updated: Optional[str] = None

    @staticmethod
    def from_dict(data):
        '''Creates a quote from a store_prices row. Missing numbers default to 0.'''
        d = dict(data) if isinstance(data, dict) else {}
        price = float(d.get("current_price") or 0)
        return StoreQuote(
            product_id=str(d.get("product_id", "")),
            store_id=str(d.get("store_id", "")),
            price=price,
            base_price=float(d.get("base_price") or price),
            discount_percent=float(d.get("discount_percent") or 0),
            available=d.get("is_available") is not False,
            stock_level=int(d.get("stock_level") or 0),
            last_updated=d.get("last_updated"),
        )

    def to_dict(self):
        return {
            "product_id": self.product_id,
            "store_id": self.store_id,
            "current_price": self.price,
            "base_price": self.base_price,
            "discount_percent": self.discount_percent,
            "is_available": self.available,
            "stock_level": self.stock_level,
            "last_updated": self.last_updated,
        }
