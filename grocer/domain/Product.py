"""Product domain entity: catalog data plus the per-store quotes received for it."""
from typing import Iterable, List, Optional, Tuple

from grocer.domain.StoreQuote import StoreQuote


class Product:
    def __init__(self, id: str = "", name: str = "", category: str = "", unit: str = "",
                 quotes: Optional[Iterable[StoreQuote]] = None, image: Optional[str] = None,
                 description: Optional[str] = None, is_active: bool = True):
        self.id = id
        self.name = name
        self.category = category
        self.unit = unit
        # Quotes are supplied from outside and never mutated here
        self.quotes: Tuple[StoreQuote, ...] = tuple(quotes) if quotes else ()
        self.image = image
        self.description = description
        self.is_active = is_active

    def __str__(self) -> str:
        return f"{self.name} ({self.unit}) - {self.category} - {len(self.quotes)} quotes"

    __repr__ = __str__

    @property
    def display_name(self) -> str:
        return f"{self.name} ({self.unit})"

    @property
    def price_range(self) -> Optional[Tuple[float, float]]:
        """(min, max) over every quote, available or not. None without quotes."""
        if not self.quotes:
            return None
        prices = [q.price for q in self.quotes]
        return min(prices), max(prices)

    @property
    def available_quotes(self) -> List[StoreQuote]:
        return [q for q in self.quotes if q.available]

    @property
    def best_quote(self) -> Optional[StoreQuote]:
        """Cheapest available quote; the first one wins a tie."""
        best = None
        for q in self.available_quotes:
            if best is None or q.price < best.price:
                best = q
        return best

    def quote_for(self, store_id: str) -> Optional[StoreQuote]:
        for q in self.quotes:
            if q.store_id == store_id:
                return q
        return None

    def with_quotes(self, quotes: Iterable[StoreQuote]) -> "Product":
        return Product(self.id, self.name, self.category, self.unit, quotes,
                       image=self.image, description=self.description, is_active=self.is_active)

    @staticmethod
    def from_dict(data):
        '''Creates a Product from a products row. Quotes are attached separately.'''
        d = dict(data) if isinstance(data, dict) else {}
        return Product(
            id=str(d.get("id", "")),
            name=d.get("name", ""),
            category=d.get("category", ""),
            unit=d.get("unit", ""),
            image=d.get("image_url"),
            description=d.get("description"),
            is_active=d.get("is_active", True) is not False,
        )

    @staticmethod
    def from_snapshot_dict(data):
        '''Creates a Product (with quotes) from one entry of a live price snapshot.'''
        d = dict(data) if isinstance(data, dict) else {}
        product_id = str(d.get("id", ""))
        quotes = []
        for sp in d.get("storePrices") or []:
            price = float(sp.get("price") or 0)
            quotes.append(StoreQuote(
                product_id=product_id,
                store_id=str(sp.get("storeId", "")),
                price=price,
                base_price=float(sp.get("originalPrice") or price),
                discount_percent=float(sp.get("discount") or 0),
                available=sp.get("available") is not False,
                stock_level=int(sp.get("stockLevel") or 0),
                last_updated=sp.get("lastUpdated"),
            ))
        return Product(
            id=product_id,
            name=d.get("name", ""),
            category=d.get("category", ""),
            unit=d.get("unit", ""),
            quotes=quotes,
            image=d.get("image"),
            description=d.get("description"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "unit": self.unit,
            "image_url": self.image,
            "description": self.description,
            "is_active": self.is_active,
        }
