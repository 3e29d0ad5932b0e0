"""Store domain entity: identity, display name and ordering metadata."""
from typing import Optional


class Store:
    def __init__(self, id: str = "", name: str = "", logo: Optional[str] = None,
                 color: Optional[str] = None, rating: float = 0.0,
                 delivery_fee: float = 0.0, min_order: float = 0.0):
        self.id = id
        self.name = name
        self.logo = logo
        self.color = color
        self.rating = rating
        self.delivery_fee = delivery_fee
        self.min_order = min_order

    def __str__(self) -> str:
        return f"{self.name} ({self.id}) - rating {self.rating}"

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        return isinstance(other, Store) and other.id == self.id

    def __hash__(self) -> int:
        return hash(self.id)

    @staticmethod
    def from_dict(data):
        '''Creates a Store from a stores row (snake_case) or a snapshot summary (camelCase).'''
        d = dict(data) if isinstance(data, dict) else {}
        return Store(
            id=str(d.get("id", "")),
            name=d.get("name", ""),
            logo=d.get("logo_url", d.get("logo")),
            color=d.get("color"),
            rating=float(d.get("rating") or 0),
            delivery_fee=float(d.get("delivery_fee", d.get("deliveryFee")) or 0),
            min_order=float(d.get("min_order", d.get("minOrder")) or 0),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "logo_url": self.logo,
            "color": self.color,
            "rating": self.rating,
            "delivery_fee": self.delivery_fee,
            "min_order": self.min_order,
        }
