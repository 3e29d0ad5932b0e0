"""StoreAnalysis: derived per-store totals for one cart. Computed fresh, never persisted."""
from typing import List, Optional

from grocer.domain.Store import Store


class StoreAnalysis:
    def __init__(self, store: Store, total: float = 0.0, available_items: int = 0,
                 unavailable_items: Optional[List[str]] = None):
        self.store = store
        self.total = total
        self.available_items = available_items
        self.unavailable_items = unavailable_items[:] if unavailable_items else []

    @property
    def all_available(self) -> bool:
        return not self.unavailable_items

    def __str__(self) -> str:
        return (f"{self.store.name}: {self.total} "
                f"({self.available_items} available, {len(self.unavailable_items)} missing)")

    __repr__ = __str__

    def to_dict(self):
        return {
            "storeId": self.store.id,
            "name": self.store.name,
            "logo": self.store.logo,
            "color": self.store.color,
            "rating": self.store.rating,
            "deliveryFee": self.store.delivery_fee,
            "minOrder": self.store.min_order,
            "total": self.total,
            "availableItems": self.available_items,
            "unavailableItems": list(self.unavailable_items),
            "allAvailable": self.all_available,
        }
