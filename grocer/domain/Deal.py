"""Deal: a discounted, available quote ranked by how much it saves."""


class Deal:
    def __init__(self, product_name: str, original_price: float, deal_price: float,
                 savings: float, savings_percent: int, store: str, store_logo: str,
                 category: str, quality: str, product_id: str, store_id: str):
        self.product_name = product_name
        self.original_price = original_price
        self.deal_price = deal_price
        self.savings = savings
        self.savings_percent = savings_percent
        self.store = store
        self.store_logo = store_logo
        self.category = category
        self.quality = quality
        self.product_id = product_id
        self.store_id = store_id

    def __str__(self) -> str:
        return f"{self.product_name} @ {self.store}: {self.deal_price} (-{self.savings_percent}%, {self.quality})"

    __repr__ = __str__

    def to_dict(self):
        return {
            "productName": self.product_name,
            "originalPrice": self.original_price,
            "dealPrice": self.deal_price,
            "savings": self.savings,
            "savingsPercent": self.savings_percent,
            "store": self.store,
            "storeLogo": self.store_logo,
            "category": self.category,
            "quality": self.quality,
            "productId": self.product_id,
            "storeId": self.store_id,
        }
