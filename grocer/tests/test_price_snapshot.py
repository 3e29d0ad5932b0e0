import unittest
from grocer.domain.Store import Store
from grocer.domain.StoreQuote import StoreQuote
from grocer.logic.pricing.catalog import assemble_products
from grocer.logic.pricing.snapshot import build_price_snapshot

NOW = "2026-10-19T08:00:00Z"


class TestPriceSnapshot(unittest.TestCase):

    def setUp(self):
        self.stores = [
            Store("s2", "High", logo="🛒", color="bg-blue-500", rating=4.6, delivery_fee=25, min_order=150),
            Store("s1", "Low", rating=3.9),
            Store("s3", "Mid", rating=4.2),
        ]
        self.price_rows = [
            {"product_id": "p1", "store_id": "s1", "base_price": 68, "current_price": 64, "discount_percent": 6, "is_available": True},
            {"product_id": "p1", "store_id": "s2", "base_price": 68, "current_price": 62, "discount_percent": 8.8, "is_available": False,
             "last_updated": "2026-10-18T06:00:00Z"},
            {"product_id": "p1", "store_id": "s3", "base_price": 68, "current_price": 66, "discount_percent": 2.9, "is_available": True},
            {"product_id": "ghost", "store_id": "s1", "base_price": 10, "current_price": 9, "discount_percent": 10, "is_available": True},
        ]
        product_rows = [
            {"id": "p1", "name": "Milk", "category": "Dairy", "unit": "1 L", "image_url": "🥛"},
            {"id": "p2", "name": "Tea", "category": "Beverages", "unit": "100 bags"},
        ]
        self.products = assemble_products(product_rows, self.price_rows)
        self.quotes = [StoreQuote.from_dict(r) for r in self.price_rows]
        self.snapshot = build_price_snapshot(self.products, self.stores, self.quotes, now=NOW)

    def test_meta(self):
        self.assertEqual(self.snapshot["meta"], {"totalProducts": 2, "totalStores": 3, "lastUpdated": NOW})

    def test_quotes_for_unknown_products_ignored(self):
        self.assertEqual([p.id for p in self.products], ["p1", "p2"])
        self.assertEqual(len(self.products[0].quotes), 3)

    def test_product_entry(self):
        milk = self.snapshot["products"][0]
        self.assertEqual([sp["storeId"] for sp in milk["storePrices"]], ["s2", "s1", "s3"])
        self.assertEqual(milk["bestPrice"], 64)
        self.assertEqual(milk["bestStore"], "Low")
        self.assertEqual(milk["bestStoreId"], "s1")
        self.assertEqual(milk["availableStores"], 2)
        self.assertEqual(milk["totalStores"], 3)
        self.assertEqual(milk["priceRange"], {"min": 62, "max": 66})
        self.assertEqual(milk["image"], "🥛")
        high = milk["storePrices"][0]
        self.assertEqual(high["deliveryFee"], 25)
        self.assertEqual(high["lastUpdated"], "2026-10-18T06:00:00Z")
        self.assertEqual(milk["storePrices"][1]["lastUpdated"], NOW)

    def test_product_without_quotes(self):
        tea = self.snapshot["products"][1]
        self.assertEqual(tea["storePrices"], [])
        self.assertIsNone(tea["bestPrice"])
        self.assertIsNone(tea["priceRange"])
        self.assertEqual(tea["availableStores"], 0)

    def test_store_summaries(self):
        summaries = {s["id"]: s for s in self.snapshot["stores"]}
        low = summaries["s1"]
        self.assertEqual(low["totalProducts"], 2)
        self.assertEqual(low["availableProducts"], 2)
        self.assertEqual(low["avgDiscount"], 8.0)  # includes the orphan row: (6 + 10) / 2
        high = summaries["s2"]
        self.assertEqual((high["availableProducts"], high["totalProducts"]), (0, 1))
        self.assertEqual(high["avgDiscount"], 8.8)

    def test_store_without_prices(self):
        empty = build_price_snapshot([], self.stores, [], now=NOW)
        self.assertTrue(all(s["avgDiscount"] == 0 for s in empty["stores"]))
        self.assertEqual(empty["meta"]["totalProducts"], 0)


if __name__ == '__main__':
    unittest.main()
