import unittest
from grocer.utilities.validators import (
    CompareRequest, DealFilterInput, InvalidQueryParameter, validate_price_query
)
from pydantic import ValidationError

STORE_ID = "5b1f6a52-0c3e-4c1a-9a57-1d1b8e6f0a01"


class TestDealFilterInput(unittest.TestCase):

    def test_defaults_for_unusable_bodies(self):
        for body in (None, [], "text", {"category": "", "maxPrice": "abc"}, {"category": 5, "maxPrice": 0}):
            with self.subTest(body=body):
                filters = DealFilterInput.from_raw(body)
                self.assertEqual(filters.category, "all")
                self.assertIsNone(filters.max_price)

    def test_values_are_kept(self):
        filters = DealFilterInput.from_raw({"category": "Dairy", "maxPrice": "120"})
        self.assertEqual(filters.category, "Dairy")
        self.assertEqual(filters.max_price, 120.0)


class TestPriceQuery(unittest.TestCase):

    def test_accepts_valid_filters(self):
        validate_price_query("Dairy", STORE_ID, STORE_ID.upper())
        validate_price_query(None, None, None)

    def test_rejects_bad_filters(self):
        cases = {
            "category": ("x" * 101, None, None),
            "storeId": (None, "dmart", None),
            "productId": (None, None, "123"),
        }
        for name, args in cases.items():
            with self.subTest(name=name):
                with self.assertRaises(InvalidQueryParameter) as ctx:
                    validate_price_query(*args)
                self.assertEqual(str(ctx.exception), f"Invalid {name} parameter")


class TestCompareRequest(unittest.TestCase):

    def test_quantity_must_be_positive(self):
        with self.assertRaises(ValidationError):
            CompareRequest.model_validate({"items": [{"productId": "p1", "quantity": 0}]})
        req = CompareRequest.model_validate({"items": [{"productId": " p1 ", "quantity": 2}]})
        self.assertEqual(req.items[0].product_id, "p1")

    def test_quantity_has_no_upper_cap(self):
        req = CompareRequest.model_validate({"items": [{"productId": "p1", "quantity": 5000}]})
        self.assertEqual(req.items[0].quantity, 5000)


if __name__ == '__main__':
    unittest.main()
