"""API tests for the public product catalog."""

import unittest

from app.core.cache import PRODUCTS_TAG
from tests.support import ApiTestCase


class TestProductsApi(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.ids = [self.create_product(f"Phone {i}", price=10 + i) for i in range(4)]

    def test_list_is_public_and_paginated_by_three(self) -> None:
        response = self.client.get("/api/products")
        self.assertEqual(response.status_code, 200)
        self.assertEqual([p["id"] for p in response.json()], self.ids[:3])

        page2 = self.client.get("/api/products?page=2").json()
        self.assertEqual([p["id"] for p in page2], self.ids[3:])

    def test_page_past_the_end_is_empty(self) -> None:
        self.assertEqual(self.client.get("/api/products?page=5&limit=3").json(), [])

    def test_detail_has_links_and_fields(self) -> None:
        response = self.client.get(f"/api/products/{self.ids[0]}")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["name"], "Phone 0")
        self.assertEqual(body["price"], 10.0)
        self.assertIsNone(body["description"])
        self.assertEqual(body["_links"], {"detail": {"href": f"/api/products/{self.ids[0]}"}})

    def test_unknown_product_returns_404_envelope(self) -> None:
        response = self.client.get("/api/products/9999")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"code": 404, "message": "Resource not found."})

    def test_list_served_from_cache_until_tag_invalidated(self) -> None:
        first = self.client.get("/api/products?limit=10").json()
        self.assertEqual(len(first), 4)

        self.create_product("Phone new")
        cached = self.client.get("/api/products?limit=10").json()
        self.assertEqual(len(cached), 4)

        self.cache.invalidate_tags([PRODUCTS_TAG])
        fresh = self.client.get("/api/products?limit=10").json()
        self.assertEqual(len(fresh), 5)

    def test_limit_above_maximum_rejected(self) -> None:
        response = self.client.get("/api/products?limit=1000")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()[0]["code"], "VALIDATION_ERROR")


if __name__ == "__main__":
    unittest.main()
