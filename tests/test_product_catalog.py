import json
import unittest

import httpx

from shop_qrcodes.core.errors import ProductCatalogError
from shop_qrcodes.services.product_catalog import (
    ProductSummary,
    ShopifyAdminClient,
    parse_product_summary,
)


def _client(handler) -> ShopifyAdminClient:
    return ShopifyAdminClient(
        "shop.example",
        "shpat_test",
        api_version="2025-07",
        transport=httpx.MockTransport(handler),
    )


class ParseProductSummaryTests(unittest.TestCase):
    def test_missing_product(self):
        self.assertIsNone(parse_product_summary(None))

    def test_product_without_media(self):
        summary = parse_product_summary({"title": "Hat", "media": {"nodes": []}})
        self.assertEqual(summary, ProductSummary(title="Hat"))

    def test_product_with_preview_image(self):
        summary = parse_product_summary(
            {
                "title": "Hat",
                "media": {"nodes": [{"preview": {"image": {"url": "https://cdn/hat.png", "altText": "A hat"}}}]},
            }
        )
        self.assertEqual(summary, ProductSummary(title="Hat", image_url="https://cdn/hat.png", image_alt="A hat"))

    def test_media_without_preview_image(self):
        summary = parse_product_summary({"title": "Hat", "media": {"nodes": [{"preview": None}]}})
        self.assertEqual(summary, ProductSummary(title="Hat"))


class ShopifyAdminClientTests(unittest.IsolatedAsyncioTestCase):
    async def test_get_product_posts_query_with_token(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["token"] = request.headers.get("X-Shopify-Access-Token")
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={
                    "data": {
                        "product": {
                            "title": "Hat",
                            "media": {"nodes": [{"preview": {"image": {"url": "u", "altText": "a"}}}]},
                        }
                    }
                },
            )

        product = await _client(handler).get_product("gid://shopify/Product/1")

        self.assertEqual(product, ProductSummary(title="Hat", image_url="u", image_alt="a"))
        self.assertEqual(seen["url"], "https://shop.example/admin/api/2025-07/graphql.json")
        self.assertEqual(seen["token"], "shpat_test")
        self.assertEqual(seen["body"]["variables"], {"id": "gid://shopify/Product/1"})
        self.assertIn("supplementQRCode", seen["body"]["query"])

    async def test_deleted_product_is_none(self):
        client = _client(lambda request: httpx.Response(200, json={"data": {"product": None}}))
        self.assertIsNone(await client.get_product("gid://shopify/Product/1"))

    async def test_get_product_handle(self):
        client = _client(lambda request: httpx.Response(200, json={"data": {"product": {"handle": "hat"}}}))
        self.assertEqual(await client.get_product_handle("gid://shopify/Product/1"), "hat")

    async def test_handle_of_deleted_product_is_none(self):
        client = _client(lambda request: httpx.Response(200, json={"data": {"product": None}}))
        self.assertIsNone(await client.get_product_handle("gid://shopify/Product/1"))

    async def test_http_error_raises_catalog_error(self):
        client = _client(lambda request: httpx.Response(503, text="unavailable"))
        with self.assertRaises(ProductCatalogError):
            await client.get_product("gid://shopify/Product/1")

    async def test_graphql_errors_raise_catalog_error(self):
        client = _client(lambda request: httpx.Response(200, json={"errors": [{"message": "Throttled"}]}))
        with self.assertRaises(ProductCatalogError):
            await client.get_product("gid://shopify/Product/1")

    async def test_transport_error_raises_catalog_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with self.assertRaises(ProductCatalogError):
            await _client(handler).get_product("gid://shopify/Product/1")


if __name__ == "__main__":
    unittest.main()
