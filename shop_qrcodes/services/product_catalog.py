"""Admin GraphQL product lookups.

Only the two queries QR codes need: the title and preview image shown next
to a QR code, and the handle copied onto the record when it is saved.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import httpx

from shop_qrcodes.core.config import settings
from shop_qrcodes.core.errors import ProductCatalogError
from shop_qrcodes.core.logger import logger

SUPPLEMENT_QR_CODE_QUERY = """
  query supplementQRCode($id: ID!) {
    product(id: $id) {
      title
      media(first: 1) {
        nodes {
          preview {
            image {
              altText
              url
            }
          }
        }
      }
    }
  }
"""

GET_PRODUCT_HANDLE_QUERY = """
  query getProduct($id: ID!) {
    product(id: $id) {
      handle
    }
  }
"""


@dataclass(frozen=True)
class ProductSummary:
    title: Optional[str]
    image_url: Optional[str] = None
    image_alt: Optional[str] = None


class ProductLookup(Protocol):
    async def get_product(self, product_id: str) -> Optional[ProductSummary]:
        ...

    async def get_product_handle(self, product_id: str) -> Optional[str]:
        ...


def parse_product_summary(product: Optional[Dict[str, Any]]) -> Optional[ProductSummary]:
    if not product:
        return None
    image = None
    nodes = (product.get("media") or {}).get("nodes") or []
    if nodes:
        image = ((nodes[0] or {}).get("preview") or {}).get("image")
    image = image or {}
    return ProductSummary(
        title=product.get("title"),
        image_url=image.get("url"),
        image_alt=image.get("altText"),
    )


class ShopifyAdminClient:
    def __init__(
        self,
        shop: str,
        access_token: str,
        *,
        api_version: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.shop = shop
        self.access_token = access_token
        self.api_version = api_version or settings.SHOPIFY_API_VERSION
        self.timeout = timeout if timeout is not None else settings.CATALOG_TIMEOUT_SECONDS
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return f"https://{self.shop}/admin/api/{self.api_version}/graphql.json"

    async def graphql(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        headers = {
            "X-Shopify-Access-Token": self.access_token,
            "Content-Type": "application/json",
        }
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout, connect=5.0),
                transport=self._transport,
            ) as client:
                resp = await client.post(
                    self.endpoint,
                    json={"query": query, "variables": variables},
                    headers=headers,
                )
        except httpx.RequestError as exc:
            logger.error("Admin GraphQL request error for %s: %s", self.shop, exc)
            raise ProductCatalogError(f"Admin API request failed: {exc}") from exc

        if resp.status_code >= 400:
            logger.error(
                "Admin GraphQL HTTP %s for %s: %s",
                resp.status_code,
                self.shop,
                resp.text[:500],
            )
            raise ProductCatalogError(f"Admin API returned HTTP {resp.status_code}")

        try:
            payload = resp.json()
        except ValueError as exc:
            logger.error("Failed to parse Admin GraphQL response JSON: %s", exc)
            raise ProductCatalogError("Admin API returned invalid JSON") from exc

        if payload.get("errors"):
            logger.warning("Admin GraphQL errors for %s: %s", self.shop, payload["errors"])
            raise ProductCatalogError(f"Admin API query failed: {payload['errors']}")

        return payload.get("data") or {}

    async def get_product(self, product_id: str) -> Optional[ProductSummary]:
        data = await self.graphql(SUPPLEMENT_QR_CODE_QUERY, {"id": product_id})
        return parse_product_summary(data.get("product"))

    async def get_product_handle(self, product_id: str) -> Optional[str]:
        data = await self.graphql(GET_PRODUCT_HANDLE_QUERY, {"id": product_id})
        product = data.get("product") or {}
        return product.get("handle")
