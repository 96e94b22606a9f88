from typing import Mapping, Optional

from shop_qrcodes.core.context import ShopContext
from shop_qrcodes.core.logger import logger
from shop_qrcodes.models.qr_code import EnrichedQRCodeView, QRCodeRecord
from shop_qrcodes.services.destination import resolve_destination
from shop_qrcodes.services.enrichment import enrich_many, enrich_one
from shop_qrcodes.services.store import QRCodeStore
from shop_qrcodes.services.validation import field_value, validate_qr_code


class QRCodeService:
    """What the routes call: reads come back enriched, writes go through the store."""

    def __init__(self, store: Optional[QRCodeStore] = None):
        self.store = store or QRCodeStore()

    async def get_one(self, qr_code_id: int, ctx: ShopContext) -> Optional[EnrichedQRCodeView]:
        record = self.store.find_by_id(qr_code_id, shop=ctx.shop)
        if record is None:
            return None
        return await enrich_one(record, ctx)

    async def list_for_tenant(self, ctx: ShopContext) -> list[EnrichedQRCodeView]:
        records = self.store.list_by_shop(ctx.shop)
        return await enrich_many(records, ctx)

    def validate_and_stage(self, fields: Mapping) -> Optional[dict]:
        return validate_qr_code(fields)

    async def _staged_values(self, fields: Mapping, ctx: ShopContext) -> dict:
        product_id = field_value(fields, "product_id", "productId")
        handle = await ctx.catalog.get_product_handle(product_id)
        if handle is None:
            # Product gone from the catalog; keep whatever the picker sent.
            logger.warning("No handle found for product %s on %s", product_id, ctx.shop)
            handle = field_value(fields, "product_handle", "productHandle") or ""
        return {
            "title": field_value(fields, "title"),
            "product_id": product_id,
            "product_handle": handle,
            "product_variant_id": field_value(fields, "product_variant_id", "productVariantId") or "",
            "destination": field_value(fields, "destination"),
        }

    async def create(self, fields: Mapping, ctx: ShopContext) -> QRCodeRecord:
        values = await self._staged_values(fields, ctx)
        values["shop"] = ctx.shop
        return self.store.create(values)

    async def update(self, qr_code_id: int, fields: Mapping, ctx: ShopContext) -> Optional[QRCodeRecord]:
        if self.store.find_by_id(qr_code_id, shop=ctx.shop) is None:
            return None
        values = await self._staged_values(fields, ctx)
        return self.store.update(qr_code_id, values, shop=ctx.shop)

    def delete(self, qr_code_id: int, ctx: ShopContext) -> None:
        self.store.delete(qr_code_id, shop=ctx.shop)

    def record_scan(self, qr_code_id: int) -> Optional[str]:
        """Count a scan and return where to send the customer, or None if unknown."""
        record = self.store.increment_scans(qr_code_id)
        if record is None:
            return None
        return resolve_destination(record)
