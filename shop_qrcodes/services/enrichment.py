"""Join stored QR codes with live product data and a fresh scan image.

Reads fan out: for each QR code the image render and the product lookup are
started together, and for a list every QR code is enriched concurrently.
"""
import asyncio
from typing import Optional, Sequence

from shop_qrcodes.core.context import ShopContext
from shop_qrcodes.core.errors import InvalidVariantId
from shop_qrcodes.core.logger import logger
from shop_qrcodes.models.qr_code import EnrichedQRCodeView, QRCodeRecord
from shop_qrcodes.services.destination import resolve_destination


async def enrich_one(record: QRCodeRecord, ctx: ShopContext) -> EnrichedQRCodeView:
    destination_url = resolve_destination(record)

    image, product = await asyncio.gather(
        ctx.renderer(record.id, ctx.app_url),
        ctx.catalog.get_product(record.product_id),
    )

    # A product deleted upstream is normal, not an error.
    if product is None or not product.title:
        return EnrichedQRCodeView(
            record=record,
            destination_url=destination_url,
            image=image,
            product_deleted=True,
        )

    return EnrichedQRCodeView(
        record=record,
        destination_url=destination_url,
        image=image,
        product_deleted=False,
        product_title=product.title,
        product_image=product.image_url,
        product_alt=product.image_alt,
    )


async def _enrich_isolated(record: QRCodeRecord, ctx: ShopContext) -> EnrichedQRCodeView:
    try:
        return await enrich_one(record, ctx)
    except InvalidVariantId:
        raise
    except Exception as exc:
        logger.exception("Could not enrich QR code %s for %s", record.id, record.shop)
        return EnrichedQRCodeView(
            record=record,
            destination_url=resolve_destination(record),
            image=None,
            product_deleted=False,
            enrichment_error=str(exc) or exc.__class__.__name__,
        )


async def enrich_many(
    records: Sequence[QRCodeRecord],
    ctx: ShopContext,
    isolate_failures: Optional[bool] = None,
) -> list[EnrichedQRCodeView]:
    """Enrich every record concurrently, keeping the input order.

    With ``isolate_failures`` (the default comes from the shop context) a
    lookup or render failure only marks that record's view with
    ``enrichment_error``; without it the first failure fails the whole list.
    A malformed cart variant id always fails the list.
    """
    if not records:
        return []

    if isolate_failures is None:
        isolate_failures = ctx.isolate_failures
    enrich = _enrich_isolated if isolate_failures else enrich_one

    return list(await asyncio.gather(*(enrich(record, ctx) for record in records)))
