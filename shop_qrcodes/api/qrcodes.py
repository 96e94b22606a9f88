from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, status
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel, ConfigDict, Field

from shop_qrcodes.core.context import ShopContext
from shop_qrcodes.core.errors import InvalidVariantId, ProductCatalogError, QRCodeNotFound
from shop_qrcodes.core.logger import logger
from shop_qrcodes.services.product_catalog import ShopifyAdminClient
from shop_qrcodes.services.qr_codes import QRCodeService

router = APIRouter(prefix="/qrcodes", tags=["qrcodes"])


class QRCodeForm(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = ""
    product_id: str = Field("", alias="productId")
    product_handle: str = Field("", alias="productHandle")
    product_variant_id: str = Field("", alias="productVariantId")
    destination: str = "product"


def get_service() -> QRCodeService:
    return QRCodeService()


def get_shop_context(
    x_shopify_shop_domain: Optional[str] = Header(None),
    x_shopify_access_token: Optional[str] = Header(None),
) -> ShopContext:
    """Build the tenant context from the headers of an authenticated admin request."""
    if not x_shopify_shop_domain or not x_shopify_access_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated"
        )
    catalog = ShopifyAdminClient(x_shopify_shop_domain, x_shopify_access_token)
    return ShopContext(shop=x_shopify_shop_domain, catalog=catalog)


def _upstream_error(exc: Exception) -> HTTPException:
    if isinstance(exc, InvalidVariantId):
        logger.error("Malformed QR code data: %s", exc)
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc)
        )
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=f"Product catalog unavailable: {exc}"
    )


@router.get("")
async def list_qr_codes(
    ctx: ShopContext = Depends(get_shop_context),
    service: QRCodeService = Depends(get_service),
):
    """List the shop's QR codes, newest first."""
    try:
        views = await service.list_for_tenant(ctx)
    except (InvalidVariantId, ProductCatalogError) as exc:
        raise _upstream_error(exc)
    return {"qrCodes": [view.to_dict() for view in views]}


@router.get("/{qr_code_id}")
async def get_qr_code(
    qr_code_id: int,
    ctx: ShopContext = Depends(get_shop_context),
    service: QRCodeService = Depends(get_service),
):
    try:
        view = await service.get_one(qr_code_id, ctx)
    except (InvalidVariantId, ProductCatalogError) as exc:
        raise _upstream_error(exc)
    if view is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="QR code not found")
    return view.to_dict()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_qr_code(
    form: QRCodeForm,
    ctx: ShopContext = Depends(get_shop_context),
    service: QRCodeService = Depends(get_service),
):
    fields = form.model_dump()
    errors = service.validate_and_stage(fields)
    if errors:
        return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"errors": errors})
    try:
        record = await service.create(fields, ctx)
    except ProductCatalogError as exc:
        raise _upstream_error(exc)
    return record.to_dict()


@router.put("/{qr_code_id}")
async def update_qr_code(
    qr_code_id: int,
    form: QRCodeForm,
    ctx: ShopContext = Depends(get_shop_context),
    service: QRCodeService = Depends(get_service),
):
    fields = form.model_dump()
    errors = service.validate_and_stage(fields)
    if errors:
        return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"errors": errors})
    try:
        record = await service.update(qr_code_id, fields, ctx)
    except ProductCatalogError as exc:
        raise _upstream_error(exc)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="QR code not found")
    return record.to_dict()


@router.delete("/{qr_code_id}")
async def delete_qr_code(
    qr_code_id: int,
    ctx: ShopContext = Depends(get_shop_context),
    service: QRCodeService = Depends(get_service),
):
    try:
        service.delete(qr_code_id, ctx)
    except QRCodeNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="QR code not found")
    return {"success": True, "message": f"QR code {qr_code_id} deleted"}


@router.get("/{qr_code_id}/scan")
async def scan_qr_code(qr_code_id: int, service: QRCodeService = Depends(get_service)):
    """Public landing URL encoded in every QR code image."""
    try:
        destination_url = service.record_scan(qr_code_id)
    except InvalidVariantId as exc:
        raise _upstream_error(exc)
    if destination_url is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="QR code not found")
    return RedirectResponse(url=destination_url, status_code=status.HTTP_302_FOUND)
