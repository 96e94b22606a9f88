"""Where a scanned QR code sends the customer."""
import re
from dataclasses import dataclass
from typing import Union

from shop_qrcodes.core.errors import InvalidVariantId
from shop_qrcodes.models.qr_code import Destination, QRCodeRecord

VARIANT_ID_PATTERN = re.compile(r"gid://shopify/ProductVariant/([0-9]+)")


@dataclass(frozen=True)
class ParsedVariant:
    numeric_id: str


@dataclass(frozen=True)
class ParseFailure:
    value: str


def parse_variant_id(value) -> Union[ParsedVariant, ParseFailure]:
    """Pull the numeric variant id out of a ``gid://shopify/ProductVariant/<n>`` gid."""
    match = VARIANT_ID_PATTERN.search(value or "")
    if match is None:
        return ParseFailure(value=value)
    return ParsedVariant(numeric_id=match.group(1))


def resolve_destination(record: QRCodeRecord) -> str:
    if record.destination == Destination.PRODUCT.value:
        return f"https://{record.shop}/products/{record.product_handle}"

    parsed = parse_variant_id(record.product_variant_id)
    if isinstance(parsed, ParseFailure):
        raise InvalidVariantId(parsed.value)
    return f"https://{record.shop}/cart/{parsed.numeric_id}:1"
