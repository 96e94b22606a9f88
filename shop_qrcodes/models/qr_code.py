from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import Table, MetaData, Column, Integer, String, DateTime
from sqlalchemy import func

# QR codes table, SQLAlchemy Core only (no ORM class)
metadata = MetaData()

qr_codes = Table(
    "qr_codes",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("shop", String(255), nullable=False, index=True),
    Column("title", String(255), nullable=False),
    Column("product_id", String(255), nullable=False),
    Column("product_handle", String(255), nullable=False, server_default=""),
    Column("product_variant_id", String(255), nullable=False, server_default=""),
    Column("destination", String(16), nullable=False),
    Column("scans", Integer, nullable=False, server_default="0"),
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
    # ids are never handed out twice, even after the newest row is deleted
    sqlite_autoincrement=True,
)


class Destination(str, Enum):
    PRODUCT = "product"
    CART = "cart"


@dataclass(frozen=True)
class QRCodeRecord:
    id: int
    shop: str
    title: str
    product_id: str
    product_handle: str
    product_variant_id: str
    destination: str
    created_at: Optional[datetime]
    scans: int = 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "shop": self.shop,
            "title": self.title,
            "productId": self.product_id,
            "productHandle": self.product_handle,
            "productVariantId": self.product_variant_id,
            "destination": self.destination,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "scans": self.scans,
        }

    @classmethod
    def from_row(cls, row) -> "QRCodeRecord":
        m = row._mapping
        return cls(
            id=m["id"],
            shop=m["shop"],
            title=m["title"],
            product_id=m["product_id"],
            product_handle=m["product_handle"] or "",
            product_variant_id=m["product_variant_id"] or "",
            destination=m["destination"],
            created_at=m["created_at"],
            scans=m["scans"] or 0,
        )


@dataclass(frozen=True)
class EnrichedQRCodeView:
    """A stored QR code joined with live product data and its rendered image.

    Built fresh for every read and never persisted.
    """

    record: QRCodeRecord
    destination_url: str
    image: Optional[str]
    product_deleted: bool
    product_title: Optional[str] = None
    product_image: Optional[str] = None
    product_alt: Optional[str] = None
    enrichment_error: Optional[str] = None

    @property
    def id(self) -> int:
        return self.record.id

    def to_dict(self) -> dict:
        data = self.record.to_dict()
        data.update({
            "productDeleted": self.product_deleted,
            "productTitle": self.product_title,
            "productImage": self.product_image,
            "productAlt": self.product_alt,
            "destinationUrl": self.destination_url,
            "image": self.image,
            "enrichmentError": self.enrichment_error,
        })
        return data


def create_tables(engine):
    """Create the qr_codes table in the target database."""
    metadata.create_all(engine)


__all__ = [
    "qr_codes",
    "metadata",
    "create_tables",
    "Destination",
    "QRCodeRecord",
    "EnrichedQRCodeView",
]
