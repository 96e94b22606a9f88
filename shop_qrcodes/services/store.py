from typing import Mapping, Optional

from sqlalchemy import delete, insert, select, update

from shop_qrcodes.core.database import SessionLocal
from shop_qrcodes.core.errors import QRCodeNotFound
from shop_qrcodes.core.logger import logger
from shop_qrcodes.models.qr_code import QRCodeRecord, qr_codes

# Columns a caller may write. id, created_at and scans belong to the store.
WRITABLE_COLUMNS = (
    "shop",
    "title",
    "product_id",
    "product_handle",
    "product_variant_id",
    "destination",
)


def _values(fields: Mapping, allowed=WRITABLE_COLUMNS) -> dict:
    return {k: fields[k] for k in allowed if k in fields and fields[k] is not None}


class QRCodeStore:
    """CRUD over the qr_codes table.

    Every method opens its own session and commits once, so each call is
    atomic on its own. Database errors roll back and propagate unchanged.
    """

    def __init__(self, session_factory=SessionLocal):
        self._session_factory = session_factory

    def _select_one(self, db, qr_code_id: int, shop: Optional[str] = None):
        stmt = select(qr_codes).where(qr_codes.c.id == qr_code_id)
        if shop is not None:
            stmt = stmt.where(qr_codes.c.shop == shop)
        row = db.execute(stmt).first()
        return QRCodeRecord.from_row(row) if row else None

    def find_by_id(self, qr_code_id: int, shop: Optional[str] = None) -> Optional[QRCodeRecord]:
        with self._session_factory() as db:
            return self._select_one(db, qr_code_id, shop)

    def list_by_shop(self, shop: str) -> list[QRCodeRecord]:
        with self._session_factory() as db:
            rows = db.execute(
                select(qr_codes)
                .where(qr_codes.c.shop == shop)
                .order_by(qr_codes.c.id.desc())
            ).all()
        return [QRCodeRecord.from_row(row) for row in rows]

    def create(self, fields: Mapping) -> QRCodeRecord:
        with self._session_factory() as db:
            try:
                result = db.execute(insert(qr_codes).values(**_values(fields)))
                qr_code_id = result.inserted_primary_key[0]
                db.commit()
            except Exception:
                db.rollback()
                raise
            record = self._select_one(db, qr_code_id)
        logger.info("Created QR code %s for %s", record.id, record.shop)
        return record

    def update(self, qr_code_id: int, fields: Mapping, shop: Optional[str] = None) -> Optional[QRCodeRecord]:
        # shop is the owner, never rewritten by an update
        values = _values(fields, allowed=WRITABLE_COLUMNS[1:])
        with self._session_factory() as db:
            if self._select_one(db, qr_code_id, shop) is None:
                return None
            try:
                if values:
                    db.execute(update(qr_codes).where(qr_codes.c.id == qr_code_id).values(**values))
                db.commit()
            except Exception:
                db.rollback()
                raise
            return self._select_one(db, qr_code_id)

    def delete(self, qr_code_id: int, shop: Optional[str] = None) -> None:
        stmt = delete(qr_codes).where(qr_codes.c.id == qr_code_id)
        if shop is not None:
            stmt = stmt.where(qr_codes.c.shop == shop)
        with self._session_factory() as db:
            try:
                result = db.execute(stmt)
                if result.rowcount == 0:
                    raise QRCodeNotFound(qr_code_id)
                db.commit()
            except Exception:
                db.rollback()
                raise
        logger.info("Deleted QR code %s", qr_code_id)

    def increment_scans(self, qr_code_id: int) -> Optional[QRCodeRecord]:
        with self._session_factory() as db:
            try:
                result = db.execute(
                    update(qr_codes)
                    .where(qr_codes.c.id == qr_code_id)
                    .values(scans=qr_codes.c.scans + 1)
                )
                if result.rowcount == 0:
                    db.rollback()
                    return None
                db.commit()
            except Exception:
                db.rollback()
                raise
            return self._select_one(db, qr_code_id)
