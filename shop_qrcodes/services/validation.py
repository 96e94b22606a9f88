from typing import Mapping, Optional

from shop_qrcodes.models.qr_code import Destination

DESTINATIONS = {d.value for d in Destination}


def field_value(data: Mapping, name: str, alias: Optional[str] = None):
    value = data.get(name)
    if not value and alias:
        value = data.get(alias)
    if isinstance(value, str):
        value = value.strip()
    return value


def validate_qr_code(data: Mapping) -> Optional[dict]:
    """Check the fields a QR code needs before it is created or updated.

    Every problem is reported at once, keyed by field name, so the form can
    show them next to the inputs. Returns None when the data is valid.
    """
    errors = {}

    if not field_value(data, "title"):
        errors["title"] = "Title is required"

    if not field_value(data, "product_id", "productId"):
        errors["product_id"] = "Product is required"

    destination = field_value(data, "destination")
    if not destination:
        errors["destination"] = "Destination is required"
    elif destination not in DESTINATIONS:
        errors["destination"] = "Destination must be product or cart"

    if errors:
        return errors
    return None
