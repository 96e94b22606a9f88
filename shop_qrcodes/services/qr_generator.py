"""QR Code generation utility."""
import asyncio
import base64
import io

import qrcode
from qrcode.image.pure import PyPNGImage

from shop_qrcodes.core.config import settings


def build_scan_url(qr_code_id: int, app_url: str) -> str:
    """Landing URL encoded into the image; the scan endpoint redirects from there."""
    return f"{app_url.rstrip('/')}/qrcodes/{qr_code_id}/scan"


def _make_qr(payload: str) -> qrcode.QRCode:
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=settings.QR_BOX_SIZE,
        border=settings.QR_BORDER,
    )
    qr.add_data(payload)
    qr.make(fit=True)
    return qr


def generate_qr_code_blob(payload: str) -> bytes:
    img = _make_qr(payload).make_image(image_factory=PyPNGImage)
    buffer = io.BytesIO()
    img.save(buffer)
    return buffer.getvalue()


def qr_data_url(payload: str) -> str:
    encoded = base64.b64encode(generate_qr_code_blob(payload)).decode("ascii")
    return f"data:image/png;base64,{encoded}"


async def render_code(qr_code_id: int, app_url: str) -> str:
    """Render the scan URL of a QR code as a PNG data URL.

    Nothing is cached, every call encodes again. Encoder errors propagate.
    """
    url = build_scan_url(qr_code_id, app_url)
    return await asyncio.to_thread(qr_data_url, url)


def generate_qr_code_file(qr_code_id: int, app_url: str, filepath: str) -> None:
    img = _make_qr(build_scan_url(qr_code_id, app_url)).make_image(image_factory=PyPNGImage)
    with open(filepath, "wb") as f:
        img.save(f)
