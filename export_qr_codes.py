import argparse
import os

from shop_qrcodes.core.config import settings
from shop_qrcodes.services.qr_generator import generate_qr_code_file
from shop_qrcodes.services.store import QRCodeStore


def export_qr_codes(
    shop: str,
    output_folder: str = "qr_codes",
    app_url: str = None,
    store: QRCodeStore = None,
) -> list:
    """Write one PNG per QR code of a shop, for printing."""
    os.makedirs(output_folder, exist_ok=True)
    app_url = app_url or settings.SHOPIFY_APP_URL
    store = store or QRCodeStore()

    written = []
    for record in store.list_by_shop(shop):
        filename = f"{record.id}_{record.title.replace(' ', '_').replace('/', '_')}.png"
        filepath = os.path.join(output_folder, filename)
        generate_qr_code_file(record.id, app_url, filepath)
        written.append(filepath)
        print(f"✓ QR code {record.id} '{record.title}' → {filepath}")

    print(f"\n✓ Exported {len(written)} QR codes for {shop}")
    return written


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description="Export a shop's QR codes as PNG files")
    parser.add_argument("shop", help="shop domain, e.g. my-store.myshopify.com")
    parser.add_argument("--output", default="qr_codes")
    parser.add_argument("--app-url", default=None)
    args = parser.parse_args()

    export_qr_codes(args.shop, output_folder=args.output, app_url=args.app_url)
