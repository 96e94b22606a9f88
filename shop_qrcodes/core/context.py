from dataclasses import dataclass, field
from typing import Awaitable, Callable

from shop_qrcodes.core.config import settings
from shop_qrcodes.services.product_catalog import ProductLookup
from shop_qrcodes.services.qr_generator import render_code


Renderer = Callable[[int, str], Awaitable[str]]


@dataclass
class ShopContext:
    """Everything a request needs to know about the calling shop.

    Built once per request and passed explicitly into every service call,
    so nothing in the services reads tenant or app configuration from
    globals.
    """

    shop: str
    catalog: ProductLookup
    app_url: str = field(default_factory=lambda: settings.SHOPIFY_APP_URL)
    renderer: Renderer = render_code
    isolate_failures: bool = field(default_factory=lambda: settings.ENRICHMENT_ISOLATE_FAILURES)
