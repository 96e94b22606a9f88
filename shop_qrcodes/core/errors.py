"""Domain errors shared by the services and the API layer."""


class InvalidVariantId(ValueError):
    """A cart QR code carries a variant id we cannot turn into a cart URL.

    This is corrupted or legacy data, not something the merchant can fix
    through the form, so it is never reported as a field error.
    """

    def __init__(self, value):
        self.value = value
        super().__init__(f"Unrecognized product variant ID: {value!r}")


class QRCodeNotFound(LookupError):
    def __init__(self, qr_code_id: int):
        self.qr_code_id = qr_code_id
        super().__init__(f"QR code {qr_code_id} not found")


class ProductCatalogError(RuntimeError):
    """The Admin GraphQL API could not be reached or rejected the query."""
