class CatalogError(Exception):
    pass


class CatalogValidationError(CatalogError):
    """Raised when an admin payload is missing required fields or carries bad values."""
    pass


class ProductNotFound(CatalogError):
    def __init__(self, product_id: str):
        super().__init__("Product not found")
        self.product_id = product_id


class CatalogStoreError(CatalogError):
    """Raised when a mutation fails in the database. The message is safe to show to clients."""
    pass
