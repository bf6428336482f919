import logging
from typing import Any, Dict, List

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.models.product import Product
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.product_schema import (
    NON_NULLABLE_FIELDS,
    UPDATABLE_FIELDS,
    ProductCreate,
    ProductUpdate,
)
from storefront.services.errors import (
    CatalogStoreError,
    CatalogValidationError,
    ProductNotFound,
)

logger = logging.getLogger(__name__)

REQUIRED_CREATE_FIELDS = ("name", "price", "stock_quantity")


def _validation_message(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ()))
        msg = err.get("msg", "invalid value").removeprefix("Value error, ")
        parts.append(f"{field}: {msg}" if field else msg)
    return "; ".join(parts)


class AdminProductService:
    """
    Inventory mutations for the admin panel.

    Unlike catalog reads these fail closed: database errors roll back the
    session, are logged with their traceback, and surface as
    CatalogStoreError carrying a generic message.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = ProductRepository(db)

    def _store_failure(self, message: str) -> CatalogStoreError:
        logger.exception(message)
        self.db.rollback()
        return CatalogStoreError(message)

    def list_all_products(self) -> List[Product]:
        try:
            return self.repo.list_all()
        except SQLAlchemyError as e:
            raise self._store_failure("Failed to fetch products") from e

    def count_products(self) -> int:
        try:
            return self.repo.count()
        except SQLAlchemyError as e:
            raise self._store_failure("Failed to count products") from e

    def create_product(self, payload: Dict[str, Any]) -> Product:
        if not isinstance(payload, dict):
            raise CatalogValidationError("Request body must be a JSON object")
        # falsy values count as missing: "", 0 and None are all rejected here
        if any(not payload.get(k) for k in REQUIRED_CREATE_FIELDS):
            raise CatalogValidationError("Name, price, and stock quantity are required")
        try:
            data = ProductCreate.model_validate(payload)
        except ValidationError as e:
            raise CatalogValidationError(_validation_message(e)) from e

        try:
            product = self.repo.create(
                name=data.name,
                description=data.description or None,
                price=data.price,
                image_url=data.image_url or None,
                category=data.category or None,
                stock_quantity=data.stock_quantity,
                is_active=True,
            )
            self.db.commit()
            self.db.refresh(product)
        except SQLAlchemyError as e:
            raise self._store_failure("Failed to add product") from e

        logger.info("Created product %s (%s)", product.id, product.name)
        return product

    def update_product(self, product_id: str, payload: Dict[str, Any]) -> Product:
        """
        Apply a partial update. Keys outside UPDATABLE_FIELDS are ignored; keys
        that are present are applied even when empty or null, except that
        non-nullable columns refuse null.
        """
        if not isinstance(payload, dict):
            raise CatalogValidationError("Request body must be a JSON object")
        changes = {k: payload[k] for k in UPDATABLE_FIELDS if k in payload}
        if not changes:
            raise CatalogValidationError("No valid fields provided for update")
        try:
            changes = ProductUpdate.model_validate(changes).model_dump(exclude_unset=True)
        except ValidationError as e:
            raise CatalogValidationError(_validation_message(e)) from e
        null_fields = [k for k in NON_NULLABLE_FIELDS if k in changes and changes[k] is None]
        if null_fields:
            raise CatalogValidationError(f"Fields cannot be null: {', '.join(null_fields)}")

        try:
            product = self.repo.get(product_id)
            if product is None:
                raise ProductNotFound(product_id)
            self.repo.update(product, changes)
            self.db.commit()
            self.db.refresh(product)
        except SQLAlchemyError as e:
            raise self._store_failure("Failed to update product") from e

        logger.info("Updated product %s fields=%s", product_id, sorted(changes))
        return product

    def delete_product(self, product_id: str) -> None:
        """Hard delete. Deleting an id that does not exist is not an error."""
        try:
            deleted = self.repo.delete(product_id)
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._store_failure("Failed to delete product") from e
        logger.info("Deleted product %s (rows=%d)", product_id, deleted)
