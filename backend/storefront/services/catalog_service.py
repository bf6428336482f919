import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.config import settings
from storefront.models.product import Product
from storefront.repositories.product_repo import ProductRepository

logger = logging.getLogger(__name__)


class CatalogService:
    """
    Customer-facing product reads. Only active products are ever returned.

    Reads fail open: a database error is logged and turned into an empty
    result (or None for single lookups) so the storefront renders an empty
    shelf instead of an error page.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = ProductRepository(db)

    def list_products(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        sort: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Product]:
        try:
            return self.repo.list_active(
                search=search, category=category, sort=sort, limit=limit
            )
        except SQLAlchemyError:
            logger.exception(
                "Error fetching products (search=%r, category=%r, sort=%r)",
                search,
                category,
                sort,
            )
            self.db.rollback()
            return []

    def get_product(self, product_id: str) -> Optional[Product]:
        try:
            product = self.repo.get_active(product_id)
        except SQLAlchemyError:
            logger.exception("Error fetching product %s", product_id)
            self.db.rollback()
            return None
        if product is None:
            logger.warning("Product %s not found or inactive", product_id)
        return product

    def get_related_products(
        self, category: Optional[str], exclude_id: str, limit: Optional[int] = None
    ) -> List[Product]:
        """Active products sharing `category`, excluding `exclude_id` itself."""
        if not category:
            return []
        limit = limit or settings.RELATED_PRODUCTS_LIMIT
        try:
            return self.repo.list_related(category, exclude_id, limit)
        except SQLAlchemyError:
            logger.exception("Error fetching related products for %s", exclude_id)
            self.db.rollback()
            return []
