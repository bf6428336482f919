from typing import Dict, List, Optional

from storefront.models.product import Product, utcnow
from sqlalchemy import func
from sqlalchemy.orm import Session

# sort key -> (column, descending)
SORT_COLUMNS = {
    "newest": (Product.created_at, True),
    "price-asc": (Product.price, False),
    "price-desc": (Product.price, True),
    "name-asc": (Product.name, False),
    "name-desc": (Product.name, True),
}
DEFAULT_SORT = "newest"
ALL_CATEGORIES = "all"


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def _active(self):
        return self.db.query(Product).filter(Product.is_active == True)

    def get(self, product_id: str) -> Optional[Product]:
        """Return a product by id regardless of its active flag (admin lookups)."""
        return self.db.query(Product).filter(Product.id == product_id).first()

    def get_active(self, product_id: str) -> Optional[Product]:
        return self._active().filter(Product.id == product_id).first()

    def list_active(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        sort: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Product]:
        query = self._active()
        if search:
            # literal substring, so % and _ in the search text match themselves
            query = query.filter(
                Product.name.icontains(search, autoescape=True)
                | Product.description.icontains(search, autoescape=True)
            )
        if category and category != ALL_CATEGORIES:
            query = query.filter(Product.category == category)

        column, descending = SORT_COLUMNS.get(sort or DEFAULT_SORT, SORT_COLUMNS[DEFAULT_SORT])
        query = query.order_by(column.desc() if descending else column.asc(), Product.id.asc())
        if limit:
            query = query.limit(limit)
        return query.all()

    def list_related(self, category: str, exclude_id: str, limit: int) -> List[Product]:
        return (
            self._active()
            .filter(Product.category == category, Product.id != exclude_id)
            .order_by(Product.id.asc())
            .limit(limit)
            .all()
        )

    def list_active_categories(self) -> List[str]:
        """One entry per active product that has a category; duplicates are kept for counting."""
        rows = (
            self.db.query(Product.category)
            .filter(Product.is_active == True, Product.category.isnot(None))
            .all()
        )
        return [r[0] for r in rows]

    def list_active_sitemap_rows(self):
        return (
            self._active()
            .with_entities(Product.id, Product.updated_at)
            .order_by(Product.id.asc())
            .all()
        )

    def list_all(self) -> List[Product]:
        return (
            self.db.query(Product)
            .order_by(Product.created_at.desc(), Product.id.asc())
            .all()
        )

    def count(self) -> int:
        return self.db.query(func.count(Product.id)).scalar() or 0

    def create(self, **fields) -> Product:
        p = Product(**fields)
        self.db.add(p)
        self.db.flush()
        return p

    def update(self, product: Product, changes: Dict) -> Product:
        for key, value in changes.items():
            setattr(product, key, value)
        # stamp explicitly; no UPDATE is emitted when the values are unchanged
        product.updated_at = utcnow()
        self.db.flush()
        return product

    def delete(self, product_id: str) -> int:
        return (
            self.db.query(Product)
            .filter(Product.id == product_id)
            .delete(synchronize_session=False)
        )
