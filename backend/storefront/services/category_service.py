import logging
import re
from collections import Counter
from typing import Dict, List
from urllib.parse import quote

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.repositories.product_repo import ProductRepository

logger = logging.getLogger(__name__)

GENERIC_DESCRIPTION = "Explore our amazing products in this category"
PLACEHOLDER_IMAGE = "https://via.placeholder.com/600x400?text="

# Browse-page copy for the categories offered in the admin form. Stored
# categories are free-form, so anything else falls back to the generic copy.
CATEGORY_DETAILS: Dict[str, Dict[str, str]] = {
    "Electronics": {
        "description": "Latest gadgets, computers, smartphones, and electronic accessories",
        "image_url": "https://images.unsplash.com/photo-1498049794561-7780e7231661?w=600&h=400&fit=crop&crop=center",
    },
    "Furniture": {
        "description": "Modern and comfortable furniture for your home and office",
        "image_url": "https://images.unsplash.com/photo-1586023492125-27b2c045efd7?w=600&h=400&fit=crop&crop=center",
    },
    "Clothing": {
        "description": "Trendy fashion and apparel for all styles and occasions",
        "image_url": "https://images.unsplash.com/photo-1441986300917-64674bd600d8?w=600&h=400&fit=crop&crop=center",
    },
    "Food & Beverage": {
        "description": "Premium food products, beverages, and gourmet items",
        "image_url": "https://images.unsplash.com/photo-1506976785307-8732e854ad03?w=600&h=400&fit=crop&crop=center",
    },
    "Books": {
        "description": "Wide selection of books across all genres and topics",
        "image_url": "https://images.unsplash.com/photo-1481627834876-b7833e8f5570?w=600&h=400&fit=crop&crop=center",
    },
    "Sports": {
        "description": "Sports equipment, fitness gear, and athletic accessories",
        "image_url": "https://images.unsplash.com/photo-1571019613914-85e0c1ee7e7e?w=600&h=400&fit=crop&crop=center",
    },
}
SUGGESTED_CATEGORIES = list(CATEGORY_DETAILS)


def category_slug(name: str) -> str:
    return re.sub(r"\s+", "-", name.lower())


class CategoryService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ProductRepository(db)

    def _active_categories(self) -> List[str]:
        try:
            return self.repo.list_active_categories()
        except SQLAlchemyError:
            logger.exception("Error fetching categories")
            self.db.rollback()
            return []

    def count_by_category(self) -> List[Dict]:
        """
        [{"category", "count"}] over active products with a category, most
        populated first; equal counts are ordered by name.
        """
        counts = Counter(c for c in self._active_categories() if c)
        ordered = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
        return [{"category": name, "count": n} for name, n in ordered]

    def list_categories(self) -> List[Dict]:
        categories = []
        for entry in self.count_by_category():
            details = CATEGORY_DETAILS.get(entry["category"])
            if details:
                description, image_url = details["description"], details["image_url"]
            else:
                description = GENERIC_DESCRIPTION
                image_url = PLACEHOLDER_IMAGE + quote(entry["category"], safe="")
            categories.append(
                {**entry, "description": description, "image_url": image_url}
            )
        return categories

    def list_distinct_categories(self) -> List[str]:
        return sorted({c for c in self._active_categories() if c})
