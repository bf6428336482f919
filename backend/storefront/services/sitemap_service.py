import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional
from xml.etree import ElementTree

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.config import settings
from storefront.repositories.product_repo import ProductRepository
from storefront.services.category_service import CategoryService, category_slug

logger = logging.getLogger(__name__)

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

# path, change frequency, priority
STATIC_PAGES = [
    ("", "daily", 1.0),
    ("/products", "daily", 0.9),
    ("/categories", "weekly", 0.8),
    ("/about", "monthly", 0.7),
]


class SitemapService:
    def __init__(self, db: Session, base_url: Optional[str] = None):
        self.db = db
        self.base_url = (base_url or settings.SITE_URL).rstrip("/")
        self.repo = ProductRepository(db)

    def build_entries(self) -> List[Dict]:
        now = datetime.now(timezone.utc)
        entries = [
            {
                "url": f"{self.base_url}{path}",
                "last_modified": now,
                "change_frequency": freq,
                "priority": priority,
            }
            for path, freq, priority in STATIC_PAGES
        ]

        try:
            rows = self.repo.list_active_sitemap_rows()
        except SQLAlchemyError:
            logger.exception("Error fetching products for sitemap")
            self.db.rollback()
            rows = []
        for product_id, updated_at in rows:
            # SQLite hands back naive datetimes; stored values are UTC
            if updated_at is not None and updated_at.tzinfo is None:
                updated_at = updated_at.replace(tzinfo=timezone.utc)
            entries.append(
                {
                    "url": f"{self.base_url}/products/{product_id}",
                    "last_modified": updated_at or now,
                    "change_frequency": "weekly",
                    "priority": 0.8,
                }
            )

        for name in CategoryService(self.db).list_distinct_categories():
            entries.append(
                {
                    "url": f"{self.base_url}/categories/{category_slug(name)}",
                    "last_modified": now,
                    "change_frequency": "weekly",
                    "priority": 0.7,
                }
            )
        return entries

    def render_xml(self, entries: Optional[List[Dict]] = None) -> str:
        urlset = ElementTree.Element("urlset", xmlns=SITEMAP_NS)
        for entry in entries if entries is not None else self.build_entries():
            url = ElementTree.SubElement(urlset, "url")
            ElementTree.SubElement(url, "loc").text = entry["url"]
            ElementTree.SubElement(url, "lastmod").text = entry["last_modified"].isoformat()
            ElementTree.SubElement(url, "changefreq").text = entry["change_frequency"]
            ElementTree.SubElement(url, "priority").text = f"{entry['priority']:.1f}"
        return '<?xml version="1.0" encoding="UTF-8"?>\n' + ElementTree.tostring(
            urlset, encoding="unicode"
        )
