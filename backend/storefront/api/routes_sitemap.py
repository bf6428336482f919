from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from storefront.db import get_db
from storefront.services.sitemap_service import SitemapService

router = APIRouter(tags=["sitemap"])


@router.get("/sitemap.xml", summary="Sitemap of storefront pages")
def sitemap(db: Session = Depends(get_db)):
    xml = SitemapService(db).render_xml()
    return Response(content=xml, media_type="application/xml")
