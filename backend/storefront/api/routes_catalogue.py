from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Optional
from sqlalchemy.orm import Session
from storefront.db import get_db
from storefront.schemas.product_schema import ProductOut
from storefront.services.catalog_service import CatalogService

router = APIRouter(tags=["catalogue"])


def _to_dict(p):
    return ProductOut.model_validate(p).model_dump()


@router.get("", summary="List products")
def list_products(
    search: Optional[str] = Query(None, description="search term (name or description)"),
    category: Optional[str] = Query(None, description="exact category, or 'all'"),
    sort: Optional[str] = Query(
        None, description="newest | price-asc | price-desc | name-asc | name-desc"
    ),
    limit: Optional[int] = Query(None, ge=1, le=200),
    db: Session = Depends(get_db),
):
    svc = CatalogService(db)
    items = svc.list_products(search=search, category=category, sort=sort, limit=limit)
    return {"products": [_to_dict(p) for p in items]}


@router.get("/{product_id}", summary="Get product by id")
def get_product(product_id: str, db: Session = Depends(get_db)):
    svc = CatalogService(db)
    p = svc.get_product(product_id)
    if not p:
        raise HTTPException(status_code=404, detail="Product not found")
    return _to_dict(p)


@router.get("/{product_id}/related", summary="Products in the same category")
def related_products(
    product_id: str,
    limit: Optional[int] = Query(None, ge=1, le=50),
    db: Session = Depends(get_db),
):
    svc = CatalogService(db)
    p = svc.get_product(product_id)
    if not p:
        raise HTTPException(status_code=404, detail="Product not found")
    items = svc.get_related_products(p.category, p.id, limit=limit)
    return {"products": [_to_dict(r) for r in items]}
