import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.db import get_db
from storefront.schemas.product_schema import ProductOut
from storefront.security import require_admin
from storefront.services.admin_service import AdminProductService
from storefront.services.category_service import SUGGESTED_CATEGORIES
from storefront.services.errors import (
    CatalogStoreError,
    CatalogValidationError,
    ProductNotFound,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)]
)


def _to_dict(p):
    return ProductOut.model_validate(p).model_dump()


@router.get("/products", summary="List every product, including inactive ones")
def list_all_products(db: Session = Depends(get_db)):
    svc = AdminProductService(db)
    try:
        return {"products": [_to_dict(p) for p in svc.list_all_products()]}
    except CatalogStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception:
        logger.exception("Unexpected error listing products")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/products", summary="Create a product")
def create_product(payload: Any = Body(...), db: Session = Depends(get_db)):
    """
    payload: { "name": "Yoga Mat", "price": "39.99", "stock_quantity": "50",
               "description": ..., "image_url": ..., "category": ... }
    """
    svc = AdminProductService(db)
    try:
        product = svc.create_product(payload)
        return {"product": _to_dict(product)}
    except CatalogValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CatalogStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception:
        logger.exception("Unexpected error creating product")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.patch("/products/{product_id}", summary="Partially update a product")
def update_product(
    product_id: str, payload: Any = Body(...), db: Session = Depends(get_db)
):
    svc = AdminProductService(db)
    try:
        product = svc.update_product(product_id, payload)
        return {"product": _to_dict(product)}
    except CatalogValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ProductNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CatalogStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception:
        logger.exception("Unexpected error updating product %s", product_id)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete("/products/{product_id}", summary="Permanently delete a product")
def delete_product(product_id: str, db: Session = Depends(get_db)):
    svc = AdminProductService(db)
    try:
        svc.delete_product(product_id)
        return {"success": True}
    except CatalogStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception:
        logger.exception("Unexpected error deleting product %s", product_id)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/stats", summary="Dashboard figures")
def stats(db: Session = Depends(get_db)) -> Dict[str, int]:
    svc = AdminProductService(db)
    try:
        return {"total_products": svc.count_products()}
    except CatalogStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception:
        logger.exception("Unexpected error counting products")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/category-suggestions", summary="Categories offered by the product form")
def category_suggestions():
    return {"categories": SUGGESTED_CATEGORIES}
