from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.db import get_db
from storefront.services.category_service import CategoryService

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", summary="Categories with product counts, most populated first")
def list_categories(db: Session = Depends(get_db)):
    return {"categories": CategoryService(db).list_categories()}


@router.get("/names", summary="Distinct category names")
def list_category_names(db: Session = Depends(get_db)):
    return {"categories": CategoryService(db).list_distinct_categories()}
