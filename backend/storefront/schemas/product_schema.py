# backend/storefront/schemas/product_schema.py
import math
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

# columns an admin is allowed to write through an update
UPDATABLE_FIELDS = (
    "name",
    "description",
    "price",
    "image_url",
    "category",
    "stock_quantity",
    "is_active",
)
NON_NULLABLE_FIELDS = ("name", "price", "stock_quantity", "is_active")
# upper bound of a 32-bit INTEGER column
MAX_STOCK_QUANTITY = 2**31 - 1


class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    description: Optional[str] = None
    price: float
    image_url: Optional[str] = None
    category: Optional[str] = None
    stock_quantity: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


class _NumericFields(BaseModel):
    """Shared coercion for price and stock_quantity coming from free-text form input."""

    model_config = ConfigDict(extra="ignore")

    @field_validator("price", mode="before", check_fields=False)
    @classmethod
    def _coerce_price(cls, v):
        if v is None:
            return v
        if isinstance(v, bool):
            raise ValueError("price must be a number")
        try:
            value = float(str(v).strip()) if isinstance(v, str) else float(v)
        except (TypeError, ValueError):
            raise ValueError("price must be a number")
        if not math.isfinite(value):
            raise ValueError("price must be a finite number")
        if value < 0:
            raise ValueError("price must not be negative")
        return value

    @field_validator("stock_quantity", mode="before", check_fields=False)
    @classmethod
    def _coerce_stock(cls, v):
        if v is None:
            return v
        if isinstance(v, bool):
            raise ValueError("stock_quantity must be an integer")
        if isinstance(v, float):
            if not v.is_integer():
                raise ValueError("stock_quantity must be an integer")
            v = int(v)
        try:
            value = int(str(v).strip()) if isinstance(v, str) else int(v)
        except (TypeError, ValueError):
            raise ValueError("stock_quantity must be an integer")
        if value < 0:
            raise ValueError("stock_quantity must not be negative")
        if value > MAX_STOCK_QUANTITY:
            raise ValueError("stock_quantity is too large")
        return value


class ProductCreate(_NumericFields):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    image_url: Optional[str] = None
    category: Optional[str] = None
    stock_quantity: Optional[int] = None


class ProductUpdate(_NumericFields):
    """All fields optional; `model_dump(exclude_unset=True)` gives the keys actually sent."""

    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    image_url: Optional[str] = None
    category: Optional[str] = None
    stock_quantity: Optional[int] = None
    is_active: Optional[bool] = None
