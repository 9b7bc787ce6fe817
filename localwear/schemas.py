# localwear/schemas.py
"""Request bodies and response projections.

JSON on the wire is camelCase; Python attributes stay snake_case.
"""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from .models import OrderStatus, Role


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# -------------------
# Requests
# -------------------
class GoogleLoginIn(ApiModel):
    id_token: str = Field(..., min_length=1)


class AdminLoginIn(ApiModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class OrderItemIn(ApiModel):
    product_id: int
    size: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0)


class OrderCreateIn(ApiModel):
    shipping_address: str = Field(..., min_length=1)
    items: List[OrderItemIn] = Field(..., min_length=1)


class OrderStatusIn(ApiModel):
    status: OrderStatus


class ProductCreateIn(ApiModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    category: str = Field(..., min_length=1)
    image_url: Optional[str] = None
    sizes: List[str] = Field(default_factory=list)
    quantity_in_stock: int = Field(..., ge=0)


class ProductUpdateIn(ApiModel):
    """Every field optional; unset or null means keep the stored value."""

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    category: Optional[str] = Field(None, min_length=1)
    image_url: Optional[str] = None
    sizes: Optional[List[str]] = None
    quantity_in_stock: Optional[int] = Field(None, ge=0)

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)


# -------------------
# Responses
# -------------------
class UserOut(ApiModel):
    id: int
    name: str
    email: str
    address: Optional[str] = None
    role: Role


class AuthOut(ApiModel):
    token: str
    user: UserOut


class ProductOut(ApiModel):
    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    category: str
    image_url: Optional[str] = None
    sizes: List[str] = Field(default_factory=list)
    quantity_in_stock: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class OrderItemOut(ApiModel):
    id: int
    product_id: Optional[int] = None
    product_name: str
    # null once the product has been deleted from the catalog
    product: Optional[ProductOut] = None
    size: str
    quantity: int
    price: Decimal


class OrderOut(ApiModel):
    id: int
    user: UserOut
    total_price: Decimal
    shipping_address: str
    status: OrderStatus
    items: List[OrderItemOut]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ImageUploadOut(ApiModel):
    image_url: str
