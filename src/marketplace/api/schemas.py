"""Pydantic request/response schemas for the Marketplace API."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

# --- Identity Request Schemas ---


class RegisterUserRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "username": "jane.doe",
                    "email": "jane@example.com",
                    "first_name": "Jane",
                    "last_name": "Doe",
                    "role": "Buyer",
                }
            ]
        }
    }

    username: str = Field(..., max_length=50)
    email: str = Field(..., max_length=254)
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    role: str


# --- Catalogue Request Schemas ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Ceramic Mug",
                    "price": 12.50,
                    "seller_id": "seller-042",
                    "description": "Hand-glazed stoneware mug, 350ml.",
                    "minimum_order_quantity": 1,
                }
            ]
        }
    }

    name: str = Field(..., max_length=255)
    price: float = Field(..., gt=0)
    seller_id: str
    description: str | None = None
    category_id: str | None = None
    minimum_order_quantity: int | None = Field(None, ge=1)


class UpdateProductRequest(BaseModel):
    name: str | None = Field(None, max_length=255)
    description: str | None = None
    price: float | None = Field(None, gt=0)
    minimum_order_quantity: int | None = Field(None, ge=1)


class CreateCategoryRequest(BaseModel):
    model_config = {
        "json_schema_extra": {"examples": [{"name": "Kitchen", "description": "Cookware and tableware"}]}
    }

    name: str = Field(..., max_length=100)
    description: str | None = None
    parent_category_id: str | None = None


class UpdateCategoryRequest(BaseModel):
    name: str | None = Field(None, max_length=100)
    description: str | None = None
    parent_category_id: str | None = None


class SetCategoryParentRequest(BaseModel):
    parent_category_id: str


# --- Cart Request Schemas ---


class CreateCartRequest(BaseModel):
    buyer_id: str


class AddToCartRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"product_id": "prod-001", "quantity": 2}]}}

    product_id: str
    quantity: int = Field(1, ge=1)


class UpdateCartQuantityRequest(BaseModel):
    new_quantity: int = Field(..., ge=1)


# --- Coupon Request Schemas ---


class CreateCouponRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "code": "SPRING10",
                    "discount_percentage": 10.0,
                    "start_date": "2026-03-01",
                    "end_date": "2026-05-31",
                    "max_redemptions": 100,
                    "seller_id": "seller-042",
                }
            ]
        }
    }

    code: str = Field(..., max_length=50)
    discount_percentage: float = Field(..., ge=0, le=100)
    start_date: date
    end_date: date
    max_redemptions: int | None = Field(None, ge=1)
    seller_id: str


class UpdateCouponRequest(BaseModel):
    code: str | None = Field(None, max_length=50)
    discount_percentage: float | None = Field(None, ge=0, le=100)
    start_date: date | None = None
    end_date: date | None = None
    max_redemptions: int | None = Field(None, ge=1)


class ApplyCouponRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"product_id": "prod-001", "buyer_id": "buyer-007"}]}}

    product_id: str
    buyer_id: str


# --- Response Schemas ---


class UserIdResponse(BaseModel):
    user_id: str


class ProductIdResponse(BaseModel):
    product_id: str


class CategoryIdResponse(BaseModel):
    category_id: str


class CategoryResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    parent_category_id: str | None = None
    level: int
    is_active: bool


class CartIdResponse(BaseModel):
    cart_id: str


class CartItemIdResponse(BaseModel):
    item_id: str


class CouponResponse(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": "d4e5f6a7-b8c9-0123-def0-234567890123",
                    "code": "SPRING10",
                    "discount_percentage": 10.0,
                    "start_date": "2026-03-01",
                    "end_date": "2026-05-31",
                    "max_redemptions": 100,
                    "redeem_count": 3,
                    "seller_id": "seller-042",
                }
            ]
        }
    }

    id: str
    code: str
    discount_percentage: float
    start_date: date
    end_date: date
    max_redemptions: int | None = None
    redeem_count: int
    seller_id: str


class CouponValidityResponse(BaseModel):
    coupon_id: str
    product_id: str
    valid: bool


class StatusResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "ok"}]}}

    status: str = "ok"
