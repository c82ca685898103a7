"""FastAPI endpoints for the Marketplace domain."""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from marketplace.api.schemas import (
    AddToCartRequest,
    ApplyCouponRequest,
    CartIdResponse,
    CartItemIdResponse,
    CategoryIdResponse,
    CategoryResponse,
    CouponResponse,
    CouponValidityResponse,
    CreateCartRequest,
    CreateCategoryRequest,
    CreateCouponRequest,
    CreateProductRequest,
    ProductIdResponse,
    RegisterUserRequest,
    SetCategoryParentRequest,
    StatusResponse,
    UpdateCartQuantityRequest,
    UpdateCategoryRequest,
    UpdateCouponRequest,
    UpdateProductRequest,
    UserIdResponse,
)
from marketplace.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity
from marketplace.cart.management import AbandonCart, CreateCart
from marketplace.catalogue.categories import (
    CreateCategory,
    DeleteCategory,
    DetachCategory,
    SetCategoryParent,
    UpdateCategory,
    all_categories,
    category_names,
    get_category,
    root_categories,
    subcategories,
)
from marketplace.catalogue.products import CreateProduct, UpdateProductDetails
from marketplace.coupon.application import (
    ApplyCouponToProduct,
    RemoveCouponFromCartItem,
    RemoveCouponFromProduct,
)
from marketplace.coupon.management import CreateCoupon, DeleteCoupon, DeleteCouponByCode, UpdateCoupon
from marketplace.coupon.queries import get_coupon, get_coupon_by_code, is_coupon_valid, list_seller_coupons
from marketplace.identity.registration import RegisterUser

user_router = APIRouter(prefix="/users", tags=["users"])
product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])
cart_router = APIRouter(tags=["carts"])
coupon_router = APIRouter(tags=["coupons"])


def _coupon_response(snapshot) -> CouponResponse:
    return CouponResponse(**snapshot.to_dict())


def _category_response(category) -> CategoryResponse:
    return CategoryResponse(
        id=str(category.id),
        name=category.name,
        description=category.description,
        parent_category_id=str(category.parent_category_id) if category.parent_category_id else None,
        level=category.level,
        is_active=category.is_active,
    )


# --- User endpoints ---


@user_router.post("", status_code=201, response_model=UserIdResponse)
async def register_user(body: RegisterUserRequest) -> UserIdResponse:
    command = RegisterUser(
        username=body.username,
        email=body.email,
        first_name=body.first_name,
        last_name=body.last_name,
        role=body.role,
    )
    result = current_domain.process(command, asynchronous=False)
    return UserIdResponse(user_id=result)


# --- Product endpoints ---


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(body: CreateProductRequest) -> ProductIdResponse:
    command = CreateProduct(
        name=body.name,
        price=body.price,
        seller_id=body.seller_id,
        description=body.description,
        category_id=body.category_id,
        minimum_order_quantity=body.minimum_order_quantity,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.put("/{product_id}", response_model=StatusResponse)
async def update_product(product_id: str, body: UpdateProductRequest) -> StatusResponse:
    command = UpdateProductDetails(
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        minimum_order_quantity=body.minimum_order_quantity,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.delete("/{product_id}/coupon", response_model=StatusResponse)
async def remove_coupon_from_product(product_id: str) -> StatusResponse:
    current_domain.process(RemoveCouponFromProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


# --- Category endpoints ---


@category_router.post("", status_code=201, response_model=CategoryIdResponse)
async def create_category(body: CreateCategoryRequest) -> CategoryIdResponse:
    command = CreateCategory(
        name=body.name,
        description=body.description,
        parent_category_id=body.parent_category_id,
    )
    result = current_domain.process(command, asynchronous=False)
    return CategoryIdResponse(category_id=result)


@category_router.get("", response_model=list[CategoryResponse])
async def list_categories() -> list[CategoryResponse]:
    return [_category_response(category) for category in all_categories()]


@category_router.get("/roots", response_model=list[CategoryResponse])
async def list_root_categories() -> list[CategoryResponse]:
    return [_category_response(category) for category in root_categories()]


@category_router.get("/names", response_model=list[str])
async def list_category_names() -> list[str]:
    return category_names()


@category_router.get("/{category_id}/subcategories", response_model=list[CategoryResponse])
async def list_subcategories(category_id: str) -> list[CategoryResponse]:
    return [_category_response(category) for category in subcategories(category_id)]


@category_router.get("/{category_id}", response_model=CategoryResponse)
async def read_category(category_id: str) -> CategoryResponse:
    return _category_response(get_category(category_id))


@category_router.put("/{category_id}", response_model=StatusResponse)
async def update_category(category_id: str, body: UpdateCategoryRequest) -> StatusResponse:
    command = UpdateCategory(
        category_id=category_id,
        name=body.name,
        description=body.description,
        parent_category_id=body.parent_category_id,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@category_router.put("/{category_id}/parent", response_model=StatusResponse)
async def set_category_parent(category_id: str, body: SetCategoryParentRequest) -> StatusResponse:
    command = SetCategoryParent(category_id=category_id, parent_category_id=body.parent_category_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@category_router.delete("/{category_id}/parent", response_model=StatusResponse)
async def detach_category(category_id: str) -> StatusResponse:
    current_domain.process(DetachCategory(category_id=category_id), asynchronous=False)
    return StatusResponse()


@category_router.delete("/{category_id}", response_model=StatusResponse)
async def delete_category(category_id: str) -> StatusResponse:
    current_domain.process(DeleteCategory(category_id=category_id), asynchronous=False)
    return StatusResponse()


# --- Cart endpoints ---


@cart_router.post("/carts", status_code=201, response_model=CartIdResponse)
async def create_cart(body: CreateCartRequest) -> CartIdResponse:
    result = current_domain.process(CreateCart(buyer_id=body.buyer_id), asynchronous=False)
    return CartIdResponse(cart_id=result)


@cart_router.post("/carts/{cart_id}/items", status_code=201, response_model=CartItemIdResponse)
async def add_to_cart(cart_id: str, body: AddToCartRequest) -> CartItemIdResponse:
    command = AddToCart(cart_id=cart_id, product_id=body.product_id, quantity=body.quantity)
    result = current_domain.process(command, asynchronous=False)
    return CartItemIdResponse(item_id=result)


@cart_router.put("/carts/{cart_id}/items/{item_id}", response_model=StatusResponse)
async def update_cart_quantity(cart_id: str, item_id: str, body: UpdateCartQuantityRequest) -> StatusResponse:
    command = UpdateCartQuantity(cart_id=cart_id, item_id=item_id, new_quantity=body.new_quantity)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@cart_router.delete("/carts/{cart_id}/items/{item_id}", response_model=StatusResponse)
async def remove_from_cart(cart_id: str, item_id: str) -> StatusResponse:
    current_domain.process(RemoveFromCart(cart_id=cart_id, item_id=item_id), asynchronous=False)
    return StatusResponse()


@cart_router.put("/carts/{cart_id}/abandon", response_model=StatusResponse)
async def abandon_cart(cart_id: str) -> StatusResponse:
    current_domain.process(AbandonCart(cart_id=cart_id), asynchronous=False)
    return StatusResponse()


@cart_router.delete("/cart-items/{item_id}/coupon", response_model=StatusResponse)
async def remove_coupon_from_cart_item(item_id: str) -> StatusResponse:
    current_domain.process(RemoveCouponFromCartItem(cart_item_id=item_id), asynchronous=False)
    return StatusResponse()


# --- Coupon endpoints ---


@coupon_router.post("/coupons", status_code=201, response_model=CouponResponse)
async def create_coupon(body: CreateCouponRequest) -> CouponResponse:
    command = CreateCoupon(
        code=body.code,
        discount_percentage=body.discount_percentage,
        start_date=body.start_date.isoformat(),
        end_date=body.end_date.isoformat(),
        max_redemptions=body.max_redemptions,
        seller_id=body.seller_id,
    )
    snapshot = current_domain.process(command, asynchronous=False)
    return _coupon_response(snapshot)


@coupon_router.put("/coupons/{coupon_id}", response_model=CouponResponse)
async def update_coupon(coupon_id: str, body: UpdateCouponRequest) -> CouponResponse:
    command = UpdateCoupon(
        coupon_id=coupon_id,
        code=body.code,
        discount_percentage=body.discount_percentage,
        start_date=body.start_date.isoformat() if body.start_date else None,
        end_date=body.end_date.isoformat() if body.end_date else None,
        max_redemptions=body.max_redemptions,
    )
    snapshot = current_domain.process(command, asynchronous=False)
    return _coupon_response(snapshot)


@coupon_router.delete("/coupons/code/{code}", response_model=StatusResponse)
async def delete_coupon_by_code(code: str) -> StatusResponse:
    current_domain.process(DeleteCouponByCode(code=code), asynchronous=False)
    return StatusResponse()


@coupon_router.delete("/coupons/{coupon_id}", response_model=StatusResponse)
async def delete_coupon(coupon_id: str) -> StatusResponse:
    current_domain.process(DeleteCoupon(coupon_id=coupon_id), asynchronous=False)
    return StatusResponse()


@coupon_router.get("/coupons/code/{code}", response_model=CouponResponse)
async def read_coupon_by_code(code: str) -> CouponResponse:
    return _coupon_response(get_coupon_by_code(code))


@coupon_router.get("/coupons/{coupon_id}", response_model=CouponResponse)
async def read_coupon(coupon_id: str) -> CouponResponse:
    return _coupon_response(get_coupon(coupon_id))


@coupon_router.get("/coupons/{coupon_id}/validity", response_model=CouponValidityResponse)
async def check_coupon_validity(coupon_id: str, product_id: str) -> CouponValidityResponse:
    return CouponValidityResponse(
        coupon_id=coupon_id,
        product_id=product_id,
        valid=is_coupon_valid(coupon_id, product_id),
    )


@coupon_router.get("/sellers/{seller_id}/coupons", response_model=list[CouponResponse])
async def read_seller_coupons(seller_id: str) -> list[CouponResponse]:
    return [_coupon_response(snapshot) for snapshot in list_seller_coupons(seller_id)]


@coupon_router.post("/coupons/{coupon_id}/apply", response_model=CouponResponse)
async def apply_coupon(coupon_id: str, body: ApplyCouponRequest) -> CouponResponse:
    command = ApplyCouponToProduct(coupon_id=coupon_id, product_id=body.product_id, buyer_id=body.buyer_id)
    snapshot = current_domain.process(command, asynchronous=False)
    return _coupon_response(snapshot)
