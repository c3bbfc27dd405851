from typing import Optional

from fastapi import APIRouter, Depends, Query

from marketplace.auth.dependencies import get_current_user, get_optional_user
from marketplace.deps import get_product_service
from marketplace.errors import ApiError, not_found
from marketplace.models.common import Created, Ok
from marketplace.models.product import (
    Condition,
    ProductInput,
    ProductList,
    ProductOut,
    ProductPage,
    ProductUpdate,
    Visibility,
)
from marketplace.services.products import ProductService
from marketplace.utils.pagination import MAX_PAGE, clamp_page

DEFAULT_PAGE_SIZE = 12
MAX_PAGE_SIZE = 50

router = APIRouter(prefix="/products", tags=["Products"])
me_router = APIRouter(prefix="/me", tags=["Products"])


@router.post("", status_code=201, response_model=Created)
def create_product(
    data: ProductInput,
    user: str = Depends(get_current_user),
    products: ProductService = Depends(get_product_service),
):
    product = products.create(data, user)
    return Created(id=product.id)


@router.get("", response_model=ProductPage)
def list_products(
    q: Optional[str] = None,
    category: Optional[str] = None,
    condition: Optional[Condition] = None,
    min_price: Optional[float] = Query(None, alias="minPrice"),
    max_price: Optional[float] = Query(None, alias="maxPrice"),
    visibility: Optional[Visibility] = None,
    owner_id: Optional[str] = Query(None, alias="ownerId"),
    page: int = Query(1, le=MAX_PAGE),
    page_size: int = Query(DEFAULT_PAGE_SIZE, alias="pageSize"),
    user: Optional[str] = Depends(get_optional_user),
    products: ProductService = Depends(get_product_service),
):
    owner = None
    if owner_id == "me":
        if user is None:
            raise ApiError(401, "Missing Bearer token")
        owner = user
    elif owner_id:
        raise ApiError(400, "Validation failed", details="ownerId only accepts 'me'")

    page, page_size = clamp_page(page, page_size, MAX_PAGE_SIZE)
    items, total = products.search(
        page,
        page_size,
        owner_id=owner,
        q=q,
        category=category,
        condition=condition,
        min_price=min_price,
        max_price=max_price,
        visibility=visibility,
    )
    return ProductPage(
        items=[ProductOut.model_validate(p) for p in items],
        page=page,
        page_size=page_size,
        total=total,
    )


@me_router.get("/products", response_model=ProductList)
def get_my_products(
    user: str = Depends(get_current_user),
    products: ProductService = Depends(get_product_service),
):
    return ProductList(items=[ProductOut.model_validate(p) for p in products.owned_by(user)])


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: str, products: ProductService = Depends(get_product_service)):
    product = products.get(product_id)
    if product is None:
        raise not_found()
    return ProductOut.model_validate(product)


@router.put("/{product_id}", response_model=Ok)
def update_product(
    product_id: str,
    data: ProductUpdate,
    user: str = Depends(get_current_user),
    products: ProductService = Depends(get_product_service),
):
    products.update(product_id, data, user)
    return Ok()


@router.delete("/{product_id}", response_model=Ok)
def delete_product(
    product_id: str,
    user: str = Depends(get_current_user),
    products: ProductService = Depends(get_product_service),
):
    products.delete(product_id, user)
    return Ok()
