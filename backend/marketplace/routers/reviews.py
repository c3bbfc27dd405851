from typing import Optional

from fastapi import APIRouter, Depends, Query

from marketplace.auth.dependencies import get_current_user
from marketplace.deps import get_review_service
from marketplace.errors import bad_request
from marketplace.models.common import Created
from marketplace.models.review import ReviewInput, ReviewOut, ReviewPage
from marketplace.services.reviews import ReviewService
from marketplace.utils.pagination import MAX_PAGE, clamp_page

router = APIRouter(prefix="/reviews", tags=["Reviews"])


@router.post("", status_code=201, response_model=Created)
def create_review(
    data: ReviewInput,
    user: str = Depends(get_current_user),
    reviews: ReviewService = Depends(get_review_service),
):
    return Created(id=reviews.create(data, user).id)


@router.get("", response_model=ReviewPage)
def list_reviews(
    product_id: Optional[str] = Query(None, alias="productId"),
    page: int = Query(1, le=MAX_PAGE),
    page_size: int = Query(20, alias="pageSize"),
    reviews: ReviewService = Depends(get_review_service),
):
    if not product_id:
        raise bad_request("Missing productId")
    page, page_size = clamp_page(page, page_size, 50)
    items, total = reviews.for_product(product_id, page, page_size)
    return ReviewPage(
        items=[ReviewOut.model_validate(r) for r in items],
        summary=reviews.summary(product_id),
        page=page,
        page_size=page_size,
        total=total,
    )
