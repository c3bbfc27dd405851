from typing import List, Tuple

from sqlmodel import col, select

from marketplace.errors import not_found
from marketplace.models.review import ReviewInput, ReviewSummary
from marketplace.models.review_db import Review
from marketplace.services.base import TenantService
from marketplace.services.products import ProductService
from marketplace.utils.pagination import paginate


def summarize(ratings) -> ReviewSummary:
    """Average rounded to one decimal, 0 when there is nothing to average."""
    values = [int(r) for r in ratings if r is not None]
    if not values:
        return ReviewSummary(avg=0, count=0)
    return ReviewSummary(avg=round(sum(values) / len(values), 1), count=len(values))


class ReviewService(TenantService):
    model = Review

    def create(self, data: ReviewInput, uid: str) -> Review:
        if ProductService(self.session, self.settings).get(data.product_id) is None:
            raise not_found("Product not found")

        review = Review(**data.model_dump(), author_id=uid, **self.tenant())
        self.session.add(review)
        self.session.commit()
        self.session.refresh(review)
        return review

    def for_product(self, product_id: str, page: int, page_size: int) -> Tuple[List[Review], int]:
        statement = (
            self.scoped(select(Review))
            .where(Review.product_id == product_id)
            .order_by(col(Review.created_at).desc(), col(Review.id).desc())
        )
        return paginate(self.session, statement, page, page_size)

    def summary(self, product_id: str) -> ReviewSummary:
        statement = self.scoped(select(Review.rating)).where(Review.product_id == product_id)
        return summarize(self.session.exec(statement).all())
