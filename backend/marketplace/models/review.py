from pydantic import Field
from typing import List

from marketplace.models.common import CamelModel, UtcDatetime


class ReviewInput(CamelModel):
    product_id: str = Field(min_length=1)
    rating: int = Field(ge=1, le=5)
    text: str = Field(default="", max_length=500)


class ReviewOut(CamelModel):
    id: str
    product_id: str
    rating: int
    text: str
    author_id: str
    created_at: UtcDatetime
    updated_at: UtcDatetime


class ReviewSummary(CamelModel):
    avg: float
    count: int


class ReviewPage(CamelModel):
    items: List[ReviewOut]
    summary: ReviewSummary
    page: int
    page_size: int
    total: int
