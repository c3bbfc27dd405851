from pydantic import Field
from typing import List, Optional

from marketplace.models.common import CamelModel, UtcDatetime
from marketplace.models.product import ProductOut


class BookmarkInput(CamelModel):
    product_id: str = Field(min_length=1)


class BookmarkStatus(CamelModel):
    bookmarked: bool
    id: Optional[str] = None


class BookmarkOut(CamelModel):
    id: str
    product_id: str
    user_id: str
    created_at: UtcDatetime
    # None once the bookmarked product has been deleted
    product: Optional[ProductOut] = None


class BookmarkPage(CamelModel):
    items: List[BookmarkOut]
    page: int
    page_size: int
    total: int
