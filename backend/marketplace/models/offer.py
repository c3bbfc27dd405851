from enum import Enum
from pydantic import Field
from typing import List, Literal, Optional

from marketplace.models.common import CamelModel, PositiveMoney, UtcDatetime


class OfferStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"


class OfferInput(CamelModel):
    product_id: str = Field(min_length=1)
    amount: PositiveMoney
    message: Optional[str] = Field(default=None, max_length=500)


class OfferDecision(CamelModel):
    status: Literal["accepted", "declined"]


class OfferOut(CamelModel):
    id: str
    product_id: str
    buyer_id: str
    seller_id: str
    amount: float
    message: Optional[str] = None
    status: OfferStatus
    created_at: UtcDatetime
    updated_at: UtcDatetime


class OfferPage(CamelModel):
    items: List[OfferOut]
    page: int
    page_size: int
    total: int
