from sqlmodel import SQLModel, Field
from datetime import datetime
from typing import Optional
from uuid import uuid4

from marketplace.db import utcnow


class Offer(SQLModel, table=True):
    __tablename__ = "offers"

    id: str = Field(default_factory=lambda: uuid4().hex, primary_key=True)
    org_id: str = Field(index=True)
    app_id: str = Field(index=True)
    product_id: str = Field(index=True)
    buyer_id: str = Field(index=True)
    seller_id: str = Field(index=True)
    amount: float
    message: Optional[str] = None
    status: str = Field(default="pending", index=True)
    created_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: datetime = Field(default_factory=utcnow)
