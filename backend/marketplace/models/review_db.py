from sqlmodel import SQLModel, Field
from datetime import datetime
from uuid import uuid4

from marketplace.db import utcnow


class Review(SQLModel, table=True):
    __tablename__ = "reviews"

    id: str = Field(default_factory=lambda: uuid4().hex, primary_key=True)
    org_id: str = Field(index=True)
    app_id: str = Field(index=True)
    product_id: str = Field(index=True)
    author_id: str
    rating: int
    text: str = ""
    created_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: datetime = Field(default_factory=utcnow)
