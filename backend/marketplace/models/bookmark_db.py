from sqlmodel import SQLModel, Field
from sqlalchemy import UniqueConstraint
from datetime import datetime
from uuid import uuid4

from marketplace.db import utcnow


class Bookmark(SQLModel, table=True):
    __tablename__ = "bookmarks"
    __table_args__ = (
        UniqueConstraint("org_id", "app_id", "user_id", "product_id", name="uq_bookmark_user_product"),
    )

    id: str = Field(default_factory=lambda: uuid4().hex, primary_key=True)
    org_id: str = Field(index=True)
    app_id: str = Field(index=True)
    user_id: str = Field(index=True)
    product_id: str = Field(index=True)
    created_at: datetime = Field(default_factory=utcnow, index=True)
