from sqlmodel import SQLModel, Field, Column, JSON
from datetime import datetime
from typing import List
from uuid import uuid4

from marketplace.db import utcnow


class Product(SQLModel, table=True):
    __tablename__ = "products"

    id: str = Field(default_factory=lambda: uuid4().hex, primary_key=True)
    org_id: str = Field(index=True)
    app_id: str = Field(index=True)
    owner_id: str = Field(index=True)
    title: str
    price: float = Field(index=True)
    inventory: int = 1
    condition: str = "used"
    category: str = Field(index=True)
    visibility: str = Field(default="public", index=True)
    pickup: bool = True
    ship_options: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    photos: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    created_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: datetime = Field(default_factory=utcnow)
