from pydantic import Field, StrictBool, StringConstraints, model_validator
from pydantic.alias_generators import to_camel
from typing import List, Literal, Optional
from typing_extensions import Annotated

from marketplace.models.common import CamelModel, NonNegativeMoney, UtcDatetime

Condition = Literal["new", "used", "refurbished"]
Visibility = Literal["public", "private"]

Title = Annotated[str, StringConstraints(min_length=2, max_length=80)]
Category = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2)]
Photos = Annotated[List[str], Field(max_length=12)]


class ProductInput(CamelModel):
    """Body of POST /products. Unknown keys, ownerId included, are dropped."""

    title: Title
    price: NonNegativeMoney
    inventory: int = Field(default=1, ge=0)
    condition: Condition = "used"
    category: Category
    visibility: Visibility = "public"
    pickup: StrictBool = True
    ship_options: List[str] = Field(default_factory=list)
    photos: Photos = Field(default_factory=list)


class ProductUpdate(CamelModel):
    title: Optional[Title] = None
    price: Optional[NonNegativeMoney] = None
    inventory: Optional[int] = Field(default=None, ge=0)
    condition: Optional[Condition] = None
    category: Optional[Category] = None
    visibility: Optional[Visibility] = None
    pickup: Optional[StrictBool] = None
    ship_options: Optional[List[str]] = None
    photos: Optional[Photos] = None

    @model_validator(mode="after")
    def check_fields(self):
        if not self.model_fields_set:
            raise ValueError("At least one field required.")
        for name in self.model_fields_set:
            if getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} may not be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(include=self.model_fields_set)


class ProductOut(CamelModel):
    id: str
    title: str
    price: float
    inventory: int
    condition: str
    category: str
    visibility: str
    pickup: bool
    ship_options: List[str] = []
    photos: List[str] = []
    owner_id: str
    created_at: UtcDatetime
    updated_at: UtcDatetime


class ProductPage(CamelModel):
    items: List[ProductOut]
    page: int
    page_size: int
    total: int


class ProductList(CamelModel):
    items: List[ProductOut]
