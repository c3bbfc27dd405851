import logging
from typing import List, Optional, Tuple

from sqlalchemy import func, or_
from sqlmodel import col, select

from marketplace.auth.ownership import require_owner
from marketplace.db import utcnow
from marketplace.models.product import ProductInput, ProductUpdate
from marketplace.models.product_db import Product
from marketplace.services.base import TenantService
from marketplace.utils.pagination import paginate

logger = logging.getLogger(__name__)

OWNED_LIST_LIMIT = 100


def newest_first(statement):
    return statement.order_by(col(Product.created_at).desc(), col(Product.id).desc())


class ProductService(TenantService):
    model = Product

    def create(self, data: ProductInput, uid: str) -> Product:
        # owner always comes from the verified credential
        product = Product(**data.model_dump(), owner_id=uid, **self.tenant())
        self.session.add(product)
        self.session.commit()
        self.session.refresh(product)
        logger.info("Product %s created by %s", product.id, uid)
        return product

    def search(
        self,
        page: int,
        page_size: int,
        owner_id: Optional[str] = None,
        q: Optional[str] = None,
        category: Optional[str] = None,
        condition: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        visibility: Optional[str] = None,
    ) -> Tuple[List[Product], int]:
        """
        Filtered, newest-first page of products.

        Without `owner_id` this is the public catalogue and only public
        products qualify, whatever `visibility` asks for.
        """
        statement = self.scoped(select(Product))
        if owner_id is None:
            statement = statement.where(Product.visibility == "public")
        else:
            statement = statement.where(Product.owner_id == owner_id)
            if visibility:
                statement = statement.where(Product.visibility == visibility)

        if q:
            needle = q.strip().lower()
            if needle:
                statement = statement.where(
                    or_(
                        func.lower(Product.title).contains(needle, autoescape=True),
                        func.lower(Product.category).contains(needle, autoescape=True),
                    )
                )
        if category:
            statement = statement.where(Product.category == category.strip())
        if condition:
            statement = statement.where(Product.condition == condition.strip())
        if min_price is not None:
            statement = statement.where(Product.price >= min_price)
        if max_price is not None:
            statement = statement.where(Product.price <= max_price)

        return paginate(self.session, newest_first(statement), page, page_size)

    def owned_by(self, uid: str) -> List[Product]:
        statement = newest_first(self.scoped(select(Product)).where(Product.owner_id == uid))
        return list(self.session.exec(statement.limit(OWNED_LIST_LIMIT)).all())

    def update(self, product_id: str, data: ProductUpdate, uid: str) -> Product:
        product = require_owner(self.get, product_id, uid)
        for field, value in data.changes().items():
            setattr(product, field, value)
        product.updated_at = utcnow()
        self.session.add(product)
        self.session.commit()
        return product

    def delete(self, product_id: str, uid: str):
        product = require_owner(self.get, product_id, uid)
        self.session.delete(product)
        self.session.commit()
        logger.info("Product %s deleted by %s", product_id, uid)
