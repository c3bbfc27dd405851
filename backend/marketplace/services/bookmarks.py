import logging
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlmodel import col, select

from marketplace.auth.ownership import require_owner
from marketplace.errors import not_found
from marketplace.models.bookmark import BookmarkOut
from marketplace.models.bookmark_db import Bookmark
from marketplace.models.product import ProductOut
from marketplace.models.product_db import Product
from marketplace.services.base import TenantService
from marketplace.services.products import ProductService
from marketplace.utils.pagination import paginate

logger = logging.getLogger(__name__)


class BookmarkService(TenantService):
    model = Bookmark

    def find(self, uid: str, product_id: str) -> Optional[Bookmark]:
        statement = self.scoped(select(Bookmark)).where(Bookmark.user_id == uid, Bookmark.product_id == product_id)
        return self.session.exec(statement).first()

    def add(self, uid: str, product_id: str) -> Tuple[Bookmark, bool]:
        """
        Bookmark a product for `uid`. Returns the bookmark and whether it was
        newly created; an existing bookmark for the pair is returned as is.
        """
        existing = self.find(uid, product_id)
        if existing is not None:
            return existing, False
        if ProductService(self.session, self.settings).get(product_id) is None:
            raise not_found("Product not found")

        bookmark = Bookmark(user_id=uid, product_id=product_id, **self.tenant())
        self.session.add(bookmark)
        try:
            self.session.commit()
        except IntegrityError:
            # a concurrent request created it first
            self.session.rollback()
            existing = self.find(uid, product_id)
            if existing is None:
                raise
            return existing, False
        self.session.refresh(bookmark)
        return bookmark, True

    def remove(self, bookmark_id: str, uid: str):
        bookmark = require_owner(self.get, bookmark_id, uid, owner_field="user_id")
        self.session.delete(bookmark)
        self.session.commit()

    def for_user(self, uid: str, page: int, page_size: int) -> Tuple[List[BookmarkOut], int]:
        statement = (
            self.scoped(select(Bookmark))
            .where(Bookmark.user_id == uid)
            .order_by(col(Bookmark.created_at).desc(), col(Bookmark.id).desc())
        )
        bookmarks, total = paginate(self.session, statement, page, page_size)

        product_ids = [b.product_id for b in bookmarks]
        products = {}
        if product_ids:
            rows = self.session.exec(self.scoped(select(Product), Product).where(col(Product.id).in_(product_ids)))
            products = {p.id: p for p in rows}

        items = []
        for bookmark in bookmarks:
            product = products.get(bookmark.product_id)
            items.append(
                BookmarkOut(
                    id=bookmark.id,
                    product_id=bookmark.product_id,
                    user_id=bookmark.user_id,
                    created_at=bookmark.created_at,
                    product=ProductOut.model_validate(product) if product is not None else None,
                )
            )
        return items, total
