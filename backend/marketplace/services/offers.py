"""
Offers and their one-shot decision.

An offer starts ``pending``. Its seller may move it to ``accepted`` or
``declined`` exactly once; both are terminal. The decision is written with
a conditional update on ``status = 'pending'`` so two racing decisions can
never both succeed.
"""
import logging
from typing import List, Optional, Tuple

from sqlalchemy import update
from sqlmodel import col, select

from marketplace.auth.ownership import require_owner
from marketplace.db import utcnow
from marketplace.errors import bad_request, not_found
from marketplace.models.offer import OfferInput, OfferStatus
from marketplace.models.offer_db import Offer
from marketplace.models.product_db import Product
from marketplace.services.base import TenantService
from marketplace.utils.pagination import paginate

logger = logging.getLogger(__name__)

TERMINAL_STATES = (OfferStatus.ACCEPTED, OfferStatus.DECLINED)
ALREADY_PROCESSED = "Offer already processed"


def ensure_transition_allowed(offer: Offer, target: OfferStatus):
    if target not in TERMINAL_STATES:
        raise bad_request("Invalid status", details="status must be 'accepted' or 'declined'")
    if offer.status != OfferStatus.PENDING.value:
        raise bad_request(ALREADY_PROCESSED)


class OfferService(TenantService):
    model = Offer

    def create(self, data: OfferInput, uid: str) -> Offer:
        # lock the product row for the read-then-insert where the backend supports it
        statement = (
            select(Product)
            .where(
                Product.id == data.product_id,
                Product.org_id == self.settings.org_id,
                Product.app_id == self.settings.app_id,
            )
            .with_for_update()
        )
        product = self.session.exec(statement).first()
        if product is None:
            raise not_found("Product not found")
        if product.owner_id == uid:
            raise bad_request("You cannot make an offer on your own product")

        offer = Offer(
            product_id=product.id,
            buyer_id=uid,
            seller_id=product.owner_id,
            amount=data.amount,
            message=data.message,
            status=OfferStatus.PENDING.value,
            **self.tenant(),
        )
        self.session.add(offer)
        self.session.commit()
        self.session.refresh(offer)
        logger.info("Offer %s on product %s from %s", offer.id, product.id, uid)
        return offer

    def for_user(
        self, uid: str, role: str, page: int, page_size: int, status: Optional[OfferStatus] = None
    ) -> Tuple[List[Offer], int]:
        party = Offer.seller_id if role == "seller" else Offer.buyer_id
        statement = self.scoped(select(Offer)).where(party == uid)
        if status is not None:
            statement = statement.where(Offer.status == status.value)
        statement = statement.order_by(col(Offer.created_at).desc(), col(Offer.id).desc())
        return paginate(self.session, statement, page, page_size)

    def decide(self, offer_id: str, target: OfferStatus, uid: str) -> Offer:
        """Move a pending offer to accepted or declined on behalf of its seller."""
        offer = require_owner(self.get, offer_id, uid, owner_field="seller_id")
        ensure_transition_allowed(offer, target)

        result = self.session.connection().execute(
            update(Offer)
            .where(Offer.id == offer.id, Offer.status == OfferStatus.PENDING.value)
            .values(status=target.value, updated_at=utcnow())
        )
        if result.rowcount != 1:
            self.session.rollback()
            raise bad_request(ALREADY_PROCESSED)
        self.session.commit()
        self.session.refresh(offer)
        logger.info("Offer %s %s by %s", offer.id, target.value, uid)
        return offer
