from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query

from marketplace.auth.dependencies import get_current_user
from marketplace.deps import get_offer_service
from marketplace.models.common import Created, Ok
from marketplace.models.offer import OfferDecision, OfferInput, OfferOut, OfferPage, OfferStatus
from marketplace.services.offers import OfferService
from marketplace.utils.pagination import MAX_PAGE, clamp_page

router = APIRouter(prefix="/offers", tags=["Offers"])


@router.post("", status_code=201, response_model=Created)
def create_offer(
    data: OfferInput,
    user: str = Depends(get_current_user),
    offers: OfferService = Depends(get_offer_service),
):
    return Created(id=offers.create(data, user).id)


@router.get("", response_model=OfferPage)
def list_offers(
    role: Literal["buyer", "seller"] = "seller",
    status: Optional[OfferStatus] = None,
    page: int = Query(1, le=MAX_PAGE),
    page_size: int = Query(12, alias="pageSize"),
    user: str = Depends(get_current_user),
    offers: OfferService = Depends(get_offer_service),
):
    page, page_size = clamp_page(page, page_size, 50)
    items, total = offers.for_user(user, role, page, page_size, status=status)
    return OfferPage(
        items=[OfferOut.model_validate(o) for o in items],
        page=page,
        page_size=page_size,
        total=total,
    )


@router.patch("/{offer_id}", response_model=Ok)
def decide_offer(
    offer_id: str,
    data: OfferDecision,
    user: str = Depends(get_current_user),
    offers: OfferService = Depends(get_offer_service),
):
    offers.decide(offer_id, OfferStatus(data.status), user)
    return Ok()
