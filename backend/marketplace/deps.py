from fastapi import Depends, Request
from sqlmodel import Session

from marketplace.config import Settings
from marketplace.db import get_session
from marketplace.services.bookmarks import BookmarkService
from marketplace.services.offers import OfferService
from marketplace.services.products import ProductService
from marketplace.services.reviews import ReviewService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_product_service(session: Session = Depends(get_session), settings: Settings = Depends(get_settings)):
    return ProductService(session, settings)


def get_review_service(session: Session = Depends(get_session), settings: Settings = Depends(get_settings)):
    return ReviewService(session, settings)


def get_bookmark_service(session: Session = Depends(get_session), settings: Settings = Depends(get_settings)):
    return BookmarkService(session, settings)


def get_offer_service(session: Session = Depends(get_session), settings: Settings = Depends(get_settings)):
    return OfferService(session, settings)
