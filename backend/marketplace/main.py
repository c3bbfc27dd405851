import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from marketplace.auth.auth_handler import TokenVerifier
from marketplace.config import Settings
from marketplace.db import create_db_and_tables, make_engine
from marketplace.errors import register_error_handlers
from marketplace.routers import bookmarks, image_upload, offers, products, reviews
from marketplace.utils.s3 import get_s3_client


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    app = FastAPI(title="Marketplace API")
    app.state.settings = settings
    app.state.engine = make_engine(settings.database_url)
    app.state.token_verifier = TokenVerifier(settings)
    app.state.s3_client = get_s3_client(settings)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.allowed_origin],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    register_error_handlers(app)

    # Include routers
    app.include_router(products.router)
    app.include_router(products.me_router)
    app.include_router(reviews.router)
    app.include_router(bookmarks.router)
    app.include_router(offers.router)
    app.include_router(image_upload.router)

    @app.on_event("startup")
    def on_startup():
        create_db_and_tables(app.state.engine)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app
