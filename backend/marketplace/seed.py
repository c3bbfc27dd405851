"""Load a JSON array of products into the configured org/app, owned by `seed`."""
import argparse
import json
import logging
import sys

from pydantic import ValidationError
from sqlmodel import Session

from marketplace.config import Settings
from marketplace.db import create_db_and_tables, make_engine
from marketplace.models.product import ProductInput
from marketplace.services.products import ProductService

logger = logging.getLogger(__name__)

SEED_OWNER = "seed"


def seed_products(session: Session, settings: Settings, items: list) -> int:
    products = []
    for index, item in enumerate(items):
        try:
            products.append(ProductInput.model_validate(item))
        except ValidationError as e:
            raise ValueError(f"Product #{index} is invalid: {e}") from e

    service = ProductService(session, settings)
    for data in products:
        service.create(data, SEED_OWNER)
    return len(products)


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("path", help="JSON file holding a list of products")
    args = parser.parse_args(argv)

    settings = Settings.from_env()
    logging.basicConfig(level=settings.log_level)

    with open(args.path, encoding="utf-8") as f:
        items = json.load(f)
    if not isinstance(items, list):
        parser.error("the seed file must contain a JSON array")

    engine = make_engine(settings.database_url)
    create_db_and_tables(engine)
    with Session(engine) as session:
        try:
            count = seed_products(session, settings, items)
        except ValueError as e:
            logger.error("%s", e)
            return 1
    print(f"Seeded {count} products to /orgs/{settings.org_id}/apps/{settings.app_id}/products")
    return 0


if __name__ == "__main__":
    sys.exit(main())
