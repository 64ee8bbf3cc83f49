"""Load a starter catalog into an empty database: ``python -m flower_shop.seed``."""

import logging

from .crud import seed_products
from .database import SessionLocal, engine
from .models import Base

logger = logging.getLogger(__name__)

SAMPLE_PRODUCTS = [
    {
        "name": "Rose Bouquet Premium",
        "catalog_type": "Bucket Fresh Flower",
        "detail": "Premium red rose bouquet with elegant wrapping. A fit for birthdays or anniversaries.",
        "price": 250000,
        "stock": 15,
    },
    {
        "name": "Sunflower Field",
        "catalog_type": "Fresh Flower",
        "detail": "Fresh long-stem sunflowers to brighten up any room.",
        "price": 85000,
        "stock": 20,
    },
    {
        "name": "Pink Lily Elegance",
        "catalog_type": "Bucket Fresh Flower",
        "detail": "Elegant pink lilies with baby's breath filler.",
        "price": 350000,
        "stock": 10,
    },
    {
        "name": "Mixed Flower Bucket",
        "catalog_type": "Bucket Fresh Flower",
        "detail": "A bright mix of fresh seasonal flowers.",
        "price": 180000,
        "stock": 12,
    },
    {
        "name": "Tulip Romance",
        "catalog_type": "Fresh Flower",
        "detail": "Imported red tulips.",
        "price": 200000,
        "stock": 8,
    },
    {
        "name": "Orchid White",
        "catalog_type": "Fresh Flower",
        "detail": "Long-lasting white orchid for home or office.",
        "price": 300000,
        "stock": 6,
    },
    {
        "name": "Hydrangea Blue",
        "catalog_type": "Bucket Fresh Flower",
        "detail": "Full blue hydrangea bouquet with exclusive wrapping.",
        "price": 400000,
        "stock": 5,
    },
]


def seed_catalog() -> int:
    db = SessionLocal()
    try:
        inserted = seed_products(db, [dict(p, status="Available", image="") for p in SAMPLE_PRODUCTS])
        if inserted:
            logger.info("Seeded %s products", inserted)
        else:
            logger.info("Products already exist, skipping seed")
        return inserted
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    Base.metadata.create_all(bind=engine)
    seed_catalog()
