"""
One-shot sample data seeder. Run after migrate.py:

    python seed.py
"""

from sqlalchemy.orm import Session
from crud import compute_total_price
from models import Product, Order
from validators import to_cents
from decimal import Decimal
from typing import List
import logging
import random
import sys

logger = logging.getLogger(__name__)

ADJECTIVES = ["Ergonomic", "Rustic", "Sleek", "Handcrafted", "Practical", "Refined", "Gorgeous", "Small"]
MATERIALS = ["Steel", "Wooden", "Cotton", "Granite", "Plastic", "Bronze", "Leather", "Rubber"]
NOUNS = ["Chair", "Keyboard", "Lamp", "Table", "Shoes", "Gloves", "Clock", "Bike"]


def random_product(rng: random.Random) -> Product:
    adjective, material, noun = rng.choice(ADJECTIVES), rng.choice(MATERIALS), rng.choice(NOUNS)
    price = to_cents(Decimal(rng.randint(1000, 100000)) / 100)
    return Product(
        name=f"{adjective} {material} {noun}",
        description=f"The {adjective.lower()} {noun.lower()} made of {material.lower()}, built to last.",
        price=price,
    )


def seed_products(db: Session, count: int = 5, rng: random.Random = None) -> List[Product]:
    rng = rng or random.Random()
    products = [random_product(rng) for _ in range(count)]
    logger.info("Inserting %d sample products...", count)
    db.add_all(products)
    db.commit()
    for product in products:
        db.refresh(product)
    return products


def seed_orders(db: Session, products: List[Product], count: int = 10, rng: random.Random = None) -> List[Order]:
    """ orders against random seeded products, quantity between 1 and 5 """
    rng = rng or random.Random()
    orders = []
    for _ in range(count):
        product = rng.choice(products)
        quantity = rng.randint(1, 5)
        orders.append(Order(
            product_id=product.id,
            quantity=quantity,
            total_price=compute_total_price(product.price, quantity),
        ))
    logger.info("Inserting %d sample orders...", count)
    db.add_all(orders)
    db.commit()
    return orders


def seed(db: Session, products: int = 5, orders: int = 10, rng: random.Random = None) -> None:
    logger.info("Starting database seeding...")
    seeded_products = seed_products(db, products, rng)
    seed_orders(db, seeded_products, orders, rng)
    logger.info("Database seeding completed successfully!")


def main() -> int:
    from database import SessionLocal, engine

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    db = SessionLocal()
    try:
        seed(db)
        return 0
    except Exception:
        db.rollback()
        logger.exception("Error seeding database")
        return 1
    finally:
        db.close()
        engine.dispose()


if __name__ == "__main__":
    sys.exit(main())
