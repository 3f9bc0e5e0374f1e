from sqlalchemy.orm import Session
from fastapi import HTTPException
from models import Product, Order
from schemas import ProductCreate, ProductUpdate, OrderCreate, OrderUpdate
from validators import check_amount, is_missing, parse_id, parse_name, parse_price, parse_quantity, to_cents
from decimal import Decimal
from typing import List
import logging

logger = logging.getLogger(__name__)


def _supplied(data, field: str) -> bool:
    """ a field counts as supplied when the client sent it with a non-null value """
    return field in data.model_fields_set and getattr(data, field) is not None


def compute_total_price(price, quantity: int) -> Decimal:
    """ total_price = product.price * quantity, rounded like the column rounds it """
    total = to_cents(Decimal(price) * quantity)
    return check_amount(total, "Total price must not exceed 99999999.99")


def crud_get_product_list(db: Session) -> List[Product]:
    return db.query(Product).order_by(Product.id).all()


def crud_get_product_by_id(db: Session, product_id: int) -> Product:
    product = db.query(Product).filter(Product.id == product_id).first()
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


def crud_create_product(db: Session, data: ProductCreate) -> Product:
    """ creates a new product, name and price are mandatory """
    if is_missing(data.name) or is_missing(data.price):
        raise ValueError("Name and price are required")

    price = parse_price(data.price)
    name = parse_name(data.name)

    new_product = Product(name=name, description=data.description, price=price)
    db.add(new_product)
    db.commit()
    db.refresh(new_product)
    logger.info("Created product %s", new_product.id)
    return new_product


def crud_update_product(db: Session, product_id: int, data: ProductUpdate) -> Product:
    """ updates only the fields present in the request body """
    product = crud_get_product_by_id(db, product_id)

    if _supplied(data, "name"):
        if is_missing(data.name):
            raise ValueError("Name must not be empty")
        product.name = parse_name(data.name)
    # an explicit null clears the description
    if "description" in data.model_fields_set:
        product.description = data.description
    if _supplied(data, "price"):
        product.price = parse_price(data.price)

    db.commit()
    db.refresh(product)
    return product


def crud_delete_product(db: Session, product_id: int) -> None:
    """ deletes a product, its orders go with it through the foreign key cascade """
    product = crud_get_product_by_id(db, product_id)
    db.delete(product)
    db.commit()
    logger.info("Deleted product %s", product_id)


def crud_get_order_list(db: Session) -> List[Order]:
    return db.query(Order).order_by(Order.id).all()


def crud_get_order_by_id(db: Session, order_id: int) -> Order:
    order = db.query(Order).filter(Order.id == order_id).first()
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


def crud_create_order(db: Session, data: OrderCreate) -> Order:
    if is_missing(data.product_id) or is_missing(data.quantity):
        raise ValueError("Product ID and quantity are required")

    quantity = parse_quantity(data.quantity)
    product_id = parse_id(data.product_id)

    # gets the product to calculate the total price
    product = crud_get_product_by_id(db, product_id)

    new_order = Order(
        product_id=product.id,
        quantity=quantity,
        total_price=compute_total_price(product.price, quantity),
    )
    db.add(new_order)
    db.commit()
    db.refresh(new_order)
    logger.info("Created order %s for product %s", new_order.id, product.id)
    return new_order


def crud_update_order(db: Session, order_id: int, data: OrderUpdate) -> Order:
    """ updates product and/or quantity of an order
        total_price is recalculated whenever one of the two changes """
    order = crud_get_order_by_id(db, order_id)

    product_supplied = _supplied(data, "product_id")
    quantity_supplied = _supplied(data, "quantity")

    # validates everything before the next lookup
    new_product_id = parse_id(data.product_id) if product_supplied else None
    new_quantity = parse_quantity(data.quantity) if quantity_supplied else None

    if product_supplied:
        product = crud_get_product_by_id(db, new_product_id)
        quantity = new_quantity if quantity_supplied else order.quantity
        total_price = compute_total_price(product.price, quantity)
        order.product_id = product.id
        order.quantity = quantity
        order.total_price = total_price
    elif quantity_supplied:
        # only the quantity changes, the price comes from the product already on the order
        product = db.query(Product).filter(Product.id == order.product_id).first()
        if not product:
            raise HTTPException(status_code=404, detail="Associated product not found")
        total_price = compute_total_price(product.price, new_quantity)
        order.quantity = new_quantity
        order.total_price = total_price

    db.commit()
    db.refresh(order)
    return order


def crud_delete_order(db: Session, order_id: int) -> None:
    order = crud_get_order_by_id(db, order_id)
    db.delete(order)
    db.commit()
    logger.info("Deleted order %s", order_id)
