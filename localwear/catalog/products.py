# localwear/catalog/products.py
from __future__ import annotations

import logging
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from ..errors import NotFoundError
from ..models import OrderItem, Product
from ..repositories import ProductRepository

log = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "name",
    "description",
    "price",
    "category",
    "image_url",
    "sizes",
    "quantity_in_stock",
)


def list_products(db: Session) -> List[Product]:
    return ProductRepository(db).list()


def get_product(db: Session, product_id: int) -> Product:
    product = ProductRepository(db).get(product_id)
    if product is None:
        raise NotFoundError(f"Product not found with id: {product_id}")
    return product


def create_product(db: Session, fields: Dict[str, Any]) -> Product:
    product = Product(**{k: v for k, v in fields.items() if k in EDITABLE_FIELDS})
    ProductRepository(db).save(product)
    db.commit()
    log.info("product %s created: %s", product.id, product.name)
    return product


def update_product(db: Session, product_id: int, changes: Dict[str, Any]) -> Product:
    """Apply a partial update.

    `changes` only holds the fields to set; anything missing is kept as is.
    """
    product = get_product(db, product_id)
    for key, value in changes.items():
        if key in EDITABLE_FIELDS:
            setattr(product, key, value)

    ProductRepository(db).save(product)
    db.commit()
    log.info("product %s updated: %s", product.id, sorted(changes))
    return product


def delete_product(db: Session, product_id: int) -> None:
    product = get_product(db, product_id)
    # sqlite leaves ON DELETE SET NULL unenforced and reuses the freed id
    db.query(OrderItem).filter(OrderItem.product_id == product_id).update(
        {OrderItem.product_id: None}, synchronize_session=False
    )
    ProductRepository(db).delete(product)
    db.commit()
    log.info("product %s deleted", product_id)
