# localwear/ordering/workflow.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List

from sqlalchemy.orm import Session

from ..auth import Principal
from ..errors import BadRequestError, NotFoundError
from ..models import Order, OrderItem, OrderStatus
from ..repositories import OrderRepository, ProductRepository, UserRepository
from .pricing import build_summary, order_total

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrderLine:
    product_id: int
    size: str
    quantity: int


def place_order(
    db: Session,
    principal: Principal,
    shipping_address: str,
    lines: Iterable[OrderLine],
) -> Order:
    """Check stock, snapshot prices and persist a PLACED order.

    Stock is decremented line by line as the request is walked. Everything
    happens in the session's transaction, so a failure on any line rolls back
    the decrements already made and no order is written.
    """
    users = UserRepository(db)
    products = ProductRepository(db)
    orders = OrderRepository(db)

    try:
        user = users.get(principal.user_id)
        if user is None:
            raise NotFoundError("User not found")

        items: List[OrderItem] = []
        for line in lines:
            product = products.get(line.product_id)
            if product is None:
                raise NotFoundError(f"Product not found with id: {line.product_id}")

            if product.quantity_in_stock < line.quantity:
                raise BadRequestError(f"Insufficient stock for product: {product.name}")

            # size is stored as given, not checked against product.sizes
            items.append(
                OrderItem(
                    product=product,
                    product_name=product.name,
                    size=line.size,
                    quantity=line.quantity,
                    price=product.price,
                )
            )

            product.quantity_in_stock -= line.quantity
            products.save(product)

        order = Order(
            user_id=user.id,
            shipping_address=shipping_address,
            status=OrderStatus.PLACED.value,
            total_price=order_total((it.price, it.quantity) for it in items),
            items=items,
        )
        orders.save(order)
        db.commit()
    except Exception:
        db.rollback()
        raise

    log.info("order %s placed by %s: %d item(s), total %s", order.id, user.email, len(items), order.total_price)
    if log.isEnabledFor(logging.DEBUG):
        log.debug("order %s\n%s", order.id, build_summary((it.product_name, it.quantity, it.price) for it in items))
    return orders.get(order.id)


def list_orders_for(db: Session, principal: Principal) -> List[Order]:
    return OrderRepository(db).list_for_user(principal.user_id)


def list_all_orders(db: Session) -> List[Order]:
    return OrderRepository(db).list_all()


def update_order_status(db: Session, order_id: int, status: OrderStatus) -> Order:
    orders = OrderRepository(db)
    order = orders.get(order_id)
    if order is None:
        raise NotFoundError(f"Order not found with id: {order_id}")

    previous = order.status
    # no transition rules: any status may follow any other
    order.status = OrderStatus(status).value
    orders.save(order)
    db.commit()

    log.info("order %s status %s -> %s", order.id, previous, order.status)
    return order
