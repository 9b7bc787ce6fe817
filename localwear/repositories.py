# localwear/repositories.py
"""Per-entity stores over a SQLAlchemy session.

Repositories flush but never commit; the calling workflow owns the transaction.
"""
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from .models import Order, OrderItem, Product, User


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def get_by_google_id(self, google_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.google_id == google_id).first()

    def exists_by_email(self, email: str) -> bool:
        return self.get_by_email(email) is not None

    def save(self, user: User) -> User:
        self.db.add(user)
        self.db.flush()
        return user


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def list(self) -> List[Product]:
        return self.db.query(Product).order_by(Product.id).all()

    def get(self, product_id: int) -> Optional[Product]:
        return self.db.get(Product, product_id)

    def count(self) -> int:
        return self.db.query(func.count(Product.id)).scalar() or 0

    def save(self, product: Product) -> Product:
        self.db.add(product)
        self.db.flush()
        return product

    def delete(self, product: Product) -> None:
        self.db.delete(product)
        self.db.flush()


class OrderRepository:
    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(Order).options(
            selectinload(Order.user),
            selectinload(Order.items).selectinload(OrderItem.product),
        )

    def get(self, order_id: int) -> Optional[Order]:
        return self._query().filter(Order.id == order_id).first()

    def list_for_user(self, user_id: int) -> List[Order]:
        return (
            self._query()
            .filter(Order.user_id == user_id)
            .order_by(Order.created_at.desc(), Order.id.desc())
            .all()
        )

    def list_all(self) -> List[Order]:
        return self._query().order_by(Order.created_at.desc(), Order.id.desc()).all()

    def save(self, order: Order) -> Order:
        self.db.add(order)
        self.db.flush()
        return order
