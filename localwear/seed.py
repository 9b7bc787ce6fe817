# localwear/seed.py
from __future__ import annotations

import json
import logging
import os
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from .auth import hash_password
from .models import Product, Role, User
from .repositories import ProductRepository, UserRepository

log = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent / "data"
CATALOG_PATH = DATA_DIR / "catalog.json"


def load_catalog(path: Path = CATALOG_PATH) -> List[Dict[str, Any]]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e

    out: List[Dict[str, Any]] = []
    for p in data.get("products") or []:
        if not isinstance(p, dict):
            continue
        out.append({**p, "price": Decimal(str(p.get("price", "0")))})
    return out


def ensure_admin(db: Session) -> bool:
    email = os.getenv("ADMIN_EMAIL", "admin@localwear.com")
    users = UserRepository(db)
    if users.exists_by_email(email):
        return False

    users.save(
        User(
            name=os.getenv("ADMIN_NAME", "Admin User"),
            email=email,
            password_hash=hash_password(os.getenv("ADMIN_PASSWORD", "admin123")),
            role=Role.ADMIN.value,
            address="Admin Address",
        )
    )
    log.info("seeded admin account %s", email)
    return True


def seed_catalog(db: Session) -> int:
    products = ProductRepository(db)
    if products.count() > 0:
        return 0

    rows = load_catalog()
    for row in rows:
        products.save(Product(**row))
    log.info("seeded %d sample products", len(rows))
    return len(rows)


def run(db: Session) -> None:
    try:
        ensure_admin(db)
        seed_catalog(db)
        db.commit()
    except Exception:
        db.rollback()
        raise
