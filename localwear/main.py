# localwear/main.py
from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import List

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, File, Request, Response, UploadFile
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.orm import Session

load_dotenv()

from . import identity, seed
from .access import require_admin, require_customer_or_admin
from .auth import Principal
from .catalog import images, products
from .db import Base, SessionLocal, engine, get_db
from .errors import StoreError
from .ordering import workflow
from .ordering.workflow import OrderLine
from .schemas import (
    AdminLoginIn,
    AuthOut,
    GoogleLoginIn,
    ImageUploadOut,
    OrderCreateIn,
    OrderOut,
    OrderStatusIn,
    ProductCreateIn,
    ProductOut,
    ProductUpdateIn,
    UserOut,
)

log = logging.getLogger("localwear")


# -------------------
# Config (env-driven)
# -------------------
class Settings(BaseModel):
    cors_origins: List[str] = [
        o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",") if o.strip()
    ]
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    seed_on_startup: bool = os.getenv("SEED_ON_STARTUP", "1").strip().lower() not in {"0", "false"}


settings = Settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    Base.metadata.create_all(bind=engine)
    if settings.seed_on_startup:
        db = SessionLocal()
        try:
            seed.run(db)
        finally:
            db.close()
    log.info("localwear api ready")
    yield


app = FastAPI(title="LocalWear Store API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# -------------------
# Error mapping
# -------------------
@app.exception_handler(StoreError)
def store_error_handler(_request: Request, exc: StoreError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
def validation_error_handler(_request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


# -------------------
# Health
# -------------------
@app.get("/")
def root():
    return {"ok": True, "service": "localwear-api"}


# -------------------
# Auth
# -------------------
@app.post("/auth/google-login", response_model=AuthOut)
def google_login(payload: GoogleLoginIn, db: Session = Depends(get_db)):
    token, user = identity.google_login(db, payload.id_token)
    return AuthOut(token=token, user=UserOut.model_validate(user))


@app.post("/auth/admin-login", response_model=AuthOut)
def admin_login(payload: AdminLoginIn, db: Session = Depends(get_db)):
    token, user = identity.admin_login(db, payload.email, payload.password)
    return AuthOut(token=token, user=UserOut.model_validate(user))


# -------------------
# Catalog (public)
# -------------------
@app.get("/products", response_model=List[ProductOut])
def list_products(db: Session = Depends(get_db)):
    return products.list_products(db)


@app.get("/products/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    return products.get_product(db, product_id)


# -------------------
# Orders
# -------------------
@app.post("/orders", response_model=OrderOut)
def create_order(
    payload: OrderCreateIn,
    principal: Principal = Depends(require_customer_or_admin),
    db: Session = Depends(get_db),
):
    lines = [OrderLine(product_id=i.product_id, size=i.size, quantity=i.quantity) for i in payload.items]
    return workflow.place_order(db, principal, payload.shipping_address, lines)


@app.get("/orders/user", response_model=List[OrderOut])
def user_orders(
    principal: Principal = Depends(require_customer_or_admin),
    db: Session = Depends(get_db),
):
    return workflow.list_orders_for(db, principal)


# -------------------
# Admin
# -------------------
@app.get("/admin/orders", response_model=List[OrderOut], dependencies=[Depends(require_admin)])
def all_orders(db: Session = Depends(get_db)):
    return workflow.list_all_orders(db)


@app.patch("/admin/orders/{order_id}/status", response_model=OrderOut, dependencies=[Depends(require_admin)])
def update_order_status(order_id: int, payload: OrderStatusIn, db: Session = Depends(get_db)):
    return workflow.update_order_status(db, order_id, payload.status)


@app.post("/admin/products", response_model=ProductOut, dependencies=[Depends(require_admin)])
def create_product(payload: ProductCreateIn, db: Session = Depends(get_db)):
    return products.create_product(db, payload.model_dump())


@app.put("/admin/products/{product_id}", response_model=ProductOut, dependencies=[Depends(require_admin)])
def update_product(product_id: int, payload: ProductUpdateIn, db: Session = Depends(get_db)):
    return products.update_product(db, product_id, payload.changes())


@app.delete("/admin/products/{product_id}", status_code=204, dependencies=[Depends(require_admin)])
def delete_product(product_id: int, db: Session = Depends(get_db)):
    products.delete_product(db, product_id)
    return Response(status_code=204)


@app.post("/admin/upload-image", response_model=ImageUploadOut, dependencies=[Depends(require_admin)])
def upload_image(image: UploadFile = File(...)):
    data = image.file.read()
    url = images.upload_image(data, image.content_type)
    return ImageUploadOut(image_url=url)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", 8000)))
