# catalog/crud.py
import logging
from typing import List

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .core import ProductIn, _make_product_values
from .models import Product

logger = logging.getLogger(__name__)

# Request handling logic for the /products resource. Each function is
# independent of the others: no transaction spans two requests, and any
# database fault surfaces as a 500 without being retried.

MISSING_FIELDS = "Missing required fields"
NOT_FOUND = "Product not found"

def _server_error(db: Session, err: SQLAlchemyError, message: str) -> HTTPException:
    db.rollback()
    logger.error(f"{message}: {err}")
    return HTTPException(status_code=500, detail=message)

def _fetch(db: Session, product_id: int) -> Product:
    return db.query(Product).filter(Product.id == product_id).first()

def list_products_logic(db: Session) -> List[Product]:
    try:
        return db.query(Product).order_by(Product.id.desc()).all()
    except SQLAlchemyError as e:
        raise _server_error(db, e, "Failed to fetch products")

def get_product_logic(db: Session, product_id: int) -> Product:
    try:
        product = _fetch(db, product_id)
    except SQLAlchemyError as e:
        raise _server_error(db, e, "Failed to fetch product")
    if product is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return product

def create_product_logic(db: Session, payload: ProductIn) -> Product:
    if payload.missing_required():
        raise HTTPException(status_code=400, detail=MISSING_FIELDS)
    try:
        product = Product(**_make_product_values(payload))
        db.add(product)
        db.commit()
        logger.info(f"Product #{product.id} created")
        return _fetch(db, product.id)
    except SQLAlchemyError as e:
        raise _server_error(db, e, "Failed to create product")

def update_product_logic(db: Session, product_id: int, payload: ProductIn) -> Product:
    # An unknown id is a 404 whatever the body holds.
    try:
        exists = _fetch(db, product_id) is not None
    except SQLAlchemyError as e:
        raise _server_error(db, e, "Failed to update product")
    if not exists:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    if payload.missing_required():
        raise HTTPException(status_code=400, detail=MISSING_FIELDS)
    try:
        matched = (
            db.query(Product)
            .filter(Product.id == product_id)
            .update(_make_product_values(payload), synchronize_session=False)
        )
        if matched == 0:
            db.rollback()
            raise HTTPException(status_code=404, detail=NOT_FOUND)
        db.commit()
        db.expire_all()
        logger.info(f"Product #{product_id} updated")
        return _fetch(db, product_id)
    except SQLAlchemyError as e:
        raise _server_error(db, e, "Failed to update product")

def delete_product_logic(db: Session, product_id: int) -> dict:
    try:
        deleted = db.query(Product).filter(Product.id == product_id).delete(synchronize_session=False)
        if deleted == 0:
            db.rollback()
            raise HTTPException(status_code=404, detail=NOT_FOUND)
        db.commit()
    except SQLAlchemyError as e:
        raise _server_error(db, e, "Failed to delete product")
    logger.info(f"Product #{product_id} deleted")
    return {"message": "Product deleted"}
