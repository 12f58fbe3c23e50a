# catalog/main.py
import logging
from contextlib import asynccontextmanager
from typing import List

from fastapi import FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.orm import Session

from . import config
from .core import ProductIn, ProductOut, Message
from .crud import (
    list_products_logic, get_product_logic, create_product_logic,
    update_product_logic, delete_product_logic, MISSING_FIELDS, NOT_FOUND,
)
from .database import Base, engine, get_db

logger = logging.getLogger(__name__)

TOO_LARGE = {"message": "Request body too large"}


class BodySizeLimit:
    """
    Rejects request bodies above config.MAX_BODY_BYTES with a 413.

    The body is counted as it arrives, so chunked uploads without a
    Content-Length header are capped too. The buffered body is then
    handed to the app unchanged.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        limit = config.MAX_BODY_BYTES
        length = dict(scope["headers"]).get(b"content-length", b"")
        if length.isdigit() and int(length) > limit:
            await JSONResponse(status_code=413, content=TOO_LARGE)(scope, receive, send)
            return

        chunks, size, more_body = [], 0, True
        while more_body:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            chunk = message.get("body", b"")
            size += len(chunk)
            if size > limit:
                await JSONResponse(status_code=413, content=TOO_LARGE)(scope, receive, send)
                return
            chunks.append(chunk)
            more_body = message.get("more_body", False)

        body = b"".join(chunks)
        replayed = False

        async def replay():
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": body, "more_body": False}
            return await receive()

        await self.app(scope, replay, send)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables ensured on startup.")
    except Exception as e:
        logger.error(f"DB init failed at startup: {e}")
    yield


app = FastAPI(title="Store Product API", lifespan=lifespan)

app.add_middleware(BodySizeLimit)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------
# Error shape
# ---------------------------
@app.exception_handler(StarletteHTTPException)
async def http_error(_request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)})

@app.exception_handler(RequestValidationError)
async def validation_error(_request: Request, exc: RequestValidationError):
    # A non-numeric id can never match a row
    if any(err.get("loc", ("",))[0] == "path" for err in exc.errors()):
        return JSONResponse(status_code=404, content={"message": NOT_FOUND})
    return JSONResponse(status_code=400, content={"message": MISSING_FIELDS})

# ---------------------------
# Health
# ---------------------------
@app.get("/", response_model=Message)
async def root():
    return {"message": "Store Product API is running"}

# ---------------------------
# Product endpoints
# ---------------------------
@app.get("/products", response_model=List[ProductOut])
def list_products(db: Session = Depends(get_db)):
    return list_products_logic(db)

@app.get("/products/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    return get_product_logic(db, product_id)

@app.post("/products", response_model=ProductOut, status_code=201)
def create_product(payload: ProductIn, db: Session = Depends(get_db)):
    return create_product_logic(db, payload)

@app.put("/products/{product_id}", response_model=ProductOut)
def update_product(product_id: int, payload: ProductIn, db: Session = Depends(get_db)):
    return update_product_logic(db, product_id, payload)

@app.delete("/products/{product_id}", response_model=Message)
def delete_product(product_id: int, db: Session = Depends(get_db)):
    return delete_product_logic(db, product_id)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=config.HOST, port=config.PORT)
