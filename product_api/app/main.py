import os
import time
from typing import Annotated, List
from fastapi import FastAPI, APIRouter, HTTPException, Depends, Path, Request, Response, status
from fastapi.responses import PlainTextResponse
from loguru import logger
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from .db import get_session, init_db
from .log import configure_logging
from .metrics import LAT, REQS, route_label
from .models import Product
from .schemas import INT64_MAX, INT64_MIN, ProductIn, ProductOut

APP_NAME = "product-api"
API_PREFIX = "/api/Product"
APP_ENV = os.getenv("APP_ENV", "production").strip()
LISTEN_PORT = int(os.getenv("LISTEN_PORT", "8080"))

configure_logging(os.getenv("LOG_LEVEL", "INFO"), APP_ENV)

def docs_enabled(environment: str) -> bool:
    return environment.strip().lower() == "development"

# Swagger UI only in development; every docs route is off otherwise
_docs = docs_enabled(APP_ENV)
app = FastAPI(
    title=APP_NAME,
    docs_url="/swagger" if _docs else None,
    redoc_url=None,
    openapi_url="/swagger/v1/swagger.json" if _docs else None,
)
router = APIRouter(prefix=API_PREFIX, tags=["Product"])

ProductId = Annotated[int, Path(ge=INT64_MIN, le=INT64_MAX)]

# ---- Startup: ensure the table exists (idempotent) ----
@app.on_event("startup")
def on_startup():
    logger.info("Starting {} (environment={})", APP_NAME, APP_ENV)
    init_db()

# ---- Prometheus metrics ----
@app.middleware("http")
async def metrics_middleware(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    path = route_label(request)
    REQS.labels(APP_NAME, path, request.method, response.status_code).inc()
    LAT.labels(APP_NAME, path, request.method).observe(time.time() - start)
    return response

@app.get("/health", response_class=PlainTextResponse)
def health():
    return "ok"

@app.get("/metrics")
def metrics():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

@router.get("/", response_model=List[ProductOut], operation_id="GetAllProducts")
def list_products(session: Session = Depends(get_session)):
    rows = session.execute(select(Product)).scalars().all()
    return rows

@router.get("/{id}", response_model=ProductOut, operation_id="GetProductById")
def get_product(id: ProductId, session: Session = Depends(get_session)):
    p = session.get(Product, id)
    if not p:
        logger.debug("Product {} not found", id)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="not found")
    return p

@router.put("/{id}", operation_id="UpdateProduct")
def update_product(id: ProductId, payload: ProductIn, session: Session = Depends(get_session)):
    # full replacement; the row count doubles as the existence check
    res = session.execute(
        update(Product)
        .where(Product.id == id)
        .values(name=payload.name, description=payload.description, quantity=payload.quantity)
    )
    if res.rowcount != 1:
        logger.debug("Update matched {} rows for product {}", res.rowcount, id)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="not found")
    session.commit()
    logger.info("Updated product {}", id)
    return Response(status_code=status.HTTP_200_OK)

@router.post("/", response_model=ProductOut, status_code=status.HTTP_201_CREATED, operation_id="CreateProduct")
def create_product(payload: ProductIn, response: Response, session: Session = Depends(get_session)):
    p = Product(name=payload.name, description=payload.description, quantity=payload.quantity)
    session.add(p)
    session.commit()
    session.refresh(p)
    response.headers["Location"] = f"{API_PREFIX}/{p.id}"
    logger.info("Created product {}", p.id)
    return p

@router.delete("/{id}", operation_id="DeleteProduct")
def delete_product(id: ProductId, session: Session = Depends(get_session)):
    res = session.execute(delete(Product).where(Product.id == id))
    if res.rowcount != 1:
        logger.debug("Delete matched {} rows for product {}", res.rowcount, id)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="not found")
    session.commit()
    logger.info("Deleted product {}", id)
    return Response(status_code=status.HTTP_200_OK)

app.include_router(router)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=LISTEN_PORT)
