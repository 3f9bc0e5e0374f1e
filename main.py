from fastapi import FastAPI, APIRouter, HTTPException, Depends, Path, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from contextlib import asynccontextmanager
from database import engine, get_db
from migrate import run_migrations
from validators import MAX_INTEGER
from schemas import (
    ProductCreate, ProductUpdate, ProductOut, OrderCreate, OrderUpdate, OrderOut,
    ErrorOut, StatusOut,
)
from crud import (
    crud_get_product_list, crud_get_product_by_id, crud_create_product, crud_update_product,
    crud_delete_product, crud_get_order_list, crud_get_order_by_id, crud_create_order,
    crud_update_order, crud_delete_order,
)
from typing import Annotated, List
import logging
import os

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# automatically create all required tables on startup to initialize the db
@asynccontextmanager
async def lifespan(app: FastAPI):
    if os.getenv("CREATE_TABLES_ON_STARTUP", "true").lower() == "true":
        logger.info("Creating database tables...")
        run_migrations(engine)
    yield  # The app runs here
    logger.info("Closing database connection...")
    engine.dispose()  # Cleanup on shutdown


# initialize app, the swagger ui is served on /api-docs
app = FastAPI(
    title="E-Commerce API",
    version="1.0.0",
    description="API for managing products and orders in an e-commerce system",
    docs_url="/api-docs",
    openapi_tags=[
        {"name": "Products", "description": "Product catalogue"},
        {"name": "Orders", "description": "Orders of a single product"},
    ],
    lifespan=lifespan,
)

products_router = APIRouter(prefix="/api/products", tags=["Products"])
orders_router = APIRouter(prefix="/api/orders", tags=["Orders"])

NOT_FOUND = {404: {"model": ErrorOut}}
INVALID = {400: {"model": ErrorOut}}
SERVER_ERROR = {500: {"model": ErrorOut}}
# path ids outside the Integer column range are rejected like any other malformed id
RowId = Annotated[int, Path(ge=-MAX_INTEGER, le=MAX_INTEGER)]


def storage_failure(db: Session, message: str) -> HTTPException:
    """ rolls back the request transaction and hides the db error behind a generic message """
    db.rollback()
    logger.exception(message)
    return HTTPException(status_code=500, detail=message)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # malformed json bodies or non integer ids in the path
    logger.info("Rejected request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request"})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Something went wrong!", "message": str(exc)})


@app.get("/", response_model=StatusOut, status_code=status.HTTP_200_OK)
def root():
    return {
        "message": "E-Commerce API is running",
        "documentation": "Visit /api-docs for API documentation",
    }


@products_router.get("", response_model=List[ProductOut], responses=SERVER_ERROR,
                     summary="Retrieve all products")
def list_products(db: Session = Depends(get_db)):
    try:
        return crud_get_product_list(db)
    except SQLAlchemyError:
        raise storage_failure(db, "Failed to fetch products")


@products_router.get("/{product_id}", response_model=ProductOut, responses={**NOT_FOUND, **SERVER_ERROR},
                     summary="Get a product by ID")
def get_product(product_id: RowId, db: Session = Depends(get_db)):
    try:
        return crud_get_product_by_id(db, product_id)
    except SQLAlchemyError:
        raise storage_failure(db, "Failed to fetch product")


@products_router.post("", response_model=ProductOut, status_code=status.HTTP_201_CREATED,
                      responses={**INVALID, **SERVER_ERROR}, summary="Create a new product")
def create_product(product: ProductCreate, db: Session = Depends(get_db)):
    try:
        return crud_create_product(db, product)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SQLAlchemyError:
        raise storage_failure(db, "Failed to create product")


@products_router.put("/{product_id}", response_model=ProductOut,
                     responses={**INVALID, **NOT_FOUND, **SERVER_ERROR}, summary="Update a product")
def update_product(product_id: RowId, product: ProductUpdate, db: Session = Depends(get_db)):
    try:
        return crud_update_product(db, product_id, product)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SQLAlchemyError:
        raise storage_failure(db, "Failed to update product")


@products_router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response,
                        responses={**NOT_FOUND, **SERVER_ERROR}, summary="Delete a product and its orders")
def delete_product(product_id: RowId, db: Session = Depends(get_db)):
    try:
        crud_delete_product(db, product_id)
    except SQLAlchemyError:
        raise storage_failure(db, "Failed to delete product")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@orders_router.get("", response_model=List[OrderOut], responses=SERVER_ERROR,
                   summary="Retrieve all orders")
def list_orders(db: Session = Depends(get_db)):
    try:
        return crud_get_order_list(db)
    except SQLAlchemyError:
        raise storage_failure(db, "Failed to fetch orders")


@orders_router.get("/{order_id}", response_model=OrderOut, responses={**NOT_FOUND, **SERVER_ERROR},
                   summary="Get an order by ID")
def get_order(order_id: RowId, db: Session = Depends(get_db)):
    try:
        return crud_get_order_by_id(db, order_id)
    except SQLAlchemyError:
        raise storage_failure(db, "Failed to fetch order")


@orders_router.post("", response_model=OrderOut, status_code=status.HTTP_201_CREATED,
                    responses={**INVALID, **NOT_FOUND, **SERVER_ERROR}, summary="Create a new order")
def create_order(order: OrderCreate, db: Session = Depends(get_db)):
    try:
        return crud_create_order(db, order)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SQLAlchemyError:
        raise storage_failure(db, "Failed to create order")


@orders_router.put("/{order_id}", response_model=OrderOut,
                   responses={**INVALID, **NOT_FOUND, **SERVER_ERROR}, summary="Update an order")
def update_order(order_id: RowId, order: OrderUpdate, db: Session = Depends(get_db)):
    try:
        return crud_update_order(db, order_id, order)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SQLAlchemyError:
        raise storage_failure(db, "Failed to update order")


@orders_router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response,
                      responses={**NOT_FOUND, **SERVER_ERROR}, summary="Delete an order")
def delete_order(order_id: RowId, db: Session = Depends(get_db)):
    try:
        crud_delete_order(db, order_id)
    except SQLAlchemyError:
        raise storage_failure(db, "Failed to delete order")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


app.include_router(products_router)
app.include_router(orders_router)


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", "3000"))
    logger.info("Swagger documentation available at http://localhost:%s/api-docs", port)
    uvicorn.run(app, host=os.getenv("HOST", "0.0.0.0"), port=port)
