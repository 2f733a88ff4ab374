# catalog/main.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import config
from .core import (
    create_product_logic, delete_product_logic, get_product_logic,
    list_categories_logic, list_products_logic, reset_logic,
    update_product_logic, validation_message,
)
from .database import CatalogStore, SEED_PRODUCTS
from .models import CategoriesOut, ErrorOut, Product, ProductIn, ProductPatch

logger = logging.getLogger(__name__)

NOT_FOUND_RESPONSE = {404: {"model": ErrorOut, "description": "Product not found"}}
BAD_REQUEST_RESPONSE = {400: {"model": ErrorOut, "description": "Validation failed"}}


def get_store(request: Request) -> CatalogStore:
    return request.app.state.store


# ---------------------------
# Product endpoints
# ---------------------------
router = APIRouter(prefix="/api", tags=["products"])


@router.get("/products", response_model=List[Product])
async def list_products(category: Optional[str] = None, store: CatalogStore = Depends(get_store)):
    return await list_products_logic(store, category)


@router.get("/categories", response_model=CategoriesOut)
async def list_categories():
    return {"categories": await list_categories_logic()}


@router.get("/products/{product_id}", response_model=Product, responses=NOT_FOUND_RESPONSE)
async def get_product(product_id: str, store: CatalogStore = Depends(get_store)):
    return await get_product_logic(store, product_id)


@router.post("/products", response_model=Product, status_code=201, responses=BAD_REQUEST_RESPONSE)
async def create_product(payload: ProductIn, store: CatalogStore = Depends(get_store)):
    return await create_product_logic(store, payload)


@router.patch(
    "/products/{product_id}",
    response_model=Product,
    responses={**NOT_FOUND_RESPONSE, **BAD_REQUEST_RESPONSE},
    # body is read by hand so an unknown id wins over a bad body
    openapi_extra={"requestBody": {"content": {"application/json": {"schema": ProductPatch.model_json_schema()}}}},
)
async def update_product(product_id: str, request: Request, store: CatalogStore = Depends(get_store)):
    return await update_product_logic(store, product_id, await request.body())


@router.delete("/products/{product_id}", status_code=204, responses=NOT_FOUND_RESPONSE)
async def delete_product(product_id: str, store: CatalogStore = Depends(get_store)):
    await delete_product_logic(store, product_id)
    return Response(status_code=204)


# ---------------------------
# Error bodies: always {"error": "..."}
# ---------------------------
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code, headers=getattr(exc, "headers", None))


async def validation_error_handler(request: Request, exc: RequestValidationError):
    message = validation_message(exc.errors())
    logger.warning("rejected %s %s: %s", request.method, request.url.path, message)
    return JSONResponse({"error": message}, status_code=400)


async def internal_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse({"error": "Internal server error"}, status_code=500)


def create_app(store: Optional[CatalogStore] = None) -> FastAPI:
    config.setup_logging()

    app = FastAPI(
        title="Product catalog API (in-memory)",
        version="1.0.0",
        docs_url="/api-docs",
        openapi_url="/api-docs/openapi.json",
        redoc_url=None,
    )
    app.state.store = store if store is not None else CatalogStore(SEED_PRODUCTS if config.LOAD_SEED else ())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)

    app.include_router(router)

    @app.get("/")
    async def health_check(store: CatalogStore = Depends(get_store)):
        return {"status": "ok", "products": len(store)}

    # ---------------------------
    # Utility: reset (for tests/demo)
    # ---------------------------
    @app.post("/reset")
    async def reset_all(seed: bool = False, store: CatalogStore = Depends(get_store)):
        return await reset_logic(store, seed)

    return app


app = create_app()


def serve() -> None:
    import uvicorn

    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    serve()
