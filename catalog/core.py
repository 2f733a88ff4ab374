import json
import logging
from typing import Any, Dict, List, Optional, Sequence

from fastapi import HTTPException
from pydantic import ValidationError

from . import config
from .database import CatalogStore, SEED_PRODUCTS
from .models import Product, ProductIn, ProductPatch

# This file contains the core logic behind the product endpoints.

logger = logging.getLogger(__name__)

NOT_FOUND = "Product not found"


def parse_id(raw: str) -> Optional[int]:
    """Turn a path segment into a product id, or None if no product can have it."""
    # plain ASCII digits only; int() would also take "+3", "1_0" or " 3"
    if not isinstance(raw, str) or not (raw.isascii() and raw.isdigit()):
        return None
    product_id = int(raw)
    return product_id if product_id > 0 else None


def _field(loc: Sequence[Any]) -> str:
    return ".".join(str(part) for part in loc if part != "body")


def validation_message(errors: Sequence[Dict[str, Any]]) -> str:
    """Build the single human-readable message returned with a 400.

    Missing fields are reported together; any other problem is reported
    for the first offending field only.
    """
    if not errors:
        return "Invalid request"
    if any(e["type"] == "json_invalid" for e in errors):
        return "Malformed JSON body"

    missing = [_field(e["loc"]) for e in errors if e["type"] == "missing" and _field(e["loc"])]
    if missing:
        return "Missing required fields: " + ", ".join(missing)

    err = errors[0]
    field = _field(err["loc"])
    if not field:
        if err["type"] == "missing":
            return "Request body is required"
        return "Request body must be a JSON object"

    msg = err["msg"]
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    return f"Invalid {field}: {msg}"


def _require(store: CatalogStore, raw_id: str) -> int:
    product_id = parse_id(raw_id)
    if product_id is None or store.find(product_id) is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return product_id


async def list_products_logic(store: CatalogStore, category: Optional[str] = None) -> List[Product]:
    return store.list(category)


async def list_categories_logic() -> List[str]:
    return list(config.ALLOWED_CATEGORIES)


async def get_product_logic(store: CatalogStore, raw_id: str) -> Product:
    product_id = parse_id(raw_id)
    p = store.find(product_id) if product_id is not None else None
    if p is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return p


async def create_product_logic(store: CatalogStore, payload: ProductIn) -> Product:
    product = store.insert(payload.model_dump())
    logger.info("created product %d (%s)", product.id, product.name)
    return product


def _patch_body(raw: bytes) -> Dict[str, Any]:
    if not raw.strip():
        return {}
    try:
        body = json.loads(raw)
    except ValueError:
        raise HTTPException(status_code=400, detail="Malformed JSON body")
    if not isinstance(body, dict):
        raise HTTPException(status_code=400, detail="Request body must be a JSON object")
    return body


async def update_product_logic(store: CatalogStore, raw_id: str, raw_body: bytes) -> Product:
    """Apply a partial update.

    The id is checked first, then the whole body is decoded and validated;
    a single bad field rejects the request and nothing is written.
    """
    product_id = _require(store, raw_id)
    body = _patch_body(raw_body)
    try:
        payload = ProductPatch.model_validate(body)
    except ValidationError as e:
        message = validation_message(e.errors())
        logger.warning("rejected update of product %d: %s", product_id, message)
        raise HTTPException(status_code=400, detail=message)

    changes = payload.changes()
    if not changes:
        return store.find(product_id)

    updated = store.update(product_id, changes)
    if updated is None:
        # deleted between the lookup and the update
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    logger.info("updated product %d: %s", product_id, ", ".join(sorted(changes)))
    return updated


async def delete_product_logic(store: CatalogStore, raw_id: str) -> None:
    product_id = parse_id(raw_id)
    if product_id is None or not store.delete(product_id):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    logger.info("deleted product %d", product_id)


async def reset_logic(store: CatalogStore, seed: bool = False) -> dict:
    store.reset(SEED_PRODUCTS if seed else ())
    logger.info("store reset (seed=%s)", seed)
    return {"status": "reset", "products": len(store)}
