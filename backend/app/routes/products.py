"""
Product Catalog Backend: Product Route Handlers
===============================================

What:  The five product endpoints.
How:   Parses the path, body and optional file, delegates to the
       AssetService and the injected ProductStore, returns JSON.

Endpoints:
    GET    /products          → 200 [Product]
    GET    /products/{id}     → 200 Product | 404
    POST   /products          → 200 Product (with assigned id) | 400
    PUT    /products/{id}     → 200 {"changes": N} | 400
    DELETE /products/{id}     → 200 {"changes": N}

    Any StorageError → 500 via the global handler.

Request bodies:
    Create and update accept either a JSON object or form fields
    (multipart/form-data or urlencoded). In `multipart` upload mode a file
    part named `image` is stored and its URL replaces any `image_url` field;
    in `url_only` mode file parts are ignored.
"""

import json
import logging
from typing import Dict, List, Optional, Tuple

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError as PydanticValidationError
from starlette.datastructures import UploadFile

from app.config import Settings
from app.exceptions import ValidationError
from app.schemas.product import (
    ChangesResponse,
    ErrorResponse,
    ProductPayload,
    ProductResponse,
)
from app.services.asset_service import AssetService
from app.services.product_store import ProductStore, get_product_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Products"])

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")
IMAGE_FIELD = "image"


# ── Dependencies ──────────────────────────────────────────────────────────
def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_asset_service(request: Request) -> AssetService:
    return request.app.state.asset_service


# ── Request Parsing ───────────────────────────────────────────────────────
async def read_product_request(
    request: Request,
    accept_uploads: bool,
) -> Tuple[ProductPayload, Optional[UploadFile]]:
    """
    Extract the product fields and the optional image upload from a request.

    Returns:
        (payload, upload) where upload is None when no file was sent or
        uploads are disabled.

    Raises:
        ValidationError if the body is not a JSON object or a field has the
        wrong type (e.g. a non-numeric price).
    """
    content_type = request.headers.get("content-type", "")
    upload: Optional[UploadFile] = None
    data: Dict[str, object] = {}

    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                if not accept_uploads:
                    logger.info("Ignoring file part '%s': uploads are disabled", key)
                elif key == IMAGE_FIELD:
                    upload = value
                continue
            data[key] = value
    else:
        body = await request.body()
        if body.strip():
            try:
                data = json.loads(body)
            except ValueError as e:
                raise ValidationError(
                    message=f"Request body is not valid JSON: {e}",
                    field="body",
                ) from e
            if not isinstance(data, dict):
                raise ValidationError(
                    message="Request body must be a JSON object",
                    field="body",
                )

    try:
        payload = ProductPayload.model_validate(data)
    except PydanticValidationError as e:
        errors = [
            {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
            for err in e.errors()
        ]
        raise ValidationError(
            message="Invalid product fields: "
            + "; ".join(f"{err['field']}: {err['message']}" for err in errors),
            field=errors[0]["field"] if errors else None,
            context={"errors": errors},
        ) from e

    return payload, upload


def check_required_fields(payload: ProductPayload, upload: Optional[UploadFile]) -> None:
    """
    Presence check for `name` and `image_url`.

    An uploaded file satisfies `image_url`. Runs before the file is stored,
    so a rejected request writes nothing.
    """
    missing = []
    if not payload.name:
        missing.append("name")
    if not (payload.image_url or AssetService.has_upload(upload)):
        missing.append("image_url")

    if missing:
        raise ValidationError(
            message=f"Missing required product fields: {', '.join(missing)}",
            field=missing[0],
            context={"missing": missing},
        )


async def resolve_product_fields(
    request: Request,
    settings: Settings,
    assets: AssetService,
) -> ProductPayload:
    """Parse, optionally presence-check, and settle `image_url` for a write."""
    payload, upload = await read_product_request(request, settings.accepts_uploads)
    try:
        if settings.require_product_fields:
            check_required_fields(payload, upload)
        image_url = await assets.resolve_image_url(upload, payload.image_url)
    finally:
        if upload is not None:
            await upload.close()

    return payload.model_copy(update={"image_url": image_url})


# ── Endpoints ─────────────────────────────────────────────────────────────
@router.get(
    "/products",
    response_model=List[ProductResponse],
    responses={500: {"description": "Database error", "model": ErrorResponse}},
    summary="List all products",
)
async def list_products(
    store: ProductStore = Depends(get_product_store),
) -> List[ProductResponse]:
    products = await store.list_products()
    return [ProductResponse.model_validate(product) for product in products]


@router.get(
    "/products/{product_id}",
    response_model=ProductResponse,
    responses={
        404: {"description": "Product not found", "model": ErrorResponse},
        500: {"description": "Database error", "model": ErrorResponse},
    },
    summary="Get a single product by ID",
)
async def get_product(
    product_id: int,
    store: ProductStore = Depends(get_product_store),
) -> ProductResponse:
    product = await store.get_product(product_id)
    return ProductResponse.model_validate(product)


@router.post(
    "/products",
    response_model=ProductResponse,
    responses={
        400: {"description": "Missing or malformed fields", "model": ErrorResponse},
        500: {"description": "Database or upload error", "model": ErrorResponse},
    },
    summary="Create a product",
    description=(
        "Accepts a JSON object or form fields. In multipart mode an `image` "
        "file part is stored under the uploads directory and its URL becomes "
        "the product's image_url."
    ),
)
async def create_product(
    request: Request,
    store: ProductStore = Depends(get_product_store),
    settings: Settings = Depends(get_settings),
    assets: AssetService = Depends(get_asset_service),
) -> ProductResponse:
    payload = await resolve_product_fields(request, settings, assets)
    product = await store.create_product(payload.to_fields())
    return ProductResponse.model_validate(product)


@router.put(
    "/products/{product_id}",
    response_model=ChangesResponse,
    responses={
        400: {"description": "Missing or malformed fields", "model": ErrorResponse},
        500: {"description": "Database or upload error", "model": ErrorResponse},
    },
    summary="Overwrite a product",
    description=(
        "Replaces every writable field; omitted fields are cleared. "
        "An id that matches nothing returns {\"changes\": 0}."
    ),
)
async def update_product(
    product_id: int,
    request: Request,
    store: ProductStore = Depends(get_product_store),
    settings: Settings = Depends(get_settings),
    assets: AssetService = Depends(get_asset_service),
) -> ChangesResponse:
    payload = await resolve_product_fields(request, settings, assets)
    changes = await store.update_product(product_id, payload.to_fields())
    return ChangesResponse(changes=changes)


@router.delete(
    "/products/{product_id}",
    response_model=ChangesResponse,
    responses={500: {"description": "Database error", "model": ErrorResponse}},
    summary="Delete a product",
)
async def delete_product(
    product_id: int,
    store: ProductStore = Depends(get_product_store),
) -> ChangesResponse:
    changes = await store.delete_product(product_id)
    return ChangesResponse(changes=changes)
