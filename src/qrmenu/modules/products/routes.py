"""Product API routes.

Create and update accept ``multipart/form-data`` so an ``image`` file can
travel with the product fields. Empty form fields are treated as omitted.
"""

from typing import Any, TypeVar
from uuid import UUID

from fastapi import APIRouter, Query, Request, status
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from starlette.datastructures import UploadFile

from qrmenu.core.permissions.dependencies import StaffPrincipal
from qrmenu.core.schemas import ApiResponse
from qrmenu.modules.products.schemas import (
    AvailabilityUpdate,
    ProductCreate,
    ProductRead,
    ProductUpdate,
)
from qrmenu.modules.products.services import ProductSvc


router = APIRouter(prefix="/products", tags=["products"])

SchemaT = TypeVar("SchemaT", bound=BaseModel)

IMAGE_FIELD = "image"


async def read_product_form(
    request: Request,
) -> tuple[dict[str, Any], UploadFile | None]:
    """Split a submitted form into plain fields and the optional image file."""
    form = await request.form()
    fields: dict[str, Any] = {}
    image: UploadFile | None = None
    for key, value in form.multi_items():
        if isinstance(value, UploadFile):
            if key == IMAGE_FIELD and value.filename:
                image = value
            continue
        if value != "":
            fields[key] = value
    return fields, image


def parse_form(schema: type[SchemaT], fields: dict[str, Any]) -> SchemaT:
    """Validate form fields into ``schema``, reporting errors like a JSON body."""
    try:
        return schema.model_validate(fields)
    except PydanticValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False)) from exc


@router.get(
    "",
    response_model=ApiResponse[list[ProductRead]],
    summary="List products",
    description="Lists a store's products, optionally for one category.",
)
async def list_products(
    principal: StaffPrincipal,
    service: ProductSvc,
    store_id: UUID = Query(..., alias="storeId"),
    category_id: UUID | None = Query(None, alias="categoryId"),
) -> ApiResponse[list[ProductRead]]:
    products = await service.list_products(store_id, principal, category_id)
    return ApiResponse(data=[ProductRead.model_validate(p) for p in products])


@router.post(
    "",
    response_model=ApiResponse[ProductRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create product",
    description="Multipart form with product fields and an optional image file.",
)
async def create_product(
    request: Request,
    principal: StaffPrincipal,
    service: ProductSvc,
    store_id: UUID = Query(..., alias="storeId"),
) -> ApiResponse[ProductRead]:
    fields, image = await read_product_form(request)
    data = parse_form(ProductCreate, fields)
    product = await service.create_product(store_id, data, principal, image)
    return ApiResponse(data=ProductRead.model_validate(product))


@router.get(
    "/{product_id}",
    response_model=ApiResponse[ProductRead],
    summary="Get product",
)
async def get_product(
    product_id: UUID,
    principal: StaffPrincipal,
    service: ProductSvc,
) -> ApiResponse[ProductRead]:
    product = await service.get_product(product_id, principal)
    return ApiResponse(data=ProductRead.model_validate(product))


@router.patch(
    "/{product_id}",
    response_model=ApiResponse[ProductRead],
    summary="Update product",
    description="Multipart form; a new image file replaces the stored one.",
)
async def update_product(
    product_id: UUID,
    request: Request,
    principal: StaffPrincipal,
    service: ProductSvc,
) -> ApiResponse[ProductRead]:
    fields, image = await read_product_form(request)
    data = parse_form(ProductUpdate, fields)
    product = await service.update_product(product_id, data, principal, image)
    return ApiResponse(data=ProductRead.model_validate(product))


@router.patch(
    "/{product_id}/availability",
    response_model=ApiResponse[ProductRead],
    summary="Set availability",
    description="Marks a product in or out of stock and notifies open menus.",
)
async def set_availability(
    product_id: UUID,
    data: AvailabilityUpdate,
    principal: StaffPrincipal,
    service: ProductSvc,
) -> ApiResponse[ProductRead]:
    product = await service.set_availability(product_id, data.is_available, principal)
    return ApiResponse(data=ProductRead.model_validate(product))


@router.delete(
    "/{product_id}",
    response_model=ApiResponse[None],
    summary="Delete product",
)
async def delete_product(
    product_id: UUID,
    principal: StaffPrincipal,
    service: ProductSvc,
) -> ApiResponse[None]:
    await service.delete_product(product_id, principal)
    return ApiResponse(message="Product deleted")
