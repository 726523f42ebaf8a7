"""Products API routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import JSONResponse

from catalog.application.adjust_stock import AdjustStockHandler
from catalog.application.commands import (
    AdjustStockCommand,
    CreateProductCommand,
    DeleteProductCommand,
    GetProductQuery,
    GetProductsQuery,
    UpdateProductCommand,
)
from catalog.application.create_product import CreateProductHandler
from catalog.application.delete_product import DeleteProductHandler
from catalog.application.get_product import GetProductHandler
from catalog.application.get_products import GetProductsHandler
from catalog.application.result import ErrorKind, Result
from catalog.application.update_product import UpdateProductHandler
from catalog.domain.repository.product_repository import ProductRepository
from catalog.infrastructure.api.deps import get_product_repository
from catalog.infrastructure.api.schemas import (
    AdjustStockRequest,
    CreatedResponse,
    CreateProductRequest,
    ErrorResponse,
    ProductPageResponse,
    ProductResponse,
    StockResponse,
    UpdateProductRequest,
)
from catalog.infrastructure.config import get_settings

router = APIRouter(prefix="/products", tags=["Products"])

_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVARIANT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.STORE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _error_response(result: Result) -> JSONResponse:
    return JSONResponse(
        status_code=_STATUS_BY_KIND[result.error_kind],
        content={"error": result.error},
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CreatedResponse,
    responses=_ERROR_RESPONSES,
)
def create_product(
    body: CreateProductRequest,
    response: Response,
    repo: ProductRepository = Depends(get_product_repository),
):
    command = CreateProductCommand(
        code=body.code,
        name=body.name,
        description=body.description,
        price=body.price,
        stock=body.stock,
    )
    result = CreateProductHandler(repo).handle(command)
    if result.is_failure:
        return _error_response(result)
    response.headers["Location"] = f"{router.prefix}/{result.value}"
    return CreatedResponse(id=result.value)


@router.get("", response_model=ProductPageResponse, responses=_ERROR_RESPONSES)
def list_products(
    page: int = Query(1),
    page_size: int | None = Query(None, alias="pageSize"),
    repo: ProductRepository = Depends(get_product_repository),
):
    if page_size is None:
        page_size = get_settings().DEFAULT_PAGE_SIZE
    result = GetProductsHandler(repo).handle(
        GetProductsQuery(page=page, page_size=page_size)
    )
    if result.is_failure:
        return _error_response(result)
    return ProductPageResponse.from_page(result.value)


@router.get("/{product_id}", response_model=ProductResponse, responses=_ERROR_RESPONSES)
def get_product(
    product_id: str,
    repo: ProductRepository = Depends(get_product_repository),
):
    result = GetProductHandler(repo).handle(GetProductQuery(product_id))
    if result.is_failure:
        return _error_response(result)
    return ProductResponse.from_dto(result.value)


@router.put(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_ERROR_RESPONSES,
)
def update_product(
    product_id: str,
    body: UpdateProductRequest,
    repo: ProductRepository = Depends(get_product_repository),
):
    command = UpdateProductCommand(
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        stock=body.stock,
    )
    result = UpdateProductHandler(repo).handle(command)
    if result.is_failure:
        return _error_response(result)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_ERROR_RESPONSES,
)
def delete_product(
    product_id: str,
    repo: ProductRepository = Depends(get_product_repository),
):
    result = DeleteProductHandler(repo).handle(DeleteProductCommand(product_id))
    if result.is_failure:
        return _error_response(result)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{product_id}/stock-adjustments",
    response_model=StockResponse,
    responses=_ERROR_RESPONSES,
)
def adjust_stock(
    product_id: str,
    body: AdjustStockRequest,
    repo: ProductRepository = Depends(get_product_repository),
):
    command = AdjustStockCommand(product_id=product_id, delta=body.delta)
    result = AdjustStockHandler(repo).handle(command)
    if result.is_failure:
        return _error_response(result)
    return StockResponse(stock=result.value)
