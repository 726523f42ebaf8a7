"""Pydantic request/response models for the HTTP boundary.

JSON keys are camelCase on the wire; Python attributes stay snake_case.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from catalog.application.dto import ProductDTO, ProductListItemDTO
from catalog.application.pagination import PaginatedResult


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Requests -----------------------------------------------------------------


class CreateProductRequest(CamelModel):
    code: str
    name: str
    description: str | None = None
    price: Decimal
    stock: int


class UpdateProductRequest(CamelModel):
    name: str
    description: str | None = None
    price: Decimal
    stock: int


class AdjustStockRequest(CamelModel):
    delta: int


# --- Responses ----------------------------------------------------------------


class CreatedResponse(CamelModel):
    id: str


class StockResponse(CamelModel):
    stock: int


class ErrorResponse(CamelModel):
    error: str


class ProductResponse(CamelModel):
    id: str
    code: str
    name: str
    description: str
    price: Decimal
    stock: int
    created_at: datetime
    updated_at: datetime | None

    @staticmethod
    def from_dto(dto: ProductDTO) -> ProductResponse:
        return ProductResponse(
            id=dto.id,
            code=dto.code,
            name=dto.name,
            description=dto.description,
            price=dto.price,
            stock=dto.stock,
            created_at=dto.created_at,
            updated_at=dto.updated_at,
        )


class ProductListItemResponse(CamelModel):
    code: str
    name: str


class ProductPageResponse(CamelModel):
    items: list[ProductListItemResponse]
    total_items: int
    total_pages: int
    page: int
    page_size: int

    @staticmethod
    def from_page(page: PaginatedResult[ProductListItemDTO]) -> ProductPageResponse:
        return ProductPageResponse(
            items=[
                ProductListItemResponse(code=item.code, name=item.name)
                for item in page.items
            ],
            total_items=page.total_items,
            total_pages=page.total_pages,
            page=page.page,
            page_size=page.page_size,
        )
