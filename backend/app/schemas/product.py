from pydantic import field_validator
from datetime import datetime
from app.schemas.base import CamelModel, clean_optional, clean_required


class ProductBase(CamelModel):
    name: str
    description: str | None = None
    image: str | None = None

    @field_validator("name")
    @classmethod
    def _name(cls, value: str) -> str:
        return clean_required(value)

    @field_validator("description", "image")
    @classmethod
    def _optional_text(cls, value: str | None) -> str | None:
        return clean_optional(value)


class ProductCreate(ProductBase):
    pass


class ProductUpdate(CamelModel):
    """Partial update; only the fields sent are changed."""
    name: str | None = None
    description: str | None = None
    image: str | None = None

    @field_validator("name")
    @classmethod
    def _name(cls, value: str | None) -> str | None:
        return clean_required(value) if value is not None else None

    @field_validator("description", "image")
    @classmethod
    def _optional_text(cls, value: str | None) -> str | None:
        return clean_optional(value)


class Product(ProductBase):
    id: int
    created_at: datetime
    updated_at: datetime


class ProductSummary(CamelModel):
    """Abbreviated product shown next to a price."""
    id: int
    name: str
    description: str | None = None


class ProductDeleted(CamelModel):
    message: str
    deleted_prices: int
    product_name: str
