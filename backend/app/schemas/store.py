from pydantic import field_validator
from datetime import datetime
from app.schemas.base import CamelModel, clean_optional, clean_required

OPTIONAL_FIELDS = ("description", "address", "phone", "website", "image")


class StoreBase(CamelModel):
    name: str
    description: str | None = None
    address: str | None = None
    phone: str | None = None
    website: str | None = None
    image: str | None = None

    @field_validator("name")
    @classmethod
    def _name(cls, value: str) -> str:
        return clean_required(value)

    @field_validator(*OPTIONAL_FIELDS)
    @classmethod
    def _optional_text(cls, value: str | None) -> str | None:
        return clean_optional(value)


class StoreCreate(StoreBase):
    pass


class StoreUpdate(CamelModel):
    name: str | None = None
    description: str | None = None
    address: str | None = None
    phone: str | None = None
    website: str | None = None
    image: str | None = None

    @field_validator("name")
    @classmethod
    def _name(cls, value: str | None) -> str | None:
        return clean_required(value) if value is not None else None

    @field_validator(*OPTIONAL_FIELDS)
    @classmethod
    def _optional_text(cls, value: str | None) -> str | None:
        return clean_optional(value)


class Store(StoreBase):
    id: int
    created_at: datetime
    updated_at: datetime


class StoreSummary(CamelModel):
    """Store contact fields shown next to a price."""
    id: int
    name: str
    address: str | None = None
    phone: str | None = None
    website: str | None = None


class StoreDeleted(CamelModel):
    message: str
    deleted_prices: int
    store_name: str
