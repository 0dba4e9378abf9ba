from pydantic import Field, field_validator
from datetime import datetime
from decimal import Decimal
from app.schemas.base import CamelModel, clean_optional
from app.schemas.product import Product, ProductSummary
from app.schemas.store import StoreSummary


class PriceUpsert(CamelModel):
    """Create-or-replace the price of a product at a store.

    Omitted optional fields fall back to their defaults, they never keep
    the previously stored value.
    """
    product_id: int
    store_id: int
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    currency: str | None = None
    is_available: bool | None = None
    stock_quantity: int | None = Field(default=None, ge=0)
    notes: str | None = None

    @field_validator("currency", "notes")
    @classmethod
    def _optional_text(cls, value: str | None) -> str | None:
        return clean_optional(value)


class PriceEntry(CamelModel):
    id: int
    product_id: int
    store_id: int
    price: float
    currency: str
    is_available: bool
    stock_quantity: int
    notes: str | None = None
    last_updated: datetime
    product: ProductSummary | None = None
    store: StoreSummary | None = None


class PriceStats(CamelModel):
    """Summary over every price of a product, independent of paging."""
    total_stores: int = 0
    available_stores: int = 0
    unavailable_stores: int = 0
    min_price: float | None = None
    max_price: float | None = None
    avg_price: float | None = None


class PriceComparison(CamelModel):
    product: Product
    prices: list[PriceEntry]
    stats: PriceStats


class PriceDeleted(CamelModel):
    message: str
    id: int
