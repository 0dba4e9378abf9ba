from app.schemas.store import Store, StoreCreate, StoreUpdate, StoreSummary, StoreDeleted
from app.schemas.product import Product, ProductCreate, ProductUpdate, ProductSummary, ProductDeleted
from app.schemas.price import PriceEntry, PriceUpsert, PriceStats, PriceComparison, PriceDeleted

__all__ = [
    "Store", "StoreCreate", "StoreUpdate", "StoreSummary", "StoreDeleted",
    "Product", "ProductCreate", "ProductUpdate", "ProductSummary", "ProductDeleted",
    "PriceEntry", "PriceUpsert", "PriceStats", "PriceComparison", "PriceDeleted",
]
