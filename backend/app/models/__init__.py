from app.models.product import Product
from app.models.store import Store
from app.models.price import PriceEntry

__all__ = [
    "Product",
    "Store",
    "PriceEntry",
]
