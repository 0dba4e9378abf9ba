"""
Product catalog operations: listing, CRUD and cascade delete.
"""
import logging

from sqlalchemy.orm import Session

from app.errors import NotFoundError
from app.models import Product, PriceEntry
from app.models.timestamps import utcnow
from app.schemas.product import ProductCreate, ProductUpdate
from app.services.listing import apply_search, order_clause, paginate

logger = logging.getLogger(__name__)

PRODUCT_NOT_FOUND = "Producto no encontrado"
DEFAULT_LIMIT = 12

SORT_FIELDS = {
    "createdAt": Product.created_at,
    "name": Product.name,
}


def list_products(
    db: Session,
    search: str | None = None,
    sort_by: str | None = "createdAt",
    order: str | None = "desc",
    skip: int = 0,
    limit: int = DEFAULT_LIMIT,
) -> list[Product]:
    """Search name and description, newest first unless told otherwise."""
    query = apply_search(db.query(Product), search, [Product.name, Product.description])
    ordering = order_clause(sort_by, order != "asc", SORT_FIELDS, Product.created_at.desc())
    query = query.order_by(ordering, Product.id.desc())
    return paginate(query, skip, limit)


def get_product(db: Session, product_id: int) -> Product:
    product = db.query(Product).filter(Product.id == product_id).first()
    if not product:
        raise NotFoundError(PRODUCT_NOT_FOUND)
    return product


def create_product(db: Session, data: ProductCreate, image_url: str | None = None) -> Product:
    values = data.model_dump()
    if image_url:
        values["image"] = image_url

    product = Product(**values)
    db.add(product)
    db.commit()
    db.refresh(product)

    logger.info(f"Created product {product.id} ({product.name})")
    return product


def update_product(
    db: Session,
    product_id: int,
    data: ProductUpdate,
    image_url: str | None = None,
) -> Product:
    """Apply only the fields present in ``data``."""
    product = get_product(db, product_id)

    changes = data.model_dump(exclude_unset=True)
    if changes.get("name") is None:
        changes.pop("name", None)
    if image_url:
        changes["image"] = image_url

    for field, value in changes.items():
        setattr(product, field, value)
    product.updated_at = utcnow()

    db.commit()
    db.refresh(product)
    return product


def delete_product(db: Session, product_id: int) -> dict:
    """Delete a product and every price recorded for it in one transaction."""
    product = get_product(db, product_id)
    name = product.name

    try:
        deleted_prices = db.query(PriceEntry).filter(
            PriceEntry.product_id == product_id
        ).delete(synchronize_session=False)
        db.query(Product).filter(Product.id == product_id).delete(synchronize_session=False)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Deleted product {product_id} ({name}) and {deleted_prices} prices")
    return {
        "message": "Producto eliminado exitosamente",
        "deleted_prices": deleted_prices,
        "product_name": name,
    }
