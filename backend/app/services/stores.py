"""
Store directory operations: listing, CRUD and cascade delete.
"""
import logging

from sqlalchemy.orm import Session

from app.errors import NotFoundError
from app.models import Store, PriceEntry
from app.models.timestamps import utcnow
from app.schemas.store import StoreCreate, StoreUpdate
from app.services.listing import apply_search, order_clause, paginate

logger = logging.getLogger(__name__)

STORE_NOT_FOUND = "Tienda no encontrada"
DEFAULT_LIMIT = 12

SORT_FIELDS = {
    "createdAt": Store.created_at,
    "name": Store.name,
}


def list_stores(
    db: Session,
    search: str | None = None,
    sort_by: str | None = "createdAt",
    order: str | None = "desc",
    skip: int = 0,
    limit: int = DEFAULT_LIMIT,
) -> list[Store]:
    query = apply_search(
        db.query(Store), search, [Store.name, Store.description, Store.address]
    )
    ordering = order_clause(sort_by, order != "asc", SORT_FIELDS, Store.created_at.desc())
    query = query.order_by(ordering, Store.id.desc())
    return paginate(query, skip, limit)


def get_store(db: Session, store_id: int) -> Store:
    store = db.query(Store).filter(Store.id == store_id).first()
    if not store:
        raise NotFoundError(STORE_NOT_FOUND)
    return store


def create_store(db: Session, data: StoreCreate, image_url: str | None = None) -> Store:
    values = data.model_dump()
    if image_url:
        values["image"] = image_url

    store = Store(**values)
    db.add(store)
    db.commit()
    db.refresh(store)

    logger.info(f"Created store {store.id} ({store.name})")
    return store


def update_store(
    db: Session,
    store_id: int,
    data: StoreUpdate,
    image_url: str | None = None,
) -> Store:
    store = get_store(db, store_id)

    changes = data.model_dump(exclude_unset=True)
    if changes.get("name") is None:
        changes.pop("name", None)
    if image_url:
        changes["image"] = image_url

    for field, value in changes.items():
        setattr(store, field, value)
    store.updated_at = utcnow()

    db.commit()
    db.refresh(store)
    return store


def delete_store(db: Session, store_id: int) -> dict:
    """Delete a store and every price it lists in one transaction."""
    store = get_store(db, store_id)
    name = store.name

    try:
        deleted_prices = db.query(PriceEntry).filter(
            PriceEntry.store_id == store_id
        ).delete(synchronize_session=False)
        db.query(Store).filter(Store.id == store_id).delete(synchronize_session=False)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Deleted store {store_id} ({name}) and {deleted_prices} prices")
    return {
        "message": "Tienda eliminada exitosamente",
        "deleted_prices": deleted_prices,
        "store_name": name,
    }
