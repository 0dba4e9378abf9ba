"""
Price comparison and price upsert.

A product's comparison page shows one paginated, sortable page of store
prices plus statistics. The statistics always cover every price recorded for
the product, so paging, sorting or filtering the page never changes them.
"""
import logging
from decimal import Decimal

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, contains_eager

from app.errors import NotFoundError
from app.models import PriceEntry, Product, Store
from app.models.timestamps import utcnow
from app.schemas.price import PriceStats, PriceUpsert
from app.services.listing import order_clause, paginate
from app.services.products import get_product
from app.services.stores import get_store

logger = logging.getLogger(__name__)

PRICE_NOT_FOUND = "Precio no encontrado"
DEFAULT_CURRENCY = "USD"
COMPARE_LIMIT = 10
LIST_LIMIT = 12

# Product comparison: unknown keys fall back to price ascending
COMPARE_SORT_FIELDS = {
    "price": PriceEntry.price,
    "lastUpdated": PriceEntry.last_updated,
    "storeName": Store.name,
}

# Price listing (and the per-store view): unknown keys fall back to
# lastUpdated descending
PRICE_SORT_FIELDS = {
    "price": PriceEntry.price,
    "lastUpdated": PriceEntry.last_updated,
    "productName": Product.name,
}


def _as_decimal(value) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def compute_price_stats(entries) -> PriceStats:
    """Counts over all entries; min/max/avg over available entries only."""
    available = [_as_decimal(e.price) for e in entries if e.is_available]
    total = len(entries)

    if not available:
        return PriceStats(
            total_stores=total,
            available_stores=0,
            unavailable_stores=total,
        )

    avg = sum(available, Decimal(0)) / len(available)
    return PriceStats(
        total_stores=total,
        available_stores=len(available),
        unavailable_stores=total - len(available),
        min_price=float(min(available)),
        max_price=float(max(available)),
        avg_price=float(avg),
    )


def compare_product_prices(
    db: Session,
    product_id: int,
    is_available: bool | None = None,
    sort_by: str | None = "price",
    order: str | None = "asc",
    skip: int = 0,
    limit: int = COMPARE_LIMIT,
) -> dict:
    """
    Compare the prices of one product across stores.

    Args:
        product_id: Product to compare
        is_available: Only show available (True) or unavailable (False) prices
        sort_by: ``price``, ``lastUpdated`` or ``storeName``
        order: ``desc`` for descending, anything else ascending
        skip, limit: Page of prices to return

    Returns:
        Dict with ``product``, the page of ``prices`` (with store contact
        fields) and ``stats`` for the whole product.
    """
    product = get_product(db, product_id)

    query = db.query(PriceEntry).join(PriceEntry.store).options(
        contains_eager(PriceEntry.store)
    ).filter(PriceEntry.product_id == product_id)

    if is_available is not None:
        query = query.filter(PriceEntry.is_available == is_available)

    ordering = order_clause(
        sort_by, order == "desc", COMPARE_SORT_FIELDS, PriceEntry.price.asc()
    )
    prices = paginate(query.order_by(ordering, PriceEntry.id), skip, limit)

    all_prices = db.query(PriceEntry).filter(PriceEntry.product_id == product_id).all()

    return {
        "product": product,
        "prices": prices,
        "stats": compute_price_stats(all_prices),
    }


def list_prices(
    db: Session,
    product_id: int | None = None,
    store_id: int | None = None,
    available: bool | None = None,
    sort_by: str | None = "lastUpdated",
    order: str | None = "desc",
    skip: int = 0,
    limit: int = LIST_LIMIT,
) -> list[PriceEntry]:
    """Prices joined with their product and store, most recently updated first."""
    query = db.query(PriceEntry).join(PriceEntry.product).join(PriceEntry.store).options(
        contains_eager(PriceEntry.product),
        contains_eager(PriceEntry.store),
    )

    if product_id is not None:
        query = query.filter(PriceEntry.product_id == product_id)

    if store_id is not None:
        query = query.filter(PriceEntry.store_id == store_id)

    if available is not None:
        query = query.filter(PriceEntry.is_available == available)

    ordering = order_clause(
        sort_by, order != "asc", PRICE_SORT_FIELDS, PriceEntry.last_updated.desc()
    )
    return paginate(query.order_by(ordering, PriceEntry.id.desc()), skip, limit)


def compare_by_store(
    db: Session,
    store_id: int,
    available: bool | None = None,
    sort_by: str | None = "lastUpdated",
    order: str | None = "desc",
    skip: int = 0,
    limit: int = LIST_LIMIT,
) -> list[PriceEntry]:
    """Every product price listed by one store."""
    get_store(db, store_id)
    return list_prices(
        db,
        store_id=store_id,
        available=available,
        sort_by=sort_by,
        order=order,
        skip=skip,
        limit=limit,
    )


def upsert_price(db: Session, data: PriceUpsert) -> PriceEntry:
    """
    Create the price for a (product, store) pair or overwrite the existing one.

    Every mutable field is replaced: omitted currency, availability and stock
    reset to USD, True and 0, omitted notes are cleared.
    """
    get_product(db, data.product_id)
    get_store(db, data.store_id)

    values = {
        "price": data.price,
        "currency": data.currency or DEFAULT_CURRENCY,
        "is_available": True if data.is_available is None else data.is_available,
        "stock_quantity": data.stock_quantity or 0,
        "notes": data.notes,
        "last_updated": utcnow(),
    }

    entry = db.query(PriceEntry).filter(
        PriceEntry.product_id == data.product_id,
        PriceEntry.store_id == data.store_id,
    ).first()

    if entry:
        for field, value in values.items():
            setattr(entry, field, value)
    else:
        entry = PriceEntry(product_id=data.product_id, store_id=data.store_id, **values)
        db.add(entry)

    try:
        db.commit()
    except IntegrityError:
        # Another request inserted the same pair first
        db.rollback()
        logger.warning(
            f"Duplicate price for product {data.product_id} at store {data.store_id}"
        )
        raise

    db.refresh(entry)
    logger.info(
        f"Saved price {entry.id}: product {entry.product_id} at store {entry.store_id} = {entry.price}"
    )
    return entry


def get_price(db: Session, price_id: int) -> PriceEntry:
    entry = db.query(PriceEntry).filter(PriceEntry.id == price_id).first()
    if not entry:
        raise NotFoundError(PRICE_NOT_FOUND)
    return entry


def delete_price(db: Session, price_id: int) -> dict:
    entry = get_price(db, price_id)
    db.delete(entry)
    db.commit()
    logger.info(f"Deleted price {price_id}")
    return {"message": "Precio eliminado exitosamente", "id": price_id}
