from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from app.database import get_db
from app.errors import operation_error
from app.schemas.price import PriceEntry as PriceEntrySchema, PriceUpsert, PriceDeleted
from app.services import pricing

router = APIRouter(prefix="/prices", tags=["prices"])


@router.get("/", response_model=list[PriceEntrySchema])
def list_prices(
    product_id: int | None = Query(None, alias="productId"),
    store_id: int | None = Query(None, alias="storeId"),
    available: bool | None = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(pricing.LIST_LIMIT, ge=1, le=100),
    sort_by: str = Query("lastUpdated", alias="sortBy"),
    order: str = "desc",
    db: Session = Depends(get_db)
):
    """List prices with optional product, store and availability filters."""
    with operation_error("Error al obtener los precios"):
        return pricing.list_prices(
            db,
            product_id=product_id,
            store_id=store_id,
            available=available,
            sort_by=sort_by,
            order=order,
            skip=skip,
            limit=limit,
        )


@router.post("/", response_model=PriceEntrySchema, status_code=status.HTTP_201_CREATED)
def upsert_price(data: PriceUpsert, db: Session = Depends(get_db)):
    """Create the price of a product at a store, or replace the existing one."""
    with operation_error("Error al crear/actualizar el precio"):
        return pricing.upsert_price(db, data)


@router.get("/{price_id}", response_model=PriceEntrySchema)
def get_price(price_id: int, db: Session = Depends(get_db)):
    with operation_error("Error al obtener el precio"):
        return pricing.get_price(db, price_id)


@router.delete("/{price_id}", response_model=PriceDeleted)
def delete_price(price_id: int, db: Session = Depends(get_db)):
    with operation_error("Error al eliminar el precio"):
        return pricing.delete_price(db, price_id)
