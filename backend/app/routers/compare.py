from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.database import get_db
from app.errors import operation_error
from app.schemas.price import PriceComparison
from app.services import pricing

router = APIRouter(prefix="/compare", tags=["compare"])


@router.get("/{product_id}", response_model=PriceComparison)
def compare_prices(
    product_id: int,
    is_available: bool | None = Query(None, alias="isAvailable"),
    skip: int = Query(0, ge=0),
    limit: int = Query(pricing.COMPARE_LIMIT, ge=1, le=100),
    sort_by: str = Query("price", alias="sortBy"),
    order: str = "asc",
    db: Session = Depends(get_db)
):
    """
    Compare a product's price across stores.

    ``stats`` always covers every store price of the product; the
    availability filter, sort and paging only affect ``prices``.
    """
    with operation_error("Error al comparar precios"):
        return pricing.compare_product_prices(
            db,
            product_id,
            is_available=is_available,
            sort_by=sort_by,
            order=order,
            skip=skip,
            limit=limit,
        )
