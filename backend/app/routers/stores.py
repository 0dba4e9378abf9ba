from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from app.database import get_db
from app.dependencies import EntityPayload, entity_payload, get_image_uploader
from app.errors import operation_error
from app.schemas.price import PriceEntry as PriceEntrySchema
from app.schemas.store import Store as StoreSchema, StoreCreate, StoreUpdate, StoreDeleted
from app.services import pricing
from app.services import stores as store_service
from app.services.image_upload import ImageUploadService

router = APIRouter(prefix="/stores", tags=["stores"])


@router.get("/", response_model=list[StoreSchema])
def list_stores(
    search: str | None = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(store_service.DEFAULT_LIMIT, ge=1, le=100),
    sort_by: str = Query("createdAt", alias="sortBy"),
    order: str = "desc",
    db: Session = Depends(get_db)
):
    """List stores, newest first by default."""
    with operation_error("Error al obtener las tiendas"):
        return store_service.list_stores(
            db, search=search, sort_by=sort_by, order=order, skip=skip, limit=limit
        )


@router.post("/", response_model=StoreSchema, status_code=status.HTTP_201_CREATED)
def create_store(
    payload: EntityPayload = Depends(entity_payload),
    uploader: ImageUploadService = Depends(get_image_uploader),
    db: Session = Depends(get_db)
):
    """Create a store from JSON or a multipart form with an optional image."""
    data = StoreCreate.model_validate(payload.data)
    with operation_error("Error al crear la tienda"):
        image_url = uploader.upload(payload.image) if payload.image else None
        return store_service.create_store(db, data, image_url=image_url)


@router.get("/{store_id}", response_model=StoreSchema)
def get_store(store_id: int, db: Session = Depends(get_db)):
    with operation_error("Error al obtener la tienda"):
        return store_service.get_store(db, store_id)


@router.put("/{store_id}", response_model=StoreSchema)
def update_store(
    store_id: int,
    payload: EntityPayload = Depends(entity_payload),
    uploader: ImageUploadService = Depends(get_image_uploader),
    db: Session = Depends(get_db)
):
    data = StoreUpdate.model_validate(payload.data)
    with operation_error("Error al actualizar la tienda"):
        store_service.get_store(db, store_id)
        image_url = uploader.upload(payload.image) if payload.image else None
        return store_service.update_store(db, store_id, data, image_url=image_url)


@router.delete("/{store_id}", response_model=StoreDeleted)
def delete_store(store_id: int, db: Session = Depends(get_db)):
    """Delete a store together with every price it lists."""
    with operation_error("Error al eliminar la tienda"):
        return store_service.delete_store(db, store_id)


@router.get("/{store_id}/prices", response_model=list[PriceEntrySchema])
def list_store_prices(
    store_id: int,
    available: bool | None = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(pricing.LIST_LIMIT, ge=1, le=100),
    sort_by: str = Query("lastUpdated", alias="sortBy"),
    order: str = "desc",
    db: Session = Depends(get_db)
):
    """Products sold by a store with their prices."""
    with operation_error("Error al obtener los precios de la tienda"):
        return pricing.compare_by_store(
            db, store_id, available=available, sort_by=sort_by, order=order,
            skip=skip, limit=limit
        )
