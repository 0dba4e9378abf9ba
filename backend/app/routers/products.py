from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from app.database import get_db
from app.dependencies import EntityPayload, entity_payload, get_image_uploader
from app.errors import operation_error
from app.schemas.product import Product as ProductSchema, ProductCreate, ProductUpdate, ProductDeleted
from app.services import products as product_service
from app.services.image_upload import ImageUploadService

router = APIRouter(prefix="/products", tags=["products"])


@router.get("/", response_model=list[ProductSchema])
def list_products(
    search: str | None = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(product_service.DEFAULT_LIMIT, ge=1, le=100),
    sort_by: str = Query("createdAt", alias="sortBy"),
    order: str = "desc",
    db: Session = Depends(get_db)
):
    """List products, optionally searching name and description."""
    with operation_error("Error al obtener los productos"):
        return product_service.list_products(
            db, search=search, sort_by=sort_by, order=order, skip=skip, limit=limit
        )


@router.post("/", response_model=ProductSchema, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: EntityPayload = Depends(entity_payload),
    uploader: ImageUploadService = Depends(get_image_uploader),
    db: Session = Depends(get_db)
):
    """Create a product from JSON or a multipart form with an optional image."""
    data = ProductCreate.model_validate(payload.data)
    with operation_error("Error al crear el producto"):
        image_url = uploader.upload(payload.image) if payload.image else None
        return product_service.create_product(db, data, image_url=image_url)


@router.get("/{product_id}", response_model=ProductSchema)
def get_product(product_id: int, db: Session = Depends(get_db)):
    """Get a specific product by ID."""
    with operation_error("Error al obtener el producto"):
        return product_service.get_product(db, product_id)


@router.put("/{product_id}", response_model=ProductSchema)
def update_product(
    product_id: int,
    payload: EntityPayload = Depends(entity_payload),
    uploader: ImageUploadService = Depends(get_image_uploader),
    db: Session = Depends(get_db)
):
    """Update the fields sent; a new image replaces the stored one."""
    data = ProductUpdate.model_validate(payload.data)
    with operation_error("Error al actualizar el producto"):
        product_service.get_product(db, product_id)
        image_url = uploader.upload(payload.image) if payload.image else None
        return product_service.update_product(db, product_id, data, image_url=image_url)


@router.delete("/{product_id}", response_model=ProductDeleted)
def delete_product(product_id: int, db: Session = Depends(get_db)):
    """Delete a product together with its prices in every store."""
    with operation_error("Error al eliminar el producto"):
        return product_service.delete_product(db, product_id)
