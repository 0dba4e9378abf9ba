from sqlalchemy import (
    Column, Integer, String, ForeignKey, Boolean, DateTime, Numeric, Text,
    UniqueConstraint, CheckConstraint,
)
from sqlalchemy.orm import relationship
from app.database import Base
from app.models.timestamps import utcnow


class PriceEntry(Base):
    __tablename__ = "price_entries"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    store_id = Column(Integer, ForeignKey("stores.id"), nullable=False, index=True)
    price = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(10), nullable=False, default="USD")
    is_available = Column(Boolean, nullable=False, default=True, index=True)
    stock_quantity = Column(Integer, nullable=False, default=0)
    notes = Column(Text)
    last_updated = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # One price per product per store
    __table_args__ = (
        UniqueConstraint("product_id", "store_id", name="uq_price_product_store"),
        CheckConstraint("price >= 0", name="ck_price_non_negative"),
        CheckConstraint("stock_quantity >= 0", name="ck_stock_non_negative"),
    )

    # Relationships
    product = relationship("Product", back_populates="prices")
    store = relationship("Store", back_populates="prices")
