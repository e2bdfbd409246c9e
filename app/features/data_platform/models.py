"""Data platform ORM models for the inventory schema.

Tables:
- stores: physical store locations.
- products: per-store catalogue with price and current stock.
- product_sales: individual sale events (fact table).

``product_sales.store_id`` duplicates ``products.store_id`` so that time-range
queries filtered by store stay on a single table. It is written from the
product's store at insert time and not re-validated afterwards.

Deleting a store removes its products and their sales through database-level
``ON DELETE CASCADE``; the ORM relationships use ``passive_deletes`` so the
database does the work.
"""

import datetime
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base
from app.shared.models import CreatedAtMixin, TimestampMixin

# ============================================================================
# DIMENSION TABLES
# ============================================================================


class Store(TimestampMixin, Base):
    """Store table.

    Attributes:
        id: Primary key.
        name: Store display name.
        address: Street address.
        city: City location.
        state: State or region.
        zip_code: Postal code.
        phone_number: Contact phone (optional).
        email: Contact email (optional).
    """

    __tablename__ = "stores"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255))
    address: Mapped[str] = mapped_column(Text)
    city: Mapped[str] = mapped_column(String(100))
    state: Mapped[str] = mapped_column(String(50))
    zip_code: Mapped[str] = mapped_column(String(10))
    phone_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Relationships (one-to-many)
    products: Mapped[list["Product"]] = relationship(
        back_populates="store",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    sales: Mapped[list["ProductSale"]] = relationship(
        back_populates="store",
        passive_deletes=True,
    )


class Product(TimestampMixin, Base):
    """Product table.

    Attributes:
        id: Primary key.
        store_id: Owning store (FK, cascade delete).
        name: Product display name.
        description: Free-text description (optional).
        category: Product category.
        price: Current unit price, 2 decimal places.
        quantity_in_stock: Units currently on hand (never negative).
        sku: Stock keeping unit.
    """

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    store_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("stores.id", ondelete="CASCADE"), index=True
    )
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(100), index=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), index=True)
    quantity_in_stock: Mapped[int] = mapped_column(
        Integer, default=0, server_default="0", index=True
    )
    sku: Mapped[str] = mapped_column(String(100), index=True)

    # Relationships
    store: Mapped["Store"] = relationship(back_populates="products")
    sales: Mapped[list["ProductSale"]] = relationship(
        back_populates="product",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint("quantity_in_stock >= 0", name="ck_products_stock_non_negative"),
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
    )


# ============================================================================
# FACT TABLES
# ============================================================================


class ProductSale(CreatedAtMixin, Base):
    """Sale event fact table.

    ``total_amount`` is supplied by the writer (normally unit_price * quantity_sold)
    and is not enforced by a constraint; analytics trust the stored value.

    Attributes:
        id: Surrogate primary key.
        product_id: Product sold (FK, cascade delete).
        store_id: Store of the product at sale time (FK, cascade delete).
        quantity_sold: Units sold in this event.
        unit_price: Price per unit at time of sale.
        total_amount: Total sale amount.
        sale_date: When the sale happened (defaults to insert time).
    """

    __tablename__ = "product_sales"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    product_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("products.id", ondelete="CASCADE"), index=True
    )
    store_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("stores.id", ondelete="CASCADE"), index=True
    )
    quantity_sold: Mapped[int] = mapped_column(Integer)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(10, 2))
    total_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    sale_date: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        index=True,
    )

    # Relationships
    product: Mapped["Product"] = relationship(back_populates="sales")
    store: Mapped["Store"] = relationship(back_populates="sales")

    __table_args__ = (
        # Composite index for the dominant query pattern: date range + store
        Index("ix_product_sales_sale_date_store_id", "sale_date", "store_id"),
    )
