"""SQLAlchemy models for the product catalog.

Defines the Category, Mark and Product tables. Names are unique per
table and products reference their category and mark with restrictive
foreign keys, so a referenced row can never be removed underneath them.
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.infrastructure.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Category(Base):
    """Product category.

    Attributes:
        id: Store-assigned identifier.
        name: Unique category name.
        products: Products filed under this category (loaded on demand).
    """

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    products: Mapped[list["Product"]] = relationship(
        "Product",
        back_populates="category",
        lazy="raise",
        passive_deletes="all",
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Category(id={self.id}, name={self.name})>"


class Mark(Base):
    """Product mark (brand).

    Attributes:
        id: Store-assigned identifier.
        name: Unique mark name.
        products: Products sold under this mark (loaded on demand).
    """

    __tablename__ = "marks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    products: Mapped[list["Product"]] = relationship(
        "Product",
        back_populates="mark",
        lazy="raise",
        passive_deletes="all",
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Mark(id={self.id}, name={self.name})>"


class Product(Base):
    """Product in the catalog.

    Attributes:
        id: Store-assigned identifier.
        name: Product name, unique across all products.
        description: Optional product description.
        price: Non-negative price.
        stock: Non-negative quantity on hand.
        category_id: Owning category.
        mark_id: Owning mark.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("categories.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    mark_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("marks.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    # Relationships
    category: Mapped["Category"] = relationship(
        "Category", back_populates="products", lazy="raise"
    )
    mark: Mapped["Mark"] = relationship("Mark", back_populates="products", lazy="raise")

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(id={self.id}, name={self.name[:30]})>"
