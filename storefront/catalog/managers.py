"""Entity managers for the catalog tables.

Each manager owns the validation and integrity rules for one table:
name uniqueness, foreign-key existence on product writes, the deletion
guard on categories and marks, and partial-update semantics for products.
Managers flush but never commit; the request-scoped session decides.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, ClassVar, Generic, TypeVar

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from storefront.catalog.models import Category, Mark, Product
from storefront.domain.exceptions import (
    AlreadyExistsError,
    BadRequestError,
    ConflictError,
    NotFoundError,
)

logger = structlog.get_logger()

EntityT = TypeVar("EntityT", Category, Mark)


# ============================================================================
# Data Transfer Objects
# ============================================================================


@dataclass
class ProductData:
    """Incoming product fields.

    Fields left as None are treated as "not provided": required on
    create, left untouched on update.
    """

    name: str | None = None
    description: str | None = None
    price: Decimal | float | int | str | None = None
    stock: int | None = None
    category_id: int | None = None
    mark_id: int | None = None


@dataclass
class FullProduct:
    """A product together with its category and mark rows.

    Either relation is None when the referenced row could not be found.
    """

    product: Product
    category: Category | None
    mark: Mark | None


# Bounds of the products.price Numeric(10, 2) and products.stock Integer columns
PRICE_QUANTUM = Decimal("0.01")
PRICE_LIMIT = Decimal("100000000")
MAX_STOCK = 2**31 - 1


def _to_price(value: Any) -> Decimal:
    try:
        price = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise BadRequestError(f"Invalid price: {value!r}") from exc
    if not price.is_finite() or price < 0:
        raise BadRequestError(f"Price must be a non-negative number, got {value!r}")
    if price >= PRICE_LIMIT:
        raise BadRequestError(f"Price must be below {PRICE_LIMIT}, got {value!r}")

    quantized = price.quantize(PRICE_QUANTUM)
    if quantized != price:
        raise BadRequestError(f"Price must have at most 2 decimal places, got {value!r}")
    return quantized


def _to_stock(value: Any) -> int:
    try:
        stock = int(value)
    except (TypeError, ValueError) as exc:
        raise BadRequestError(f"Invalid stock: {value!r}") from exc
    if stock < 0 or stock > MAX_STOCK:
        raise BadRequestError(
            f"Stock must be an integer between 0 and {MAX_STOCK}, got {value!r}"
        )
    return stock


# ============================================================================
# Category / Mark
# ============================================================================


class NamedEntityManager(Generic[EntityT]):
    """Shared manager for tables identified by a unique name.

    Subclasses bind the ORM model, a display label used in error
    messages, and the name of the Product column that references the table.
    """

    model: ClassVar[type]
    label: ClassVar[str]
    product_reference: ClassVar[str]

    def __init__(self, session: AsyncSession) -> None:
        """Initialize manager with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def get_by_id(
        self,
        entity_id: int,
        include_products: bool = False,
    ) -> EntityT | None:
        """Get a row by ID.

        Args:
            entity_id: Row ID.
            include_products: Whether to eagerly load referencing products.

        Returns:
            The row if found, None otherwise.
        """
        query = select(self.model).where(self.model.id == entity_id)

        if include_products:
            query = query.options(selectinload(self.model.products)).execution_options(
                populate_existing=True
            )

        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_all(self) -> Sequence[EntityT]:
        """List all rows, without related products."""
        result = await self.session.execute(select(self.model).order_by(self.model.id))
        return result.scalars().all()

    async def get_by_name(self, name: str) -> EntityT | None:
        """Get a row by exact (case-sensitive) name."""
        result = await self.session.execute(
            select(self.model).where(self.model.name == name)
        )
        return result.scalar_one_or_none()

    async def create(self, name: str) -> EntityT:
        """Create a row.

        Args:
            name: Unique name.

        Returns:
            The created row.

        Raises:
            BadRequestError: If the name is blank.
            AlreadyExistsError: If the name is already taken.
        """
        name = self._require_name(name)

        if await self.get_by_name(name) is not None:
            raise AlreadyExistsError(f"{self.label} already exists.", details={"name": name})

        entity = self.model(name=name)
        self.session.add(entity)
        await self._flush_unique(name)

        logger.info(f"Created {self.label.lower()}", entity_id=entity.id, name=name)
        return entity

    async def update(self, entity_id: int, name: str) -> EntityT:
        """Rename a row.

        Args:
            entity_id: Row ID.
            name: New unique name.

        Returns:
            The updated row.

        Raises:
            BadRequestError: If the name is blank.
            NotFoundError: If the row does not exist.
            AlreadyExistsError: If another row already has the name.
        """
        name = self._require_name(name)

        entity = await self.get_by_id(entity_id)
        if entity is None:
            raise NotFoundError(f"{self.label} not found.", details={"id": entity_id})

        same_name = await self.get_by_name(name)
        if same_name is not None and same_name.id != entity.id:
            raise AlreadyExistsError(f"{self.label} already exists.", details={"name": name})

        entity.name = name
        await self._flush_unique(name)

        logger.info(f"Updated {self.label.lower()}", entity_id=entity.id, name=name)
        return entity

    async def delete(self, entity_id: int) -> EntityT:
        """Delete a row that no product references.

        Args:
            entity_id: Row ID.

        Returns:
            Snapshot of the deleted row.

        Raises:
            NotFoundError: If the row does not exist.
            ConflictError: If one or more products reference the row.
        """
        entity = await self.get_by_id(entity_id)
        if entity is None:
            raise NotFoundError(f"{self.label} not found.", details={"id": entity_id})

        references = await self.count_products(entity_id)
        if references > 0:
            raise ConflictError(
                f"Cannot delete {self.label.lower()} with associated products.",
                details={"id": entity_id, "product_count": references},
            )

        await self.session.delete(entity)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            # A product was attached between the check and the delete
            raise ConflictError(
                f"Cannot delete {self.label.lower()} with associated products.",
                details={"id": entity_id},
            ) from exc

        logger.info(f"Deleted {self.label.lower()}", entity_id=entity_id, name=entity.name)
        return entity

    async def count_products(self, entity_id: int) -> int:
        """Count products that reference the row."""
        result = await self.session.execute(
            select(func.count(Product.id)).where(
                getattr(Product, self.product_reference) == entity_id
            )
        )
        return result.scalar_one()

    async def get_or_create(self, name: str) -> tuple[EntityT, bool]:
        """Fetch a row by name, creating it when missing.

        Returns:
            The row and whether it was created.
        """
        existing = await self.get_by_name(name)
        if existing is not None:
            return existing, False
        return await self.create(name), True

    def _require_name(self, name: str | None) -> str:
        if name is None or not name.strip():
            raise BadRequestError("Bad request. Missing required fields.", details={"field": "name"})
        return name

    async def _flush_unique(self, name: str) -> None:
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise AlreadyExistsError(f"{self.label} already exists.", details={"name": name}) from exc


class CategoryManager(NamedEntityManager[Category]):
    """Manager for the categories table."""

    model = Category
    label = "Category"
    product_reference = "category_id"


class MarkManager(NamedEntityManager[Mark]):
    """Manager for the marks table."""

    model = Mark
    label = "Mark"
    product_reference = "mark_id"


# ============================================================================
# Product
# ============================================================================


class ProductManager:
    """Manager for the products table.

    Example usage:
        async with async_session_factory() as session:
            manager = ProductManager(session)
            product = await manager.create(
                ProductData(name="Laptop", price=999, category_id=1, mark_id=2)
            )
            await session.commit()
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize manager with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session
        self.categories = CategoryManager(session)
        self.marks = MarkManager(session)

    async def get_by_id(self, product_id: int, expand: bool = False) -> Product | FullProduct:
        """Get a product by ID.

        Args:
            product_id: Product ID.
            expand: Whether to resolve the category and mark rows.

        Returns:
            The bare product, or a FullProduct when expand is set.

        Raises:
            NotFoundError: If the product does not exist.
        """
        product = await self.session.get(Product, product_id)
        if product is None:
            raise NotFoundError("Product not found.", details={"id": product_id})

        if not expand:
            return product

        category = await self.session.get(Category, product.category_id)
        mark = await self.session.get(Mark, product.mark_id)
        return FullProduct(product=product, category=category, mark=mark)

    async def get_all(self) -> Sequence[Product]:
        """List all products."""
        result = await self.session.execute(select(Product).order_by(Product.id))
        return result.scalars().all()

    async def get_by_name(self, name: str) -> Product | None:
        """Get a product by exact name."""
        result = await self.session.execute(select(Product).where(Product.name == name))
        return result.scalar_one_or_none()

    async def find_for_import(
        self,
        name: str,
        category_id: int,
        mark_id: int,
    ) -> Product | None:
        """Get a product by its (name, category, mark) tuple."""
        result = await self.session.execute(
            select(Product).where(
                Product.name == name,
                Product.category_id == category_id,
                Product.mark_id == mark_id,
            )
        )
        return result.scalar_one_or_none()

    async def create(self, data: ProductData) -> Product:
        """Create a product.

        Args:
            data: Product fields; name, price, category_id and mark_id are required.

        Returns:
            The created product.

        Raises:
            BadRequestError: If a required field is missing or invalid, or the
                referenced mark or category does not exist.
            AlreadyExistsError: If a product with the same name exists.
        """
        if (
            data.name is None
            or not data.name.strip()
            or data.price is None
            or data.category_id is None
            or data.mark_id is None
        ):
            raise BadRequestError("Bad request. Missing required fields.")

        price = _to_price(data.price)
        stock = _to_stock(data.stock) if data.stock is not None else 0

        mark = await self.marks.get_by_id(data.mark_id)
        category = await self.categories.get_by_id(data.category_id)
        if mark is None or category is None:
            raise BadRequestError(
                "Invalid mark or category.",
                details={"mark_id": data.mark_id, "category_id": data.category_id},
            )

        if await self.get_by_name(data.name) is not None:
            raise AlreadyExistsError(
                "Product with this name already exists.", details={"name": data.name}
            )

        product = Product(
            name=data.name,
            description=data.description,
            price=price,
            stock=stock,
            category_id=data.category_id,
            mark_id=data.mark_id,
        )
        self.session.add(product)
        await self._flush_unique(data.name)

        logger.info("Created product", product_id=product.id, name=product.name)
        return product

    async def update(self, product_id: int, data: ProductData) -> Product:
        """Partially update a product.

        Only fields that are not None are written; everything else keeps
        its stored value.

        Args:
            product_id: Product ID.
            data: Fields to change.

        Returns:
            The updated product.

        Raises:
            NotFoundError: If the product, or a given mark or category, does not exist.
            AlreadyExistsError: If the new name belongs to another product.
            BadRequestError: If a given field is invalid.
        """
        product = await self.get_by_id(product_id)

        if data.name is not None and data.name != product.name:
            if not data.name.strip():
                raise BadRequestError("Product name cannot be empty.")
            if await self.get_by_name(data.name) is not None:
                raise AlreadyExistsError(
                    "Product with this name already exists.", details={"name": data.name}
                )
            product.name = data.name

        if data.mark_id is not None:
            if await self.marks.get_by_id(data.mark_id) is None:
                raise NotFoundError("Mark not found.", details={"id": data.mark_id})
            product.mark_id = data.mark_id

        if data.category_id is not None:
            if await self.categories.get_by_id(data.category_id) is None:
                raise NotFoundError("Category not found.", details={"id": data.category_id})
            product.category_id = data.category_id

        if data.description is not None:
            product.description = data.description
        if data.price is not None:
            product.price = _to_price(data.price)
        if data.stock is not None:
            product.stock = _to_stock(data.stock)

        await self._flush_unique(product.name)

        logger.info("Updated product", product_id=product.id)
        return product

    async def replace(self, product_id: int, data: ProductData) -> Product:
        """Update a product, writing the description even when it is None.

        Used by the catalog import, where a blank description cell clears
        the stored one. Other fields follow update().

        Args:
            product_id: Product ID.
            data: Full set of row fields.

        Returns:
            The updated product.
        """
        product = await self.update(product_id, data)

        if data.description is None and product.description is not None:
            product.description = None
            await self.session.flush()

        return product

    async def delete(self, product_id: int) -> Product:
        """Delete a product.

        Args:
            product_id: Product ID.

        Returns:
            Snapshot of the deleted product.

        Raises:
            NotFoundError: If the product does not exist.
        """
        product = await self.get_by_id(product_id)

        await self.session.delete(product)
        await self.session.flush()

        logger.info("Deleted product", product_id=product_id, name=product.name)
        return product

    async def _flush_unique(self, name: str) -> None:
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise AlreadyExistsError(
                "Product with this name already exists.", details={"name": name}
            ) from exc
