"""Bulk catalog import from CSV.

Each row names a product together with its mark and category. Marks and
categories are upserted by name; products are upserted by their
(name, category, mark) tuple, so re-importing the same file updates rows
in place instead of duplicating them.
"""

import csv
import io
from dataclasses import asdict, dataclass

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.catalog.managers import ProductData, ProductManager
from storefront.domain.exceptions import BadRequestError, DomainError

logger = structlog.get_logger()

REQUIRED_COLUMNS = ("Product", "Mark", "Category", "Description", "Price", "Stock")


@dataclass
class ImportRow:
    """One validated CSV row."""

    line: int
    product: str
    mark: str
    category: str
    description: str | None
    price: str
    stock: int


@dataclass
class ImportReport:
    """Summary of an import run."""

    rows: int = 0
    products_created: int = 0
    products_updated: int = 0
    categories_created: int = 0
    marks_created: int = 0

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary."""
        return asdict(self)


def parse_catalog_csv(text: str) -> list[ImportRow]:
    """Parse and validate catalog CSV text.

    Args:
        text: CSV content with a header row.

    Returns:
        Validated rows in file order.

    Raises:
        BadRequestError: If the header lacks a required column or a row is invalid.
    """
    reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")), delimiter=",")

    header = [name.strip() for name in (reader.fieldnames or [])]
    missing = [column for column in REQUIRED_COLUMNS if column not in header]
    if missing:
        raise BadRequestError(
            f"CSV is missing required columns: {', '.join(missing)}",
            details={"missing_columns": missing},
        )
    reader.fieldnames = header

    rows: list[ImportRow] = []
    for line, record in enumerate(reader, start=1):
        values = {key: (value or "").strip() for key, value in record.items() if key}
        if not any(values.values()):
            continue

        for column in ("Product", "Mark", "Category", "Price"):
            if not values.get(column):
                raise BadRequestError(
                    f"Row {line}: missing value for '{column}'",
                    details={"row": line, "column": column},
                )

        stock_value = values.get("Stock") or "0"
        try:
            stock = int(stock_value)
        except ValueError as exc:
            raise BadRequestError(
                f"Row {line}: invalid stock {stock_value!r}",
                details={"row": line, "column": "Stock"},
            ) from exc

        rows.append(
            ImportRow(
                line=line,
                product=values["Product"],
                mark=values["Mark"],
                category=values["Category"],
                description=values.get("Description") or None,
                price=values["Price"],
                stock=stock,
            )
        )

    return rows


class CatalogImporter:
    """Imports catalog rows through the entity managers.

    Example usage:
        async with async_session_factory() as session:
            report = await CatalogImporter(session).import_csv(text)
            await session.commit()
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize importer with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session
        self.products = ProductManager(session)

    async def import_csv(self, text: str) -> ImportReport:
        """Parse CSV text and upsert every row.

        Args:
            text: CSV content.

        Returns:
            Import counts.
        """
        rows = parse_catalog_csv(text)
        report = await self.import_rows(rows)

        logger.info("Catalog import complete", **report.to_dict())
        return report

    async def import_rows(self, rows: list[ImportRow]) -> ImportReport:
        """Upsert validated rows.

        Args:
            rows: Rows from parse_catalog_csv.

        Returns:
            Import counts.

        Raises:
            DomainError: The first failing row's error, same type, with its
                message prefixed by the row number.
        """
        report = ImportReport()

        for row in rows:
            try:
                await self._import_row(row, report)
            except DomainError as exc:
                raise type(exc)(
                    f"Row {row.line}: {exc.message}", details={**exc.details, "row": row.line}
                ) from exc
            report.rows += 1

        return report

    async def _import_row(self, row: ImportRow, report: ImportReport) -> None:
        category, created = await self.products.categories.get_or_create(row.category)
        if created:
            report.categories_created += 1

        mark, created = await self.products.marks.get_or_create(row.mark)
        if created:
            report.marks_created += 1

        data = ProductData(
            name=row.product,
            description=row.description,
            price=row.price,
            stock=row.stock,
            category_id=category.id,
            mark_id=mark.id,
        )

        existing = await self.products.find_for_import(row.product, category.id, mark.id)
        if existing is not None:
            await self.products.replace(existing.id, data)
            report.products_updated += 1
            logger.debug("Updated imported product", row=row.line, product_id=existing.id)
        else:
            product = await self.products.create(data)
            report.products_created += 1
            logger.debug("Created imported product", row=row.line, product_id=product.id)
