"""Product projection consumed by the advert generator.

Flattens a product row and its optional mark and category into the
fields the prompt needs, filling in defaults for anything missing.
"""

from dataclasses import dataclass, field, replace
from typing import Any

DEFAULT_DESCRIPTION = "No description available"
DEFAULT_MARK_NAME = "Unknown"
DEFAULT_CATEGORY_NAME = "Uncategorized"


@dataclass(frozen=True)
class NamedRef:
    """Name of a related row."""

    name: str


@dataclass(frozen=True)
class ProductAdvertProjection:
    """Read-only product view for advertisement prompts.

    Attributes:
        title: Product name.
        description: Product description or a placeholder.
        price: Price in major currency units.
        stock: Quantity on hand.
        mark: Mark name, "Unknown" when absent.
        category: Category name, "Uncategorized" when absent.
    """

    title: str
    description: str = DEFAULT_DESCRIPTION
    price: float = 0.0
    stock: int = 0
    mark: NamedRef = field(default_factory=lambda: NamedRef(DEFAULT_MARK_NAME))
    category: NamedRef = field(default_factory=lambda: NamedRef(DEFAULT_CATEGORY_NAME))

    @classmethod
    def build(
        cls,
        product: Any,
        mark: Any | None = None,
        category: Any | None = None,
    ) -> "ProductAdvertProjection":
        """Create a projection from store rows.

        Args:
            product: Product row (needs name, description, price, stock).
            mark: Optional mark row.
            category: Optional category row.

        Returns:
            ProductAdvertProjection instance.
        """
        return cls(
            title=product.name,
            description=product.description or DEFAULT_DESCRIPTION,
            price=float(product.price or 0),
            stock=product.stock or 0,
            mark=NamedRef(mark.name if mark is not None else DEFAULT_MARK_NAME),
            category=NamedRef(category.name if category is not None else DEFAULT_CATEGORY_NAME),
        )

    def with_mark(self, mark: Any | None) -> "ProductAdvertProjection":
        """Return a copy with the mark back-filled.

        Raises:
            ValueError: If mark is None or its name is blank.
        """
        return replace(self, mark=NamedRef(_require_name(mark, "mark")))

    def with_category(self, category: Any | None) -> "ProductAdvertProjection":
        """Return a copy with the category back-filled.

        Raises:
            ValueError: If category is None or its name is blank.
        """
        return replace(self, category=NamedRef(_require_name(category, "category")))


def _require_name(row: Any | None, kind: str) -> str:
    if row is None:
        raise ValueError(f"Invalid {kind}")
    name = getattr(row, "name", None)
    if name is None or not name.strip():
        raise ValueError(f"{kind.capitalize()} name cannot be empty")
    return name
