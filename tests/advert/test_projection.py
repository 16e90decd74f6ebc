"""Tests for the advert product projection."""

from dataclasses import FrozenInstanceError
from decimal import Decimal
from types import SimpleNamespace

import pytest

from storefront.advert.projection import ProductAdvertProjection


def make_product(**overrides) -> SimpleNamespace:
    """Create a product-shaped object."""
    fields = {
        "name": "Acme Book 14",
        "description": "Light 14-inch laptop",
        "price": Decimal("999.90"),
        "stock": 7,
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


class TestBuild:
    """Tests for ProductAdvertProjection.build."""

    def test_maps_fields(self) -> None:
        """Store fields map onto the projection."""
        projection = ProductAdvertProjection.build(
            make_product(),
            SimpleNamespace(name="Acme"),
            SimpleNamespace(name="Laptops"),
        )

        assert projection.title == "Acme Book 14"
        assert projection.description == "Light 14-inch laptop"
        assert projection.price == pytest.approx(999.90)
        assert projection.stock == 7
        assert projection.mark.name == "Acme"
        assert projection.category.name == "Laptops"

    def test_defaults_for_missing_relations(self) -> None:
        """Absent mark and category fall back to placeholders."""
        projection = ProductAdvertProjection.build(make_product(description=None, stock=None))

        assert projection.description == "No description available"
        assert projection.stock == 0
        assert projection.mark.name == "Unknown"
        assert projection.category.name == "Uncategorized"

    def test_is_read_only(self) -> None:
        """Projections cannot be mutated in place."""
        projection = ProductAdvertProjection.build(make_product())

        with pytest.raises(FrozenInstanceError):
            projection.title = "Other"  # type: ignore[misc]


class TestBackFill:
    """Tests for with_mark / with_category."""

    def test_with_mark_and_category(self) -> None:
        """Back-filled relations replace the defaults."""
        projection = (
            ProductAdvertProjection.build(make_product())
            .with_mark(SimpleNamespace(name="Acme"))
            .with_category(SimpleNamespace(name="Laptops"))
        )

        assert projection.mark.name == "Acme"
        assert projection.category.name == "Laptops"

    def test_original_is_untouched(self) -> None:
        """Back-filling returns a new projection."""
        original = ProductAdvertProjection.build(make_product())

        original.with_mark(SimpleNamespace(name="Acme"))

        assert original.mark.name == "Unknown"

    @pytest.mark.parametrize("method", ["with_mark", "with_category"])
    def test_rejects_none(self, method: str) -> None:
        """None is not a valid relation."""
        projection = ProductAdvertProjection.build(make_product())

        with pytest.raises(ValueError):
            getattr(projection, method)(None)

    @pytest.mark.parametrize("method", ["with_mark", "with_category"])
    @pytest.mark.parametrize("name", ["", "   ", "\t"])
    def test_rejects_blank_name(self, method: str, name: str) -> None:
        """Whitespace-only names are rejected."""
        projection = ProductAdvertProjection.build(make_product())

        with pytest.raises(ValueError, match="cannot be empty"):
            getattr(projection, method)(SimpleNamespace(name=name))
