"""Product catalog.

Provides the catalog tables, the entity managers that guard their
consistency rules, and the bulk CSV importer.
"""

from storefront.catalog.importer import CatalogImporter, ImportReport, parse_catalog_csv
from storefront.catalog.managers import (
    CategoryManager,
    FullProduct,
    MarkManager,
    ProductData,
    ProductManager,
)
from storefront.catalog.models import Category, Mark, Product

__all__ = [
    # Models
    "Category",
    "Mark",
    "Product",
    # Managers
    "CategoryManager",
    "FullProduct",
    "MarkManager",
    "ProductData",
    "ProductManager",
    # Import
    "CatalogImporter",
    "ImportReport",
    "parse_catalog_csv",
]
