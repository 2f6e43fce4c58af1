"""Static tag/attribute reference data for MuCow documents."""
from .catalog import (
    ROOT_PARENT,
    AttributeCatalogEntry,
    AttributeKind,
    Catalog,
    CatalogError,
    TagCatalogEntry,
    load_catalog,
    load_schema,
)

__all__ = [
    "ROOT_PARENT",
    "AttributeCatalogEntry",
    "AttributeKind",
    "Catalog",
    "CatalogError",
    "TagCatalogEntry",
    "load_catalog",
    "load_schema",
]
