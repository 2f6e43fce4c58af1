"""
Tag and attribute catalogs for MuCow documents.

The catalogs are static reference data: which tags exist, where each tag
may appear, which attributes it accepts, and what values those attributes
take. They are loaded once when the server initializes and are read-only
afterwards, so completion requests can share them without locking.

Catalog files use the same layout the MuCow tooling has always shipped:

    tags:       {"widget": {"attributes": ["name", ...], "context": ["/root$"]}}
    attributes: {"text/default": {"type": "free"},
                 "isResizable": {"type": "boolean"},
                 "localization": {"attribOption": ["none", "all"], "noSort": true},
                 "id": {"global": "true"}}

Both JSON and YAML files are accepted.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from importlib import resources
from pathlib import Path
from typing import Any, Mapping

import yaml


# Parent name used for tags at the top of the document.
ROOT_PARENT = "/root$"

BUNDLED_RESOURCES = "mucowls.catalog.resources"
BUNDLED_TAGS = "tags.json"
BUNDLED_ATTRIBUTES = "attributes.json"
BUNDLED_SCHEMA = "mucow.xsd"


class CatalogError(ValueError):
    """Raised when a catalog file cannot be read or has the wrong shape."""


class AttributeKind(Enum):
    """How an attribute takes its value."""

    BOOLEAN = "boolean"     # "false" | "true"
    FLAG = "flag"           # bare attribute, no value
    ENUMERATED = "enumerated"
    FREE = "free"


@dataclass(frozen=True)
class TagCatalogEntry:
    name: str
    allowed_parents: frozenset[str] = frozenset()
    allowed_attributes: tuple[str, ...] = ()

    def allows_parent(self, parent: str) -> bool:
        """An empty parent set means the tag may appear anywhere."""
        return not self.allowed_parents or parent in self.allowed_parents


@dataclass(frozen=True)
class AttributeCatalogEntry:
    key: str
    kind: AttributeKind = AttributeKind.FREE
    is_global: bool = False
    allowed_values: tuple[str, ...] = ()
    sort_disabled: bool = False


@dataclass(frozen=True)
class Catalog:
    """
    Typed view over the tag and attribute catalogs.

    Attribute keys are either a bare attribute name or a "tag/attribute"
    composite for attributes whose values depend on the tag they sit on.
    """

    tags: Mapping[str, TagCatalogEntry] = field(default_factory=dict)
    attributes: Mapping[str, AttributeCatalogEntry] = field(default_factory=dict)

    def get_tag(self, name: str) -> TagCatalogEntry | None:
        return self.tags.get(name)

    def get_attribute(
        self, tag_name: str | None, attribute_name: str
    ) -> AttributeCatalogEntry | None:
        """
        Look up an attribute descriptor.

        The composite "tag/attribute" key wins; the bare attribute name is
        the fallback. Most attributes only have the bare form, but some
        (e.g. "list/default") need per-tag values.
        """
        if tag_name:
            entry = self.attributes.get(f"{tag_name}/{attribute_name}")
            if entry is not None:
                return entry
        return self.attributes.get(attribute_name)

    def is_flag(self, tag_name: str | None, attribute_name: str) -> bool:
        """Whether the attribute is written bare, without a value."""
        entry = self.get_attribute(tag_name, attribute_name)
        return entry is not None and entry.kind is AttributeKind.FLAG

    @property
    def global_attributes(self) -> list[str]:
        """Names of attributes every tag accepts, in catalog order."""
        return [
            entry.key
            for entry in self.attributes.values()
            if entry.is_global
        ]

    @classmethod
    def from_dicts(
        cls,
        tags: Mapping[str, Any],
        attributes: Mapping[str, Any],
    ) -> Catalog:
        """Build a catalog from the raw tag and attribute mappings."""
        if not isinstance(tags, Mapping):
            raise CatalogError("Tag catalog must be a mapping of tag names")
        if not isinstance(attributes, Mapping):
            raise CatalogError("Attribute catalog must be a mapping of attribute keys")

        tag_entries = {
            name: _parse_tag(name, raw or {}) for name, raw in tags.items()
        }
        attribute_entries = {
            key: _parse_attribute(key, raw or {}) for key, raw in attributes.items()
        }
        return cls(tags=tag_entries, attributes=attribute_entries)


def _parse_tag(name: str, raw: Any) -> TagCatalogEntry:
    if not isinstance(raw, Mapping):
        raise CatalogError(f"Tag '{name}' must map to an object")

    return TagCatalogEntry(
        name=name,
        allowed_parents=frozenset(raw.get("context") or ()),
        allowed_attributes=tuple(raw.get("attributes") or ()),
    )


def _parse_attribute(key: str, raw: Any) -> AttributeCatalogEntry:
    if not isinstance(raw, Mapping):
        raise CatalogError(f"Attribute '{key}' must map to an object")

    values = tuple(str(v) for v in raw.get("attribOption") or ())
    attr_type = raw.get("type")
    if attr_type == "boolean":
        kind = AttributeKind.BOOLEAN
    elif attr_type == "flag":
        kind = AttributeKind.FLAG
    elif values:
        kind = AttributeKind.ENUMERATED
    else:
        kind = AttributeKind.FREE

    # "global" is the string "true" in the shipped catalogs
    is_global = str(raw.get("global", "")).lower() == "true"

    return AttributeCatalogEntry(
        key=key,
        kind=kind,
        is_global=is_global,
        allowed_values=values,
        sort_disabled=bool(raw.get("noSort", False)),
    )


def read_catalog_file(path: Path) -> Any:
    """Read a JSON or YAML catalog file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix in (".yml", ".yaml"):
                return yaml.safe_load(f)
            return json.load(f)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise CatalogError(f"Cannot load catalog {path}: {e}") from e


def load_catalog(
    tags_path: Path | None = None,
    attributes_path: Path | None = None,
) -> Catalog:
    """
    Load the tag and attribute catalogs.

    Paths left as None use the catalogs bundled with the package.
    """
    bundled = resources.files(BUNDLED_RESOURCES)

    if tags_path is None:
        tags = json.loads(bundled.joinpath(BUNDLED_TAGS).read_text(encoding="utf-8"))
    else:
        tags = read_catalog_file(tags_path)

    if attributes_path is None:
        attributes = json.loads(
            bundled.joinpath(BUNDLED_ATTRIBUTES).read_text(encoding="utf-8")
        )
    else:
        attributes = read_catalog_file(attributes_path)

    return Catalog.from_dicts(tags or {}, attributes or {})


def load_schema(schema_path: Path | None = None) -> str:
    """Return the XSD text used for validation."""
    if schema_path is None:
        return (
            resources.files(BUNDLED_RESOURCES)
            .joinpath(BUNDLED_SCHEMA)
            .read_text(encoding="utf-8")
        )
    try:
        return schema_path.read_text(encoding="utf-8")
    except OSError as e:
        raise CatalogError(f"Cannot read schema {schema_path}: {e}") from e
