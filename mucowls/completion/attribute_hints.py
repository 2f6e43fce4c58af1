"""Attribute name and attribute value completion."""

from __future__ import annotations

from typing import Iterable

from mucowls.catalog import AttributeKind, Catalog
from mucowls.completion.context import (
    AttributeNameContext,
    AttributeValueContext,
    CompletionContext,
)
from mucowls.completion.hints import HintList


BOOLEAN_VALUES = ["false", "true"]


class AttributeCompletionEngine:
    """
    Candidates for attribute names and attribute values.

    Name candidates keep catalog order (tag attributes first, then global
    attributes). Value candidates are sorted unless the attribute opts out
    with noSort.
    """

    def __init__(self, catalog: Catalog) -> None:
        self.catalog = catalog
        self.global_attributes = catalog.global_attributes

    def complete(self, context: CompletionContext) -> HintList | None:
        """Hints for the context, or None to end the completion session."""
        if isinstance(context, AttributeNameContext):
            hints = self.get_name_hints(
                context.tag_name, context.used_attribute_names, context.query
            )
        elif isinstance(context, AttributeValueContext):
            hints = self.get_value_hints(
                context.tag_name, context.attribute_name, context.query
            )
        else:
            return None

        if hints is None:
            return None
        return HintList(hints=hints, match=context.query)

    def get_name_hints(
        self, tag_name: str, used: Iterable[str], query: str
    ) -> list[str] | None:
        tag = self.catalog.get_tag(tag_name)
        if tag is None:
            return None

        used = set(used)
        candidates = list(dict.fromkeys([*tag.allowed_attributes, *self.global_attributes]))

        return [
            name
            for name in candidates
            if name not in used and name.startswith(query)
        ]

    def get_value_hints(
        self, tag_name: str, attribute_name: str, query: str
    ) -> list[str] | None:
        descriptor = self.catalog.get_attribute(tag_name, attribute_name)
        if descriptor is None:
            return None

        if descriptor.kind is AttributeKind.BOOLEAN:
            candidates = list(BOOLEAN_VALUES)
        elif descriptor.allowed_values:
            candidates = list(descriptor.allowed_values)
        else:
            candidates = []

        hints = [value for value in candidates if value.startswith(query)]
        if not descriptor.sort_disabled:
            hints.sort()
        return hints
