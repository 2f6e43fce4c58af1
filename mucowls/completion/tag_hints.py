"""Tag name completion."""

from __future__ import annotations

from mucowls.catalog import Catalog
from mucowls.completion.context import TagContext
from mucowls.completion.hints import HintList


class TagCompletionEngine:
    def __init__(self, catalog: Catalog) -> None:
        self.catalog = catalog

    def get_hints(self, query: str, parent_name: str) -> list[str]:
        """
        Tag names starting with the query that may appear inside the parent.

        Tags without a parent restriction are allowed everywhere. The result
        is sorted and free of duplicates.
        """
        query = query.replace("<", "")
        return sorted(
            {
                name
                for name, entry in self.catalog.tags.items()
                if name.startswith(query) and entry.allows_parent(parent_name)
            }
        )

    def complete(self, context: TagContext) -> HintList:
        return HintList(
            hints=self.get_hints(context.query, context.parent_name),
            match=context.query,
        )
