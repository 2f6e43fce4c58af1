"""
Attribute completion capability.

Completes attribute names inside a start tag, and attribute values between
the quotes of an attribute the catalog knows values for.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lsprotocol.types import CompletionItemKind, CompletionList

from mucowls.completion.attribute_hints import AttributeCompletionEngine
from mucowls.completion.context import (
    AttributeNameContext,
    AttributeValueContext,
    CompletionContext,
)
from mucowls.completion.insertion import HintInsertionEngine
from mucowls.lsp.capabilities.capabilities import CompletionCapability
from mucowls.lsp.capabilities.completion_items import build_completion_items

if TYPE_CHECKING:
    from pygls.workspace import TextDocument

    from mucowls.lsp.mucow_language_server import MucowLanguageServer


class AttributeCompletionCapability(CompletionCapability):
    """Provides completion for attribute names and values."""

    def __init__(self, server: MucowLanguageServer) -> None:
        super().__init__(server)
        self.engine = AttributeCompletionEngine(self.catalog)
        self.insertion = HintInsertionEngine(self.catalog)

    @property
    def name(self) -> str:
        return "attribute_completion"

    @property
    def description(self) -> str:
        return "Autocomplete attribute names and enumerated attribute values"

    async def can_handle(self, context: CompletionContext) -> bool:
        return isinstance(context, (AttributeNameContext, AttributeValueContext))

    async def complete(
        self,
        context: CompletionContext,
        document: TextDocument,
        cursor: int,
    ) -> CompletionList | None:
        if not isinstance(context, (AttributeNameContext, AttributeValueContext)):
            return None

        hints = self.engine.complete(context)
        if hints is None:
            return None

        kind = (
            CompletionItemKind.Value
            if isinstance(context, AttributeValueContext)
            else CompletionItemKind.Property
        )
        items = build_completion_items(
            hints, context, self.insertion, document.lines, cursor, kind
        )
        return CompletionList(is_incomplete=False, items=items)
