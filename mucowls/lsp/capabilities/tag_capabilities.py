"""
Tag name completion capability.

Offers the catalog tags allowed inside the enclosing element when the
cursor is on a tag name (or right after "<").
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lsprotocol.types import CompletionItemKind, CompletionList

from mucowls.completion.context import CompletionContext, TagContext
from mucowls.completion.insertion import HintInsertionEngine
from mucowls.completion.tag_hints import TagCompletionEngine
from mucowls.lsp.capabilities.capabilities import CompletionCapability
from mucowls.lsp.capabilities.completion_items import build_completion_items

if TYPE_CHECKING:
    from pygls.workspace import TextDocument

    from mucowls.lsp.mucow_language_server import MucowLanguageServer


class TagCompletionCapability(CompletionCapability):
    """Provides completion for MuCow tag names."""

    def __init__(self, server: MucowLanguageServer) -> None:
        super().__init__(server)
        self.engine = TagCompletionEngine(self.catalog)
        self.insertion = HintInsertionEngine(self.catalog)

    @property
    def name(self) -> str:
        return "tag_completion"

    @property
    def description(self) -> str:
        return "Autocomplete tag names allowed inside the enclosing element"

    async def can_handle(self, context: CompletionContext) -> bool:
        return isinstance(context, TagContext)

    async def complete(
        self,
        context: CompletionContext,
        document: TextDocument,
        cursor: int,
    ) -> CompletionList | None:
        if not isinstance(context, TagContext):
            return None

        hints = self.engine.complete(context)
        items = build_completion_items(
            hints,
            context,
            self.insertion,
            document.lines,
            cursor,
            CompletionItemKind.Class,
        )
        return CompletionList(is_incomplete=False, items=items)
