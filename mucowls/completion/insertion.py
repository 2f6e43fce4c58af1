"""
Hint insertion.

Applies a chosen hint to the buffer the completion request came from. The
replaced span is the token the context was resolved on:

    start = cursor - context.token_offset
    end   = start + len(context.token_text)

Each call mutates the buffer at most once.
"""

from __future__ import annotations

from typing import Protocol

from mucowls.catalog import Catalog
from mucowls.completion.context import (
    AttributeNameContext,
    AttributeValueContext,
    CompletionContext,
    ResolvedContext,
    TagContext,
)


class EditBuffer(Protocol):
    """Buffer mutation capability used by the insertion engine."""

    def cursor_offset(self) -> int:
        ...

    def replace_range(self, text: str, start: int, end: int | None = None) -> None:
        """Replace start..end with text; insert at start when end is None."""
        ...

    def set_cursor(self, offset: int) -> None:
        ...


class TextBuffer:
    """In-memory EditBuffer over a plain string."""

    def __init__(self, text: str, cursor: int = 0) -> None:
        self.text = text
        self.cursor = cursor

    def cursor_offset(self) -> int:
        return self.cursor

    def replace_range(self, text: str, start: int, end: int | None = None) -> None:
        if end is None:
            end = start
        self.text = self.text[:start] + text + self.text[end:]

        # A cursor inside the replaced span ends up after the new text.
        if start <= self.cursor <= end:
            self.cursor = start + len(text)
        elif self.cursor > end:
            self.cursor += len(text) - (end - start)

    def set_cursor(self, offset: int) -> None:
        self.cursor = offset


class HintInsertionEngine:
    def __init__(self, catalog: Catalog) -> None:
        self.catalog = catalog

    def insert_hint(
        self, completion: str, context: CompletionContext, buffer: EditBuffer
    ) -> bool:
        """
        Insert a hint into the buffer.

        Returns:
            True when the caller should immediately ask for another round of
            hints; only after inserting name="" for a new attribute, with the
            cursor left between the quotes.
        """
        if isinstance(context, TagContext):
            return self._insert_tag_name(completion, context, buffer)
        if isinstance(context, AttributeNameContext):
            return self._insert_attribute_name(completion, context, buffer)
        if isinstance(context, AttributeValueContext):
            return self._insert_attribute_value(completion, context, buffer)
        return False

    def _span(self, context: ResolvedContext, buffer: EditBuffer) -> tuple[int, int]:
        start = buffer.cursor_offset() - context.token_offset
        return start, start + len(context.token_text)

    def _replace(
        self, buffer: EditBuffer, text: str, start: int, end: int
    ) -> None:
        if start != end:
            buffer.replace_range(text, start, end)
        else:
            buffer.replace_range(text, start)

    def _insert_tag_name(
        self, completion: str, context: TagContext, buffer: EditBuffer
    ) -> bool:
        if completion != context.token_text:
            start, end = self._span(context, buffer)
            self._replace(buffer, completion, start, end)
        return False

    def _insert_attribute_name(
        self, completion: str, context: AttributeNameContext, buffer: EditBuffer
    ) -> bool:
        start, end = self._span(context, buffer)
        if context.should_replace_existing or self.catalog.is_flag(
            context.tag_name, completion
        ):
            # Bare name; an existing ="..." stays where it is.
            if completion != context.token_text:
                self._replace(buffer, completion, start, end)
            return False

        if completion != context.token_text:
            text = f'{completion}=""'
            self._replace(buffer, text, start, end)
            buffer.set_cursor(start + len(text) - 1)

        # The cursor is (or already was) where a value goes: ask for value hints.
        return True

    def _insert_attribute_value(
        self, completion: str, context: AttributeValueContext, buffer: EditBuffer
    ) -> bool:
        quoted = f'"{completion}"'
        if quoted != context.token_text:
            start, end = self._span(context, buffer)
            self._replace(buffer, quoted, start, end)
        return False
