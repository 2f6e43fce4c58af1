"""
Turning hints into LSP completion items.

An LSP server cannot touch the editor buffer; it describes the edit
instead. EditRecorder stands in for the buffer while the insertion engine
runs, and the recorded edit becomes the item's text_edit. A recorded
cursor move becomes a "$0" snippet tab stop, and a follow-up request
becomes the editor's trigger-suggest command.
"""

from __future__ import annotations

from collections.abc import Sequence

from lsprotocol.types import (
    Command,
    CompletionItem,
    CompletionItemKind,
    InsertTextFormat,
    Range,
    TextEdit,
)

from mucowls.completion.context import ResolvedContext
from mucowls.completion.hints import HintList
from mucowls.completion.insertion import HintInsertionEngine
from mucowls.utils.positions import position_at_offset


TRIGGER_SUGGEST = Command(
    title="Trigger Suggest", command="editor.action.triggerSuggest"
)


class EditRecorder:
    """EditBuffer that records the single edit instead of applying it."""

    def __init__(self, cursor: int) -> None:
        self.cursor = cursor
        self.edit: tuple[int, int, str] | None = None
        self.new_cursor: int | None = None

    def cursor_offset(self) -> int:
        return self.cursor

    def replace_range(self, text: str, start: int, end: int | None = None) -> None:
        self.edit = (start, start if end is None else end, text)

    def set_cursor(self, offset: int) -> None:
        self.new_cursor = offset


def _escape_snippet(text: str) -> str:
    return text.replace("\\", "\\\\").replace("$", "\\$").replace("}", "\\}")


def build_completion_items(
    hints: HintList,
    context: ResolvedContext,
    engine: HintInsertionEngine,
    lines: Sequence[str],
    cursor: int,
    kind: CompletionItemKind,
) -> list[CompletionItem]:
    """One completion item per hint, in hint order."""
    items = []

    for index, hint in enumerate(hints.hints):
        recorder = EditRecorder(cursor)
        follow_up = engine.insert_hint(hint, context, recorder)

        if recorder.edit is None:
            # The hint is already there; keep the token as it is.
            start = cursor - context.token_offset
            edit = (start, start + len(context.token_text), context.token_text)
        else:
            edit = recorder.edit

        start, end, text = edit
        new_text = text
        insert_format = InsertTextFormat.PlainText

        if recorder.new_cursor is not None:
            split = recorder.new_cursor - start
            new_text = (
                _escape_snippet(text[:split]) + "$0" + _escape_snippet(text[split:])
            )
            insert_format = InsertTextFormat.Snippet

        items.append(
            CompletionItem(
                label=hint,
                kind=kind,
                sort_text=f"{index:05d}",
                filter_text=text,
                insert_text_format=insert_format,
                text_edit=TextEdit(
                    range=Range(
                        start=position_at_offset(lines, start),
                        end=position_at_offset(lines, end),
                    ),
                    new_text=new_text,
                ),
                command=TRIGGER_SUGGEST if follow_up else None,
            )
        )

    return items
