"""
Schema validation diagnostics.

Documents are validated with xmllint when they are opened and saved (and
on every change when lintOnChange is set). Results are last-request-wins
per document: a run that finishes after a newer run started for the same
document is discarded.
"""

from __future__ import annotations

import itertools
from collections.abc import Sequence
from typing import TYPE_CHECKING

from lsprotocol.types import (
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DidSaveTextDocumentParams,
    Diagnostic,
    DiagnosticSeverity,
    MessageType,
    Position,
    PublishDiagnosticsParams,
    Range,
)

from mucowls.lint.parser import LintDiagnostic
from mucowls.lint.xmllint import ValidatorError
from mucowls.lsp.capabilities.capabilities import DiagnosticsCapability

if TYPE_CHECKING:
    from mucowls.lsp.mucow_language_server import MucowLanguageServer


DIAGNOSTIC_SOURCE = "MuCow Grammar"


def to_lsp_diagnostic(error: LintDiagnostic, lines: Sequence[str]) -> Diagnostic:
    """Underline from the reported column to the end of the line."""
    line = max(error.line, 0)
    end_character = error.column
    if line < len(lines):
        end_character = max(len(lines[line].rstrip("\r\n")), error.column)

    return Diagnostic(
        range=Range(
            start=Position(line=line, character=error.column),
            end=Position(line=line, character=end_character),
        ),
        message=error.message,
        severity=DiagnosticSeverity.Error,
        source=DIAGNOSTIC_SOURCE,
    )


class LintCapability(DiagnosticsCapability):
    """Publishes xmllint schema errors as diagnostics."""

    def __init__(self, server: MucowLanguageServer) -> None:
        super().__init__(server)
        self._generations: dict[str, int] = {}
        self._counter = itertools.count(1)

    @property
    def name(self) -> str:
        return "lint"

    @property
    def description(self) -> str:
        return "Validate MuCow documents against the MuCow schema"

    def register(self) -> None:
        text_sync = self.server.text_sync_manager
        if text_sync is None:
            return

        text_sync.add_on_open_hook(self._on_open)
        text_sync.add_on_save_hook(self._on_save)
        text_sync.add_on_close_hook(self._on_close)
        if self.server.settings.lint_on_change:
            text_sync.add_on_change_hook(self._on_change)

    async def _on_open(self, params: DidOpenTextDocumentParams) -> None:
        await self.publish(params.text_document.uri)

    async def _on_change(self, params: DidChangeTextDocumentParams) -> None:
        await self.publish(params.text_document.uri)

    async def _on_save(self, params: DidSaveTextDocumentParams) -> None:
        await self.publish(params.text_document.uri)

    async def _on_close(self, params: DidCloseTextDocumentParams) -> None:
        uri = params.text_document.uri
        self._generations.pop(uri, None)
        if self.server.settings.handles(uri):
            self.server.text_document_publish_diagnostics(
                PublishDiagnosticsParams(uri=uri, diagnostics=[])
            )

    async def can_handle(self, uri: str) -> bool:
        return self.server.validator is not None and self.server.settings.handles(uri)

    async def diagnose(self, uri: str) -> list[Diagnostic] | None:
        validator = self.server.validator
        if validator is None:
            return None

        generation = next(self._counter)
        self._generations[uri] = generation

        document = self.server.workspace.get_text_document(uri)
        try:
            result = await validator.lint(document.source)
        except ValidatorError as e:
            self.server.log_message(
                f"Validation failed for {uri}: {e}", MessageType.Error
            )
            return None

        if self._generations.get(uri) != generation:
            # superseded by a newer run, or the document was closed
            return None

        if result is None:
            return []
        return [to_lsp_diagnostic(error, document.lines) for error in result.errors]

    async def publish(self, uri: str) -> None:
        if not await self.can_handle(uri):
            return

        diagnostics = await self.diagnose(uri)
        if diagnostics is None:
            return

        self.server.text_document_publish_diagnostics(
            PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
        )
