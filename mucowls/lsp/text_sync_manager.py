"""
Text Synchronization Manager

Handles the LSP document lifecycle notifications and lets capabilities
hook into them (the lint capability validates on open and save).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Awaitable, Callable, Sequence

from lsprotocol.types import (
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DidSaveTextDocumentParams,
    MessageType,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DID_SAVE,
)

if TYPE_CHECKING:
    from mucowls.lsp.mucow_language_server import MucowLanguageServer


# Type aliases for hook signatures
OnOpenHook = Callable[[DidOpenTextDocumentParams], Awaitable[None]]
OnChangeHook = Callable[[DidChangeTextDocumentParams], Awaitable[None]]
OnSaveHook = Callable[[DidSaveTextDocumentParams], Awaitable[None]]
OnCloseHook = Callable[[DidCloseTextDocumentParams], Awaitable[None]]


class TextSyncManager:
    """
    Manages text document synchronization and hook broadcasting.

    Design Principles:
    - Text sync is infrastructure, NOT a capability
    - Hooks run in registration order
    - A failing hook is logged and does not stop the others

    Usage:
        text_sync = TextSyncManager(server)
        text_sync.register_handlers()
        server.text_sync_manager = text_sync

        class LintCapability(DiagnosticsCapability):
            def register(self):
                text_sync = self.server.text_sync_manager
                text_sync.add_on_save_hook(self._on_save)
    """

    def __init__(self, server: MucowLanguageServer) -> None:
        self.server = server

        self._on_open_hooks: list[OnOpenHook] = []
        self._on_change_hooks: list[OnChangeHook] = []
        self._on_save_hooks: list[OnSaveHook] = []
        self._on_close_hooks: list[OnCloseHook] = []

    def add_on_open_hook(self, hook: OnOpenHook) -> None:
        self._on_open_hooks.append(hook)

    def add_on_change_hook(self, hook: OnChangeHook) -> None:
        """
        Register a hook for document change events.

        Change hooks run on every keystroke; keep them cheap or make them
        tolerate being superseded by the next change.
        """
        self._on_change_hooks.append(hook)

    def add_on_save_hook(self, hook: OnSaveHook) -> None:
        self._on_save_hooks.append(hook)

    def add_on_close_hook(self, hook: OnCloseHook) -> None:
        self._on_close_hooks.append(hook)

    async def _broadcast(
        self,
        event: str,
        hooks: Sequence[Callable[[Any], Awaitable[None]]],
        params: Any,
    ) -> None:
        for hook in hooks:
            try:
                await hook(params)
            except Exception as e:
                self.server.log_message(
                    f"Error in {event} hook {hook.__name__}: "
                    f"{type(e).__name__}: {e}",
                    MessageType.Error,
                )

    async def _broadcast_on_open(self, params: DidOpenTextDocumentParams) -> None:
        await self._broadcast("on_open", self._on_open_hooks, params)

    async def _broadcast_on_change(
        self, params: DidChangeTextDocumentParams
    ) -> None:
        await self._broadcast("on_change", self._on_change_hooks, params)

    async def _broadcast_on_save(self, params: DidSaveTextDocumentParams) -> None:
        await self._broadcast("on_save", self._on_save_hooks, params)

    async def _broadcast_on_close(
        self, params: DidCloseTextDocumentParams
    ) -> None:
        await self._broadcast("on_close", self._on_close_hooks, params)

    def register_handlers(self) -> None:
        """
        Register LSP text synchronization handlers with the server.

        Called once from create_server(). pygls updates
        ls.workspace.text_documents before these handlers run.
        """

        @self.server.feature(TEXT_DOCUMENT_DID_OPEN)
        async def did_open(
            ls: MucowLanguageServer,
            params: DidOpenTextDocumentParams,
        ) -> None:
            ls.log_message(f"Document opened: {params.text_document.uri}")
            await self._broadcast_on_open(params)

        @self.server.feature(TEXT_DOCUMENT_DID_CHANGE)
        async def did_change(
            ls: MucowLanguageServer,
            params: DidChangeTextDocumentParams,
        ) -> None:
            await self._broadcast_on_change(params)

        @self.server.feature(TEXT_DOCUMENT_DID_SAVE)
        async def did_save(
            ls: MucowLanguageServer,
            params: DidSaveTextDocumentParams,
        ) -> None:
            ls.log_message(f"Document saved: {params.text_document.uri}")
            await self._broadcast_on_save(params)

        @self.server.feature(TEXT_DOCUMENT_DID_CLOSE)
        async def did_close(
            ls: MucowLanguageServer,
            params: DidCloseTextDocumentParams,
        ) -> None:
            await self._broadcast_on_close(params)
