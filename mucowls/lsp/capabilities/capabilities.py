"""
LSP Capabilities Manager

Completion and diagnostics are provided by capability plugins. The manager
resolves the completion context once per request and hands the same
context to every completion capability, so no request state is kept on
the capabilities themselves.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from lsprotocol.types import (
    CompletionList,
    CompletionParams,
    Diagnostic,
)

from mucowls.completion.context import CompletionContext, TokenContextResolver
from mucowls.tokenizer import XmlTokenStream
from mucowls.utils.positions import offset_at_position

if TYPE_CHECKING:
    from pygls.workspace import TextDocument

    from mucowls.lsp.mucow_language_server import MucowLanguageServer


class Capability(ABC):
    """
    Base class for all LSP capability handlers.

    Each capability decides whether it can handle a specific request.
    """

    def __init__(self, server: MucowLanguageServer) -> None:
        self.server = server
        self.catalog = server.catalog

    def register(self) -> None:
        """
        Hook the capability into the server.

        Called once after the catalogs are loaded.
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name for this capability."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of what this capability does."""
        pass


class CompletionCapability(Capability):
    """Base class for completion capabilities."""

    @abstractmethod
    async def can_handle(self, context: CompletionContext) -> bool:
        """Whether this capability completes in the resolved context."""
        pass

    @abstractmethod
    async def complete(
        self,
        context: CompletionContext,
        document: TextDocument,
        cursor: int,
    ) -> CompletionList | None:
        """
        Provide completion items.

        Only called if can_handle() returns True. None ends the completion
        session; an empty list just shows nothing.
        """
        pass


class DiagnosticsCapability(Capability):
    """Base class for capabilities publishing diagnostics."""

    @abstractmethod
    async def can_handle(self, uri: str) -> bool:
        """Check if this capability validates the document."""
        pass

    @abstractmethod
    async def diagnose(self, uri: str) -> list[Diagnostic] | None:
        """
        Compute diagnostics for a document.

        None means the result is stale or could not be computed and the
        previously published diagnostics should be left alone.
        """
        pass


class CapabilityManager:
    """
    Central manager for all LSP capabilities.

    Usage:
        # In server initialization, after the catalogs are loaded
        manager = CapabilityManager(server)
        manager.register_all()
    """

    def __init__(
        self,
        server: MucowLanguageServer,
        capabilities: dict[str, Capability] | None = None,
    ):
        self.server = server
        self.resolver = TokenContextResolver()

        # Default capabilities
        if capabilities is None:
            from mucowls.lsp.capabilities.attribute_capabilities import (
                AttributeCompletionCapability,
            )
            from mucowls.lsp.capabilities.lint_capabilities import LintCapability
            from mucowls.lsp.capabilities.tag_capabilities import (
                TagCompletionCapability,
            )

            capabilities = {
                "tag_completion": TagCompletionCapability(server),
                "attribute_completion": AttributeCompletionCapability(server),
                "lint": LintCapability(server),
            }

        self.capabilities = capabilities
        self._registered = False

    def register_all(self) -> None:
        """Register all capabilities with the server."""
        if self._registered:
            return

        for capability in self.capabilities.values():
            capability.register()

        self._registered = True

    def get_capability(self, name: str) -> Capability | None:
        """Get a specific capability by name"""
        return self.capabilities.get(name)

    def get_capabilities_by_type(self, capability_type: type) -> list[Capability]:
        """Get all capabilities of a specific type (e.g., all CompletionCapability)."""
        return [
            cap
            for cap in self.capabilities.values()
            if isinstance(cap, capability_type)
        ]

    def resolve_context(
        self, document: TextDocument, cursor: int
    ) -> CompletionContext:
        """Resolve the completion context at a cursor offset."""
        stream = XmlTokenStream(document.source, cursor)
        return self.resolver.resolve(stream)

    async def handle_completion(
        self, params: CompletionParams
    ) -> CompletionList | None:
        """
        Handle completion requests by delegating to capable handlers.

        Returns None (end the session) when no capability produced a result.
        """
        if not self.server.settings.handles(params.text_document.uri):
            return None

        document = self.server.workspace.get_text_document(params.text_document.uri)
        cursor = offset_at_position(document.lines, params.position)
        context = self.resolve_context(document, cursor)

        items = []
        handled = False

        for capability in self.get_capabilities_by_type(CompletionCapability):
            if await capability.can_handle(context):  # pyright: ignore
                result = await capability.complete(context, document, cursor)  # pyright: ignore
                if result is None:
                    continue
                handled = True
                items.extend(result.items)

        if not handled:
            return None

        return CompletionList(is_incomplete=False, items=items)
