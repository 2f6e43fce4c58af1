from lsprotocol.types import (
    INITIALIZE,
    TEXT_DOCUMENT_COMPLETION,
    CompletionOptions,
    CompletionParams,
    InitializeParams,
)

from mucowls.lsp.capabilities.capabilities import CapabilityManager
from mucowls.lsp.mucow_language_server import MucowLanguageServer
from mucowls.lsp.text_sync_manager import TextSyncManager


COMPLETION_TRIGGER_CHARACTERS = ["<", " ", '"']


def create_server() -> MucowLanguageServer:
    """
    Creates and returns a configured Language Server instance.

    The LanguageServer class from pygls handles:
    - JSON-RPC communication with clients (editors)
    - Request/response lifecycle
    - Notifications and event handling
    """
    server = MucowLanguageServer("mucowls", "0.1.0")

    # Text sync handlers are registered up front; capabilities add their
    # hooks once the catalogs are loaded during initialize.
    server.text_sync_manager = TextSyncManager(server)
    server.text_sync_manager.register_handlers()

    @server.feature(INITIALIZE)
    def initialize(ls: MucowLanguageServer, params: InitializeParams):
        """
        Load settings, catalogs and the validator, then set up capabilities.
        """
        ls.load_settings(params.initialization_options)

        ls.load_catalog()
        ls.load_validator()

        ls.capability_manager = CapabilityManager(ls)
        ls.capability_manager.register_all()

    @server.feature(
        TEXT_DOCUMENT_COMPLETION,
        CompletionOptions(trigger_characters=COMPLETION_TRIGGER_CHARACTERS),
    )
    async def completion(ls: MucowLanguageServer, params: CompletionParams):
        if ls.capability_manager:
            return await ls.capability_manager.handle_completion(params)
        return None

    return server
