from __future__ import annotations

from typing import TYPE_CHECKING

from lsprotocol.types import LogMessageParams, MessageType
from pygls.lsp.server import LanguageServer

from mucowls.catalog import Catalog, CatalogError, load_catalog, load_schema
from mucowls.lint.xmllint import XmllintValidator
from mucowls.lsp.settings import ServerSettings

if TYPE_CHECKING:
    from mucowls.lsp.capabilities.capabilities import CapabilityManager
    from mucowls.lsp.text_sync_manager import TextSyncManager


class MucowLanguageServer(LanguageServer):
    """
    Custom Language Server with MuCow-specific attributes.

    Attributes:
        settings: Configuration resolved at initialize
        catalog: Tag/attribute catalog shared by all completion requests
        validator: xmllint wrapper, None when xmllint is not installed
    """

    def __init__(self, name: str, version: str):
        super().__init__(name, version)

        self.settings = ServerSettings()
        self.catalog: Catalog = Catalog()
        self.validator: XmllintValidator | None = None
        self.capability_manager: CapabilityManager | None = None
        self.text_sync_manager: TextSyncManager | None = None

    def log_message(self, message: str, type: MessageType = MessageType.Info) -> None:
        self.window_log_message(LogMessageParams(type=type, message=message))

    def load_settings(self, options) -> None:
        """Resolve settings from the client's initializationOptions."""
        self.settings = ServerSettings.from_initialization_options(options)
        for problem in self.settings.problems:
            self.log_message(problem, MessageType.Error)

    def load_catalog(self) -> None:
        """Load the catalogs named in the settings, or the bundled ones."""
        try:
            self.catalog = load_catalog(
                self.settings.tags_catalog, self.settings.attributes_catalog
            )
        except CatalogError as e:
            self.log_message(f"{e}; using the bundled catalog", MessageType.Error)
            self.catalog = load_catalog()

        self.log_message(
            f"Loaded {len(self.catalog.tags)} tags and "
            f"{len(self.catalog.attributes)} attributes"
        )

    def load_validator(self) -> None:
        """Set up xmllint with the configured schema, if xmllint is installed."""
        try:
            schema = load_schema(self.settings.schema)
        except CatalogError as e:
            self.log_message(f"{e}; using the bundled schema", MessageType.Error)
            schema = load_schema()

        validator = XmllintValidator(
            schema,
            xmllint_path=self.settings.xmllint_path,
            timeout=self.settings.validator_timeout,
        )
        if not validator.is_available():
            self.log_message(
                f"{self.settings.xmllint_path} not found, diagnostics disabled",
                MessageType.Warning,
            )
            self.validator = None
            return

        self.validator = validator
