"""
Basic tests for the MuCow Language Server.

These tests verify that the server can be created and has the expected features registered.
"""

from lsprotocol.types import (
    INITIALIZE,
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DID_SAVE,
)

from mucowls.lsp.server import COMPLETION_TRIGGER_CHARACTERS, create_server


def test_server_creation():
    """Test that the server can be created successfully."""
    server = create_server()
    assert server is not None
    assert server.name == "mucowls"
    assert server.version == "0.1.0"


def test_server_has_completion_feature():
    """Test that completion feature is registered."""
    server = create_server()

    assert TEXT_DOCUMENT_COMPLETION in server.protocol.fm._features


def test_server_has_initialize_feature():
    server = create_server()

    assert INITIALIZE in server.protocol.fm._features


def test_server_has_text_sync_features():
    """Lint runs off the document lifecycle notifications."""
    server = create_server()

    for feature in (TEXT_DOCUMENT_DID_OPEN, TEXT_DOCUMENT_DID_SAVE, TEXT_DOCUMENT_DID_CLOSE):
        assert feature in server.protocol.fm._features


def test_completion_triggers():
    assert COMPLETION_TRIGGER_CHARACTERS == ["<", " ", '"']


def test_capabilities_wait_for_initialize():
    server = create_server()

    assert server.capability_manager is None
    assert server.text_sync_manager is not None


def test_invalid_settings_are_logged():
    from unittest.mock import patch

    from lsprotocol.types import MessageType

    server = create_server()

    with patch.object(server, "window_log_message") as log:
        server.load_settings({"validatorTimeout": "soon"})

    assert server.settings.validator_timeout == 30.0
    params = log.call_args[0][0]
    assert params.type == MessageType.Error
    assert "validatorTimeout" in params.message
