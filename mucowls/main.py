"""
Entry point for the MuCow Language Server.

Editors start `mucowls` (or `python -m mucowls`) and talk to it over
stdin/stdout, so nothing but JSON-RPC may be written to stdout.
"""
import os
import sys

from mucowls.lsp.server import create_server


DEBUG_PORT = 5678


def wait_for_debugger() -> None:
    port = int(os.getenv("MUCOWLS_DEBUG_PORT", DEBUG_PORT))
    print(f"mucowls: waiting for debugger on port {port}", file=sys.stderr)
    try:
        import debugpy  # type: ignore
    except ImportError:
        print(
            "mucowls: debugpy not installed, run pip install -e '.[dev]'",
            file=sys.stderr,
        )
        return

    debugpy.listen(("127.0.0.1", port))
    debugpy.wait_for_client()
    print("mucowls: debugger attached", file=sys.stderr)


def main():
    if os.getenv("DEBUG"):
        wait_for_debugger()

    server = create_server()
    server.start_io()


if __name__ == "__main__":
    main()
