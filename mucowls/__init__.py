"""MuCow language server: completion and schema diagnostics for .mucow files."""

__version__ = "0.1.0"
