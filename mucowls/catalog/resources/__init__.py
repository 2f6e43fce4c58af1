"""Bundled MuCow catalogs and schema."""
