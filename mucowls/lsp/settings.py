"""
Server configuration.

Settings come from the client's initializationOptions, fall back to
environment variables, then to the bundled defaults:

    {
        "tagsCatalog": "/path/to/MucowTags.json",
        "attributesCatalog": "/path/to/MucowAttributes.yml",
        "schema": "/path/to/mucow.xsd",
        "xmllintPath": "/usr/bin/xmllint",
        "lintOnChange": false,
        "validatorTimeout": 30
    }
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


ENV_TAGS = "MUCOWLS_TAGS"
ENV_ATTRIBUTES = "MUCOWLS_ATTRIBUTES"
ENV_SCHEMA = "MUCOWLS_SCHEMA"
ENV_XMLLINT = "MUCOWLS_XMLLINT"

DEFAULT_VALIDATOR_TIMEOUT = 30.0


@dataclass
class ServerSettings:
    tags_catalog: Path | None = None
    attributes_catalog: Path | None = None
    schema: Path | None = None
    xmllint_path: str = "xmllint"
    lint_on_change: bool = False
    validator_timeout: float = DEFAULT_VALIDATOR_TIMEOUT
    file_extensions: tuple[str, ...] = (".mucow",)
    # Options that were ignored, reported by the server once it can log.
    problems: list[str] = field(default_factory=list, compare=False)

    @classmethod
    def from_initialization_options(
        cls,
        options: Any,
        environ: Mapping[str, str] | None = None,
    ) -> ServerSettings:
        if environ is None:
            environ = os.environ
        if not isinstance(options, Mapping):
            options = {}

        def path_setting(key: str, env_key: str) -> Path | None:
            value = options.get(key) or environ.get(env_key)
            return Path(value).expanduser() if value else None

        problems = []
        timeout = DEFAULT_VALIDATOR_TIMEOUT
        raw_timeout = options.get("validatorTimeout")
        if raw_timeout is not None:
            try:
                timeout = float(raw_timeout)
            except (TypeError, ValueError):
                problems.append(
                    f"Invalid validatorTimeout {raw_timeout!r}, "
                    f"using {DEFAULT_VALIDATOR_TIMEOUT}s"
                )

        return cls(
            tags_catalog=path_setting("tagsCatalog", ENV_TAGS),
            attributes_catalog=path_setting("attributesCatalog", ENV_ATTRIBUTES),
            schema=path_setting("schema", ENV_SCHEMA),
            xmllint_path=(
                options.get("xmllintPath") or environ.get(ENV_XMLLINT) or "xmllint"
            ),
            lint_on_change=bool(options.get("lintOnChange", False)),
            validator_timeout=timeout,
            problems=problems,
        )

    def handles(self, uri: str) -> bool:
        """Whether a document is a MuCow file this server should serve."""
        return uri.endswith(self.file_extensions)
