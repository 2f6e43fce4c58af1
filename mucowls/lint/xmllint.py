"""
Schema validation through the xmllint command line tool.

The document and the schema are written to a scratch directory under the
fixed names xmllint's output is parsed against, then validated with:

    xmllint --noout --schema file.xsd file.xml
"""

from __future__ import annotations

import asyncio
import shutil
import tempfile
from pathlib import Path

from mucowls.lint.parser import (
    FILE_NAME,
    XSD_NAME,
    LintResult,
    parse_validator_output,
)


XMLLINT_ARGUMENTS = ["--noout", "--schema", XSD_NAME, FILE_NAME]

# xmllint exit codes that still come with a readable report:
# 0 valid, 1 parse errors, 3 and 4 validation errors.
REPORTED_EXIT_CODES = (0, 1, 3, 4)


class ValidatorError(RuntimeError):
    """xmllint could not be run, or could not use the schema."""


class XmllintValidator:
    """
    Runs xmllint against a fixed schema.

    Validation runs in a subprocess so the language server's event loop
    stays responsive while a document is checked.
    """

    def __init__(
        self,
        schema: str,
        xmllint_path: str = "xmllint",
        timeout: float = 30.0,
    ) -> None:
        self.schema = schema
        self.xmllint_path = xmllint_path
        self.timeout = timeout

    def is_available(self) -> bool:
        """Check that the xmllint executable can be found."""
        return shutil.which(self.xmllint_path) is not None

    async def validate(self, text: str) -> str:
        """
        Validate a document and return xmllint's combined output.

        Raises:
            ValidatorError: xmllint is missing, timed out, or failed for a
                reason other than the document being invalid.
        """
        with tempfile.TemporaryDirectory(prefix="mucowls-") as scratch:
            scratch_dir = Path(scratch)
            (scratch_dir / FILE_NAME).write_text(text, encoding="utf-8")
            (scratch_dir / XSD_NAME).write_text(self.schema, encoding="utf-8")

            try:
                process = await asyncio.create_subprocess_exec(
                    self.xmllint_path,
                    *XMLLINT_ARGUMENTS,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                    cwd=str(scratch_dir),
                )
            except OSError as e:
                raise ValidatorError(
                    f"Cannot run {self.xmllint_path}: {e}"
                ) from e

            try:
                stdout, stderr = await asyncio.wait_for(
                    process.communicate(), timeout=self.timeout
                )
            except asyncio.TimeoutError as e:
                process.kill()
                await process.wait()
                raise ValidatorError(
                    f"{self.xmllint_path} timed out after {self.timeout}s"
                ) from e

        output = (
            stdout.decode("utf-8", errors="replace")
            + stderr.decode("utf-8", errors="replace")
        ).strip()

        if process.returncode not in REPORTED_EXIT_CODES:
            raise ValidatorError(
                f"{self.xmllint_path} exited with {process.returncode}: {output}"
            )

        return output

    async def lint(self, text: str) -> LintResult | None:
        """Validate a document; None when it validates."""
        output = await self.validate(text)
        errors = parse_validator_output(output)
        if errors is None:
            return None
        return LintResult(errors=errors)
