"""
Parser for xmllint's validation output.

xmllint reports on a fixed file name. A valid document produces a single
line:

    file.xml validates

Errors come as one record per problem, optionally followed by the source
line and a caret under the column where the problem starts:

    file.xml:3: element foo: Schemas validity error : Missing child element
      <foo/>
         ^
    file.xml fails to validate

Line numbers are 1-based in the output and 0-based in LintDiagnostic.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any


FILE_NAME = "file.xml"
XSD_NAME = "file.xsd"
DELIMITER = ":"
RECORD_PREFIX = FILE_NAME + DELIMITER
LINE_NO_OFFSET = len(RECORD_PREFIX)
SUCCESS_LINE = f"{FILE_NAME} validates"

CARET_LINE = re.compile(r"[^^]*\^")


@dataclass
class LintDiagnostic:
    line: int
    message: str
    column: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "pos": {"line": self.line, "ch": self.column},
            "message": self.message,
        }


@dataclass
class LintResult:
    errors: list[LintDiagnostic] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"errors": [error.to_dict() for error in self.errors]}


def parse_validator_output(output: str) -> list[LintDiagnostic] | None:
    """
    Parse raw validator output.

    Returns:
        None when the document validates, otherwise the diagnostics in the
        order they were reported (possibly empty, e.g. for a bare
        "file.xml fails to validate").
    """
    if output.strip() == SUCCESS_LINE:
        return None
    return parse_errors(output)


def parse_errors(output: str) -> list[LintDiagnostic]:
    """
    Collect the error records in the output.

    Never raises: a record whose line number cannot be read stops the scan
    and whatever was collected up to that point is returned.
    """
    results: list[LintDiagnostic] = []
    current: LintDiagnostic | None = None

    for line in output.splitlines():
        if line.startswith(RECORD_PREFIX):
            if current is not None:
                results.append(current)
                current = None

            delimiter = line.find(DELIMITER, LINE_NO_OFFSET)
            if delimiter == -1:
                break
            line_field = line[LINE_NO_OFFSET:delimiter]
            if not (line_field.isascii() and line_field.isdigit()):
                break
            line_number = int(line_field)

            current = LintDiagnostic(
                line=line_number - 1,
                message=line[delimiter + 1:].strip(),
            )
        elif current is not None and CARET_LINE.fullmatch(line.rstrip()):
            current.column = line.index("^")
        # anything else is the echoed source line or a summary

    if current is not None:
        results.append(current)

    return results
