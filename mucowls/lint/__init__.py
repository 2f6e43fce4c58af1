"""Schema validation and validator output parsing."""
from .parser import LintDiagnostic, LintResult, parse_errors, parse_validator_output
from .xmllint import ValidatorError, XmllintValidator

__all__ = [
    "LintDiagnostic",
    "LintResult",
    "ValidatorError",
    "XmllintValidator",
    "parse_errors",
    "parse_validator_output",
]
