import pytest

from mucowls.lint.parser import (
    LintDiagnostic,
    LintResult,
    parse_errors,
    parse_validator_output,
)


SCHEMA_ERRORS = """\
file.xml:3: element foo: Schemas validity error : Element 'foo': This element is not expected.
  <foo/>
     ^
file.xml:7: parser error : Opening and ending tag mismatch: a line 6 and b
</b>
    ^
file.xml fails to validate
"""


def test_valid_document_has_no_result():
    assert parse_validator_output("file.xml validates\n") is None


def test_records_with_caret_columns():
    errors = parse_validator_output(SCHEMA_ERRORS)

    assert errors == [
        LintDiagnostic(
            line=2,
            column=5,
            message="element foo: Schemas validity error : Element 'foo': "
            "This element is not expected.",
        ),
        LintDiagnostic(
            line=6,
            column=4,
            message="parser error : Opening and ending tag mismatch: a line 6 and b",
        ),
    ]


def test_record_without_caret_defaults_to_column_zero():
    errors = parse_errors("file.xml:3: element foo: bad\nfile.xml fails to validate")

    assert errors == [LintDiagnostic(line=2, message="element foo: bad", column=0)]


def test_bare_failure_line_is_an_empty_list():
    assert parse_validator_output("file.xml fails to validate") == []


def test_unreadable_line_number_stops_scan():
    output = "file.xml:2: first\nfile.xml:x: broken\nfile.xml:9: never read\n"

    assert parse_errors(output) == [LintDiagnostic(line=1, message="first")]


def test_missing_delimiter_stops_scan():
    assert parse_errors("file.xml:12 no delimiter") == []


def test_unrelated_lines_are_ignored():
    assert parse_errors("warning: failed to load external entity\n") == []


def test_result_dict_shape():
    result = LintResult(errors=[LintDiagnostic(line=2, message="bad", column=5)])

    assert result.to_dict() == {
        "errors": [{"pos": {"line": 2, "ch": 5}, "message": "bad"}]
    }


def test_caret_after_dots():
    output = "file.xml:3: element foo: Missing child element\n  bar\n.....^"

    assert parse_validator_output(output) == [
        LintDiagnostic(line=2, column=5, message="element foo: Missing child element")
    ]


def test_caret_before_any_record_is_ignored():
    assert parse_errors("   ^\nfile.xml:2: m") == [LintDiagnostic(line=1, message="m")]


@pytest.mark.parametrize("line_field", ["3_0", " +3", "-1", ""])
def test_line_number_must_be_plain_digits(line_field):
    output = f"file.xml:2: first\nfile.xml:{line_field}: odd\n"

    assert parse_errors(output) == [LintDiagnostic(line=1, message="first")]
