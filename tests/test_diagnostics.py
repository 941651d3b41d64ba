"""Tests for diagnostics: codes, templates, formatter and the exception hierarchy.

Python 3.13+.
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from datefield.diagnostics import (
    DateFieldError,
    Diagnostic,
    DiagnosticCode,
    DiagnosticFormatter,
    EmptyTokenError,
    ErrorTemplate,
    FieldConfigurationError,
    FormatExpansionOverflowError,
    InvalidSectionTypeError,
    MissingMaxLengthError,
    OutputFormat,
    UnsupportedSectionTypeError,
    UnsupportedTokenError,
)


class TestDiagnosticCode:
    """Code numbering by category."""

    def test_codes_are_unique(self) -> None:
        values = [code.value for code in DiagnosticCode]
        assert len(values) == len(set(values))

    def test_configuration_codes_in_1000_range(self) -> None:
        for code in (
            DiagnosticCode.FORMAT_EXPANSION_OVERFLOW,
            DiagnosticCode.MISSING_MAX_LENGTH,
            DiagnosticCode.EMPTY_TOKEN,
            DiagnosticCode.UNSUPPORTED_TOKEN,
            DiagnosticCode.UNSUPPORTED_SECTION_TYPE,
            DiagnosticCode.INVALID_SECTION_TYPE,
        ):
            assert 1000 <= code.value < 2000

    def test_parse_codes_in_2000_range(self) -> None:
        for code in (
            DiagnosticCode.PARSE_NO_MATCH,
            DiagnosticCode.PARSE_OUT_OF_RANGE,
            DiagnosticCode.DAY_CLAMP_FAILED,
        ):
            assert 2000 <= code.value < 3000


class TestErrorTemplate:
    """Template factories fill codes, messages and context fields."""

    def test_format_expansion_overflow(self) -> None:
        diagnostic = ErrorTemplate.format_expansion_overflow("PPPP", 10)
        assert diagnostic.code is DiagnosticCode.FORMAT_EXPANSION_OVERFLOW
        assert "10" in diagnostic.message
        assert diagnostic.format == "PPPP"
        assert diagnostic.hint is not None

    def test_missing_max_length_names_token(self) -> None:
        diagnostic = ErrorTemplate.missing_max_length("M")
        assert diagnostic.code is DiagnosticCode.MISSING_MAX_LENGTH
        assert diagnostic.token == "M"
        assert "'M'" in diagnostic.message

    def test_unsupported_section_type_lists_supported(self) -> None:
        diagnostic = ErrorTemplate.unsupported_section_type("hours", ["year", "day"])
        assert '"hours"' in diagnostic.message
        assert diagnostic.hint == 'The supported date sections are ["day", "year"]'

    def test_parse_diagnostics_are_warnings(self) -> None:
        assert ErrorTemplate.parse_no_match("02 31", "MM dd").severity == "warning"
        assert ErrorTemplate.parse_out_of_range("02 31", "MM dd").severity == "warning"
        assert ErrorTemplate.day_clamp_failed("13 01").severity == "warning"

    def test_configuration_diagnostics_are_errors(self) -> None:
        assert ErrorTemplate.empty_token().severity == "error"
        assert ErrorTemplate.unsupported_token("Q").severity == "error"
        assert ErrorTemplate.invalid_section_type("empty", "placeholder").severity == "error"


class TestDiagnosticFormatter:
    """Rust-style and simple output."""

    def test_rust_format_includes_context_lines(self) -> None:
        diagnostic = ErrorTemplate.missing_max_length("M")
        output = DiagnosticFormatter().format(diagnostic)
        lines = output.splitlines()
        assert lines[0] == "error[MISSING_MAX_LENGTH]: Token 'M' has no max length configured"
        assert "  = token: M" in lines
        assert any(line.startswith("  = help: ") for line in lines)

    def test_rust_format_without_optional_fields(self) -> None:
        output = DiagnosticFormatter().format(ErrorTemplate.empty_token())
        assert output == "error[EMPTY_TOKEN]: Cannot build a section from an empty format token"

    def test_simple_format(self) -> None:
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        output = formatter.format(ErrorTemplate.unsupported_token("Q"))
        assert output == "UNSUPPORTED_TOKEN: Token 'Q' is not supported by the calendar adapter"

    def test_control_characters_escaped(self) -> None:
        diagnostic = ErrorTemplate.format_expansion_overflow("MM\nerror[FAKE]: x", 10)
        output = DiagnosticFormatter().format(diagnostic)
        assert "  = format: MM\\nerror[FAKE]: x" in output.splitlines()

    def test_format_all_separates_with_blank_line(self) -> None:
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        output = formatter.format_all([ErrorTemplate.empty_token(), ErrorTemplate.empty_token()])
        assert output.count("\n\n") == 1

    @given(st.sampled_from(list(DiagnosticCode)), st.text(min_size=1, max_size=80))
    def test_rust_first_line_carries_code_name(self, code: DiagnosticCode, message: str) -> None:
        diagnostic = Diagnostic(code=code, message=message)
        first_line = DiagnosticFormatter().format(diagnostic).split("\n", 1)[0]
        assert first_line.startswith(f"error[{code.name}]: ")


class TestExceptionHierarchy:
    """Every configuration error is a DateFieldError carrying its diagnostic."""

    @pytest.mark.parametrize(
        "error_type",
        [
            FormatExpansionOverflowError,
            MissingMaxLengthError,
            EmptyTokenError,
            UnsupportedTokenError,
            UnsupportedSectionTypeError,
            InvalidSectionTypeError,
        ],
    )
    def test_subclasses_configuration_error(self, error_type: type[DateFieldError]) -> None:
        assert issubclass(error_type, FieldConfigurationError)
        assert issubclass(error_type, DateFieldError)

    def test_diagnostic_stored_and_formatted(self) -> None:
        diagnostic = ErrorTemplate.unsupported_token("Q")
        error = UnsupportedTokenError(diagnostic)
        assert error.diagnostic is diagnostic
        assert str(error).startswith("error[UNSUPPORTED_TOKEN]")

    def test_plain_message(self) -> None:
        error = DateFieldError("broken adapter")
        assert error.diagnostic is None
        assert str(error) == "broken adapter"
