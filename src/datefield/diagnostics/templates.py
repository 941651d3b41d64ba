"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterable

from .codes import Diagnostic, DiagnosticCode


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    """

    @staticmethod
    def format_expansion_overflow(format_string: str, limit: int) -> Diagnostic:
        """Format expansion kept changing after the allowed number of passes.

        Args:
            format_string: The format as passed by the caller
            limit: Number of extra passes that were allowed

        Returns:
            Diagnostic for FORMAT_EXPANSION_OVERFLOW
        """
        msg = f"Format expansion did not settle after {limit} passes"
        return Diagnostic(
            code=DiagnosticCode.FORMAT_EXPANSION_OVERFLOW,
            message=msg,
            hint="The adapter's expand_format() rule is cyclic for this format",
            format=format_string,
        )

    @staticmethod
    def missing_max_length(token: str) -> Diagnostic:
        """Unpadded numeric token without a configured max digit count.

        Args:
            token: The format token being built

        Returns:
            Diagnostic for MISSING_MAX_LENGTH
        """
        msg = f"Token '{token}' has no max length configured"
        return Diagnostic(
            code=DiagnosticCode.MISSING_MAX_LENGTH,
            message=msg,
            hint="Add max_length to the token's SectionTokenConfig",
            token=token,
        )

    @staticmethod
    def empty_token() -> Diagnostic:
        """Section construction was asked to commit an empty token.

        Returns:
            Diagnostic for EMPTY_TOKEN
        """
        return Diagnostic(
            code=DiagnosticCode.EMPTY_TOKEN,
            message="Cannot build a section from an empty format token",
        )

    @staticmethod
    def unsupported_token(token: str) -> Diagnostic:
        """Token missing from the adapter's format token map.

        Args:
            token: The unknown format token

        Returns:
            Diagnostic for UNSUPPORTED_TOKEN
        """
        msg = f"Token '{token}' is not supported by the calendar adapter"
        return Diagnostic(
            code=DiagnosticCode.UNSUPPORTED_TOKEN,
            message=msg,
            hint="Quote the text if it is meant literally",
            token=token,
        )

    @staticmethod
    def unsupported_section_type(section_type: str, supported: Iterable[str]) -> Diagnostic:
        """Field cannot edit a section type produced by its format.

        Args:
            section_type: The offending section type
            supported: Section types the field declares

        Returns:
            Diagnostic for UNSUPPORTED_SECTION_TYPE
        """
        listed = ", ".join(f'"{name}"' for name in sorted(supported))
        msg = f'The field is not compatible with the "{section_type}" date section'
        return Diagnostic(
            code=DiagnosticCode.UNSUPPORTED_SECTION_TYPE,
            message=msg,
            hint=f"The supported date sections are [{listed}]",
        )

    @staticmethod
    def invalid_section_type(section_type: str, concern: str) -> Diagnostic:
        """No handler registered for a section type.

        Args:
            section_type: The section type looked up
            concern: What was being computed (e.g. "leading zeros")

        Returns:
            Diagnostic for INVALID_SECTION_TYPE
        """
        msg = f"Invalid section type '{section_type}' for {concern}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_SECTION_TYPE,
            message=msg,
        )

    @staticmethod
    def parse_no_match(value: str, format_string: str) -> Diagnostic:
        """Section string does not match the section formats.

        Args:
            value: Joined section values
            format_string: Joined section formats

        Returns:
            Diagnostic for PARSE_NO_MATCH (logged, never raised)
        """
        msg = f"'{value}' does not match '{format_string}'"
        return Diagnostic(
            code=DiagnosticCode.PARSE_NO_MATCH,
            message=msg,
            format=format_string,
            severity="warning",
        )

    @staticmethod
    def parse_out_of_range(value: str, format_string: str) -> Diagnostic:
        """Section string matches its format but names no real date.

        Args:
            value: Parsed text (e.g. "02 30 2023")
            format_string: Pattern it matched

        Returns:
            Diagnostic for PARSE_OUT_OF_RANGE (logged, never raised)
        """
        msg = f"'{value}' matches '{format_string}' but is not a valid date"
        return Diagnostic(
            code=DiagnosticCode.PARSE_OUT_OF_RANGE,
            message=msg,
            format=format_string,
            severity="warning",
        )

    @staticmethod
    def day_clamp_failed(value: str) -> Diagnostic:
        """Day clamp recovery could not produce a valid date.

        Args:
            value: Joined section values

        Returns:
            Diagnostic for DAY_CLAMP_FAILED (logged, never raised)
        """
        msg = f"Sections '{value}' stay invalid even at the start of the month"
        return Diagnostic(
            code=DiagnosticCode.DAY_CLAMP_FAILED,
            message=msg,
            severity="warning",
        )
