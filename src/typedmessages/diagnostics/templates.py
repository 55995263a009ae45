"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan

__all__ = ["ErrorTemplate"]


def _span(source: str, start: int, end: int | None = None) -> SourceSpan:
    """Build a SourceSpan with 1-indexed line/column for a character offset."""
    start = max(0, min(start, len(source)))
    end = start if end is None else max(start, min(end, len(source)))
    line = source.count("\n", 0, start) + 1
    last_newline = source.rfind("\n", 0, start)
    column = start - last_newline if last_newline >= 0 else start + 1
    return SourceSpan(start=start, end=end, line=line, column=column)


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    """

    # ------------------------------------------------------------------
    # Syntax errors
    # ------------------------------------------------------------------

    @staticmethod
    def unexpected_eof(source: str, position: int, expected: str) -> Diagnostic:
        """Message ended while a construct was still open."""
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_EOF,
            message=f"Unexpected end of message, expected {expected}",
            span=_span(source, position),
            hint="Check that every '{' and '<tag>' is closed",
        )

    @staticmethod
    def empty_argument(source: str, position: int) -> Diagnostic:
        """Placeholder with no argument name: '{}'."""
        return Diagnostic(
            code=DiagnosticCode.EMPTY_ARGUMENT,
            message="Argument placeholder has no name",
            span=_span(source, position),
            hint="Write a name inside the braces, e.g. {name}; quote literal braces as '{'",
        )

    @staticmethod
    def malformed_argument(source: str, position: int) -> Diagnostic:
        """Argument name contains characters that are not allowed."""
        return Diagnostic(
            code=DiagnosticCode.MALFORMED_ARGUMENT,
            message="Malformed argument placeholder",
            span=_span(source, position),
        )

    @staticmethod
    def expect_argument_closing_brace(source: str, position: int) -> Diagnostic:
        """Argument placeholder not followed by '}' or ','."""
        return Diagnostic(
            code=DiagnosticCode.EXPECT_ARGUMENT_CLOSING_BRACE,
            message="Expected '}' or ',' after argument name",
            span=_span(source, position),
        )

    @staticmethod
    def invalid_argument_type(source: str, position: int, type_name: str) -> Diagnostic:
        """Unknown argument type after the first comma."""
        return Diagnostic(
            code=DiagnosticCode.INVALID_ARGUMENT_TYPE,
            message=f"Invalid argument type '{type_name}'",
            span=_span(source, position),
            hint="Use one of: number, date, time, plural, selectordinal, select",
        )

    @staticmethod
    def unbalanced_argument_style(source: str, position: int) -> Diagnostic:
        """Argument style text contains unbalanced braces."""
        return Diagnostic(
            code=DiagnosticCode.UNBALANCED_ARGUMENT_STYLE,
            message="Argument style has unbalanced braces",
            span=_span(source, position),
        )

    @staticmethod
    def expect_option(source: str, position: int, argument: str) -> Diagnostic:
        """Select/plural option selector or body missing."""
        return Diagnostic(
            code=DiagnosticCode.EXPECT_OPTION,
            message=f"Expected an option 'selector {{message}}' for argument '{argument}'",
            span=_span(source, position),
        )

    @staticmethod
    def missing_other_clause(source: str, position: int, argument: str) -> Diagnostic:
        """Select/plural argument without the mandatory 'other' option."""
        return Diagnostic(
            code=DiagnosticCode.MISSING_OTHER_CLAUSE,
            message=f"Argument '{argument}' has no 'other' option",
            span=_span(source, position),
            hint="Add an 'other { ... }' branch",
        )

    @staticmethod
    def duplicate_selector(
        source: str, position: int, argument: str, selector: str
    ) -> Diagnostic:
        """Same selector used twice in one select/plural argument."""
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_SELECTOR,
            message=f"Duplicate selector '{selector}' in argument '{argument}'",
            span=_span(source, position),
        )

    @staticmethod
    def invalid_plural_offset(source: str, position: int) -> Diagnostic:
        """'offset:' not followed by an integer."""
        return Diagnostic(
            code=DiagnosticCode.INVALID_PLURAL_OFFSET,
            message="Plural offset must be an integer",
            span=_span(source, position),
        )

    @staticmethod
    def unmatched_closing_brace(source: str, position: int) -> Diagnostic:
        """Stray '}' outside any placeholder."""
        return Diagnostic(
            code=DiagnosticCode.UNMATCHED_CLOSING_BRACE,
            message="Unmatched '}'",
            span=_span(source, position),
            hint="Quote literal braces as '}'",
        )

    @staticmethod
    def unclosed_tag(source: str, position: int, tag: str) -> Diagnostic:
        """Opening tag without closing tag."""
        return Diagnostic(
            code=DiagnosticCode.UNCLOSED_TAG,
            message=f"Tag <{tag}> is never closed",
            span=_span(source, position),
            hint=f"Add </{tag}>",
        )

    @staticmethod
    def unmatched_closing_tag(
        source: str, position: int, expected: str, found: str
    ) -> Diagnostic:
        """Closing tag name differs from the open tag (expected is "" when none is open)."""
        if expected:
            msg = f"Closing tag </{found}> does not match <{expected}>"
        else:
            msg = f"Closing tag </{found}> has no matching opening tag"
        return Diagnostic(
            code=DiagnosticCode.UNMATCHED_CLOSING_TAG,
            message=msg,
            span=_span(source, position),
        )

    @staticmethod
    def nesting_depth_exceeded(source: str, position: int, max_depth: int) -> Diagnostic:
        """Placeholders nested beyond the depth limit."""
        return Diagnostic(
            code=DiagnosticCode.NESTING_DEPTH_EXCEEDED,
            message=f"Message nesting exceeds maximum depth ({max_depth})",
            span=_span(source, position),
        )

    @staticmethod
    def message_too_large(size: int, max_size: int) -> Diagnostic:
        """Message string exceeds the size limit."""
        return Diagnostic(
            code=DiagnosticCode.MESSAGE_TOO_LARGE,
            message=f"Message is {size} characters, maximum is {max_size}",
        )

    # ------------------------------------------------------------------
    # Generation errors
    # ------------------------------------------------------------------

    @staticmethod
    def max_depth_exceeded(max_depth: int) -> Diagnostic:
        """Recursion depth exceeded while walking or serializing."""
        return Diagnostic(
            code=DiagnosticCode.MAX_DEPTH_EXCEEDED,
            message=f"Maximum nesting depth exceeded ({max_depth})",
            hint="Reduce nesting of placeholders or nested type mappings",
        )

    @staticmethod
    def formatter_failed(command: str, target: str, stderr: str) -> Diagnostic:
        """External source formatter exited with an error."""
        detail = stderr.strip() or "no output"
        return Diagnostic(
            code=DiagnosticCode.FORMATTER_FAILED,
            message=f"Formatter '{command}' failed: {detail}",
            file_path=target,
            hint="Run the formatter by hand on the generated file to see the problem",
        )

    # ------------------------------------------------------------------
    # Translation file errors
    # ------------------------------------------------------------------

    @staticmethod
    def translation_file_unreadable(file_path: str, reason: str) -> Diagnostic:
        """Translation file could not be read or decoded."""
        return Diagnostic(
            code=DiagnosticCode.TRANSLATION_FILE_UNREADABLE,
            message=f"Cannot read translation file: {reason}",
            file_path=file_path,
        )

    @staticmethod
    def translation_file_invalid(file_path: str, reason: str) -> Diagnostic:
        """Translation file is not a JSON object."""
        return Diagnostic(
            code=DiagnosticCode.TRANSLATION_FILE_INVALID,
            message=f"Invalid translation file: {reason}",
            file_path=file_path,
            hint='Translation files map keys to {"message": "..."} objects',
        )

    @staticmethod
    def translation_entry_invalid(file_path: str, key: str, reason: str) -> Diagnostic:
        """One entry of a translation file has the wrong shape."""
        return Diagnostic(
            code=DiagnosticCode.TRANSLATION_ENTRY_INVALID,
            message=f"Invalid translation '{key}': {reason}",
            file_path=file_path,
        )

    # ------------------------------------------------------------------
    # Configuration errors
    # ------------------------------------------------------------------

    @staticmethod
    def config_not_found(start: str) -> Diagnostic:
        """No configuration file above the start directory."""
        return Diagnostic(
            code=DiagnosticCode.CONFIG_NOT_FOUND,
            message=f"No typedmessages.toml or [tool.typedmessages] found above {start}",
        )

    @staticmethod
    def config_invalid(reason: str, file_path: str | None = None) -> Diagnostic:
        """Configuration values are malformed."""
        return Diagnostic(
            code=DiagnosticCode.CONFIG_INVALID,
            message=f"Invalid configuration: {reason}",
            file_path=file_path,
        )

    @staticmethod
    def unknown_language(name: str, context: str) -> Diagnostic:
        """Language referenced but not configured."""
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_LANGUAGE,
            message=f"Unknown language '{name}' in {context}",
            hint="Every language must be listed under 'languages'",
        )

    @staticmethod
    def extends_cycle(chain: tuple[str, ...]) -> Diagnostic:
        """Languages extend each other in a loop."""
        return Diagnostic(
            code=DiagnosticCode.EXTENDS_CYCLE,
            message=f"Language extends cycle: {' -> '.join(chain)}",
        )
