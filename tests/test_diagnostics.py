"""Tests for diagnostics: codes, templates, formatting and the exception hierarchy."""

from __future__ import annotations

import pytest

from langprovider.diagnostics import (
    ConfigurationError,
    CyclicReferenceError,
    DepthLimitExceededError,
    Diagnostic,
    DiagnosticCode,
    ErrorTemplate,
    ExpansionLimitExceededError,
    InvalidLanguageError,
    LanguageProviderError,
    ResolutionError,
)


class TestDiagnosticFormatting:
    """Diagnostic.format_error() output."""

    def test_minimal(self) -> None:
        """Code and message only."""
        diagnostic = Diagnostic(code=DiagnosticCode.NO_LANGUAGES, message="nothing")
        assert diagnostic.format_error() == "error[NO_LANGUAGES]: nothing"
        assert str(diagnostic) == "nothing"

    def test_full(self) -> None:
        """Every optional context line appears in order."""
        diagnostic = Diagnostic(
            code=DiagnosticCode.CYCLIC_REFERENCE,
            message="loop",
            hint="fix it",
            language="en",
            path="a",
            resolution_path=("a", "b", "a"),
        )
        assert diagnostic.format_error().splitlines() == [
            "error[CYCLIC_REFERENCE]: loop",
            "  = language: en",
            "  = path: a",
            "  = chain: a -> b -> a",
            "  = help: fix it",
        ]

    def test_control_characters_escaped(self) -> None:
        """Control characters from resource keys cannot reach the terminal raw."""
        diagnostic = Diagnostic(
            code=DiagnosticCode.MAX_DEPTH_EXCEEDED, message="bad\x1b[31m", path="p\nq"
        )
        formatted = diagnostic.format_error()
        assert "\x1b" not in formatted
        assert "\\x1b" in formatted
        assert "p\\nq" in formatted

    def test_frozen(self) -> None:
        """Diagnostics are immutable."""
        diagnostic = Diagnostic(code=DiagnosticCode.NO_LANGUAGES, message="m")
        with pytest.raises(AttributeError):
            diagnostic.message = "other"  # type: ignore[misc]


class TestErrorTemplate:
    """ErrorTemplate builders."""

    def test_default_language_missing(self) -> None:
        """Names the missing default and the available languages."""
        diagnostic = ErrorTemplate.default_language_missing("French", ("English", "German"))
        assert diagnostic.code is DiagnosticCode.DEFAULT_LANGUAGE_MISSING
        assert "French" in diagnostic.message
        assert "English, German" in diagnostic.message
        assert diagnostic.language == "French"

    def test_language_not_configured_without_languages(self) -> None:
        """An unconfigured provider reports <none> as available."""
        diagnostic = ErrorTemplate.language_not_configured("German", ())
        assert "<none>" in diagnostic.message

    def test_language_not_configured_non_string(self) -> None:
        """Non-string names are rendered with repr()."""
        diagnostic = ErrorTemplate.language_not_configured(None, ("English",))
        assert "None" in diagnostic.message
        assert diagnostic.language == "None"

    def test_cyclic_reference(self) -> None:
        """The chain is kept both in the message and structurally."""
        diagnostic = ErrorTemplate.cyclic_reference("en", ["a", "b", "a"])
        assert diagnostic.resolution_path == ("a", "b", "a")
        assert diagnostic.path == "a"
        assert "a -> b -> a" in diagnostic.message

    def test_expansion_budget_exceeded(self) -> None:
        """Reports total and limit."""
        diagnostic = ErrorTemplate.expansion_budget_exceeded("en", "big", 2000, 1000)
        assert "2000" in diagnostic.message
        assert "1000" in diagnostic.message

    @pytest.mark.parametrize(
        ("diagnostic", "code"),
        [
            (ErrorTemplate.no_languages(), DiagnosticCode.NO_LANGUAGES),
            (ErrorTemplate.resource_decode_failed("en", "x"), DiagnosticCode.RESOURCE_DECODE_FAILED),
            (ErrorTemplate.resource_parse_failed("en", "x"), DiagnosticCode.RESOURCE_PARSE_FAILED),
            (ErrorTemplate.resource_root_invalid("en", "array"), DiagnosticCode.RESOURCE_ROOT_INVALID),
            (ErrorTemplate.max_depth_exceeded("en", "a", 32), DiagnosticCode.MAX_DEPTH_EXCEEDED),
        ],
    )
    def test_codes_and_hints(self, diagnostic: Diagnostic, code: DiagnosticCode) -> None:
        """Every template sets its code and a hint."""
        assert diagnostic.code is code
        assert diagnostic.hint


class TestExceptionHierarchy:
    """Exception classes and their diagnostic plumbing."""

    def test_plain_message(self) -> None:
        """A string message carries no diagnostic."""
        error = ConfigurationError("plain")
        assert str(error) == "plain"
        assert error.diagnostic is None
        assert error.language is None

    def test_diagnostic_message(self) -> None:
        """A Diagnostic is formatted into the exception text."""
        error = InvalidLanguageError(ErrorTemplate.language_not_configured("French", ("English",)))
        assert str(error).startswith("error[LANGUAGE_NOT_CONFIGURED]")
        assert error.language == "French"

    def test_cycle_without_diagnostic(self) -> None:
        """resolution_path is empty when unknown."""
        assert CyclicReferenceError("loop").resolution_path == ()

    @pytest.mark.parametrize(
        ("error_type", "base"),
        [
            (ConfigurationError, LanguageProviderError),
            (InvalidLanguageError, LanguageProviderError),
            (InvalidLanguageError, ValueError),
            (ResolutionError, LanguageProviderError),
            (CyclicReferenceError, ResolutionError),
            (DepthLimitExceededError, CyclicReferenceError),
            (ExpansionLimitExceededError, ResolutionError),
        ],
    )
    def test_hierarchy(self, error_type: type[Exception], base: type[Exception]) -> None:
        """Each error can be caught by its documented base."""
        assert issubclass(error_type, base)
