"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    Keeps messages testable and documents every error case in one place.
    """

    @staticmethod
    def no_languages() -> Diagnostic:
        """Configuration received an empty language mapping."""
        return Diagnostic(
            code=DiagnosticCode.NO_LANGUAGES,
            message="At least one language resource is required",
            hint="Pass a mapping of language name to resource bytes",
        )

    @staticmethod
    def default_language_missing(default_language: str, languages: tuple[str, ...]) -> Diagnostic:
        """Default language is not one of the configured languages.

        Args:
            default_language: The requested default language
            languages: Languages present in the configuration

        Returns:
            Diagnostic for DEFAULT_LANGUAGE_MISSING
        """
        available = ", ".join(languages)
        msg = f"Default language '{default_language}' is not configured (available: {available})"
        return Diagnostic(
            code=DiagnosticCode.DEFAULT_LANGUAGE_MISSING,
            message=msg,
            hint="The default language must be an available configured language",
            language=default_language,
        )

    @staticmethod
    def resource_decode_failed(language: str, reason: str) -> Diagnostic:
        """Resource bytes are not valid UTF-8.

        Args:
            language: Language whose resource failed
            reason: Decoder error description

        Returns:
            Diagnostic for RESOURCE_DECODE_FAILED
        """
        msg = f"Resource for language '{language}' is not valid UTF-8: {reason}"
        return Diagnostic(
            code=DiagnosticCode.RESOURCE_DECODE_FAILED,
            message=msg,
            hint="Save the language file with UTF-8 encoding",
            language=language,
        )

    @staticmethod
    def resource_parse_failed(language: str, reason: str) -> Diagnostic:
        """Resource is not a well-formed JSON document.

        Args:
            language: Language whose resource failed
            reason: Parser error description (includes line/column)

        Returns:
            Diagnostic for RESOURCE_PARSE_FAILED
        """
        msg = f"Resource for language '{language}' is not valid JSON: {reason}"
        return Diagnostic(
            code=DiagnosticCode.RESOURCE_PARSE_FAILED,
            message=msg,
            hint="Check the language file for syntax errors",
            language=language,
        )

    @staticmethod
    def resource_root_invalid(language: str, root_type: str) -> Diagnostic:
        """Resource parsed, but its root node is not an object.

        Args:
            language: Language whose resource failed
            root_type: JSON type name of the root value

        Returns:
            Diagnostic for RESOURCE_ROOT_INVALID
        """
        msg = f"Resource for language '{language}' must have an object root, got {root_type}"
        return Diagnostic(
            code=DiagnosticCode.RESOURCE_ROOT_INVALID,
            message=msg,
            hint="Wrap the entries in a single top-level JSON object",
            language=language,
        )

    @staticmethod
    def language_not_configured(language: object, languages: tuple[str, ...]) -> Diagnostic:
        """Requested active language is not configured.

        Args:
            language: The requested language
            languages: Languages currently configured

        Returns:
            Diagnostic for LANGUAGE_NOT_CONFIGURED
        """
        available = ", ".join(languages) if languages else "<none>"
        msg = f"Language {language!r} is not configured (available: {available})"
        return Diagnostic(
            code=DiagnosticCode.LANGUAGE_NOT_CONFIGURED,
            message=msg,
            hint="The current language must be an available configured language",
            language=str(language),
        )

    @staticmethod
    def cyclic_reference(language: str, resolution_path: list[str]) -> Diagnostic:
        """Circular template reference detected.

        Args:
            language: Language being resolved
            resolution_path: Paths forming the cycle, repeated path last

        Returns:
            Diagnostic for CYCLIC_REFERENCE
        """
        cycle_chain = " -> ".join(resolution_path)
        msg = f"Circular reference detected in '{language}': {cycle_chain}"
        return Diagnostic(
            code=DiagnosticCode.CYCLIC_REFERENCE,
            message=msg,
            hint="Break the circular dependency by removing one of the ${...} references",
            language=language,
            path=resolution_path[0] if resolution_path else None,
            resolution_path=tuple(resolution_path),
        )

    @staticmethod
    def max_depth_exceeded(language: str, path: str, max_depth: int) -> Diagnostic:
        """Maximum reference nesting exceeded.

        Args:
            language: Language being resolved
            path: Path being resolved when the limit was hit
            max_depth: The maximum allowed depth

        Returns:
            Diagnostic for MAX_DEPTH_EXCEEDED
        """
        msg = f"Maximum reference depth ({max_depth}) exceeded while resolving '{path}'"
        return Diagnostic(
            code=DiagnosticCode.MAX_DEPTH_EXCEEDED,
            message=msg,
            hint="Reduce the ${...} reference chain depth",
            language=language,
            path=path,
        )

    @staticmethod
    def expansion_budget_exceeded(language: str, path: str, total: int, limit: int) -> Diagnostic:
        """Substituted output grew beyond the expansion budget.

        Args:
            language: Language being resolved
            path: Top-level path being resolved
            total: Characters produced so far
            limit: Configured maximum

        Returns:
            Diagnostic for EXPANSION_BUDGET_EXCEEDED
        """
        msg = f"Template expansion of '{path}' produced {total} characters (limit {limit})"
        return Diagnostic(
            code=DiagnosticCode.EXPANSION_BUDGET_EXCEEDED,
            message=msg,
            hint="Check for references that repeat the same entry many times",
            language=language,
            path=path,
        )
