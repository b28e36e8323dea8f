"""Diagnostic codes and data structures.

Defines error codes and the structured diagnostic carried by every
langprovider exception.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Configuration errors (resource set rejected)
        2000-2999: Language selection errors
        3000-3999: Resolution errors (broken template references)
    """

    # Configuration errors (1000-1999)
    NO_LANGUAGES = 1001
    DEFAULT_LANGUAGE_MISSING = 1002
    RESOURCE_DECODE_FAILED = 1003
    RESOURCE_PARSE_FAILED = 1004
    RESOURCE_ROOT_INVALID = 1005

    # Language selection errors (2000-2999)
    LANGUAGE_NOT_CONFIGURED = 2001

    # Resolution errors (3000-3999)
    CYCLIC_REFERENCE = 3001
    MAX_DEPTH_EXCEEDED = 3002
    EXPANSION_BUDGET_EXCEEDED = 3003


def _escape(text: str) -> str:
    """Escape control characters so diagnostics cannot inject terminal codes."""
    return "".join(ch if ch.isprintable() else repr(ch)[1:-1] for ch in text)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics: a code, a one-line message and
    optional context lines.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        language: Language involved in the failure (if any)
        path: Lookup path involved in the failure (if any)
        resolution_path: Reference chain at time of error (cyclic references)
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    language: str | None = None
    path: str | None = None
    resolution_path: tuple[str, ...] | None = None

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[DEFAULT_LANGUAGE_MISSING]: Default language 'English' is not configured
              = language: English
              = help: Pass the default language as one of the configured languages

        Returns:
            Formatted error message
        """
        lines = [f"error[{self.code.name}]: {_escape(self.message)}"]
        if self.language is not None:
            lines.append(f"  = language: {_escape(self.language)}")
        if self.path is not None:
            lines.append(f"  = path: {_escape(self.path)}")
        if self.resolution_path:
            chain = " -> ".join(_escape(step) for step in self.resolution_path)
            lines.append(f"  = chain: {chain}")
        if self.hint:
            lines.append(f"  = help: {self.hint}")
        return "\n".join(lines)
