"""langprovider exception hierarchy with structured diagnostics.

All exceptions accept either a plain message or a Diagnostic object built
by ErrorTemplate.

Hierarchy:
    LanguageProviderError
    ├─ ConfigurationError
    ├─ InvalidLanguageError
    └─ ResolutionError
       ├─ CyclicReferenceError
       │  └─ DepthLimitExceededError
       └─ ExpansionLimitExceededError

Lookup misses are NOT errors: a missing path or a non-string leaf resolves
to the empty string.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic

__all__ = [
    "ConfigurationError",
    "CyclicReferenceError",
    "DepthLimitExceededError",
    "ExpansionLimitExceededError",
    "InvalidLanguageError",
    "LanguageProviderError",
    "ResolutionError",
]


class LanguageProviderError(Exception):
    """Base exception for all langprovider errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize LanguageProviderError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)

    @property
    def language(self) -> str | None:
        """Language named by the diagnostic, if any."""
        return self.diagnostic.language if self.diagnostic is not None else None


class ConfigurationError(LanguageProviderError):
    """Language configuration rejected.

    Raised when the default language is not among the supplied languages,
    or when any resource fails to decode or parse as an object-rooted JSON
    document. The previous configuration stays in effect.
    """


class InvalidLanguageError(LanguageProviderError, ValueError):
    """Requested active language is not configured.

    The active language is left unchanged.
    """


class ResolutionError(LanguageProviderError):
    """Template resolution failed because the resource itself is broken."""


class CyclicReferenceError(ResolutionError):
    """A ${...} reference chain leads back to itself.

    Example:
        {"a": "${b}", "b": "${a}"}  <- Infinite expansion!
    """

    @property
    def resolution_path(self) -> tuple[str, ...]:
        """Paths forming the cycle (empty if unknown)."""
        if self.diagnostic is None or self.diagnostic.resolution_path is None:
            return ()
        return self.diagnostic.resolution_path


class DepthLimitExceededError(CyclicReferenceError):
    """Reference nesting exceeded the configured maximum depth.

    Raised for chains too deep to be legitimate even when no path repeats.
    """


class ExpansionLimitExceededError(ResolutionError):
    """Substituted output exceeded the expansion budget of one lookup."""
