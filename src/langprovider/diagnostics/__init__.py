"""Diagnostic system for langprovider errors.

Provides structured error diagnostics with codes and hints.
Inspired by Rust compiler diagnostics.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    ConfigurationError,
    CyclicReferenceError,
    DepthLimitExceededError,
    ExpansionLimitExceededError,
    InvalidLanguageError,
    LanguageProviderError,
    ResolutionError,
)
from .templates import ErrorTemplate

__all__ = [
    "ConfigurationError",
    "CyclicReferenceError",
    "DepthLimitExceededError",
    "Diagnostic",
    "DiagnosticCode",
    "ErrorTemplate",
    "ExpansionLimitExceededError",
    "InvalidLanguageError",
    "LanguageProviderError",
    "ResolutionError",
]
