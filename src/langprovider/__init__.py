"""langprovider - runtime-switchable localized strings from JSON resources.

Resolves dot-separated paths in per-language JSON documents, expands
${path} cross-references, falls back to a default language, caches recent
lookups and tells subscribed components when the language changes.

Public API:
    LanguageProvider - Service object: configure, switch, look up, subscribe
    LanguageUser - Protocol for components that load their texts
    UpdatedLanguageUser - LanguageUser that registers itself
    FallbackInfo - Record passed to on_fallback callbacks
    get_default_provider - Optional process-wide LanguageProvider

Exceptions:
    LanguageProviderError - Base exception class
    ConfigurationError - Language resources rejected
    InvalidLanguageError - Unknown language requested
    CyclicReferenceError - ${...} references loop back on themselves

Submodules:
    langprovider.localization - Provider, resource store, type aliases
    langprovider.runtime - Resolver, cache, lock, subscriber registry
    langprovider.diagnostics - Error types and diagnostic codes
"""

from .diagnostics import (
    ConfigurationError,
    CyclicReferenceError,
    DepthLimitExceededError,
    ExpansionLimitExceededError,
    InvalidLanguageError,
    LanguageProviderError,
    ResolutionError,
)
from .localization import LanguageProvider, get_default_provider, reset_default_provider
from .runtime import FallbackInfo, LanguageUser, NotificationFailure, UpdatedLanguageUser

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("langprovider")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ConfigurationError",
    "CyclicReferenceError",
    "DepthLimitExceededError",
    "ExpansionLimitExceededError",
    "FallbackInfo",
    "InvalidLanguageError",
    "LanguageProvider",
    "LanguageProviderError",
    "LanguageUser",
    "NotificationFailure",
    "ResolutionError",
    "UpdatedLanguageUser",
    "__version__",
    "get_default_provider",
    "reset_default_provider",
]
