"""Localization package: language resources and the LanguageProvider service.

Submodules:
    types    - PEP 695 type aliases (LanguageName, LookupPath, ResourceBytes, ...)
    store    - ResourceStore, parse_resource, ConfigureResult
    provider - LanguageProvider and the optional process-wide instance

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from langprovider.localization.provider import (
    LanguageProvider,
    get_default_provider,
    reset_default_provider,
)
from langprovider.localization.store import ConfigureResult, ResourceStore, parse_resource
from langprovider.localization.types import (
    JsonValue,
    LanguageDocument,
    LanguageName,
    LookupPath,
    ResourceBytes,
    SlotKey,
)

__all__ = [
    # Service
    "LanguageProvider",
    "get_default_provider",
    "reset_default_provider",
    # Resources
    "ConfigureResult",
    "ResourceStore",
    "parse_resource",
    # Type aliases for user code type annotations
    "JsonValue",
    "LanguageDocument",
    "LanguageName",
    "LookupPath",
    "ResourceBytes",
    "SlotKey",
]
