"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the package and by user
code when annotating LanguageProvider call sites.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping
from typing import TypeAlias

__all__ = [
    "JsonValue",
    "LanguageDocument",
    "LanguageName",
    "LookupPath",
    "ResourceBytes",
    "SlotKey",
]

LanguageName: TypeAlias = str
"""Opaque language identifier (e.g., 'English', 'de', 'pt_BR')."""

LookupPath: TypeAlias = str
"""Dot-separated key path inside a language document (e.g., 'menu.file.open')."""

ResourceBytes: TypeAlias = bytes
"""Raw content of one language file (UTF-8 JSON)."""

SlotKey: TypeAlias = object
"""Key under which register_unique() keeps at most one subscriber."""

JsonValue: TypeAlias = (
    str | int | float | bool | None | Mapping[str, "JsonValue"] | tuple["JsonValue", ...]
)
"""Any value of a loaded (frozen) language document."""

LanguageDocument: TypeAlias = Mapping[str, JsonValue]
"""Parsed, read-only language resource with an object root."""
