"""Resource store: parsed language documents keyed by language name.

Each language resource arrives as raw bytes (the content of a JSON file
packaged with the application). The store decodes and parses every buffer
up front and swaps the whole set in one assignment, so a failing buffer
never leaves a half-configured store behind.

Loaded documents are frozen: objects become read-only mappings and arrays
become tuples.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, cast

from langprovider.constants import RESOURCE_ENCODING
from langprovider.diagnostics import ConfigurationError, ErrorTemplate
from langprovider.localization.types import (
    JsonValue,
    LanguageDocument,
    LanguageName,
    ResourceBytes,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

__all__ = ["ConfigureResult", "ResourceStore", "parse_resource"]

logger = logging.getLogger(__name__)

_JSON_TYPE_NAMES: dict[type, str] = {
    list: "array",
    str: "string",
    int: "number",
    float: "number",
    bool: "boolean",
    type(None): "null",
}

_TOO_DEEP = "nesting exceeds the interpreter recursion limit"


def _freeze(value: object) -> JsonValue:
    """Convert a json.loads() result into its read-only equivalent."""
    match value:
        case dict():
            return MappingProxyType({k: _freeze(v) for k, v in value.items()})
        case list():
            return tuple(_freeze(v) for v in value)
        case _:
            return value  # type: ignore[return-value]


def parse_resource(language: LanguageName, data: ResourceBytes) -> LanguageDocument:
    """Decode and parse one language resource.

    Args:
        language: Language name (used in error diagnostics)
        data: Raw UTF-8 JSON bytes; a leading BOM is accepted

    Returns:
        Read-only document with an object root

    Raises:
        ConfigurationError: If the bytes are not UTF-8, not JSON, nested
            too deeply to load, or the root is not a JSON object
    """
    try:
        text = bytes(data).decode(RESOURCE_ENCODING)
    except (UnicodeDecodeError, TypeError) as e:
        raise ConfigurationError(ErrorTemplate.resource_decode_failed(language, str(e))) from e

    try:
        root = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigurationError(ErrorTemplate.resource_parse_failed(language, str(e))) from e
    except RecursionError as e:
        raise ConfigurationError(ErrorTemplate.resource_parse_failed(language, _TOO_DEEP)) from e

    if not isinstance(root, dict):
        root_type = _JSON_TYPE_NAMES.get(type(root), type(root).__name__)
        raise ConfigurationError(ErrorTemplate.resource_root_invalid(language, root_type))

    try:
        return cast(LanguageDocument, _freeze(root))
    except RecursionError as e:
        raise ConfigurationError(ErrorTemplate.resource_parse_failed(language, _TOO_DEEP)) from e


@dataclass(frozen=True, slots=True)
class ConfigureResult:
    """Outcome of a successful ResourceStore.configure() call.

    Attributes:
        languages: Configured languages in insertion order
        default_language: The new default language
    """

    languages: tuple[LanguageName, ...]
    default_language: LanguageName


class ResourceStore:
    """Parsed language documents plus the designated default language.

    Not thread-safe on its own; LanguageProvider guards it with its RWLock.

    Example:
        >>> store = ResourceStore()
        >>> store.configure({"English": b'{"hello": "Hello"}'}, "English")
        ConfigureResult(languages=('English',), default_language='English')
        >>> store.has_language("English")
        True
    """

    __slots__ = ("_default_language", "_documents")

    def __init__(self) -> None:
        """Initialize an empty (unconfigured) store."""
        self._documents: dict[LanguageName, LanguageDocument] = {}
        self._default_language: LanguageName | None = None

    def configure(
        self,
        languages: Mapping[LanguageName, ResourceBytes],
        default_language: LanguageName,
    ) -> ConfigureResult:
        """Replace every document and the default language.

        All buffers are parsed before anything is replaced: on failure the
        previous configuration remains in effect.

        Args:
            languages: Language name -> raw JSON bytes
            default_language: Fallback language; must be a key of languages

        Returns:
            ConfigureResult describing the new configuration

        Raises:
            ConfigurationError: If languages is empty, default_language is
                not configured, or any resource fails to parse
        """
        if not languages:
            raise ConfigurationError(ErrorTemplate.no_languages())

        names = tuple(languages)
        if default_language not in languages:
            raise ConfigurationError(ErrorTemplate.default_language_missing(default_language, names))

        documents = {name: parse_resource(name, data) for name, data in languages.items()}

        self._documents = documents
        self._default_language = default_language
        logger.debug(
            "Parsed %d language resources: %s", len(documents), ", ".join(map(repr, names))
        )
        return ConfigureResult(languages=names, default_language=default_language)

    def has_language(self, name: object) -> bool:
        """Check whether a language is configured."""
        return isinstance(name, str) and name in self._documents

    def document(self, name: LanguageName) -> LanguageDocument | None:
        """Get the parsed document for a language (None if unknown)."""
        return self._documents.get(name)

    @property
    def languages(self) -> tuple[LanguageName, ...]:
        """Configured languages in configuration order."""
        return tuple(self._documents)

    @property
    def default_language(self) -> LanguageName | None:
        """Fallback language (None before the first configure())."""
        return self._default_language

    @property
    def is_configured(self) -> bool:
        """True once configure() has succeeded."""
        return self._default_language is not None

    def clear(self) -> None:
        """Drop every document and the default language."""
        self._documents = {}
        self._default_language = None

    def __len__(self) -> int:
        """Number of configured languages."""
        return len(self._documents)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"ResourceStore(languages={self.languages!r}, default={self._default_language!r})"
