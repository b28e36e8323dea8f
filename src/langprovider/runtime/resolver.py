"""Template resolver: path lookup, default-language fallback, ${...} expansion.

Resolution of (language, path):

1. Walk the language document key by key. Unknown language, a missing key,
   or a non-object intermediate value means *not found*.
2. Not found: the default language resolves to "" (terminal); any other
   language resolves the same path against the default language.
3. Found a non-string value: "" without fallback.
4. Found a string: repeatedly replace the leftmost ${inner.path} with the
   resolution of inner.path in the same language, rescanning from the start
   after every substitution, until no reference remains.

Misses never raise. Broken resources do: a reference chain that loops back
on itself raises CyclicReferenceError, and one that nests deeper than
max_depth raises DepthLimitExceededError.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, cast

from langprovider.constants import (
    MAX_DEPTH,
    MAX_EXPANSION_SIZE,
    PATH_SEPARATOR,
    TEMPLATE_PATTERN,
)
from langprovider.enums import WalkStatus
from langprovider.runtime.resolution_context import ResolutionContext, depth_clamp

if TYPE_CHECKING:
    from langprovider.localization.store import ResourceStore
    from langprovider.localization.types import JsonValue, LanguageName, LookupPath

__all__ = ["FallbackInfo", "TemplateResolver"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FallbackInfo:
    """Record of a lookup answered by the default language.

    Passed to the on_fallback callback. Useful for spotting missing
    translations during development.

    Attributes:
        requested_language: Language the lookup asked for
        resolved_language: Language that supplied the value (the default)
        path: Lookup path that was missing in requested_language
    """

    requested_language: LanguageName
    resolved_language: LanguageName
    path: LookupPath


class TemplateResolver:
    """Resolves lookup paths to fully substituted strings.

    Reads documents from a ResourceStore; holds no state of its own besides
    limits and the optional fallback callback, so one instance can serve
    concurrent lookups.

    Example:
        >>> store = ResourceStore()
        >>> store.configure({"en": b'{"a": "hello ${b}", "b": "world"}'}, "en")
        ConfigureResult(languages=('en',), default_language='en')
        >>> TemplateResolver(store).resolve("en", "a")
        'hello world'
    """

    __slots__ = ("_max_depth", "_max_expansion_size", "_on_fallback", "_store")

    def __init__(
        self,
        store: ResourceStore,
        *,
        max_depth: int = MAX_DEPTH,
        max_expansion_size: int = MAX_EXPANSION_SIZE,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
    ) -> None:
        """Initialize resolver.

        Args:
            store: Source of language documents
            max_depth: Maximum ${...} nesting per lookup
            max_expansion_size: Maximum substituted characters per lookup
            on_fallback: Called whenever a path is answered by the default
                language instead of the requested one

        Raises:
            ValueError: If max_depth or max_expansion_size is not positive
        """
        if max_depth <= 0:
            msg = "max_depth must be positive"
            raise ValueError(msg)
        if max_expansion_size <= 0:
            msg = "max_expansion_size must be positive"
            raise ValueError(msg)
        self._store = store
        self._max_depth = depth_clamp(max_depth)
        self._max_expansion_size = max_expansion_size
        self._on_fallback = on_fallback

    @property
    def max_depth(self) -> int:
        """Effective maximum reference depth (after recursion-limit clamping)."""
        return self._max_depth

    def resolve(self, language: LanguageName, path: LookupPath) -> str:
        """Resolve a path to its fully substituted string.

        Args:
            language: Language to resolve in
            path: Dot-separated lookup path

        Returns:
            Resolved string, or "" when the path is missing everywhere or
            ends on a non-string value

        Raises:
            CyclicReferenceError: If ${...} references form a cycle
            DepthLimitExceededError: If references nest beyond max_depth
            ExpansionLimitExceededError: If substitution output is too large
        """
        context = ResolutionContext(
            language=language,
            root_path=path,
            max_depth=self._max_depth,
            max_expansion_size=self._max_expansion_size,
        )
        return self._resolve(language, path, context)

    def walk(self, language: LanguageName, path: LookupPath) -> tuple[WalkStatus, JsonValue]:
        """Walk a path through one language document, without fallback.

        Returns:
            (status, value) where value is the leaf for FOUND and
            NOT_A_STRING, and None for MISSING
        """
        node: JsonValue = self._store.document(language)
        if node is None:
            return (WalkStatus.MISSING, None)

        for segment in path.split(PATH_SEPARATOR):
            if not isinstance(node, Mapping) or segment not in node:
                return (WalkStatus.MISSING, None)
            node = node[segment]

        if isinstance(node, str):
            return (WalkStatus.FOUND, node)
        return (WalkStatus.NOT_A_STRING, node)

    def contains(self, language: LanguageName, path: LookupPath) -> bool:
        """Check whether a path resolves to a string, following fallback.

        Distinguishes "absent" from "present but empty", which resolve()
        cannot. Template references inside the value are not checked.
        """
        status, _ = self.walk(language, path)
        match status:
            case WalkStatus.FOUND:
                return True
            case WalkStatus.MISSING:
                default = self._store.default_language
                if default is None or language == default:
                    return False
                return self.walk(default, path)[0] is WalkStatus.FOUND
            case _:
                return False

    def _resolve(self, language: LanguageName, path: LookupPath, context: ResolutionContext) -> str:
        with context.enter(language, path):
            status, value = self.walk(language, path)
            match status:
                case WalkStatus.FOUND:
                    return self._expand(language, cast(str, value), context)
                case WalkStatus.NOT_A_STRING:
                    logger.debug(
                        "Path %r in %r is not a string (%s)", path, language, type(value).__name__
                    )
                    return ""
                case _:
                    return self._fall_back(language, path, context)

    def _fall_back(self, language: LanguageName, path: LookupPath, context: ResolutionContext) -> str:
        default = self._store.default_language
        if default is None or language == default:
            # Default language is terminal
            return ""

        logger.debug("Path %r missing in %r, falling back to %r", path, language, default)
        if self._on_fallback is not None:
            self._on_fallback(
                FallbackInfo(requested_language=language, resolved_language=default, path=path)
            )
        return self._resolve(default, path, context)

    def _expand(self, language: LanguageName, text: str, context: ResolutionContext) -> str:
        match = TEMPLATE_PATTERN.search(text)
        while match is not None:
            insertion = self._resolve(language, match.group(1), context)
            context.track_expansion(len(insertion))
            text = text[: match.start()] + insertion + text[match.end() :]
            # Rescan from the start: the insertion may complete a new reference
            match = TEMPLATE_PATTERN.search(text)
        return text
