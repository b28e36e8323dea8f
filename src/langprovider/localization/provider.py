"""LanguageProvider: the service object applications talk to.

Ties the resource store, template resolver, lookup cache and subscriber
registry together behind one readers-writer lock:

- Readers: lookup(), contains(), active_language, languages
- Writers: configure_languages(), set_active_language(), register*(),
  unregister(), shutdown()

A language switch clears the cache and updates the active language inside
the write lock, then notifies subscribers from a snapshot after the lock is
released. Subscribers may therefore call lookup(), register() or even
set_active_language() from inside load_texts().

Switches and their notification passes are serialized by a reentrant
notification lock, taken before the RWLock. A pass stops as soon as a newer
switch has happened (the newer switch already notified everyone), so the
last language each subscriber receives is always the active one.

Typical startup:

    provider = LanguageProvider()
    provider.configure_languages(
        {"English": english_json_bytes, "German": german_json_bytes},
        "English",
    )
    provider.register(main_window)          # main_window.load_texts("English")
    provider.set_active_language("German")  # every subscriber reloads

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from langprovider.constants import CACHE_LIMIT, MAX_DEPTH, MAX_EXPANSION_SIZE
from langprovider.diagnostics import (
    ConfigurationError,
    ErrorTemplate,
    InvalidLanguageError,
)
from langprovider.localization.store import ResourceStore
from langprovider.runtime.cache import LookupCache
from langprovider.runtime.resolver import TemplateResolver
from langprovider.runtime.rwlock import RWLock
from langprovider.runtime.subscribers import SubscriberRegistry, dispatch

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from langprovider.localization.types import (
        LanguageName,
        LookupPath,
        ResourceBytes,
        SlotKey,
    )
    from langprovider.runtime.resolver import FallbackInfo
    from langprovider.runtime.subscribers import LanguageUser, NotificationFailure

__all__ = ["LanguageProvider", "get_default_provider", "reset_default_provider"]

logger = logging.getLogger(__name__)


class LanguageProvider:
    """Runtime-switchable localized strings with change notification.

    Lookups never raise for missing data: an absent path or a non-string
    value resolves to "". Use contains() to tell "absent" from "empty".

    Thread Safety:
        All public methods are thread-safe. Store, active language, cache
        and registry form a single critical section guarded by an RWLock.
        A language change and its notification pass form one step: other
        threads switching or registering wait until the pass has finished.
        Subscribers must not wait on other threads that switch languages.
        on_fallback callbacks run while the read lock is held and must not
        call mutating methods.

    Attributes:
        strict: Re-raise subscriber errors during notification instead of
            logging them and notifying the remaining subscribers
    """

    __slots__ = (
        "_active_language",
        "_cache",
        "_generation",
        "_lock",
        "_notify_lock",
        "_registry",
        "_resolver",
        "_store",
        "_strict",
    )

    def __init__(
        self,
        *,
        cache_size: int = CACHE_LIMIT,
        max_depth: int = MAX_DEPTH,
        max_expansion_size: int = MAX_EXPANSION_SIZE,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
        strict: bool = False,
    ) -> None:
        """Initialize an unconfigured provider.

        Args:
            cache_size: Maximum cached strings for the active language
            max_depth: Maximum ${...} nesting per lookup
            max_expansion_size: Maximum substituted characters per lookup
            on_fallback: Called whenever a lookup is answered by the
                default language instead of the requested one
            strict: Propagate the first subscriber error (fail-fast)

        Raises:
            ValueError: If a size or depth limit is not positive
        """
        self._store = ResourceStore()
        self._resolver = TemplateResolver(
            self._store,
            max_depth=max_depth,
            max_expansion_size=max_expansion_size,
            on_fallback=on_fallback,
        )
        self._cache = LookupCache(cache_size)
        self._registry = SubscriberRegistry()
        self._lock = RWLock()
        self._notify_lock = threading.RLock()
        # Bumped by every language switch and shutdown; stale passes stop
        self._generation = 0
        self._active_language: LanguageName | None = None
        self._strict = strict

    # ------------------------------------------------------------------
    # Languages
    # ------------------------------------------------------------------

    def configure_languages(
        self,
        languages: Mapping[LanguageName, ResourceBytes],
        default_language: LanguageName,
    ) -> None:
        """Replace the available languages and the default language.

        Each value is the raw content of a JSON language file with a single
        object root. Cross-references are written as ``${path.to.string}``
        inside a value.

        If the active language is not among the new languages, it is reset
        and lookups use the new default language. Subscribers are not
        notified; call notify_all() if components must reload.

        Args:
            languages: Language name -> JSON file bytes
            default_language: Fallback language; must be one of languages

        Raises:
            ConfigurationError: If default_language is not configured or
                any resource fails to parse. The previous configuration
                (languages, default and active language) stays in effect.
        """
        with self._notify_lock, self._lock.write():
            try:
                result = self._store.configure(languages, default_language)
            except ConfigurationError as e:
                logger.warning("Language configuration rejected: %s", e.diagnostic or e)
                raise

            if self._active_language is not None and self._active_language not in result.languages:
                logger.info(
                    "Active language %r not in new configuration, using default %r",
                    self._active_language,
                    result.default_language,
                )
                self._active_language = None
            # Documents changed; cached strings may be stale
            self._cache.clear()

        logger.info(
            "Configured %d languages (default: %r)", len(result.languages), result.default_language
        )

    @property
    def active_language(self) -> LanguageName | None:
        """Language used by lookup() and pushed to subscribers.

        The default language until set_active_language() succeeds; None
        before configuration.
        """
        with self._lock.read():
            return self._current()

    @active_language.setter
    def active_language(self, name: LanguageName) -> None:
        self.set_active_language(name)

    def get_active_language(self) -> LanguageName | None:
        """Get the active language (see active_language)."""
        return self.active_language

    def set_active_language(self, name: LanguageName) -> tuple[NotificationFailure, ...]:
        """Switch the active language and notify every subscriber.

        Always clears the cache and notifies, even when name is already
        active. If a subscriber switches languages again from inside
        load_texts(), the nested switch notifies everyone and this pass
        stops, so every subscriber ends on the final active language.

        Args:
            name: A configured language

        Returns:
            Subscriber failures (empty unless a subscriber raised in
            non-strict mode)

        Raises:
            InvalidLanguageError: If name is not configured; the active
                language is left unchanged
        """
        with self._notify_lock:
            with self._lock.write():
                if not self._store.has_language(name):
                    diagnostic = ErrorTemplate.language_not_configured(name, self._store.languages)
                    logger.warning("%s", diagnostic)
                    raise InvalidLanguageError(diagnostic)

                self._cache.clear()
                previous = self._current()
                self._active_language = name
                subscribers = self._registry.subscribers
                self._generation += 1
                generation = self._generation

            logger.info("Active language changed: %r -> %r", previous, name)
            return self._dispatch(subscribers, name, generation)

    @property
    def default_language(self) -> LanguageName | None:
        """Fallback language (None before configuration)."""
        with self._lock.read():
            return self._store.default_language

    @property
    def languages(self) -> tuple[LanguageName, ...]:
        """Configured languages in configuration order."""
        with self._lock.read():
            return self._store.languages

    def list_languages(self) -> list[LanguageName]:
        """Configured languages as a new list."""
        return list(self.languages)

    def has_language(self, name: object) -> bool:
        """Check whether a language is configured."""
        with self._lock.read():
            return self._store.has_language(name)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def lookup(self, path: LookupPath, language: LanguageName | None = None) -> str:
        """Get a string, falling back to the default language when missing.

        Results for the active language are served from and stored in the
        cache; lookups in any other language bypass it.

        Args:
            path: Dot-separated path within the language document
            language: Language to look in (default: active language)

        Returns:
            Fully substituted string; "" when the path is missing in both
            the language and the default language, or is not a string

        Raises:
            CyclicReferenceError: If the value's ${...} references loop
            DepthLimitExceededError: If references nest too deep
            ExpansionLimitExceededError: If substitution output is too large
        """
        with self._lock.read():
            active = self._current()
            if active is None:
                return ""
            if language is not None and language != active:
                return self._resolver.resolve(language, path)

            cached = self._cache.get(path)
            if cached is not None:
                return cached
            value = self._resolver.resolve(active, path)
            self._cache.put(path, value)
            return value

    def lookup_in(self, language: LanguageName, path: LookupPath) -> str:
        """Get a string from an explicit language (see lookup())."""
        return self.lookup(path, language)

    def contains(self, path: LookupPath, language: LanguageName | None = None) -> bool:
        """Check whether a path resolves to a string, following fallback.

        Tells "absent" from "present but empty", which lookup() cannot.
        """
        with self._lock.read():
            target = language if language is not None else self._current()
            if target is None:
                return False
            return self._resolver.contains(target, path)

    # ------------------------------------------------------------------
    # Subscribers
    # ------------------------------------------------------------------

    def register(self, subscriber: LanguageUser) -> None:
        """Register a subscriber and load its texts immediately.

        The subscriber must be unregistered manually when it is disposed.
        To keep at most one instance of a component kind, use
        register_unique().

        Raises:
            TypeError: If subscriber has no load_texts() method
        """
        with self._notify_lock:
            with self._lock.write():
                self._registry.add(subscriber)
                language = self._current()
                generation = self._generation
            self._dispatch((subscriber,), language, generation)

    def register_unique(self, subscriber: LanguageUser, key: SlotKey | None = None) -> None:
        """Register a subscriber as the only one in its slot.

        Every subscriber already in the slot is unregistered first. The slot
        is key, or type(subscriber) when key is None, so registering a
        second window of the same class replaces the first.

        Raises:
            TypeError: If subscriber has no load_texts() method
        """
        with self._notify_lock:
            with self._lock.write():
                self._registry.add_unique(subscriber, key)
                language = self._current()
                generation = self._generation
            self._dispatch((subscriber,), language, generation)

    def unregister(self, subscriber: object) -> bool:
        """Remove a subscriber by identity.

        Returns:
            True if it was registered, False otherwise (no-op)
        """
        with self._lock.write():
            return self._registry.remove(subscriber)

    def notify_all(self) -> tuple[NotificationFailure, ...]:
        """Push the active language to every subscriber, in registration order.

        Returns:
            Subscriber failures (empty unless a subscriber raised in
            non-strict mode)
        """
        with self._notify_lock:
            with self._lock.read():
                subscribers = self._registry.subscribers
                language = self._current()
                generation = self._generation
            return self._dispatch(subscribers, language, generation)

    @property
    def subscribers(self) -> tuple[LanguageUser, ...]:
        """Snapshot of registered subscribers in notification order."""
        with self._lock.read():
            return self._registry.subscribers

    def is_registered(self, subscriber: object) -> bool:
        """Identity membership test."""
        with self._lock.read():
            return subscriber in self._registry

    # ------------------------------------------------------------------
    # Cache and lifecycle
    # ------------------------------------------------------------------

    def get_cache_stats(self) -> dict[str, int | float]:
        """Get lookup cache statistics (see LookupCache.get_stats())."""
        return self._cache.get_stats()

    def clear_cache(self) -> None:
        """Drop every cached string."""
        with self._lock.write():
            self._cache.clear()
        logger.debug("Cache manually cleared")

    @property
    def strict(self) -> bool:
        """Whether subscriber errors propagate (read-only)."""
        return self._strict

    def shutdown(self) -> None:
        """Tear down: drop subscribers, cached strings and resources.

        The provider is unconfigured afterwards and may be configured again.
        """
        with self._notify_lock, self._lock.write():
            count = len(self._registry)
            self._registry.clear()
            self._cache.clear()
            self._store.clear()
            self._active_language = None
            self._generation += 1
        logger.info("Language provider shut down (%d subscribers released)", count)

    def __enter__(self) -> LanguageProvider:
        """Enter context manager.

        Example:
            >>> with LanguageProvider() as provider:
            ...     provider.configure_languages({"en": b'{"hi": "Hi"}'}, "en")
            ...     provider.lookup("hi")
            'Hi'
        """
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        """Exit context manager, calling shutdown(). Does not suppress exceptions."""
        self.shutdown()

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        with self._lock.read():
            return (
                f"LanguageProvider(languages={self._store.languages!r}, "
                f"active={self._current()!r}, subscribers={len(self._registry)})"
            )

    def _current(self) -> LanguageName | None:
        """Active language or default; caller holds the lock."""
        if self._active_language is not None:
            return self._active_language
        return self._store.default_language

    def _dispatch(
        self,
        subscribers: tuple[LanguageUser, ...],
        language: LanguageName | None,
        generation: int,
    ) -> tuple[NotificationFailure, ...]:
        """Notify subscribers until a newer switch supersedes this pass.

        Caller holds the notification lock but not the RWLock.
        """

        def superseded() -> bool:
            with self._lock.read():
                return self._generation != generation

        return dispatch(subscribers, language, strict=self._strict, superseded=superseded)


_default_provider: LanguageProvider | None = None
_default_lock = threading.Lock()


def get_default_provider() -> LanguageProvider:
    """Get the process-wide provider, creating it on first use.

    Applications that prefer explicit wiring can construct and pass their
    own LanguageProvider instead.
    """
    global _default_provider  # noqa: PLW0603 - lazily created singleton
    with _default_lock:
        if _default_provider is None:
            _default_provider = LanguageProvider()
        return _default_provider


def reset_default_provider() -> None:
    """Shut down and forget the process-wide provider (teardown, tests)."""
    global _default_provider  # noqa: PLW0603 - lazily created singleton
    with _default_lock:
        provider, _default_provider = _default_provider, None
    if provider is not None:
        provider.shutdown()
