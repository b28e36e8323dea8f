"""Subscriber registry: components re-loaded whenever the language changes.

A subscriber is any object with a ``load_texts(language)`` method (the
LanguageUser protocol). The registry keeps them in registration order,
identified by identity, and pushes a language to each of them on demand.

Slots:
    Every entry occupies a *slot*. register_unique() empties the slot
    before adding, so a slot holds at most one live subscriber registered
    that way. The slot is the caller-supplied key, or the subscriber's
    runtime type when no key is given ("one live window of this kind").

Lifetime:
    Entries are never dropped automatically. A component that goes away
    must unregister itself, otherwise the registry keeps it alive and keeps
    notifying it.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable

    from langprovider.localization.provider import LanguageProvider
    from langprovider.localization.types import LanguageName, SlotKey

__all__ = [
    "LanguageUser",
    "NotificationFailure",
    "SubscriberRegistry",
    "UpdatedLanguageUser",
    "dispatch",
]

logger = logging.getLogger(__name__)


@runtime_checkable
class LanguageUser(Protocol):
    """A component that needs access to string resources.

    Example:
        >>> class Window:
        ...     def load_texts(self, language: str) -> None:
        ...         self.title = provider.lookup("window.title")
    """

    def load_texts(self, language: LanguageName) -> None:
        """Set up the component with the strings of the given language.

        Load strings with LanguageProvider.lookup(); ``language`` is the
        provider's active language at notification time.
        """


@runtime_checkable
class UpdatedLanguageUser(LanguageUser, Protocol):
    """A LanguageUser that knows how to subscribe itself for updates."""

    def register_at_provider(self, provider: LanguageProvider) -> None:
        """Register with provider.register() or provider.register_unique()."""


@dataclass(frozen=True, slots=True)
class NotificationFailure:
    """A subscriber that raised while being notified.

    Attributes:
        subscriber: The failing subscriber
        language: Language that was being pushed
        error: The exception it raised
    """

    subscriber: LanguageUser
    language: LanguageName | None
    error: Exception


@dataclass(frozen=True, slots=True)
class _Entry:
    subscriber: LanguageUser
    slot: SlotKey


class SubscriberRegistry:
    """Ordered registry of LanguageUser subscribers.

    Not thread-safe on its own; LanguageProvider mutates it under its write
    lock and notifies from a snapshot outside the lock.
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._entries: list[_Entry] = []

    @staticmethod
    def _check(subscriber: object) -> LanguageUser:
        if not isinstance(subscriber, LanguageUser):
            msg = f"Subscriber must define load_texts(language), got {type(subscriber).__name__}"
            raise TypeError(msg)
        return subscriber

    def add(self, subscriber: LanguageUser) -> None:
        """Append a subscriber in its type's slot.

        Raises:
            TypeError: If subscriber has no load_texts() method
        """
        subscriber = self._check(subscriber)
        self._entries.append(_Entry(subscriber, type(subscriber)))
        logger.debug("Registered subscriber %s", type(subscriber).__name__)

    def add_unique(
        self, subscriber: LanguageUser, key: SlotKey | None = None
    ) -> tuple[LanguageUser, ...]:
        """Empty the subscriber's slot, then append it there.

        Without a key the slot is the subscriber's runtime type, and every
        entry of exactly that type is removed, including entries that were
        registered under an explicit key.

        Args:
            subscriber: Subscriber to add
            key: Slot key; defaults to type(subscriber)

        Returns:
            Subscribers removed from the slot

        Raises:
            TypeError: If subscriber has no load_texts() method
        """
        subscriber = self._check(subscriber)
        slot = type(subscriber) if key is None else key

        def in_slot(entry: _Entry) -> bool:
            if entry.slot == slot:
                return True
            return key is None and type(entry.subscriber) is slot

        removed = tuple(e.subscriber for e in self._entries if in_slot(e))
        self._entries = [e for e in self._entries if not in_slot(e)]
        self._entries.append(_Entry(subscriber, slot))
        logger.debug(
            "Registered unique subscriber %s (replaced %d)", type(subscriber).__name__, len(removed)
        )
        return removed

    def remove(self, subscriber: object) -> bool:
        """Remove the first entry holding this exact object.

        Returns:
            True if an entry was removed, False if it was not registered
        """
        for index, entry in enumerate(self._entries):
            if entry.subscriber is subscriber:
                del self._entries[index]
                logger.debug("Unregistered subscriber %s", type(subscriber).__name__)
                return True
        return False

    def clear(self) -> None:
        """Remove every subscriber."""
        self._entries.clear()

    @property
    def subscribers(self) -> tuple[LanguageUser, ...]:
        """Snapshot of registered subscribers in notification order."""
        return tuple(e.subscriber for e in self._entries)

    def notify_all(
        self, language: LanguageName | None, *, strict: bool = False
    ) -> tuple[NotificationFailure, ...]:
        """Push a language to every subscriber, in registration order.

        Iterates over a snapshot, so subscribers may register or unregister
        from inside load_texts().

        Args:
            language: Language passed to each load_texts() call
            strict: Re-raise the first subscriber error instead of logging
                it and continuing with the remaining subscribers

        Returns:
            Failures collected while notifying (always empty when strict)
        """
        return dispatch(self.subscribers, language, strict=strict)

    def __len__(self) -> int:
        """Number of registered subscribers."""
        return len(self._entries)

    def __contains__(self, subscriber: object) -> bool:
        """Identity membership test."""
        return any(e.subscriber is subscriber for e in self._entries)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"SubscriberRegistry(subscribers={len(self._entries)})"


def dispatch(
    subscribers: tuple[LanguageUser, ...],
    language: LanguageName | None,
    *,
    strict: bool = False,
    superseded: Callable[[], bool] | None = None,
) -> tuple[NotificationFailure, ...]:
    """Call load_texts(language) on each subscriber in order.

    In non-strict mode a failing subscriber is logged with its traceback
    and recorded; the remaining subscribers are still notified.

    superseded is checked before every call; once it returns True the pass
    stops, because a newer pass has already delivered a newer language.
    """
    failures: list[NotificationFailure] = []
    for subscriber in subscribers:
        if superseded is not None and superseded():
            logger.debug("Notification for %r superseded by a newer language change", language)
            break
        try:
            subscriber.load_texts(language)  # type: ignore[arg-type]
        except Exception as e:
            if strict:
                raise
            logger.exception(
                "Subscriber %s failed to load texts for %r", type(subscriber).__name__, language
            )
            failures.append(NotificationFailure(subscriber, language, e))
    return tuple(failures)
