"""Runtime components behind LanguageProvider.

Exports:
    TemplateResolver: Path walk, default fallback and ${...} expansion
    FallbackInfo: Record passed to on_fallback callbacks
    LookupCache: FIFO cache of resolved strings
    RWLock: Readers-writer lock
    SubscriberRegistry: Ordered LanguageUser registry
    LanguageUser, UpdatedLanguageUser: Subscriber protocols
    NotificationFailure: Subscriber error collected during notification

Python 3.13+.
"""

from .cache import LookupCache
from .resolution_context import ResolutionContext
from .resolver import FallbackInfo, TemplateResolver
from .rwlock import RWLock
from .subscribers import (
    LanguageUser,
    NotificationFailure,
    SubscriberRegistry,
    UpdatedLanguageUser,
)

__all__ = [
    "FallbackInfo",
    "LanguageUser",
    "LookupCache",
    "NotificationFailure",
    "RWLock",
    "ResolutionContext",
    "SubscriberRegistry",
    "TemplateResolver",
    "UpdatedLanguageUser",
]
