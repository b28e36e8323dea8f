"""Resolution context for template expansion.

Provides the stateful context passed through the resolver during a single
top-level lookup: the reference stack for cycle detection, the depth limit,
and the expansion budget.

Thread Safety:
    ResolutionContext is created per-lookup for full isolation.

Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from langprovider.constants import MAX_DEPTH, MAX_EXPANSION_SIZE
from langprovider.diagnostics import (
    CyclicReferenceError,
    DepthLimitExceededError,
    ErrorTemplate,
    ExpansionLimitExceededError,
)

if TYPE_CHECKING:
    from collections.abc import Generator

__all__ = ["ResolutionContext", "depth_clamp"]

logger = logging.getLogger(__name__)

# Each nested reference costs a handful of interpreter frames
# (lookup -> walk -> expand -> context manager), so the clamp reserves more than one
# frame per level.
_FRAMES_PER_LEVEL: int = 4


def depth_clamp(requested_depth: int, reserve_frames: int = 50) -> int:
    """Clamp requested depth against Python recursion limit.

    Validates requested depth against sys.getrecursionlimit() to prevent
    RecursionError on systems with constrained stack limits. Logs warning
    if clamping occurs.

    Args:
        requested_depth: Desired maximum depth
        reserve_frames: Stack frames to reserve for call overhead (default: 50)

    Returns:
        Safe depth value, clamped if necessary

    Example:
        >>> import sys
        >>> sys.setrecursionlimit(1000)
        >>> depth_clamp(32)
        32
    """
    max_safe_depth = max(1, (sys.getrecursionlimit() - reserve_frames) // _FRAMES_PER_LEVEL)
    if requested_depth > max_safe_depth:
        logger.warning(
            "Requested depth %d exceeds Python recursion limit (%d). "
            "Clamping to %d to prevent RecursionError.",
            requested_depth,
            sys.getrecursionlimit(),
            max_safe_depth,
        )
        return max_safe_depth
    return requested_depth


@dataclass(slots=True)
class ResolutionContext:
    """Explicit per-lookup context for template resolution.

    Uses both a list (ordered chain for error reports) and a set (O(1)
    membership) for cycle detection. Stack entries are (language, path)
    pairs: the same path may legitimately appear once per language when a
    fallback crosses into the default language.

    Attributes:
        language: Language of the top-level lookup (for diagnostics)
        root_path: Path of the top-level lookup (for diagnostics)
        max_depth: Maximum reference nesting
        max_expansion_size: Maximum substituted characters per lookup
    """

    language: str
    root_path: str
    max_depth: int = MAX_DEPTH
    max_expansion_size: int = MAX_EXPANSION_SIZE
    stack: list[tuple[str, str]] = field(default_factory=list)
    _seen: set[tuple[str, str]] = field(default_factory=set)
    _total_chars: int = 0

    @contextmanager
    def enter(self, language: str, path: str) -> Generator[None]:
        """Push (language, path) for the duration of its resolution.

        Raises:
            CyclicReferenceError: If the pair is already being resolved
            DepthLimitExceededError: If the stack is already max_depth deep
        """
        key = (language, path)
        if key in self._seen:
            chain = [p for lang, p in self.stack if lang == language]
            start = chain.index(path) if path in chain else 0
            raise CyclicReferenceError(
                ErrorTemplate.cyclic_reference(language, [*chain[start:], path])
            )
        if len(self.stack) >= self.max_depth:
            raise DepthLimitExceededError(
                ErrorTemplate.max_depth_exceeded(language, path, self.max_depth)
            )
        self.stack.append(key)
        self._seen.add(key)
        try:
            yield
        finally:
            self.stack.pop()
            self._seen.discard(key)

    def track_expansion(self, char_count: int) -> None:
        """Add substituted characters to the running total and check budget.

        Raises:
            ExpansionLimitExceededError: If the budget is exceeded
        """
        self._total_chars += char_count
        if self._total_chars > self.max_expansion_size:
            raise ExpansionLimitExceededError(
                ErrorTemplate.expansion_budget_exceeded(
                    self.language, self.root_path, self._total_chars, self.max_expansion_size
                )
            )

    @property
    def depth(self) -> int:
        """Current reference nesting depth."""
        return len(self.stack)

    @property
    def total_chars(self) -> int:
        """Characters substituted so far (read-only)."""
        return self._total_chars
