"""Shared constants for langprovider.

Centralized configuration constants used by the localization and runtime
packages. Placing them here avoids circular imports.

Constants are grouped by domain:
- Path syntax: separator and template reference pattern
- Cache limits: bounded lookup cache
- Resolution limits: recursion and expansion protection
- Resource decoding

Python 3.13+. Zero external dependencies.
"""

import re

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Path syntax
    "PATH_SEPARATOR",
    "TEMPLATE_PATTERN",
    # Cache limits
    "CACHE_LIMIT",
    # Resolution limits
    "MAX_DEPTH",
    "MAX_EXPANSION_SIZE",
    # Resource decoding
    "RESOURCE_ENCODING",
]

# ============================================================================
# PATH SYNTAX
# ============================================================================

# Separates the keys of a lookup path ("menu.file.open"). No escaping exists,
# so keys containing a literal dot cannot be addressed.
PATH_SEPARATOR: str = "."

# Template reference inside a string leaf: ${path.to.entry}
# The inner path may not contain '$', '{' or '}', so the leftmost match is
# always the innermost complete reference.
TEMPLATE_PATTERN: re.Pattern[str] = re.compile(r"\$\{([^${}]*)\}")

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Maximum resolved strings kept for the active language (FIFO).
CACHE_LIMIT: int = 20

# ============================================================================
# RESOLUTION LIMITS
# ============================================================================

# Maximum nesting of ${...} references during one lookup.
# Real resources rarely chain more than a handful of references.
MAX_DEPTH: int = 32

# Maximum characters substituted during one top-level lookup.
# Guards against exponential expansion (a=${b}${b}, b=${c}${c}, ...).
MAX_EXPANSION_SIZE: int = 1_000_000

# ============================================================================
# RESOURCE DECODING
# ============================================================================

# UTF-8, tolerating a leading byte order mark written by some editors.
RESOURCE_ENCODING: str = "utf-8-sig"
