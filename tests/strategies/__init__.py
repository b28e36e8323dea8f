"""Hypothesis strategies for langprovider property-based testing.

Usage:
    from tests.strategies import path_segments, lookup_paths, string_documents
"""

from .documents import (
    leaf_strings,
    lookup_paths,
    path_segments,
    string_documents,
)

__all__ = [
    "leaf_strings",
    "lookup_paths",
    "path_segments",
    "string_documents",
]
