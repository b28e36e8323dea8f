"""Property-based tests for lookup, fallback and caching.

Properties:
- Every string leaf of a reference-free document looks up to itself
- Lookups never raise for arbitrary paths in reference-free documents
- The default language answers any path the active language lacks
- Cached and uncached lookups agree
- The cache never holds more than its capacity
"""

from __future__ import annotations

from typing import Any

import pytest
from hypothesis import event, given
from hypothesis import strategies as st

from langprovider import LanguageProvider
from tests.helpers.resources import encode
from tests.strategies import leaf_strings, lookup_paths, string_documents


def _leaves(document: dict[str, Any], prefix: str = "") -> dict[str, str]:
    """Flatten a nested document to path -> string leaf."""
    flat: dict[str, str] = {}
    for key, value in document.items():
        path = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_leaves(value, f"{path}."))
        else:
            flat[path] = value
    return flat


def _configured(**languages: dict[str, Any]) -> LanguageProvider:
    provider = LanguageProvider()
    default = next(iter(languages))
    provider.configure_languages(
        {name: encode(doc) for name, doc in languages.items()}, default
    )
    return provider


class TestLookupProperties:
    """Lookup invariants over generated documents."""

    @given(document=string_documents())
    def test_every_leaf_resolves_to_itself(self, document: dict[str, Any]) -> None:
        """Reference-free leaves come back unchanged."""
        provider = _configured(en=document)
        leaves = _leaves(document)
        event(f"leaf_count={min(len(leaves), 10)}")
        for path, value in leaves.items():
            assert provider.lookup(path) == value
            assert provider.contains(path)

    @given(document=string_documents(), path=lookup_paths())
    def test_lookup_never_raises(self, document: dict[str, Any], path: str) -> None:
        """Arbitrary paths resolve to a leaf or ""."""
        provider = _configured(en=document)
        result = provider.lookup(path)
        expected = _leaves(document).get(path, "")
        event(f"hit={path in _leaves(document)}")
        assert result == expected

    @given(document=string_documents())
    def test_default_fills_gaps(self, document: dict[str, Any]) -> None:
        """An empty active language shows the default language's strings."""
        provider = _configured(en=document, de={})
        provider.set_active_language("de")
        for path, value in _leaves(document).items():
            assert provider.lookup(path) == value

    @given(document=string_documents(), paths=st.lists(lookup_paths(), max_size=60))
    def test_cache_agrees_and_stays_bounded(
        self, document: dict[str, Any], paths: list[str]
    ) -> None:
        """Repeated lookups match fresh ones; the cache stays within 20 entries."""
        provider = _configured(en=document)
        fresh = _configured(en=document)
        for path in [*paths, *paths]:
            assert provider.lookup(path) == fresh.lookup(path, "en")
            assert provider.get_cache_stats()["size"] <= 20


class TestTemplateProperties:
    """Substitution invariants."""

    @given(prefix=leaf_strings(), value=leaf_strings(), suffix=leaf_strings())
    def test_single_reference_splices(self, prefix: str, value: str, suffix: str) -> None:
        """prefix${ref}suffix resolves to prefix + value + suffix."""
        provider = _configured(en={"msg": f"{prefix}${{ref}}{suffix}", "ref": value})
        assert provider.lookup("msg") == prefix + value + suffix

    @pytest.mark.fuzz
    @given(
        depth=st.integers(min_value=1, max_value=30),
        value=leaf_strings(),
    )
    def test_reference_chains(self, depth: int, value: str) -> None:
        """Chains within the depth limit resolve to the final value."""
        document = {f"k{i}": f"${{k{i + 1}}}" for i in range(depth)}
        document[f"k{depth}"] = value
        event(f"chain_depth={depth // 10 * 10}")
        provider = _configured(en=document)
        assert provider.lookup("k0") == value
