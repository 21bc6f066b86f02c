"""Tests for the page-lifetime result cache."""

from __future__ import annotations

from recipebox.client.cache import ResultCache
from recipebox.models import RecipeSummary, SearchFilters, SearchQueryDescriptor


def test_equal_descriptors_share_an_entry():
    cache = ResultCache()
    results = [RecipeSummary(id=1, title="Pasta")]
    cache.put(SearchQueryDescriptor(text="pasta", page_size="12"), results)

    hit = cache.get(SearchQueryDescriptor(text="pasta", page_size=12, filters=SearchFilters(diet="")))

    assert hit == results
    assert len(cache) == 1


def test_filter_change_is_a_different_entry():
    cache = ResultCache()
    base = SearchQueryDescriptor(text="pasta")
    cache.put(base, [RecipeSummary(id=1, title="Pasta")])

    filtered = SearchQueryDescriptor(text="pasta", filters=SearchFilters(cuisine="italian"))

    assert cache.get(filtered) is None
    assert filtered not in cache
    assert base in cache


def test_empty_results_are_cached():
    cache = ResultCache()
    descriptor = SearchQueryDescriptor(text="zzzqqqnonexistent")
    cache.put(descriptor, [])

    assert cache.get(descriptor) == []
    assert descriptor in cache


def test_returned_list_is_a_copy():
    cache = ResultCache()
    descriptor = SearchQueryDescriptor(text="soup")
    cache.put(descriptor, [RecipeSummary(id=5, title="Soup")])

    cache.get(descriptor).clear()

    assert len(cache.get(descriptor)) == 1
