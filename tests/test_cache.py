"""Tests for the input type tree cache."""

from __future__ import annotations

import pytest

from validate_directive import CompositeCache


def test_reserve_creates_once():
    cache = CompositeCache()
    tree, created = cache.reserve("Input")
    again, created_again = cache.reserve("Input")

    assert created is True
    assert created_again is False
    assert again is tree
    assert "Input" in cache
    assert len(cache) == 1


def test_get_missing_returns_none():
    assert CompositeCache().get("Missing") is None


def test_filling_marks_type_in_progress():
    cache = CompositeCache()
    with cache.filling("Input") as tree:
        assert cache.is_filling("Input")
        assert cache.get("Input") is tree
    assert not cache.is_filling("Input")


def test_filling_is_cleared_on_error():
    cache = CompositeCache()
    with pytest.raises(RuntimeError), cache.filling("Input"):
        raise RuntimeError("compile failed")
    assert not cache.is_filling("Input")
    assert "Input" in cache
